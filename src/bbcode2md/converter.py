#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbcode2md/converter.py
"""BBCode to Markdown conversion pipeline.

This module provides :class:`BBCodeConverter`, an ordered pipeline of named
cleaners that rewrites BBCode markup into Markdown one construct at a time.
There is no parse tree: each cleaner is a targeted text substitution and the
output of one is the input of the next.

Examples
--------
Convert a single string:

    >>> converter = BBCodeConverter()
    >>> converter.to_markdown("[b]Bold[/b] and [i]italic[/i]")
    '**Bold** and *italic*'

Attach a document and an identifier reported in errors:

    >>> converter = BBCodeConverter("[url=http://x.com]x[/url]", doc_id="post-42")
    >>> converter.to_markdown()
    '[x](http://x.com)'

Add a custom cleaner after the built-in ones:

    >>> converter.add_cleaner("replace_hr", lambda text, doc_id: text.replace("[hr]", "\\n---\\n"))

"""

from __future__ import annotations

import functools
import logging
from typing import Any, Optional

from bbcode2md import cleaners
from bbcode2md.cleaners import Cleaner
from bbcode2md.options import BBCodeConverterOptions

logger = logging.getLogger(__name__)


class Converter:
    """Base converter holding the text to convert and its identifier.

    Parameters
    ----------
    text : str, optional
        The text to be converted
    doc_id : str, optional
        Identifier reported when the conversion raises an error

    """

    def __init__(self, text: Optional[str] = None, doc_id: Optional[str] = None):
        """Store the document text and identifier."""
        self.text = text
        self.doc_id = doc_id


class BBCodeConverter(Converter):
    """Convert BBCode formatted text to Markdown.

    The built-in cleaners are registered in a fixed order at construction time:
    color, size and center tags are stripped first, then emphasis, lists,
    links, images, quotes and code blocks are rewritten.

    Parameters
    ----------
    text : str, optional
        The text to be converted
    doc_id : str, optional
        Identifier reported when the conversion raises an error
    options : BBCodeConverterOptions, optional
        Pipeline configuration (disabled cleaners, extra language aliases)

    """

    def __init__(
        self,
        text: Optional[str] = None,
        doc_id: Optional[str] = None,
        options: Optional[BBCodeConverterOptions] = None,
    ):
        """Initialize the converter and register the built-in cleaners."""
        super().__init__(text, doc_id)
        self.options = options or BBCodeConverterOptions()
        self._cleaners: dict[str, Cleaner] = {}

        snippets: Cleaner = cleaners.replace_snippets
        if self.options.language_aliases:
            snippets = functools.partial(
                cleaners.replace_snippets, language_aliases=self.options.resolved_language_aliases
            )

        builtin: list[tuple[str, Cleaner]] = [
            ("remove_color", cleaners.remove_color),
            ("remove_size", cleaners.remove_size),
            ("remove_center", cleaners.remove_center),
            ("replace_bold", cleaners.replace_bold),
            ("replace_italic", cleaners.replace_italic),
            ("replace_underline", cleaners.replace_underline),
            ("replace_strikethrough", cleaners.replace_strikethrough),
            ("replace_lists", cleaners.replace_lists),
            ("replace_urls", cleaners.replace_urls),
            ("replace_images", cleaners.replace_images),
            ("replace_quotes", cleaners.replace_quotes),
            ("replace_snippets", snippets),
        ]
        for name, callback in builtin:
            if name not in self.options.disabled_cleaners:
                self.add_cleaner(name, callback)

    @property
    def cleaner_names(self) -> list[str]:
        """Names of the registered cleaners, in execution order."""
        return list(self._cleaners)

    def add_cleaner(self, name: str, callback: Any) -> None:
        """Register a cleaner under ``name``.

        The callback receives ``(text, doc_id)`` and returns the rewritten
        text. A new name runs after every cleaner registered so far; an
        existing name is replaced in place. Values that are not callable are
        ignored.

        Parameters
        ----------
        name : str
            Cleaner name
        callback : callable
            Cleaner function with signature ``(text, doc_id) -> text``

        """
        if not callable(callback):
            logger.debug(f"Ignoring non-callable cleaner '{name}'")
            return

        self._cleaners[name] = callback
        logger.debug(f"Registered cleaner: {name}")

    def to_markdown(self, text: Optional[str] = None, doc_id: Optional[str] = None) -> Optional[str]:
        """Convert BBCode text to Markdown.

        Parameters
        ----------
        text : str, optional
            Text to convert. Defaults to the text given at construction.
        doc_id : str, optional
            Identifier for error messages. Defaults to the one given at construction.

        Returns
        -------
        str or None
            The Markdown text. Empty or missing input is returned unchanged.

        Raises
        ------
        MalformedMarkupError
            If a cleaner meets a construct it cannot rewrite

        """
        if text is None and self.text:
            text = self.text

        if not text:
            return text

        if doc_id is None and self.doc_id:
            doc_id = self.doc_id

        for name, cleaner in self._cleaners.items():
            text = cleaner(text, doc_id)
            logger.debug(f"Applied cleaner '{name}' to document '{doc_id}'")

        return text
