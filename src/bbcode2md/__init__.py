"""bbcode2md - Convert BBCode formatted text to Markdown.

bbcode2md rewrites forum-style BBCode markup into Markdown with an ordered
pipeline of targeted text substitutions ("cleaners"). Color, size and center
tags are stripped; bold, italic, underline, strikethrough, lists, links,
images, quotes and code blocks are translated.

Examples
--------
One-shot conversion:

    >>> from bbcode2md import to_markdown
    >>> to_markdown("[b]hi[/b]")
    '**hi**'

Reusing a configured converter:

    >>> from bbcode2md import BBCodeConverter, BBCodeConverterOptions
    >>> converter = BBCodeConverter(options=BBCodeConverterOptions(language_aliases={"py": "python"}))
    >>> converter.to_markdown("[code=py]print(1)[/code]", doc_id="post-1")
    '\\n```python\\nprint(1)\\n```\\n'

See Also
--------
bbcode2md.cleaners : the individual rewrite rules
bbcode2md.cli : command-line interface

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

from __future__ import annotations

from typing import Optional

from bbcode2md.converter import BBCodeConverter, Converter
from bbcode2md.exceptions import (
    BBCode2MdError,
    ConfigError,
    MalformedMarkupError,
    ParsingError,
    ValidationError,
)
from bbcode2md.options import BBCodeConverterOptions

__version__ = "0.1.0"

__all__ = [
    "BBCode2MdError",
    "BBCodeConverter",
    "BBCodeConverterOptions",
    "ConfigError",
    "Converter",
    "MalformedMarkupError",
    "ParsingError",
    "ValidationError",
    "to_markdown",
    "__version__",
]


def to_markdown(
    text: Optional[str], doc_id: Optional[str] = None, options: Optional[BBCodeConverterOptions] = None
) -> Optional[str]:
    """Convert BBCode text to Markdown with a fresh converter.

    Parameters
    ----------
    text : str or None
        BBCode text. Empty or missing input is returned unchanged.
    doc_id : str, optional
        Identifier reported in :class:`MalformedMarkupError` messages
    options : BBCodeConverterOptions, optional
        Pipeline configuration

    Returns
    -------
    str or None
        The Markdown text

    """
    return BBCodeConverter(options=options).to_markdown(text, doc_id)
