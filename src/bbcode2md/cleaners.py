#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbcode2md/cleaners.py
"""Built-in BBCode cleaners.

A cleaner is a pure function taking the text and an optional document id and
returning the rewritten text. Each one targets a single BBCode construct and
rewrites every non-overlapping occurrence in the whole text. Tags are matched
case-insensitively and tag bodies may span lines.

Cleaners never look at each other's state; the only thing they share is the
text handed from one to the next by :class:`bbcode2md.converter.BBCodeConverter`.

Examples
--------
    >>> from bbcode2md.cleaners import replace_bold
    >>> replace_bold("[b] hi [/b]")
    '**hi**'

"""

from __future__ import annotations

import re
from typing import Callable, Mapping, Optional

from bbcode2md.constants import LANGUAGE_ALIASES
from bbcode2md.exceptions import MalformedMarkupError

Cleaner = Callable[[str, Optional[str]], str]

_FLAGS = re.IGNORECASE | re.DOTALL

COLOR_PATTERN = re.compile(r"\[color=#?\w+\](.*?)\[/color\]", _FLAGS)
SIZE_PATTERN = re.compile(r"\[size=\d*\](.*?)\[/size\]", _FLAGS)
CENTER_PATTERN = re.compile(r"\[center\](.*?)\[/center\]", _FLAGS)

BOLD_PATTERN = re.compile(r"\[b\](.*?)\[/b\]", _FLAGS)
ITALIC_PATTERN = re.compile(r"\[i\](.*?)\[/i\]", _FLAGS)
UNDERLINE_PATTERN = re.compile(r"\[u\](.*?)\[/u\]", _FLAGS)
STRIKETHROUGH_PATTERN = re.compile(r"\[s\](.*?)\[/s\]", _FLAGS)

LIST_PATTERN = re.compile(r"\[list(?P<type>=1)?\](?P<items>.*?)\[/list\]", _FLAGS)
LIST_ITEM_MARKER = re.compile(r"\[\*\]")

# A link target is either double-quoted or a bare token without quotes,
# angle brackets, closing brackets or whitespace.
_TARGET = r"(?:\"(?P<quoted>[^\"]*)\"|(?P<bare>[^'\">\]\s]+))"
# Junk after the target must follow whitespace or the closing quote, or start
# with a character a bare target cannot hold, so it never competes with it.
_TARGET_TAIL = r"\s*(?:(?<=[\s\"])[^\]\s]+|['\">][^\]\s]*)?"

URL_PATTERN = re.compile(r"\[url\s*=\s*" + _TARGET + _TARGET_TAIL + r"\](?P<label>.*?)\[/url\]", _FLAGS)
IMAGE_PATTERN = re.compile(r"\[img\s*\]\s*" + _TARGET + _TARGET_TAIL + r"\[/img\]", _FLAGS)

QUOTE_TAG_PATTERN = re.compile(r"\[/quote\]|\[quote\b[^\]]*\]", _FLAGS)
FLAT_QUOTE_PATTERN = re.compile(r"\[quote\b[^\]]*\]((?:[^\[]|\[(?!/?quote))*)\[/quote\]", _FLAGS)

SNIPPET_PATTERN = re.compile(r"\[code\s*=?(?P<language>\w*)\](?P<snippet>.*?)\[/code\]", _FLAGS)


def _unwrap(pattern: re.Pattern[str], text: str) -> str:
    return pattern.sub(lambda match: match.group(1), text)


def _wrap(pattern: re.Pattern[str], marker: str, text: str) -> str:
    return pattern.sub(lambda match: marker + match.group(1).strip(" ") + marker, text)


def remove_color(text: str, doc_id: str | None = None) -> str:
    """Strip ``[color=...]`` tags, keeping their content."""
    return _unwrap(COLOR_PATTERN, text)


def remove_size(text: str, doc_id: str | None = None) -> str:
    """Strip ``[size=N]`` tags, keeping their content."""
    return _unwrap(SIZE_PATTERN, text)


def remove_center(text: str, doc_id: str | None = None) -> str:
    """Strip ``[center]`` tags, keeping their content."""
    return _unwrap(CENTER_PATTERN, text)


def replace_bold(text: str, doc_id: str | None = None) -> str:
    """Replace ``[b]`` with ``**strong**`` emphasis."""
    return _wrap(BOLD_PATTERN, "**", text)


def replace_italic(text: str, doc_id: str | None = None) -> str:
    """Replace ``[i]`` with ``*emphasis*``."""
    return _wrap(ITALIC_PATTERN, "*", text)


def replace_underline(text: str, doc_id: str | None = None) -> str:
    """Replace ``[u]`` with ``_underscore_`` emphasis."""
    return _wrap(UNDERLINE_PATTERN, "_", text)


def replace_strikethrough(text: str, doc_id: str | None = None) -> str:
    """Replace ``[s]`` with ``~~strikethrough~~``."""
    return _wrap(STRIKETHROUGH_PATTERN, "~~", text)


def _trim_lines(body: str) -> str:
    return "\n".join(line.strip() for line in body.splitlines() if line.strip())


def replace_lists(text: str, doc_id: str | None = None) -> str:
    """Replace ``[list]`` and ``[list=1]`` blocks with Markdown lists.

    The body is split on ``[*]`` markers. Anything before the first marker is
    discarded, empty items are skipped, and ordered items are numbered by
    their position among the markers. A non-empty list is surrounded by a
    blank line on each side; a list without items disappears.

    Parameters
    ----------
    text : str
        Text to rewrite
    doc_id : str, optional
        Document identifier used in error messages

    Returns
    -------
    str
        Text with every list block rewritten

    Raises
    ------
    MalformedMarkupError
        If the list body could not be captured

    """

    def _replace(match: re.Match[str]) -> str:
        body = match.group("items")
        if body is None:
            raise MalformedMarkupError("list", doc_id)

        items = LIST_ITEM_MARKER.split(_trim_lines(body))
        ordered = match.group("type") == "=1"

        buffer = ""
        # The first segment precedes the first marker
        for index, item in enumerate(items[1:], start=1):
            item = item.strip()
            if not item:
                continue
            prefix = f"{index}." if ordered else "-"
            buffer += f"{prefix} {item}\n"

        if buffer:
            buffer = "\n" + buffer + "\n"
        return buffer

    return LIST_PATTERN.sub(_replace, text)


def _target(match: re.Match[str]) -> str | None:
    quoted = match.group("quoted")
    return quoted if quoted is not None else match.group("bare")


def replace_urls(text: str, doc_id: str | None = None) -> str:
    """Replace ``[url=DEST]LABEL[/url]`` with ``[LABEL](DEST)``.

    Quotes around ``DEST`` are dropped rather than carried into the link
    target, so ``[url="x"]l[/url]`` becomes ``[l](x)``, not ``[l]("x")``.
    """

    def _replace(match: re.Match[str]) -> str:
        destination = _target(match)
        label = match.group("label")
        if destination is None or label is None:
            raise MalformedMarkupError("url", doc_id)
        return f"[{label}]({destination})"

    return URL_PATTERN.sub(_replace, text)


def replace_images(text: str, doc_id: str | None = None) -> str:
    """Replace ``[img]DEST[/img]`` with an image on its own line."""

    def _replace(match: re.Match[str]) -> str:
        destination = _target(match)
        if destination is None:
            raise MalformedMarkupError("image", doc_id)
        return f"\n![]({destination})\n"

    return IMAGE_PATTERN.sub(_replace, text)


def flatten_quotes(text: str) -> str:
    """Remove every balanced quote block nested inside another quote block.

    The outermost ``[quote]`` tags and the text directly inside them are kept;
    inner blocks go away together with their content. Unbalanced tags are left
    where they are.

    Examples
    --------
        >>> flatten_quotes("[quote]a[quote]b[/quote]c[/quote]")
        '[quote]ac[/quote]'

    """
    open_tags: list[int] = []
    nested: list[tuple[int, int]] = []

    for tag in QUOTE_TAG_PATTERN.finditer(text):
        if tag.group().startswith("[/"):
            if not open_tags:
                continue
            start = open_tags.pop()
            if open_tags:
                nested.append((start, tag.end()))
        else:
            open_tags.append(tag.start())

    if not nested:
        return text

    pieces = []
    position = 0
    for start, end in sorted(nested):
        # Blocks inside an already removed block
        if start < position:
            continue
        pieces.append(text[position:start])
        position = end
    pieces.append(text[position:])
    return "".join(pieces)


def replace_quotes(text: str, doc_id: str | None = None) -> str:
    """Render quote blocks as one-level Markdown blockquotes.

    Nested quotes are flattened first (see :func:`flatten_quotes`). Each
    remaining block becomes ``"> "`` followed by its trimmed content, with
    leading whitespace and blank lines removed, and a blank line after it.
    """
    text = flatten_quotes(text)

    def _replace(match: re.Match[str]) -> str:
        content = match.group(1).strip()
        quote = "\n".join(line.lstrip() for line in content.splitlines() if line.strip())
        return "> " + quote + "\n\n"

    return FLAT_QUOTE_PATTERN.sub(_replace, text)


def resolve_language(language: str, language_aliases: Mapping[str, str] = LANGUAGE_ALIASES) -> str:
    """Map a BBCode code language onto a fence language.

    Examples
    --------
        >>> resolve_language("Shell")
        'sh'
        >>> resolve_language("python")
        'python'

    """
    language = language.lower()
    return language_aliases.get(language, language)


def replace_snippets(
    text: str, doc_id: str | None = None, language_aliases: Mapping[str, str] = LANGUAGE_ALIASES
) -> str:
    """Replace ``[code=LANG]`` blocks with fenced code blocks.

    Parameters
    ----------
    text : str
        Text to rewrite
    doc_id : str, optional
        Document identifier used in error messages
    language_aliases : Mapping[str, str]
        Lowercased BBCode language to fence language. Languages missing from
        the mapping are used as they are.

    Raises
    ------
    MalformedMarkupError
        If a code block body could not be captured

    """

    def _replace(match: re.Match[str]) -> str:
        snippet = match.group("snippet")
        if snippet is None:
            raise MalformedMarkupError("snippet", doc_id)
        language = resolve_language(match.group("language") or "", language_aliases)
        return f"\n```{language}\n{snippet.strip()}\n```\n"

    return SNIPPET_PATTERN.sub(_replace, text)
