"""
names.py

Responsibility: Derive exported identifiers from file names and SVG attribute names.

Casing follows the rules of the JavaScript `camelcase` package so generated
identifiers and attribute keys match what the runtime expects:
- words are split on `_`, `.`, `-` and spaces
- existing camelCase humps are kept as word boundaries (`viewBox` stays `viewBox`)
- the letter after a run of digits is upper-cased (`500px` -> `500Px`)
- any other character (for example `:` in `xlink:href`) passes through
"""

from __future__ import annotations

import re
from pathlib import PurePath

from iconbuilder.icon_sets import IconSet

_LEADING_SEPARATORS = re.compile(r"^[_.\- ]+")
_SEPARATED_WORD = re.compile(r"[_.\- ]+(\w|$)", re.ASCII)
_DIGIT_RUN = re.compile(r"\d+(\w|$)", re.ASCII)


def _is_upper(ch: str) -> bool:
    return ch.isascii() and ch.isalpha() and ch.upper() == ch


def _is_lower(ch: str) -> bool:
    return ch.isascii() and ch.isalpha() and ch.lower() == ch


def _preserve_camel_case(text: str) -> str:
    """
    Insert '-' at camelCase boundaries so they survive lower-casing:
    "viewBox" -> "view-Box", "XMLHttp" -> "XML-Http".
    """
    chars = list(text)
    last_lower = last_upper = last_last_upper = False
    i = 0
    while i < len(chars):
        ch = chars[i]
        if last_lower and _is_upper(ch):
            chars.insert(i, "-")
            last_lower = False
            last_last_upper = last_upper
            last_upper = True
            i += 1
        elif last_upper and last_last_upper and _is_lower(ch):
            chars.insert(i - 1, "-")
            last_last_upper = last_upper
            last_upper = False
            last_lower = True
        else:
            last_lower = ch.lower() == ch and ch.upper() != ch
            last_last_upper = last_upper
            last_upper = ch.upper() == ch and ch.lower() != ch
        i += 1
    return "".join(chars)


def camel_case(text: str, *, pascal: bool = False) -> str:
    """
    Convert `text` to camelCase (or PascalCase when `pascal` is set).

    >>> camel_case("fill-opacity")
    'fillOpacity'
    >>> camel_case("arrow-left", pascal=True)
    'ArrowLeft'
    """
    text = text.strip()
    if not text:
        return ""
    if len(text) == 1:
        return text.upper() if pascal else text.lower()

    if text != text.lower():
        text = _preserve_camel_case(text)
    text = _LEADING_SEPARATORS.sub("", text).lower()
    text = _SEPARATED_WORD.sub(lambda m: m.group(1).upper(), text)
    # "500px" -> "500Px", "3d-rotation" -> "3DRotation"
    text = _DIGIT_RUN.sub(lambda m: m.group(0).upper(), text)

    if pascal and text:
        return text[0].upper() + text[1:]
    return text


def pascal_case(text: str) -> str:
    return camel_case(text, pascal=True)


def resolve_name(file_name: str | PurePath, icon_set: IconSet) -> str:
    """
    Exported identifier for one icon file: Pascal-cased base name (extension
    stripped), passed through the icon set's formatter when it has one.

    The result is not validated as an identifier.
    """
    pascal_name = pascal_case(PurePath(file_name).stem)
    if icon_set.formatter is None:
        return pascal_name
    return icon_set.formatter(pascal_name) or pascal_name
