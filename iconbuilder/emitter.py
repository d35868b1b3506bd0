"""
emitter.py

Responsibility: Deterministically render the text of generated files.

Rules:
- Every function here is pure: same input, same bytes. No I/O.
- Trees are embedded as compact JSON, byte-identical to JavaScript's
  `JSON.stringify`, so generated modules round-trip and builds are reproducible.
- Templates are rendered with StrictUndefined so a missing variable fails loudly.

This module intentionally does NOT know about the file system or icon discovery.
"""

from __future__ import annotations

import enum
import json
from functools import lru_cache
from typing import Any

from jinja2 import Environment, StrictUndefined, Template

from iconbuilder.svg_parser import ElementNode

BANNER = "// THIS FILE IS AUTO GENERATED\n"


class OutputFormat(enum.Enum):
    MODULE = "index.mjs"
    COMMON = "index.js"
    DTS = "index.d.ts"

    @property
    def file_name(self) -> str:
        return self.value


_ICON_ROW_TEMPLATES = {
    OutputFormat.MODULE: (
        "export const Data{{ name }} = {{ data }};\n"
        "export const {{ name }} = function (props) { return GenIcon(Data{{ name }})(props); };\n"
    ),
    OutputFormat.COMMON: (
        "module.exports.Data{{ name }} = {{ data }};\n"
        "module.exports.{{ name }} = function (props) "
        "{ return GenIcon(module.exports.Data{{ name }})(props); };\n"
    ),
    OutputFormat.DTS: (
        "export declare const Data{{ name }}: IconData;\n"
        "export declare const {{ name }}: IconType;\n"
    ),
}

# Declaration files put the import ahead of the banner.
_ICON_SET_HEADERS = {
    OutputFormat.MODULE: BANNER + "import { GenIcon } from '../iconBase';\n",
    OutputFormat.COMMON: BANNER + "const { GenIcon } = require('../iconBase')\n",
    OutputFormat.DTS: "import { IconData, IconType } from '../iconBase'\n" + BANNER,
}

_BARREL_ENTRY_TEMPLATE = "export * from './{{ icon_set_id }}';\n"

INDEX_EXPORTS = (
    'export * from "./iconsManifest";\n'
    'export { IconBaseProps, IconType } from "./iconBase";\n'
    'export * from "./iconContext"'
)


@lru_cache(maxsize=None)
def _environment() -> Environment:
    return Environment(
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )


@lru_cache(maxsize=None)
def _template(source: str) -> Template:
    return _environment().from_string(source)


def serialize_tree(tree: ElementNode | dict[str, Any]) -> str:
    """
    Compact JSON literal for a tree, matching `JSON.stringify(tree)`.
    """
    data = tree.to_dict() if isinstance(tree, ElementNode) else tree
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


def emit_icon_row(name: str, tree: ElementNode, fmt: OutputFormat) -> str:
    """
    Render the two lines one icon contributes to an icon set's file in `fmt`.

    Declarations carry no tree data.
    """
    context: dict[str, Any] = {"name": name}
    if fmt is not OutputFormat.DTS:
        context["data"] = serialize_tree(tree)
    return _template(_ICON_ROW_TEMPLATES[fmt]).render(**context)


def icon_set_header(fmt: OutputFormat) -> str:
    return _ICON_SET_HEADERS[fmt]


def banner() -> str:
    return BANNER


def emit_barrel_entry(icon_set_id: str) -> str:
    return _template(_BARREL_ENTRY_TEMPLATE).render(icon_set_id=icon_set_id)


def emit_index_exports() -> str:
    return INDEX_EXPORTS
