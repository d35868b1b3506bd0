"""
svg_parser.py

Responsibility: Parse one SVG document into a normalized `ElementNode` tree.

Rules:
- Only the first `svg` element (document order) and its descendants are kept.
- `class` is dropped everywhere; `xmlns`, `width` and `height` are dropped on
  the root `svg` element only.
- Attribute keys are camel-cased (`fill-opacity` -> `fillOpacity`), values are
  kept verbatim.
- `style` elements are removed with their subtree. Text, comments and
  processing instructions are never represented.
- A node without element children has `child=None`, not an empty tuple.

This module intentionally does NOT know about file names or output formats.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any

from lxml import etree

from iconbuilder.names import camel_case

logger = logging.getLogger(__name__)

XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"

ROOT_ONLY_DROPPED = ("xmlns", "width", "height")
ALWAYS_DROPPED = ("class",)
EXCLUDED_TAGS = ("style",)

_MARKUP = re.compile(
    r"<!--.*?-->"
    r"|<!\[CDATA\[.*?\]\]>"
    r"|<\?.*?\?>"
    r"|<!(?:[^\[>]|\[.*?\])*>"
    r"|<(?P<tag>[^\s/>!?]+)(?P<attrs>(?:[^>\"']|\"[^\"]*\"|'[^']*')*)>",
    re.S,
)
_ATTRIBUTE = re.compile(r"(?P<name>[^\s=/]+)\s*=\s*(?:\"[^\"]*\"|'[^']*')")


class SvgParseError(ValueError):
    pass


@dataclass(frozen=True)
class ElementNode:
    tag: str
    attr: dict[str, str] = field(default_factory=dict)
    child: tuple[ElementNode, ...] | None = None

    def to_dict(self) -> dict[str, Any]:
        """
        Plain mapping in the shape the generated code embeds:
        {"tag": ..., "attr": {...}, "child": [...]}, `child` omitted when absent.
        """
        out: dict[str, Any] = {"tag": self.tag, "attr": dict(self.attr)}
        if self.child is not None:
            out["child"] = [c.to_dict() for c in self.child]
        return out


def _make_parser() -> etree.XMLParser:
    return etree.XMLParser(
        resolve_entities=False,
        no_network=True,
        remove_comments=True,
        remove_pis=True,
    )


def _local_name(name: str) -> str:
    return etree.QName(name).localname


def _prefixed_name(name: str, element: etree._Element) -> str:
    """
    Render a Clark-notation name ("{uri}local") with the prefix used in the
    source document ("xlink:href", "xml:space").
    """
    qname = etree.QName(name)
    if qname.namespace is None:
        return qname.localname
    if qname.namespace == XML_NAMESPACE:
        return f"xml:{qname.localname}"
    for prefix, uri in element.nsmap.items():
        if prefix is not None and uri == qname.namespace:
            return f"{prefix}:{qname.localname}"
    return qname.localname


def _tag_name(element: etree._Element) -> str:
    local = _local_name(element.tag)
    return f"{element.prefix}:{local}" if element.prefix else local


def _namespace_declarations(element: etree._Element) -> list[tuple[str, str]]:
    """
    Namespaces declared on this element itself, as (attribute name, uri) pairs.
    """
    parent = element.getparent()
    inherited = parent.nsmap if parent is not None else {}
    decls: list[tuple[str, str]] = []
    for prefix, uri in element.nsmap.items():
        if inherited.get(prefix) == uri:
            continue
        decls.append(("xmlns" if prefix is None else f"xmlns:{prefix}", uri))
    return decls


def _source_attribute_names(data: bytes) -> list[list[str]]:
    """
    Attribute names of every start tag, in document order, as written in the source.

    lxml keeps regular attributes in order but reports namespace declarations
    separately; this recovers where the declarations sat.
    """
    text = data.decode("utf-8", errors="replace")
    names: list[list[str]] = []
    for m in _MARKUP.finditer(text):
        if m.group("tag") is not None:
            names.append([a.group("name") for a in _ATTRIBUTE.finditer(m.group("attrs"))])
    return names


def _convert_attributes(
    element: etree._Element, *, is_root: bool, source_names: list[str] | None = None
) -> dict[str, str]:
    dropped = ALWAYS_DROPPED + ROOT_ONLY_DROPPED if is_root else ALWAYS_DROPPED

    decls = _namespace_declarations(element)
    raw: list[tuple[str, str]] = list(decls)
    raw.extend((_prefixed_name(key, element), value) for key, value in element.attrib.items())
    if decls and source_names:
        position = {name: i for i, name in enumerate(source_names)}
        raw.sort(key=lambda pair: position.get(pair[0], len(position)))

    attr: dict[str, str] = {}
    for name, value in raw:
        if name in dropped:
            continue
        attr[camel_case(name)] = value
    return attr


def _is_included(element: Any) -> bool:
    # Comments and PIs carry a non-str tag.
    return isinstance(element.tag, str) and _local_name(element.tag) not in EXCLUDED_TAGS


def _element_to_node(
    element: etree._Element, source_order: dict[etree._Element, list[str]], *, is_root: bool = False
) -> ElementNode:
    children = tuple(_element_to_node(c, source_order) for c in element if _is_included(c))
    return ElementNode(
        tag=_tag_name(element),
        attr=_convert_attributes(element, is_root=is_root, source_names=source_order.get(element)),
        child=children or None,
    )


def _find_svg_root(document: etree._Element) -> etree._Element | None:
    for element in document.iter():
        if isinstance(element.tag, str) and _local_name(element.tag) == "svg":
            return element
    return None


def parse_svg(svg_text: str | bytes) -> ElementNode:
    """
    Parse SVG source text into an `ElementNode` rooted at the first `svg` element.

    Raises SvgParseError if the text is not well-formed XML or contains no `svg` element.
    """
    data = svg_text.encode("utf-8") if isinstance(svg_text, str) else svg_text
    try:
        document = etree.fromstring(data, _make_parser())
    except etree.XMLSyntaxError as e:
        raise SvgParseError(f"Invalid SVG document: {e}") from e

    root = _find_svg_root(document)
    if root is None:
        raise SvgParseError(f"No <svg> element found (document root is <{_tag_name(document)}>)")

    elements = [e for e in document.iter() if isinstance(e.tag, str)]
    names = _source_attribute_names(data)
    # Start tags and elements pair up one to one unless the source uses an encoding we cannot scan.
    source_order = dict(zip(elements, names)) if len(names) == len(elements) else {}

    node = _element_to_node(root, source_order, is_root=True)
    logger.debug("Parsed <%s> with %d top-level children", node.tag, len(node.child or ()))
    return node
