from __future__ import annotations

import json

import pytest

from iconbuilder.svg_parser import ElementNode, SvgParseError, parse_svg
from tests.conftest import ARROW_LEFT


def test_root_drops_size_namespace_and_class() -> None:
    tree = parse_svg(ARROW_LEFT)
    assert tree.to_dict() == {
        "tag": "svg",
        "attr": {},
        "child": [{"tag": "path", "attr": {"d": "M1 2", "fillOpacity": "0.5"}}],
    }


def test_nested_elements_keep_size_but_lose_class() -> None:
    tree = parse_svg('<svg viewBox="0 0 24 24" height="1em"><rect width="10" height="5" class="a"/></svg>')
    assert tree.attr == {"viewBox": "0 0 24 24"}
    assert tree.child is not None
    assert tree.child[0].attr == {"width": "10", "height": "5"}


def test_style_elements_are_removed_everywhere() -> None:
    tree = parse_svg('<svg><style>.a{fill:red}</style><g><style/><path d="M0"/></g></svg>')
    assert tree.to_dict() == {
        "tag": "svg",
        "attr": {},
        "child": [{"tag": "g", "attr": {}, "child": [{"tag": "path", "attr": {"d": "M0"}}]}],
    }


def test_leaf_nodes_have_no_child_field() -> None:
    tree = parse_svg("<svg><title>Bell</title><path d='M0'/></svg>")
    assert tree.child is not None
    assert [c.child for c in tree.child] == [None, None]
    assert all("child" not in c for c in tree.to_dict()["child"])


def test_empty_svg() -> None:
    assert parse_svg('<?xml version="1.0" encoding="UTF-8"?><svg/>') == ElementNode(tag="svg")


def test_comments_and_text_are_dropped() -> None:
    tree = parse_svg('<svg>\n  <!-- arrow -->\n  <path d="M0"/>\n</svg>')
    assert tree.child == (ElementNode(tag="path", attr={"d": "M0"}),)


def test_children_keep_document_order() -> None:
    tree = parse_svg('<svg><circle r="1"/><rect x="1"/><line x1="0"/></svg>')
    assert [c.tag for c in tree.child or ()] == ["circle", "rect", "line"]


def test_attribute_order_follows_source() -> None:
    tree = parse_svg('<svg><path stroke-width="2" d="M0" fill="none"/></svg>')
    assert tree.child is not None
    assert list(tree.child[0].attr) == ["strokeWidth", "d", "fill"]


def test_prefixed_names_are_kept() -> None:
    tree = parse_svg(
        '<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink">'
        '<use xlink:href="#a" xml:space="preserve"/></svg>'
    )
    assert tree.attr == {"xmlns:xlink": "http://www.w3.org/1999/xlink"}
    assert tree.child is not None
    assert tree.child[0].attr == {"xlink:href": "#a", "xml:space": "preserve"}


def test_namespace_declarations_keep_source_position() -> None:
    tree = parse_svg(
        '<svg viewBox="0 0 1 1" xmlns:xlink="http://www.w3.org/1999/xlink" fill="none"'
        ' xmlns="http://www.w3.org/2000/svg"><g id="a" xmlns:sodipodi="urn:s" opacity="1"/></svg>'
    )
    assert list(tree.attr) == ["viewBox", "xmlns:xlink", "fill"]
    assert tree.child is not None
    assert list(tree.child[0].attr) == ["id", "xmlns:sodipodi", "opacity"]


def test_first_svg_element_is_the_root() -> None:
    tree = parse_svg('<doc><svg width="1"><path d="M0"/></svg><svg><rect/></svg></doc>')
    assert tree.attr == {}
    assert [c.tag for c in tree.child or ()] == ["path"]


def test_to_dict_round_trips_through_json() -> None:
    tree = parse_svg('<svg><text aria-label="café" d="a&quot;b"/></svg>')
    data = json.loads(json.dumps(tree.to_dict()))
    assert data == tree.to_dict()
    assert data["child"][0]["attr"] == {"ariaLabel": "café", "d": 'a"b'}


@pytest.mark.parametrize("text", ["not xml", "<svg><path></svg>", "<html><body/></html>"])
def test_invalid_documents_raise(text: str) -> None:
    with pytest.raises(SvgParseError):
        parse_svg(text)
