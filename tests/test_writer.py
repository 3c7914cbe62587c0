"""Tests for xmldb_core.writer."""

import pytest

from xmldb_core.document import Element, Text
from xmldb_core.errors import CorruptionError
from xmldb_core.writer import serialize


def _doc() -> list:
    return [
        Element("database", [
            Element("resources", [
                Element("objectGeometryGroup", [Element("path", [Text("a.obj")])]),
            ]),
        ])
    ]


def test_four_space_indent():
    expected = (
        "<database>\n"
        "    <resources>\n"
        "        <objectGeometryGroup>\n"
        "            <path>a.obj</path>\n"
        "        </objectGeometryGroup>\n"
        "    </resources>\n"
        "</database>\n"
    )
    assert serialize(_doc()) == expected


def test_custom_indent():
    text = serialize([Element("r", [Element("a", [Text("1")])])], indent=2)
    assert text == "<r>\n  <a>1</a>\n</r>\n"


def test_empty_element():
    assert serialize([Element("database", [])]) == "<database/>\n"


def test_empty_forest():
    assert serialize([]) == ""


def test_text_escaped():
    text = serialize([Element("path", [Text("a<b&c")])])
    assert text == "<path>a&lt;b&amp;c</path>\n"


def test_multiple_top_level_elements():
    text = serialize([Element("a", [Text("1")]), Element("b", [Text("2")])])
    assert text == "<a>1</a>\n<b>2</b>\n"


def test_bare_text_rejected():
    with pytest.raises(CorruptionError):
        serialize([Text("loose")])


def test_invalid_element_name():
    with pytest.raises(CorruptionError):
        serialize([Element("not a name", [])])
