import json
from pathlib import Path
import pytest
from menutree.core.errors import OutputError
from menutree.core.menu_item import ChildItems, MenuItem
from menutree.core.serializer import build_structure, dumps_structure, loads_structure, write_structure


def sample_tree():
    home = MenuItem(link="", name_en="Home", order=0)
    home.children.add(MenuItem(link="about/", name_de="Über", name_en="About", order=1, hidden=True))
    home.children.add(MenuItem(link='/say"hi"', name_en='Quote "me"', order=2))
    return ChildItems([home])


def test_structure_fields():
    data = build_structure(sample_tree())
    assert data[0] == {
        "name_de": "Home",
        "name_en": "Home",
        "link": "",
        "hidden": False,
        "items": data[0]["items"],
    }
    about = data[0]["items"][0]
    assert about["name_de"] == "Über"
    assert about["hidden"] is True
    assert about["items"] == []


def test_escaped_text_is_json_with_quotes_escaped():
    plain = dumps_structure(sample_tree(), escape_quotes=False)
    escaped = dumps_structure(sample_tree())
    assert escaped == plain.replace('"', '\\"')
    assert json.loads(plain) == build_structure(sample_tree())


def test_round_trip():
    text = dumps_structure(sample_tree())
    assert loads_structure(text) == build_structure(sample_tree())
    plain = dumps_structure(sample_tree(), escape_quotes=False)
    assert loads_structure(plain, escaped=False) == build_structure(sample_tree())


def test_empty_tree():
    assert dumps_structure(ChildItems()) == "[]"


def test_write_structure(tmp_path: Path):
    out = tmp_path / "structure.json"
    write_structure(sample_tree(), out)
    assert out.read_text(encoding="utf-8") == dumps_structure(sample_tree())


def test_write_structure_unwritable(tmp_path: Path):
    with pytest.raises(OutputError):
        write_structure(sample_tree(), tmp_path / "missing" / "structure.json")
