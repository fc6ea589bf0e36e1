import json
from pathlib import Path
import pytest
from menutree.core.errors import TemplateError
from menutree.core.group_templates import (
    GroupTemplate,
    find_group_items,
    group_file_path,
    group_name_for,
    load_template,
    render_group,
    render_item,
    write_group_files,
)
from menutree.core.menu_item import MenuItem
from menutree.core.tree_builder import TemplateRef, TreeBuilder


def write_template(path: Path, data) -> Path:
    path.write_text(data if isinstance(data, str) else json.dumps(data), encoding="utf-8")
    return path


def item(name, group=None, order=9999, **props):
    props.setdefault("name_en", name)
    return MenuItem(link="", name_en=name, group=group, order=order, properties=props)


def test_nav_scenario(tmp_path: Path, menu_writer):
    menu_writer(tmp_path, [
        {"name_en": "Home"},
        {"name_en": "B", "link": "b", "group": "nav"},
        {"name_en": "A", "link": "a", "group": "nav"},
    ])
    write_template(tmp_path / ".template.nav", {"item_template": "<b>{{name_en}}</b>", "item_spacer": ", "})
    tree = TreeBuilder(tmp_path).build()
    written = write_group_files(tree.templates[0])
    assert written == [tmp_path.resolve() / ".nav.html"]
    assert (tmp_path / ".nav.html").read_text(encoding="utf-8") == "<b>A</b>, <b>B</b>"


def test_subgroups_get_own_bucket(tmp_path: Path, menu_writer):
    menu_writer(tmp_path, [
        {"name_en": "Home"},
        {"name_en": "Top", "link": "t", "group": "nav.top"},
        {"name_en": "Main", "link": "m", "group": "nav"},
        {"name_en": "Other", "link": "o", "group": "footer"},
    ])
    write_template(tmp_path / ".template.nav", {"item_template": "{{name_en}}"})
    tree = TreeBuilder(tmp_path).build()
    write_group_files(tree.templates[0])
    assert (tmp_path / ".nav.html").read_text(encoding="utf-8") == "Main"
    assert (tmp_path / ".nav.top.html").read_text(encoding="utf-8") == "Top"
    assert not (tmp_path / ".footer.html").exists()


def test_subtree_scan_and_case_insensitive_match(tmp_path: Path, menu_writer):
    menu_writer(tmp_path, [{"name_en": "Home"}])
    write_template(tmp_path / ".template.nav", {"item_template": "[{{link}}]"})
    menu_writer(tmp_path / "a", [{"name_en": "A", "group": "NAV"}])
    menu_writer(tmp_path / "a" / "b", [
        {"name_en": "B"},
        {"name_en": "Deep", "link": "deep.html", "group": "NAV"},
    ])
    tree = TreeBuilder(tmp_path).build()
    write_group_files(tree.templates[0])
    assert (tmp_path / ".NAV.html").read_text(encoding="utf-8") == "[a/][a/b/deep.html]"


def test_template_only_sees_owner_subtree(tmp_path: Path, menu_writer):
    menu_writer(tmp_path, [{"name_en": "Home"}, {"name_en": "Outside", "link": "x", "group": "nav"}])
    menu_writer(tmp_path / "section", [
        {"name_en": "Section"},
        {"name_en": "Inside", "link": "y", "group": "nav"},
    ])
    write_template(tmp_path / "section" / ".template.nav", {"item_template": "{{name_en}}"})
    tree = TreeBuilder(tmp_path).build()
    write_group_files(tree.templates[0])
    assert (tmp_path / "section" / ".nav.html").read_text(encoding="utf-8") == "Inside"


def test_render_item_placeholders():
    props = {"name_en": "A", "link": "/a"}
    assert render_item('<a href="{{link}}">{{name_en}}</a>{{missing}}', props) == '<a href="/a">A</a>'
    assert render_item("no placeholders", props) == "no placeholders"


def test_render_group_spacer_between_items():
    template = GroupTemplate(item_template="{{name_en}}", item_spacer=" | ")
    assert render_group(template, [item("A"), item("B"), item("C")]) == "A | B | C"
    assert render_group(template, [item("A")]) == "A"


def test_find_group_items_orders_buckets():
    root = item("root")
    root.children.extend([item("b", "nav", 2), item("a", "nav", 2), item("z", "nav", 1), item("x", "other")])
    buckets = find_group_items(root.children, "Nav")
    assert list(buckets) == ["nav"]
    assert [i.name_en for i in buckets["nav"]] == ["z", "a", "b"]


def test_load_template_defaults(tmp_path: Path):
    tpl = load_template(write_template(tmp_path / ".template.x", {"item_template": "t", "item_spacer": None}))
    assert tpl.item_spacer == ""


@pytest.mark.parametrize("content", ["not json", "[1, 2]", '{"item_spacer": ","}', '{"item_template": 5}'])
def test_load_template_invalid(tmp_path: Path, content):
    with pytest.raises(TemplateError):
        load_template(write_template(tmp_path / ".template.x", content))


def test_invalid_template_is_skipped(tmp_path: Path, log_messages):
    owner = item("Home")
    owner.children.add(item("A", "nav"))
    path = write_template(tmp_path / ".template.nav", {"item_spacer": ","})
    assert write_group_files(TemplateRef(path=path, owner=owner)) == []
    assert any("Skipping template" in m for m in log_messages)


def test_write_failure_continues_with_other_buckets(tmp_path: Path, log_messages):
    owner = item("Home")
    owner.children.extend([item("A", "nav"), item("B", "nav.x")])
    (tmp_path / ".nav.html").mkdir()  # unwritable bucket
    path = write_template(tmp_path / ".template.nav", {"item_template": "{{name_en}}"})
    written = write_group_files(TemplateRef(path=path, owner=owner))
    assert written == [tmp_path / ".nav.x.html"]
    assert any("Could not write group file" in m for m in log_messages)


def test_paths():
    assert group_name_for(Path("/site/.template.nav.top")) == "nav.top"
    assert group_file_path(Path("/site/.template.nav"), "nav.top") == Path("/site/.nav.top.html")
