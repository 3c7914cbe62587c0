"""End-to-end integration tests."""

from xmldb_core import Leaf, Record, RecordStore, normalize, to_document
from xmldb_core.reader import parse
from xmldb_core.writer import serialize

GROUP = "objectGeometryGroup"


def _round_trip(tree: Record) -> Record:
    forest, error = to_document(tree, is_root=True)
    assert error is None
    raw = parse(serialize(forest))
    return normalize(raw["database"])


def _same_order(a: Record, b: Record) -> bool:
    if list(a.fields) != list(b.fields):
        return False
    for name in a.fields:
        for x, y in zip(a.fields[name], b.fields[name]):
            if isinstance(x, Record) and not _same_order(x, y):
                return False
    return True


def test_canonical_tree_survives_save_and_load():
    tree = Record({
        "name": [Leaf("scene")],
        "resources": [Record({
            GROUP: [
                Record({"path": [Leaf("a.obj")], "lod": [Leaf("0"), Leaf("1")]}),
                Record({"path": [Leaf("b.obj")]}),
            ],
            "texture": [Record({"path": [Leaf("wood.png")]})],
        })],
        "tag": [Leaf("x"), Leaf("y"), Leaf("z")],
    })
    result = _round_trip(tree)
    assert result == tree
    assert _same_order(result, tree)


def test_number_leaves_survive_save_and_load():
    tree = Record({"count": [Leaf(3)], "whole": [Leaf(3.0)], "ratio": [Leaf(0.5)]})
    assert _round_trip(tree) == tree


def test_resource_workflow(tmp_path):
    """load one entry → add → duplicate add → remove → save → reload."""
    db = tmp_path / "db.xml"
    db.write_text(
        "<database><resources><objectGeometryGroup>"
        "<path>a.obj</path>"
        "</objectGeometryGroup></resources></database>",
        encoding="utf-8",
    )
    messages: list[str] = []
    store = RecordStore(sink=messages.append)

    assert store.load(db)
    assert len(store.entries(GROUP)) == 1

    assert store.add_entry(GROUP, "b.obj")
    assert len(store.entries(GROUP)) == 2

    assert not store.add_entry(GROUP, "a.obj")
    assert len(store.entries(GROUP)) == 2
    assert len(messages) == 1

    assert store.remove_entry(GROUP, "a.obj")
    assert store.entries(GROUP) == ["b.obj"]

    assert store.save(db)
    reloaded = RecordStore(sink=messages.append)
    assert reloaded.load(db)
    assert reloaded.entries(GROUP) == ["b.obj"]
    assert reloaded.tree == store.tree


def test_build_from_nothing(tmp_path):
    store = RecordStore()
    store.add_entry(GROUP, "a.obj")
    store.add_entry(GROUP, "b.obj")
    out = tmp_path / "new.xml"
    assert store.save(out)
    assert out.read_text(encoding="utf-8") == (
        "<database>\n"
        "    <resources>\n"
        "        <objectGeometryGroup>\n"
        "            <path>a.obj</path>\n"
        "        </objectGeometryGroup>\n"
        "        <objectGeometryGroup>\n"
        "            <path>b.obj</path>\n"
        "        </objectGeometryGroup>\n"
        "    </resources>\n"
        "</database>\n"
    )
