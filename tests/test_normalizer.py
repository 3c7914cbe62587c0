"""Tests for xmldb_core.normalizer."""

from xmldb_core.model import Leaf, Record
from xmldb_core.normalizer import normalize


def _all_fields_are_lists(record: Record) -> bool:
    for instances in record.fields.values():
        if not isinstance(instances, list):
            return False
        for instance in instances:
            if isinstance(instance, Record) and not _all_fields_are_lists(instance):
                return False
    return True


class TestSingleInstances:
    def test_leaf_is_wrapped(self):
        assert normalize({"path": "a.obj"}) == Record({"path": [Leaf("a.obj")]})

    def test_map_is_wrapped(self):
        result = normalize({"group": {"path": "a.obj"}})
        assert result == Record({"group": [Record({"path": [Leaf("a.obj")]})]})

    def test_number_leaf(self):
        assert normalize({"count": 3}) == Record({"count": [Leaf("3")]})


class TestRepeatedInstances:
    def test_list_kept_in_order(self):
        result = normalize({"group": [{"path": "a.obj"}, {"path": "b.obj"}]})
        assert result.fields["group"] == [
            Record({"path": [Leaf("a.obj")]}),
            Record({"path": [Leaf("b.obj")]}),
        ]

    def test_list_of_leaves(self):
        result = normalize({"tag": ["x", "y", "z"]})
        assert result.fields["tag"] == [Leaf("x"), Leaf("y"), Leaf("z")]

    def test_empty_list(self):
        assert normalize({"group": []}) == Record({"group": []})


class TestEmptyMap:
    def test_empty_map_is_empty_collection(self):
        """An empty element yields zero instances, not one empty instance."""
        assert normalize({"group": {}}) == Record({"group": []})

    def test_empty_map_inside_list_is_an_instance(self):
        result = normalize({"group": [{}, {"path": "a"}]})
        assert result.fields["group"] == [Record(), Record({"path": [Leaf("a")]})]


class TestShape:
    def test_deep_tree_invariant(self):
        raw = {
            "resources": {
                "objectGeometryGroup": [
                    {"path": "a.obj", "tags": {"tag": ["x", "y"]}},
                    {"path": "b.obj"},
                ],
                "texture": {"path": "t.png"},
            },
            "version": "2",
        }
        result = normalize(raw)
        assert _all_fields_are_lists(result)
        group = result.fields["resources"][0].fields["objectGeometryGroup"]
        assert len(group) == 2
        assert group[0].fields["tags"][0].fields["tag"] == [Leaf("x"), Leaf("y")]

    def test_field_order_preserved(self):
        result = normalize({"b": "1", "a": "2", "c": "3"})
        assert list(result.fields) == ["b", "a", "c"]

    def test_non_map_gives_empty_record(self):
        assert normalize("text") == Record()
        assert normalize(None) == Record()


class TestIdempotence:
    def test_normalize_twice(self):
        raw = {
            "resources": {"group": [{"path": "a"}, {"path": "b"}], "empty": {}},
            "name": "scene",
        }
        once = normalize(raw)
        twice = normalize(once)
        assert twice == once
        assert list(twice.fields) == list(once.fields)

    def test_returns_new_tree(self):
        once = normalize({"path": "a"})
        twice = normalize(once)
        twice.fields["path"].append(Leaf("b"))
        assert once.fields["path"] == [Leaf("a")]
