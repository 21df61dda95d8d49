from unittest.mock import MagicMock

from azurerm.helpers import tags


class TestValidate:

    def test_valid(self):
        assert tags.validate({"env": "prod"}, "tags") == ([], [])

    def test_too_many_tags(self):
        _, errors = tags.validate({f"k{i}": "v" for i in range(51)}, "tags")
        assert errors == ["a maximum of 50 tags can be applied to each ARM resource"]

    def test_key_too_long(self):
        _, errors = tags.validate({"k" * 513: "v"}, "tags")
        assert "tag key" in errors[0]

    def test_value_too_long(self):
        _, errors = tags.validate({"k": "v" * 257}, "tags")
        assert "tag value" in errors[0]

    def test_not_a_map(self):
        _, errors = tags.validate(["a"], "tags")
        assert errors == ["expected type of tags to be map"]


class TestExpandFlatten:

    def test_expand_stringifies(self):
        assert tags.expand({"count": 3, "empty": None}) == {"count": "3", "empty": ""}

    def test_expand_none(self):
        assert tags.expand(None) == {}

    def test_flatten(self):
        assert tags.flatten({"a": "1", "b": None}) == {"a": "1", "b": ""}
        assert tags.flatten(None) == {}

    def test_flatten_and_set(self):
        d = MagicMock()
        tags.flatten_and_set(d, {"env": "test"})
        d.set.assert_called_once_with("tags", {"env": "test"})


def test_schema_force_new():
    assert tags.schema_force_new().force_new
    assert not tags.schema().force_new
