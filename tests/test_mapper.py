"""
Tests for map_dictionary_value.

These tests verify:
    - Identity when no value field is requested
    - Selection and filtering on both views
    - Empty-group preservation vs pruning
    - `original` passthrough
    - Eager validation of platform and dictionary shape
"""

import pytest

from dvm.mapper import (
    MalformedDictionary,
    MissingRecognizedFields,
    ValueMappingError,
    map_dictionary_value,
    normalize_value_fields,
    recognized_fields_of,
)
from dvm.model import Dictionary, Platform
from dvm.tree import TreeStructureError


PLATFORM = Platform(name="test", value_transform_fields=["value", "value_darkMode", "value_hiContrast"])


def text_color():
    return {
        "name": "textColor",
        "value": "#222",
        "value_darkMode": "#ddd",
        "value_hiContrast": "#000",
    }


class TestNormalizeValueFields:
    """Test candidate list normalization."""

    def test_string(self):
        assert normalize_value_fields("value_darkMode") == ["value_darkMode"]

    def test_list(self):
        assert normalize_value_fields(["value_hiContrast", "value"]) == ["value_hiContrast", "value"]

    def test_nested_list_flattened_one_level(self):
        assert normalize_value_fields([["value_hiContrast"], "value"]) == ["value_hiContrast", "value"]

    def test_none(self):
        assert normalize_value_fields(None) == []


class TestIdentity:
    """No value field means no transform and no copy."""

    @pytest.mark.parametrize("value_field", [None, "", []])
    def test_returns_same_object(self, value_field):
        dictionary = Dictionary(properties={"a": {"value": 1}})
        assert map_dictionary_value(dictionary, value_field, PLATFORM) is dictionary

    def test_identity_skips_platform_validation(self):
        dictionary = Dictionary()
        assert map_dictionary_value(dictionary, None, object()) is dictionary


class TestSelection:
    """Test selection on both views."""

    def test_dark_mode_selection(self):
        prop = text_color()
        dictionary = Dictionary(properties={"color": {"text": prop}}, all_properties=[prop])

        result = map_dictionary_value(dictionary, "value_darkMode", PLATFORM)

        assert result.properties == {"color": {"text": {"name": "textColor", "value": "#ddd"}}}
        assert result.all_properties == [{"name": "textColor", "value": "#ddd"}]

    def test_fallback(self):
        prop = {"name": "textColor", "value": "#222"}
        dictionary = Dictionary(properties={"text": prop}, all_properties=[prop])

        result = map_dictionary_value(dictionary, ["value_hiContrast", "value"], PLATFORM)

        assert result.properties == {"text": {"name": "textColor", "value": "#222"}}
        assert result.all_properties == [{"name": "textColor", "value": "#222"}]

    def test_filtering_drops_from_both_views(self):
        light_only = {"name": "bg", "value": "#fff"}
        themed = text_color()
        dictionary = Dictionary(
            properties={"color": {"bg": light_only, "text": themed}},
            all_properties=[light_only, themed],
        )

        result = map_dictionary_value(dictionary, "value_darkMode", PLATFORM)

        assert "bg" not in result.properties["color"]
        assert [p["name"] for p in result.all_properties] == ["textColor"]

    def test_flat_view_order_preserved(self):
        props = [{"name": str(i), "value": i} for i in range(5)]
        props.insert(2, {"name": "skip", "value_darkMode": 0})
        dictionary = Dictionary(all_properties=props)

        result = map_dictionary_value(dictionary, "value", PLATFORM)

        assert [p["name"] for p in result.all_properties] == ["0", "1", "2", "3", "4"]

    def test_views_transformed_independently(self):
        """The flat view is not rebuilt from the tree."""
        dictionary = Dictionary(
            properties={"a": {"value": 1}},
            all_properties=[{"value": 2}],
        )
        result = map_dictionary_value(dictionary, "value", PLATFORM)
        assert result.properties == {"a": {"value": 1}}
        assert result.all_properties == [{"value": 2}]


class TestPruning:
    """Test empty-group handling."""

    def test_empty_subtree_preserved(self):
        dictionary = Dictionary(properties={"colors": {"text": {"value": "#000"}, "bg": {}}})
        result = map_dictionary_value(dictionary, ["value"], PLATFORM)
        assert result.properties == {"colors": {"text": {"value": "#000"}, "bg": {}}}

    def test_pruned_to_empty_removed(self):
        dictionary = Dictionary(properties={"colors": {"text": {"other": "x"}}})
        result = map_dictionary_value(dictionary, ["value"], PLATFORM)
        assert result.properties == {}

    def test_group_emptied_by_candidate_filter_removed(self):
        dictionary = Dictionary(properties={"colors": {"text": {"value": "#000"}}})
        result = map_dictionary_value(dictionary, "value_darkMode", PLATFORM)
        assert "colors" not in result.properties

    def test_empty_list_preserved(self):
        dictionary = Dictionary(properties={"sizes": [], "text": {"value": 1}})
        result = map_dictionary_value(dictionary, "value", PLATFORM)
        assert result.properties == {"sizes": [], "text": {"value": 1}}

    def test_list_of_properties_mapped(self):
        dictionary = Dictionary(properties={"shadows": [{"value": 1, "value_darkMode": 2}]})
        result = map_dictionary_value(dictionary, "value_darkMode", PLATFORM)
        assert result.properties == {"shadows": [{"value": 2}]}


class TestOriginal:
    """`original` is provenance, not token data."""

    def test_original_field_kept_by_reference(self):
        original = {"value": "{color.base}", "value_darkMode": "{color.base.dark}"}
        prop = dict(text_color(), original=original)
        dictionary = Dictionary(properties={"text": prop}, all_properties=[prop])

        result = map_dictionary_value(dictionary, "value_darkMode", PLATFORM)

        assert result.properties["text"]["original"] is original
        assert result.all_properties[0]["original"] is original

    def test_original_child_is_not_mapped(self):
        """A group child named `original` is returned untouched."""
        original = {"value": "#222", "value_darkMode": "#ddd"}
        dictionary = Dictionary(properties={"color": {"original": original}})

        result = map_dictionary_value(dictionary, "value_hiContrast", PLATFORM)

        assert result.properties == {"color": {"original": original}}
        assert result.properties["color"]["original"] is original


class TestPurity:
    """Inputs are never mutated."""

    def test_input_unchanged(self):
        prop = text_color()
        dictionary = Dictionary(
            properties={"color": {"text": prop, "empty": {}}},
            all_properties=[prop],
            metadata={"name": "theme"},
        )

        result = map_dictionary_value(dictionary, "value_darkMode", PLATFORM)
        result.properties["color"]["text"]["name"] = "changed"

        assert prop == text_color()
        assert dictionary.all_properties == [text_color()]
        assert "empty" in dictionary.properties["color"]

    def test_metadata_passed_through(self):
        metadata = {"name": "theme"}
        dictionary = Dictionary(metadata=metadata)
        result = map_dictionary_value(dictionary, "value", PLATFORM)
        assert result is not dictionary
        assert result.metadata is metadata

    def test_idempotent_with_value(self):
        prop = text_color()
        dictionary = Dictionary(properties={"text": prop}, all_properties=[prop])
        once = map_dictionary_value(dictionary, "value_darkMode", PLATFORM)
        twice = map_dictionary_value(once, "value", PLATFORM)
        assert twice == once

    def test_second_pass_with_other_field_drops_everything(self):
        prop = text_color()
        dictionary = Dictionary(properties={"text": prop}, all_properties=[prop])
        once = map_dictionary_value(dictionary, "value_darkMode", PLATFORM)
        twice = map_dictionary_value(once, "value_hiContrast", PLATFORM)
        assert twice.properties == {}
        assert twice.all_properties == []


class TestMappingInput:
    """Raw mapping dictionaries and platforms are accepted."""

    def test_mapping_dictionary(self):
        prop = text_color()
        raw = {"properties": {"text": prop}, "allProperties": [prop], "name": "theme"}
        platform = {"valueTransformFields": ["value", "value_darkMode", "value_hiContrast"]}

        result = map_dictionary_value(raw, "value_hiContrast", platform)

        assert result == {
            "properties": {"text": {"name": "textColor", "value": "#000"}},
            "allProperties": [{"name": "textColor", "value": "#000"}],
            "name": "theme",
        }
        assert raw["allProperties"][0] is prop

    def test_missing_views_default_to_empty(self):
        result = map_dictionary_value({}, "value", PLATFORM)
        assert result == {"properties": {}, "allProperties": []}

    def test_snake_case_platform(self):
        assert recognized_fields_of({"value_transform_fields": ["value"]}) == ["value"]


class TestErrors:
    """Malformed input fails before traversal."""

    def test_platform_without_fields(self):
        with pytest.raises(MissingRecognizedFields):
            map_dictionary_value(Dictionary(), "value", {})

    def test_platform_fields_as_string(self):
        with pytest.raises(MissingRecognizedFields):
            map_dictionary_value(Dictionary(), "value", {"valueTransformFields": "value"})

    def test_platform_object_without_attribute(self):
        with pytest.raises(MissingRecognizedFields):
            map_dictionary_value(Dictionary(), "value", object())

    def test_properties_not_mapping(self):
        with pytest.raises(MalformedDictionary):
            map_dictionary_value(Dictionary(properties=["a"]), "value", PLATFORM)

    def test_all_properties_not_list(self):
        with pytest.raises(MalformedDictionary):
            map_dictionary_value({"allProperties": "abc"}, "value", PLATFORM)

    def test_all_properties_entry_not_mapping(self):
        with pytest.raises(MalformedDictionary):
            map_dictionary_value(Dictionary(all_properties=[{"value": 1}, 3]), "value", PLATFORM)

    def test_dictionary_wrong_type(self):
        with pytest.raises(MalformedDictionary):
            map_dictionary_value("tokens", "value", PLATFORM)

    def test_errors_share_base_class(self):
        assert issubclass(MalformedDictionary, ValueMappingError)
        assert issubclass(MissingRecognizedFields, ValueMappingError)

    def test_self_referencing_tree(self):
        properties = {"color": {}}
        properties["color"]["again"] = properties
        with pytest.raises(TreeStructureError):
            map_dictionary_value(Dictionary(properties=properties), "value", PLATFORM)
