"""
Tests for the dictionary model objects.
"""

from dvm.model import Dictionary, FileConfig, Platform


class TestDictionary:
    """Test Dictionary objects."""

    def test_defaults_are_empty(self):
        d = Dictionary()
        assert d.properties == {}
        assert d.all_properties == []
        assert d.metadata == {}

    def test_defaults_not_shared(self):
        a, b = Dictionary(), Dictionary()
        a.properties["x"] = {}
        assert b.properties == {}


class TestPlatform:
    """Test Platform objects."""

    def test_default_fields(self):
        assert Platform().value_transform_fields == ["value"]

    def test_default_fields_not_shared(self):
        a, b = Platform(), Platform()
        a.value_transform_fields.append("value_darkMode")
        assert b.value_transform_fields == ["value"]

    def test_get_file(self):
        dark = FileConfig(destination="dark.json", value_field="value_darkMode")
        platform = Platform(files=[FileConfig(destination="light.json"), dark])
        assert platform.get_file("dark.json") is dark
        assert platform.get_file("missing.json") is None

    def test_file_config_defaults(self):
        fc = FileConfig(destination="out.json")
        assert fc.value_field is None
        assert fc.format == "json"
