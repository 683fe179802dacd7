##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################
"""
Tests for the project-wide `utils.py` module.
"""
import json
import os
from types import SimpleNamespace

import pytest

from cadcam_db.utils import (
    camel_to_snake,
    dump_to_json_file,
    get_plural_of_entity,
    load_yaml,
    nested_dict_to_namespaces,
    snake_to_camel,
    verify_filepath,
)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("organizationId", "organization_id"),
        ("MachineConfig", "machine_config"),
        ("LibraryItem", "library_item"),
        ("maxRPM", "max_rpm"),
        ("machine-config", "machine_config"),
        ("library_item", "library_item"),
        ("drawing", "drawing"),
        ("numberOfFlutes", "number_of_flutes"),
    ],
)
def test_camel_to_snake(name: str, expected: str):
    """
    Test that camelCase, PascalCase, and kebab-case names become snake_case.

    Args:
        name: The name to convert.
        expected: The expected snake_case name.
    """
    assert camel_to_snake(name) == expected


@pytest.mark.parametrize(
    "name, expected",
    [("organization_id", "organizationId"), ("is_public", "isPublic"), ("name", "name")],
)
def test_snake_to_camel(name: str, expected: str):
    """
    Test that snake_case names become camelCase.

    Args:
        name: The name to convert.
        expected: The expected camelCase name.
    """
    assert snake_to_camel(name) == expected


@pytest.mark.parametrize(
    "entity_type, expected",
    [
        ("drawing", "drawings"),
        ("library_item", "library-items"),
        ("machine_config", "machine-configs"),
        ("company", "companies"),
        ("key", "keys"),
        ("process", "processes"),
        ("box", "boxes"),
        ("batch", "batches"),
    ],
)
def test_get_plural_of_entity(entity_type: str, expected: str):
    """
    Test that only the last word is pluralized and words are joined with hyphens.

    Args:
        entity_type: The singular entity type.
        expected: The expected plural.
    """
    assert get_plural_of_entity(entity_type) == expected


def test_get_plural_of_entity_with_delimiters():
    """
    Test that custom delimiters are honored.
    """
    assert get_plural_of_entity("machine configuration", split_delimiter=" ", join_delimiter=" ") == (
        "machine configurations"
    )


class TestNestedDictToNamespaces:
    """Tests for `nested_dict_to_namespaces`."""

    def test_nested(self):
        """
        Nested dicts become nested namespaces and the input is untouched.
        """
        data = {"store": {"backend": "sqlite", "options": {"timeout": 5}}, "items": [1, 2]}

        result = nested_dict_to_namespaces(data)

        assert result.store.options == SimpleNamespace(timeout=5)
        assert result.items == [1, 2]
        assert isinstance(data["store"], dict)

    def test_not_a_dict(self):
        """
        Non-dict input raises a `TypeError`.
        """
        with pytest.raises(TypeError):
            nested_dict_to_namespaces(["store"])


class TestFileHelpers:
    """Tests for the file helpers."""

    def test_load_yaml(self, tmp_path):
        """
        YAML files are read safely.

        Args:
            tmp_path: A built-in fixture that provides a temporary directory.
        """
        yaml_file = tmp_path / "app.yaml"
        yaml_file.write_text("store:\n  backend: redis\n")

        assert load_yaml(str(yaml_file)) == {"store": {"backend": "redis"}}

    def test_verify_filepath(self, tmp_path, monkeypatch: pytest.MonkeyPatch):
        """
        Valid paths are expanded to absolute paths; invalid ones raise.

        Args:
            tmp_path: A built-in fixture that provides a temporary directory.
            monkeypatch: Built-in fixture for modifying the environment.
        """
        (tmp_path / "args.json").write_text("{}")
        monkeypatch.setenv("ARGS_DIR", str(tmp_path))

        assert verify_filepath("$ARGS_DIR/args.json") == os.path.join(str(tmp_path), "args.json")
        with pytest.raises(ValueError, match="is not a valid filepath"):
            verify_filepath(str(tmp_path))

    def test_dump_to_json_file(self, tmp_path):
        """
        Data is written to a new directory and no temporary file is left behind.

        Args:
            tmp_path: A built-in fixture that provides a temporary directory.
        """
        filepath = os.path.join(str(tmp_path), "nested", "out.json")

        dump_to_json_file({"success": True}, filepath)

        with open(filepath, "r") as json_file:
            assert json.load(json_file) == {"success": True}
        assert not os.path.exists(f"{filepath}.tmp")

    def test_dump_to_json_file_requires_path(self):
        """
        An empty path is rejected.
        """
        with pytest.raises(ValueError, match="valid file path"):
            dump_to_json_file({}, "")
