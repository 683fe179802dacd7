##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################
"""
Tests for the `data_models.py` module.
"""
import json
from datetime import datetime, timezone

import pytest

from cadcam_db.common.enums import FieldType
from cadcam_db.db_scripts.data_models import (
    ALL_MODELS,
    DrawingModel,
    FieldSpec,
    LibraryItemModel,
    MachineConfigModel,
    ProjectModel,
    SubscriptionModel,
    ToolModel,
    ToolpathModel,
    json_default,
)


class TestFieldSpec:
    """Tests for the `FieldSpec` dataclass."""

    def test_is_flexible(self):
        """Only JSON fields are flexible."""
        assert FieldSpec("data", "data", FieldType.JSON).is_flexible
        assert not FieldSpec("name", "name", FieldType.STRING).is_flexible

    def test_is_required_flexible(self):
        """A flexible field is required when it can't be null."""
        assert FieldSpec("data", "data", FieldType.JSON, nullable=False).is_required_flexible
        assert not FieldSpec("data", "data", FieldType.JSON, nullable=True).is_required_flexible
        assert not FieldSpec("name", "name", FieldType.STRING, nullable=False).is_required_flexible

    def test_default_value_copies_mutable_defaults(self):
        """Each call to `default_value` should hand out a fresh list."""
        spec = FieldSpec("tags", "tags", FieldType.STRING_LIST, default=[])
        first = spec.default_value()
        first.append("changed")
        assert spec.default_value() == []


class TestModelFieldSpecs:
    """Tests for the field specs declared on the entity models."""

    def test_every_model_has_identity(self):
        """Every model declares an entity kind and display name, and they are unique."""
        kinds = [model.entity_kind for model in ALL_MODELS]
        assert len(kinds) == 11
        assert len(set(kinds)) == 11
        assert all(model.display_name for model in ALL_MODELS)

    def test_wire_names_are_camel_case(self):
        """Attribute names map to camelCase wire names."""
        names = {spec.attribute: spec.name for spec in ToolpathModel.get_field_specs()}
        assert names["operation_type"] == "operationType"
        assert names["machine_config_id"] == "machineConfigId"

    def test_alias_overrides_wire_name(self):
        """The tool's `max_rpm` uses the `maxRPM` wire name."""
        names = {spec.attribute: spec.name for spec in ToolModel.get_field_specs()}
        assert names["max_rpm"] == "maxRPM"

    def test_system_fields_have_no_spec(self):
        """`id`, `created_at`, and `updated_at` are owned by the store, not the schema."""
        attributes = {spec.attribute for spec in DrawingModel.get_field_specs()}
        assert not attributes & {"id", "created_at", "updated_at"}

    @pytest.mark.parametrize(
        "model, attribute, required_flexible",
        [
            (DrawingModel, "data", True),
            (MachineConfigModel, "config", True),
            (LibraryItemModel, "data", True),
            (LibraryItemModel, "properties", False),
            (ToolpathModel, "data", False),
        ],
    )
    def test_flexible_fields(self, model, attribute: str, required_flexible: bool):
        """
        Check which flexible fields are required and which may be cleared.

        Args:
            model: The model under test.
            attribute: The flexible field's attribute name.
            required_flexible: Whether the field may never be null.
        """
        spec = next(spec for spec in model.get_field_specs() if spec.attribute == attribute)
        assert spec.is_flexible
        assert spec.is_required_flexible is required_flexible

    def test_scoping_keys(self):
        """Scoping keys name real attributes of their model."""
        for model in ALL_MODELS:
            if model.scoping_key is None:
                continue
            assert model.scoping_key in {spec.attribute for spec in model.get_field_specs()}
        assert ProjectModel.scoping_key == "organization_id"
        assert MachineConfigModel.scoping_key == "owner_id"
        assert SubscriptionModel.scoping_key == "user_id"


class TestBaseDataModel:
    """Tests for the conversions offered by `BaseDataModel`."""

    def test_to_dict_uses_wire_names(self):
        """`to_dict` keys are wire names including the system fields."""
        created = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        drawing = DrawingModel(id="d1", name="A", data={"x": 1}, project_id="p1", created_at=created)

        result = drawing.to_dict()

        assert result["id"] == "d1"
        assert result["projectId"] == "p1"
        assert result["data"] == {"x": 1}
        assert result["createdAt"] == created
        assert "project_id" not in result

    def test_to_json_serializes_datetimes(self):
        """Datetimes are written as ISO-8601 text."""
        created = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        drawing = DrawingModel(id="d1", name="A", data={}, project_id="p1", created_at=created)

        loaded = json.loads(drawing.to_json())

        assert loaded["createdAt"] == "2024-01-02T03:04:05+00:00"

    def test_from_dict_accepts_wire_and_attribute_names(self):
        """Both `projectId` and `project_id` populate the same attribute."""
        from_wire = DrawingModel.from_dict({"name": "A", "projectId": "p1", "data": {}})
        from_attr = DrawingModel.from_dict({"name": "A", "project_id": "p1", "data": {}})
        assert from_wire.project_id == from_attr.project_id == "p1"

    def test_from_dict_ignores_unknown_keys(self):
        """Unknown keys are dropped rather than raising."""
        drawing = DrawingModel.from_dict({"name": "A", "bogus": 1})
        assert drawing.name == "A"
        assert not hasattr(drawing, "bogus")

    def test_from_json(self):
        """`from_json` decodes text then builds the model."""
        tool = ToolModel.from_json('{"name": "6mm", "maxRPM": 18000}')
        assert tool.name == "6mm"
        assert tool.max_rpm == 18000

    def test_list_defaults_are_not_shared(self):
        """Two instances never share the same default tags list."""
        first = LibraryItemModel()
        second = LibraryItemModel()
        first.tags.append("x")
        assert second.tags == []


def test_json_default_rejects_unknown_types():
    """Non-datetime values fall through to a `TypeError`."""
    with pytest.raises(TypeError, match="set"):
        json_default({1, 2})
