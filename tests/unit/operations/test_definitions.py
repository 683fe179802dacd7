##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################
"""
Tests for the `definitions.py` module.
"""
import pytest

from cadcam_db.db_scripts.data_models import ALL_MODELS, MachineConfigModel, ToolModel, UserModel
from cadcam_db.operations.definitions import (
    MIME_TYPE,
    build_all_definitions,
    build_resource_templates,
    build_tool_definitions,
)


class TestBuildAllDefinitions:
    """Tests for the full set of operations."""

    def test_counts(self):
        """
        Every entity kind gets three tools and two templates.
        """
        tools, resources = build_all_definitions()

        assert len(tools) == 3 * len(ALL_MODELS) == 33
        assert len(resources) == 2 * len(ALL_MODELS) == 22

    def test_names_are_unique(self):
        """
        No two operations share a name or URI template.
        """
        tools, resources = build_all_definitions()

        assert len({tool.name for tool in tools}) == len(tools)
        assert len({resource.uri_template for resource in resources}) == len(resources)

    @pytest.mark.parametrize(
        "tool_name",
        [
            "create_user",
            "update_organization",
            "delete_project",
            "create_drawing",
            "update_component",
            "delete_material",
            "create_tool",
            "update_machine_config",
            "delete_toolpath",
            "create_library_item",
            "update_subscription",
        ],
    )
    def test_tool_names(self, tool_name: str):
        """
        Tool names follow the `<action>_<entity>` pattern.

        Args:
            tool_name: A tool that should exist.
        """
        tools, _ = build_all_definitions()
        assert tool_name in {tool.name for tool in tools}

    @pytest.mark.parametrize(
        "uri_template",
        [
            "resource://users",
            "resource://users/{user_id}",
            "resource://organizations/{organization_id}",
            "resource://library-items",
            "resource://library-items/{library_item_id}",
            "resource://machine-configs",
            "resource://subscriptions/{subscription_id}",
        ],
    )
    def test_uri_templates(self, uri_template: str):
        """
        Collections use the plural kebab-case kind and items add an id placeholder.

        Args:
            uri_template: A template that should exist.
        """
        _, resources = build_all_definitions()
        assert uri_template in {resource.uri_template for resource in resources}


class TestBuildToolDefinitions:
    """Tests for the tools of a single entity kind."""

    def test_tool_tool_definitions(self):
        """
        The create tool takes the entity fields and the others take the id.
        """
        create, update, delete = build_tool_definitions(ToolModel)

        assert (create.name, create.action, create.entity_kind) == ("create_tool", "create", "tool")
        assert create.description == "Creates a new tool"
        create_args = {arg.name: arg for arg in create.arguments}
        assert "maxRPM" in create_args
        assert create_args["name"].required is True
        assert create_args["notes"].required is False
        assert create_args["diameter"].description == "number field"

        assert update.description == "Updates an existing tool"
        assert [arg.name for arg in update.arguments] == ["tool_id", "data"]
        assert all(arg.required for arg in update.arguments)

        assert delete.description == "Deletes a tool"
        assert [(arg.name, arg.description) for arg in delete.arguments] == [("tool_id", "ID of the tool")]

    def test_label_override_in_descriptions(self):
        """
        Machine configurations are described in full words.
        """
        create, _, delete = build_tool_definitions(MachineConfigModel)

        assert create.description == "Creates a new machine configuration"
        assert delete.arguments[0].description == "ID of the machine configuration"


class TestBuildResourceTemplates:
    """Tests for the templates of a single entity kind."""

    def test_scoped_collection(self):
        """
        A scoped collection takes its optional scoping key.
        """
        collection, item = build_resource_templates(ToolModel)

        assert collection.uri_template == "resource://tools"
        assert collection.name == "Tools"
        assert collection.is_collection is True
        assert collection.id_argument is None
        assert collection.mime_type == MIME_TYPE
        assert [(arg.name, arg.description, arg.required) for arg in collection.arguments] == [
            ("organization_id", "Optional ID of the organization to filter tools", False)
        ]

        assert item.uri_template == "resource://tools/{tool_id}"
        assert item.name == "Tool"
        assert item.is_collection is False
        assert item.id_argument == "tool_id"
        assert item.arguments[0].required is True

    def test_unscoped_collection(self):
        """
        Kinds without a scoping key have collections without arguments.
        """
        collection, _ = build_resource_templates(UserModel)
        assert collection.arguments == ()

    def test_machine_config_templates(self):
        """
        Machine configurations are scoped by owner and named in full words.
        """
        collection, item = build_resource_templates(MachineConfigModel)

        assert collection.uri_template == "resource://machine-configs"
        assert collection.name == "MachineConfigs"
        assert collection.arguments[0].name == "owner_id"
        assert collection.arguments[0].description == "Optional ID of the owner to filter machine configurations"
        assert item.uri_template == "resource://machine-configs/{machine_config_id}"
