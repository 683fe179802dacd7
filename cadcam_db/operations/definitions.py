##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################
"""
Descriptions of the operations CADCAM DB exposes: write tools and read resource templates.

Every entity kind gets three tools (`create_<entity>`, `update_<entity>`,
`delete_<entity>`) and two resource templates (`resource://<entities>` and
`resource://<entities>/{<entity>_id}`). They are generated from the data models.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Type

from cadcam_db.db_scripts.data_models import ALL_MODELS, BaseDataModel
from cadcam_db.db_scripts.entity_metadata import get_entity_label
from cadcam_db.utils import get_plural_of_entity


URI_SCHEME = "resource://"
MIME_TYPE = "application/json"


@dataclass(frozen=True)
class ArgumentSpec:
    """An argument accepted by an operation."""

    name: str
    description: str
    required: bool = False


@dataclass(frozen=True)
class ToolDefinition:
    """
    A write operation.

    Attributes:
        name: The tool name (e.g. `update_drawing`).
        description: What the tool does.
        entity_kind: The snake_case entity kind the tool writes.
        action: One of `create`, `update`, or `delete`.
        arguments: The top-level arguments the tool takes.
    """

    name: str
    description: str
    entity_kind: str
    action: str
    arguments: Tuple[ArgumentSpec, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ResourceTemplate:
    """
    A read operation addressed by URI.

    Attributes:
        uri_template: The URI template (e.g. `resource://drawings/{drawing_id}`).
        name: A display name (e.g. `Drawings` or `Drawing`).
        entity_kind: The snake_case entity kind the resource reads.
        is_collection: True for listings, False for single entities.
        arguments: The arguments the template takes.
        mime_type: The content type of the response.
    """

    uri_template: str
    name: str
    entity_kind: str
    is_collection: bool
    arguments: Tuple[ArgumentSpec, ...] = field(default_factory=tuple)
    mime_type: str = MIME_TYPE

    @property
    def id_argument(self) -> Optional[str]:
        """The name of the id argument of a single-entity template."""
        return None if self.is_collection else f"{self.entity_kind}_id"


def build_tool_definitions(model: Type[BaseDataModel]) -> List[ToolDefinition]:
    """
    Build the create, update, and delete tools of an entity kind.

    Args:
        model: The data model of the entity kind.

    Returns:
        The three tool definitions.
    """
    kind = model.entity_kind
    label = get_entity_label(kind)
    id_arg = ArgumentSpec(f"{kind}_id", f"ID of the {label}", required=True)
    create_args = tuple(
        ArgumentSpec(spec.name, f"{spec.field_type.value} field", required=spec.required)
        for spec in model.get_field_specs()
    )
    return [
        ToolDefinition(f"create_{kind}", f"Creates a new {label}", kind, "create", create_args),
        ToolDefinition(
            f"update_{kind}",
            f"Updates an existing {label}",
            kind,
            "update",
            (id_arg, ArgumentSpec("data", f"The {label} fields to change", required=True)),
        ),
        ToolDefinition(f"delete_{kind}", f"Deletes a {label}", kind, "delete", (id_arg,)),
    ]


def build_resource_templates(model: Type[BaseDataModel]) -> List[ResourceTemplate]:
    """
    Build the collection and single-entity templates of an entity kind.

    Args:
        model: The data model of the entity kind.

    Returns:
        The two resource templates.
    """
    kind = model.entity_kind
    label = get_entity_label(kind)
    plural = get_plural_of_entity(kind)
    plural_label = get_plural_of_entity(label, split_delimiter=" ", join_delimiter=" ")

    collection_args = ()
    if model.scoping_key is not None:
        scope_label = get_entity_label(model.scoping_key[: -len("_id")])
        collection_args = (
            ArgumentSpec(model.scoping_key, f"Optional ID of the {scope_label} to filter {plural_label}"),
        )

    return [
        ResourceTemplate(
            f"{URI_SCHEME}{plural}",
            get_plural_of_entity(model.display_name, split_delimiter=" ", join_delimiter=" "),
            kind,
            True,
            collection_args,
        ),
        ResourceTemplate(
            f"{URI_SCHEME}{plural}/{{{kind}_id}}",
            model.display_name,
            kind,
            False,
            (ArgumentSpec(f"{kind}_id", f"ID of the {label}", required=True),),
        ),
    ]


def build_all_definitions() -> Tuple[List[ToolDefinition], List[ResourceTemplate]]:
    """
    Build the tools and resource templates of every entity kind.

    Returns:
        A tuple of (tools, resource templates).
    """
    tools: List[ToolDefinition] = []
    resources: List[ResourceTemplate] = []
    for model in ALL_MODELS:
        tools.extend(build_tool_definitions(model))
        resources.extend(build_resource_templates(model))
    return tools, resources
