##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################
"""
The operation surface: dispatches tool calls and resource reads to the repository.

A transport (stdio, HTTP, the CLI) hands `OperationRegistry` an operation name
or URI plus arguments and gets back JSON text or a `CadcamDbError`.
"""
import json
import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple
from urllib.parse import parse_qsl, urlsplit

from cadcam_db.db_scripts.data_models import json_default
from cadcam_db.db_scripts.repository import RepositoryFacade
from cadcam_db.exceptions import CadcamDbError, UnknownOperationError, ValidationError
from cadcam_db.operations.definitions import URI_SCHEME, ResourceTemplate, ToolDefinition, build_all_definitions


LOG = logging.getLogger(__name__)


def to_json_text(value: Any) -> str:
    """
    Serialize an operation result to JSON text.

    Entities become their wire-format dicts and datetimes ISO-8601 strings.

    Args:
        value: An entity, a list of entities, or any JSON-serializable value.

    Returns:
        The JSON text.
    """
    if isinstance(value, list):
        value = [item.to_dict() if hasattr(item, "to_dict") else item for item in value]
    elif hasattr(value, "to_dict"):
        value = value.to_dict()
    return json.dumps(value, default=json_default)


class OperationRegistry:
    """
    Registry of every tool and resource template, bound to a repository.

    Attributes:
        repository: The repository operations run against.
        tools: Tool definitions keyed by name.
        resources: Resource templates keyed by URI template.

    Methods:
        list_tools: Get every tool definition.
        list_resources: Get every resource template.
        call_tool: Run a write operation.
        read_resource: Run a read operation.
    """

    def __init__(self, repository: RepositoryFacade):
        self.repository: RepositoryFacade = repository
        tools, resources = build_all_definitions()
        self.tools: Dict[str, ToolDefinition] = {tool.name: tool for tool in tools}
        self.resources: Dict[str, ResourceTemplate] = {resource.uri_template: resource for resource in resources}
        self._collections: Dict[str, ResourceTemplate] = {
            resource.uri_template[len(URI_SCHEME) :]: resource for resource in resources if resource.is_collection
        }
        self._items: Dict[str, ResourceTemplate] = {
            resource.uri_template[len(URI_SCHEME) :].split("/")[0]: resource
            for resource in resources
            if not resource.is_collection
        }

    def list_tools(self) -> List[ToolDefinition]:
        """Get every tool definition, in registration order."""
        return list(self.tools.values())

    def list_resources(self) -> List[ResourceTemplate]:
        """Get every resource template, in registration order."""
        return list(self.resources.values())

    def call_tool(self, name: str, args: Optional[Mapping[str, Any]] = None) -> str:
        """
        Run a write operation.

        Args:
            name: The tool name (e.g. `update_drawing`).
            args: The tool arguments. Create tools take the entity fields;
                update tools take `<entity>_id` and `data`; delete tools take `<entity>_id`.

        Returns:
            JSON text of the created or updated entity, or of the delete confirmation.

        Raises:
            UnknownOperationError: If no tool has this name.
            CadcamDbError: If the operation fails.
        """
        if name not in self.tools:
            raise UnknownOperationError(f"Unknown tool '{name}'.")
        tool = self.tools[name]
        args = {} if args is None else args
        LOG.info(f"Running {name}...")

        try:
            if not isinstance(args, Mapping):
                raise ValidationError(
                    f"Expected an object of arguments, got {type(args).__name__}.",
                    constraint="type",
                    entity_kind=tool.entity_kind,
                    operation=tool.action,
                )

            if tool.action == "create":
                result = self.repository.create(tool.entity_kind, args)
            elif tool.action == "update":
                result = self.repository.update(
                    tool.entity_kind, args.get(f"{tool.entity_kind}_id"), args.get("data", {})
                )
            else:
                result = self.repository.delete(tool.entity_kind, args.get(f"{tool.entity_kind}_id")).to_dict()
        except CadcamDbError as exc:
            LOG.error(f"{name} failed: {exc}")
            raise

        return to_json_text(result)

    def _match_resource(self, uri: str) -> Tuple[ResourceTemplate, Dict[str, str]]:
        """
        Find the template a URI addresses and the arguments embedded in it.

        Args:
            uri: A concrete URI (`resource://drawings/abc`), a template
                (`resource://drawings/{drawing_id}`), or a collection URI with an
                optional query string (`resource://drawings?project_id=p1`).

        Returns:
            A tuple of the matched template and the arguments taken from the URI.

        Raises:
            UnknownOperationError: If the URI matches no template.
        """
        if not uri.startswith(URI_SCHEME):
            raise UnknownOperationError(f"Unknown resource '{uri}'; URIs start with '{URI_SCHEME}'.")

        parts = urlsplit(uri)
        path = f"{parts.netloc}{parts.path}".strip("/")
        uri_args = dict(parse_qsl(parts.query))

        if path in self._collections:
            return self._collections[path], uri_args

        plural, _, entity_id = path.partition("/")
        if plural in self._items and entity_id and "/" not in entity_id:
            template = self._items[plural]
            if not (entity_id.startswith("{") and entity_id.endswith("}")):
                uri_args[template.id_argument] = entity_id
            return template, uri_args

        raise UnknownOperationError(f"Unknown resource '{uri}'.")

    def read_resource(self, uri: str, args: Optional[Mapping[str, Any]] = None) -> str:
        """
        Run a read operation.

        Args:
            uri: The resource URI or template.
            args: Template arguments: the scoping key for collections, or the
                entity id for single-entity templates. Values in `args` win over
                values embedded in the URI.

        Returns:
            JSON text of the entity or of the list of entities.

        Raises:
            UnknownOperationError: If the URI matches no template.
            CadcamDbError: If the read fails.
        """
        template, merged = self._match_resource(uri)
        merged.update(args or {})
        LOG.debug(f"Reading {template.uri_template} with {merged}.")

        try:
            if template.is_collection:
                result = self.repository.list(template.entity_kind, merged or None)
            else:
                entity_id = merged.pop(template.id_argument, None)
                if merged:
                    LOG.warning(f"Ignoring arguments {sorted(merged)} for {template.uri_template}.")
                result = self.repository.get(template.entity_kind, entity_id)
        except CadcamDbError as exc:
            LOG.error(f"Reading {uri} failed: {exc}")
            raise

        return to_json_text(result)
