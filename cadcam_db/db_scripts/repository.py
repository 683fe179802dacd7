##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################
"""
The repository facade: list, get, create, update, and delete for every entity kind.

One generic facade serves all eleven entity kinds. Each call validates its
input, builds the store payload, runs it against the backend it was given,
decodes flexible JSON fields in the result, and translates any failure into
the error taxonomy of `cadcam_db.exceptions`.
"""
import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Mapping, Optional, Type

from cadcam_db.backends.filter_support_mixin import FilterSupportMixin
from cadcam_db.backends.store_backend import StoreBackend
from cadcam_db.common.enums import SchemaMode
from cadcam_db.db_scripts.data_models import BaseDataModel
from cadcam_db.db_scripts.entity_metadata import get_entity_label, get_entity_model
from cadcam_db.db_scripts.error_translator import ErrorTranslator
from cadcam_db.db_scripts.json_fields import JsonFieldCodec
from cadcam_db.db_scripts.partial_update import PartialUpdateBuilder
from cadcam_db.db_scripts.schema_registry import SchemaRegistry
from cadcam_db.exceptions import NotFoundError, ValidationError
from cadcam_db.utils import camel_to_snake


LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeleteResult:
    """
    The outcome of a successful delete.

    Attributes:
        success: Always True; failed deletes raise instead.
        message: A confirmation such as "Drawing deleted successfully".
    """

    success: bool
    message: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert the result to a dictionary."""
        return asdict(self)


def _context_label(entity_kind: Any) -> str:
    """Best-effort snake_case label for error context, even for unknown kinds."""
    return camel_to_snake(entity_kind) if isinstance(entity_kind, str) and entity_kind else "entity"


class RepositoryFacade:
    """
    Generic data access for every entity kind.

    The facade holds no entity state of its own; everything lives in the backend.

    Attributes:
        backend: The store backend all operations run against.
        registry: Schema validation for inputs.
        builder: Store payload construction.
        codec: Flexible JSON field encoding and decoding.
        translator: Failure translation.

    Methods:
        list: List the entities of a kind, optionally narrowed by its scoping key.
        get: Get one entity by ID.
        create: Create an entity.
        update: Partially update an entity.
        delete: Delete an entity.
    """

    def __init__(  # pylint: disable=too-many-arguments
        self,
        backend: StoreBackend,
        registry: SchemaRegistry = None,
        builder: PartialUpdateBuilder = None,
        codec: JsonFieldCodec = None,
        translator: ErrorTranslator = None,
    ):
        self.backend: StoreBackend = backend
        self.registry: SchemaRegistry = registry if registry is not None else SchemaRegistry()
        self.codec: JsonFieldCodec = codec if codec is not None else JsonFieldCodec()
        self.builder: PartialUpdateBuilder = builder if builder is not None else PartialUpdateBuilder(self.codec)
        self.translator: ErrorTranslator = translator if translator is not None else ErrorTranslator()

    @staticmethod
    def _check_id(entity_id: Any):
        if not isinstance(entity_id, str) or not entity_id:
            raise ValidationError(
                f"Expected a non-empty string id, got {entity_id!r}.", field_path="id", constraint="type"
            )

    @staticmethod
    def _not_found(model: Type[BaseDataModel], entity_id: str) -> NotFoundError:
        return NotFoundError(f"{model.display_name} with ID {entity_id} not found", entity_id=entity_id)

    @staticmethod
    def _resolve_filters(model: Type[BaseDataModel], filters: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        """
        Turn caller filters into store column filters.

        Only the entity's scoping key is accepted, by wire or column name.
        A falsy value means no filter.

        Raises:
            ValidationError: If `filters` isn't a mapping or names any other key.
        """
        if not filters:
            return {}
        if not isinstance(filters, Mapping):
            raise ValidationError(
                f"Expected filters to be an object, got {type(filters).__name__}.", constraint="type"
            )

        scoping_names = set()
        if model.scoping_key is not None:
            scoping_spec = next(spec for spec in model.get_field_specs() if spec.attribute == model.scoping_key)
            scoping_names = {scoping_spec.name, scoping_spec.attribute}

        resolved = {}
        for key, value in filters.items():
            if key not in scoping_names:
                allowed = " or ".join(sorted(scoping_names)) if scoping_names else "nothing"
                raise ValidationError(
                    f"Cannot filter {model.entity_kind} listings by '{key}'; filter by {allowed}.",
                    field_path=str(key),
                    constraint="filter",
                )
            if value:
                resolved[model.scoping_key] = value
        return resolved

    def list(self, entity_kind: str, filters: Optional[Mapping[str, Any]] = None) -> List[BaseDataModel]:
        """
        List the entities of a kind, in the store's default order.

        Args:
            entity_kind: The entity kind in any supported spelling.
            filters: Optional `{scoping_key: value}` narrowing the listing.

        Returns:
            The matching entities with flexible fields decoded.

        Raises:
            CadcamDbError: Translated failure.
        """
        with self.translator.guard(_context_label(entity_kind), "list"):
            model = get_entity_model(entity_kind)
            column_filters = self._resolve_filters(model, filters)

            if not column_filters:
                entities = self.backend.retrieve_all(model.entity_kind)
            elif isinstance(self.backend, FilterSupportMixin):
                entities = self.backend.retrieve_all_filtered(model.entity_kind, column_filters)
            else:
                entities = [
                    entity
                    for entity in self.backend.retrieve_all(model.entity_kind)
                    if all(getattr(entity, column) == value for column, value in column_filters.items())
                ]

            LOG.debug(f"Listed {len(entities)} {model.entity_kind} entities.")
            return [self.codec.decode_row(entity) for entity in entities]

    def get(self, entity_kind: str, entity_id: str) -> BaseDataModel:
        """
        Get one entity by ID.

        Args:
            entity_kind: The entity kind in any supported spelling.
            entity_id: The ID of the entity.

        Returns:
            The entity with flexible fields decoded.

        Raises:
            NotFoundError: If no entity of this kind has `entity_id`.
            CadcamDbError: Any other translated failure.
        """
        with self.translator.guard(_context_label(entity_kind), "get"):
            model = get_entity_model(entity_kind)
            self._check_id(entity_id)

            entity = self.backend.retrieve(entity_id, model.entity_kind)
            if entity is None:
                raise self._not_found(model, entity_id)
            return self.codec.decode_row(entity)

    def create(self, entity_kind: str, raw_input: Any) -> BaseDataModel:
        """
        Create an entity. The store assigns its id and timestamps.

        Args:
            entity_kind: The entity kind in any supported spelling.
            raw_input: The entity's fields keyed by wire name.

        Returns:
            The created entity with flexible fields decoded.

        Raises:
            ValidationError: If `raw_input` doesn't match the create schema.
            ConflictError: If a unique field would be duplicated.
            CadcamDbError: Any other translated failure.
        """
        with self.translator.guard(_context_label(entity_kind), "create"):
            model = get_entity_model(entity_kind)
            payload = self.registry.validate(model.entity_kind, SchemaMode.CREATE, raw_input)
            values = self.builder.build_create_payload(payload)

            entity = self.backend.insert(model.entity_kind, values)
            LOG.info(f"Created {model.entity_kind} '{entity.id}'.")
            return self.codec.decode_row(entity)

    def update(self, entity_kind: str, entity_id: str, raw_update: Any) -> BaseDataModel:
        """
        Partially update an entity.

        Fields absent from `raw_update` are left untouched. An update with no
        fields writes nothing and returns the entity as stored.

        Args:
            entity_kind: The entity kind in any supported spelling.
            entity_id: The ID of the entity.
            raw_update: The fields to change keyed by wire name.

        Returns:
            The updated entity with flexible fields decoded.

        Raises:
            ValidationError: If `raw_update` doesn't match the update schema.
            InvalidFieldError: If a field that can't be cleared is given `null`.
            NotFoundError: If no entity of this kind has `entity_id`.
            CadcamDbError: Any other translated failure.
        """
        with self.translator.guard(_context_label(entity_kind), "update"):
            model = get_entity_model(entity_kind)
            self._check_id(entity_id)
            payload = self.registry.validate(model.entity_kind, SchemaMode.UPDATE, raw_update)
            changes = self.builder.build_update_payload(payload)

            if not changes:
                LOG.debug(f"Empty update for {model.entity_kind} '{entity_id}'; nothing to write.")
                entity = self.backend.retrieve(entity_id, model.entity_kind)
            else:
                entity = self.backend.update(entity_id, model.entity_kind, changes)

            if entity is None:
                raise self._not_found(model, entity_id)
            LOG.info(f"Updated {model.entity_kind} '{entity_id}' ({len(changes)} field(s)).")
            return self.codec.decode_row(entity)

    def delete(self, entity_kind: str, entity_id: str) -> DeleteResult:
        """
        Delete an entity. Related entities are not touched.

        Args:
            entity_kind: The entity kind in any supported spelling.
            entity_id: The ID of the entity.

        Returns:
            A `DeleteResult` confirming the delete.

        Raises:
            NotFoundError: If no entity of this kind has `entity_id`.
            CadcamDbError: Any other translated failure.
        """
        with self.translator.guard(_context_label(entity_kind), "delete"):
            model = get_entity_model(entity_kind)
            self._check_id(entity_id)

            if not self.backend.delete(entity_id, model.entity_kind):
                raise self._not_found(model, entity_id)
            LOG.info(f"Deleted {model.entity_kind} '{entity_id}'.")
            label = get_entity_label(model.entity_kind).capitalize()
            return DeleteResult(success=True, message=f"{label} deleted successfully")
