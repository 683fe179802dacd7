##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################
"""
Construction of store payloads from validated create and update records.

An update request distinguishes three states for every field:

- the key is absent: the stored value is left untouched;
- the key is present with `null`: the stored value is cleared, if the field allows it;
- the key is present with a value: the stored value is replaced.

The same rule applies to every entity, driven by its field specs.
"""
import logging
from typing import Any, Dict, Type

from cadcam_db.common.enums import SchemaMode
from cadcam_db.db_scripts.data_models import BaseDataModel, FieldSpec
from cadcam_db.db_scripts.entity_metadata import get_entity_model
from cadcam_db.db_scripts.json_fields import JsonFieldCodec
from cadcam_db.db_scripts.schema_registry import ValidatedPayload
from cadcam_db.exceptions import InvalidFieldError


LOG = logging.getLogger(__name__)


class PartialUpdateBuilder:
    """
    Turns validated records into store payloads keyed by column name.

    Attributes:
        codec: The codec used to encode flexible JSON fields.

    Methods:
        build_update_payload: Build the changes for a partial update.
        build_create_payload: Build the values for a new entity.
    """

    def __init__(self, codec: JsonFieldCodec = None):
        self.codec = codec if codec is not None else JsonFieldCodec()

    def _resolve_field(self, spec: FieldSpec, value: Any, model: Type[BaseDataModel]) -> Any:
        if value is None:
            if spec.is_required_flexible or not spec.nullable:
                raise InvalidFieldError(
                    f"Field '{spec.name}' cannot be null for {model.display_name}.", field_name=spec.name
                )
            return None
        if spec.is_flexible:
            return self.codec.encode(value)
        return value

    def build_update_payload(self, payload: ValidatedPayload) -> Dict[str, Any]:
        """
        Build the store changes for a partial update.

        Args:
            payload: A record validated against the update schema.

        Returns:
            The changes keyed by column name. Fields absent from `payload`
            are absent from the result, so an empty record gives an empty dict.

        Raises:
            InvalidFieldError: If a field that can't be cleared is given `null`.
            ValueError: If `payload` was not validated against the update schema.
        """
        if payload.mode != SchemaMode.UPDATE:
            raise ValueError(f"Expected an update payload, got a {payload.mode.value} payload.")

        model = get_entity_model(payload.entity_kind)
        changes = {}
        for spec in model.get_field_specs():
            if not spec.updatable or spec.name not in payload.values:
                continue
            changes[spec.attribute] = self._resolve_field(spec, payload.values[spec.name], model)

        LOG.debug(f"Built {payload.entity_kind} update touching {sorted(changes)}.")
        return changes

    def build_create_payload(self, payload: ValidatedPayload) -> Dict[str, Any]:
        """
        Build the store values for a new entity.

        Args:
            payload: A record validated against the create schema.

        Returns:
            The values keyed by column name with flexible fields encoded.
            Optional fields that were omitted are stored as None.

        Raises:
            InvalidFieldError: If a required flexible field is missing or null.
            ValueError: If `payload` was not validated against the create schema.
        """
        if payload.mode != SchemaMode.CREATE:
            raise ValueError(f"Expected a create payload, got a {payload.mode.value} payload.")

        model = get_entity_model(payload.entity_kind)
        values = {}
        for spec in model.get_field_specs():
            if spec.name in payload.values:
                values[spec.attribute] = self._resolve_field(spec, payload.values[spec.name], model)
            elif spec.is_required_flexible:
                raise InvalidFieldError(
                    f"Field '{spec.name}' cannot be null for {model.display_name}.", field_name=spec.name
                )
            else:
                values[spec.attribute] = spec.default_value()
        return values
