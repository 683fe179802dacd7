##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################
"""
JSON Schema definitions for every entity kind, and validation against them.

Three schema variants are built for each entity from its field specs:

- `base`: the entity's own creation fields, without ownership or scoping references.
- `create`: the base fields plus ownership and scoping references.
- `update`: every updatable field, all optional. Every field accepts `null`; the update builder
  rejects it on fields that can't be cleared.

Schemas are JSON Schema Draft 7 documents validated with `jsonschema`.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple

from jsonschema import Draft7Validator, FormatChecker
from jsonschema.exceptions import best_match

from cadcam_db.common.enums import FieldType, SchemaMode
from cadcam_db.db_scripts.data_models import FieldSpec
from cadcam_db.db_scripts.entity_metadata import get_entity_model, normalize_entity_kind
from cadcam_db.exceptions import ValidationError


LOG = logging.getLogger(__name__)

ROOT_PATH = "<root>"

_TYPE_SCHEMAS = {
    FieldType.STRING: {"type": "string"},
    FieldType.NUMBER: {"type": "number"},
    FieldType.BOOLEAN: {"type": "boolean"},
    FieldType.DATETIME: {"type": "string", "format": "date-time"},
    FieldType.STRING_LIST: {"type": "array", "items": {"type": "string"}},
}


@dataclass(frozen=True)
class ValidatedPayload:
    """
    The result of validating raw input against an entity schema.

    Attributes:
        entity_kind: The snake_case entity kind the payload was validated for.
        mode: The schema variant the payload was validated against.
        values: The validated field values keyed by wire name. Read-only.
    """

    entity_kind: str
    mode: SchemaMode
    values: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def __contains__(self, name: str) -> bool:
        return name in self.values

    def __len__(self) -> int:
        return len(self.values)


def _field_schema(spec: FieldSpec, allow_null: bool) -> Dict:
    """
    Build the JSON Schema for a single field.

    Args:
        spec: The field's spec.
        allow_null: Whether `null` is an accepted value.

    Returns:
        A JSON Schema document for the field.
    """
    if spec.is_flexible:
        return {} if allow_null else {"not": {"type": "null"}}

    schema = dict(_TYPE_SCHEMAS[spec.field_type])
    if allow_null:
        schema["type"] = [schema["type"], "null"]
    return schema


def _included_fields(specs: Tuple[FieldSpec, ...], mode: SchemaMode) -> Tuple[FieldSpec, ...]:
    if mode == SchemaMode.BASE:
        return tuple(spec for spec in specs if not spec.relation)
    if mode == SchemaMode.UPDATE:
        return tuple(spec for spec in specs if spec.updatable)
    return specs


class SchemaRegistry:
    """
    Holds the base, create, and update schemas for every entity kind.

    Schemas are built lazily from the entity's field specs and cached.

    Methods:
        get_schema: Get the JSON Schema document for an entity kind and mode.
        get_field_specs: Get the field specs a mode covers.
        validate: Validate raw input and return a `ValidatedPayload`.
    """

    def __init__(self):
        self._schemas: Dict[Tuple[str, SchemaMode], Dict] = {}
        self._validators: Dict[Tuple[str, SchemaMode], Draft7Validator] = {}

    def get_field_specs(self, entity_kind: str, mode: SchemaMode) -> Tuple[FieldSpec, ...]:
        """
        Get the specs of the fields included in a schema variant.

        Args:
            entity_kind: The entity kind in any supported spelling.
            mode: The schema variant.

        Returns:
            A tuple of `FieldSpec` objects.
        """
        return _included_fields(get_entity_model(entity_kind).get_field_specs(), SchemaMode(mode))

    def get_schema(self, entity_kind: str, mode: SchemaMode) -> Dict:
        """
        Get the JSON Schema document for an entity kind and mode.

        Args:
            entity_kind: The entity kind in any supported spelling.
            mode: The schema variant.

        Returns:
            A JSON Schema (Draft 7) document.
        """
        key = (normalize_entity_kind(entity_kind), SchemaMode(mode))
        if key not in self._schemas:
            self._schemas[key] = self._build_schema(*key)
        return self._schemas[key]

    def _build_schema(self, entity_kind: str, mode: SchemaMode) -> Dict:
        model = get_entity_model(entity_kind)
        properties = {}
        required = []
        for spec in _included_fields(model.get_field_specs(), mode):
            if mode == SchemaMode.UPDATE:
                # Whether a field can be cleared is decided by the update builder
                allow_null = True
            else:
                allow_null = spec.nullable
                if spec.required:
                    required.append(spec.name)
            properties[spec.name] = _field_schema(spec, allow_null)

        schema = {
            "$schema": "http://json-schema.org/draft-07/schema#",
            "title": f"{model.display_name} ({mode.value})",
            "type": "object",
            "properties": properties,
            "additionalProperties": False,
        }
        if required:
            schema["required"] = required
        Draft7Validator.check_schema(schema)
        LOG.debug(f"Built {mode.value} schema for {entity_kind}.")
        return schema

    def _get_validator(self, entity_kind: str, mode: SchemaMode) -> Draft7Validator:
        key = (entity_kind, mode)
        if key not in self._validators:
            self._validators[key] = Draft7Validator(
                self.get_schema(entity_kind, mode), format_checker=FormatChecker()
            )
        return self._validators[key]

    def validate(self, entity_kind: str, mode: SchemaMode, raw_input: Any) -> ValidatedPayload:
        """
        Validate raw input against an entity schema.

        Keys that are not part of the schema are dropped with a warning. Datetime fields
        accept ISO-8601 strings or `datetime` objects and come back as `datetime` objects.
        In create mode, omitted fields that have a default are filled in.

        Args:
            entity_kind: The entity kind in any supported spelling.
            mode: The schema variant to validate against.
            raw_input: The caller-supplied input.

        Returns:
            A `ValidatedPayload` holding the accepted values keyed by wire name.

        Raises:
            ValidationError: If `raw_input` is not a mapping or violates the schema.
        """
        entity_kind = normalize_entity_kind(entity_kind)
        mode = SchemaMode(mode)
        if not isinstance(raw_input, Mapping):
            raise ValidationError(
                f"Expected an object of {entity_kind} fields, got {type(raw_input).__name__}.",
                field_path=ROOT_PATH,
                constraint="type",
            )

        specs = {spec.name: spec for spec in self.get_field_specs(entity_kind, mode)}
        candidate = {}
        for key, val in raw_input.items():
            if key not in specs:
                LOG.warning(f"Dropping unknown {mode.value} field '{key}' for {entity_kind}.")
                continue
            if isinstance(val, datetime):
                val = val.isoformat()
            candidate[key] = val

        error = best_match(self._get_validator(entity_kind, mode).iter_errors(candidate))
        if error is not None:
            raise ValidationError(
                error.message, field_path=self._error_path(error), constraint=str(error.validator)
            )

        values = {}
        for name, val in candidate.items():
            spec = specs[name]
            if spec.field_type == FieldType.DATETIME and val is not None:
                val = self._parse_datetime(name, val)
            values[name] = val

        if mode == SchemaMode.CREATE:
            for name, spec in specs.items():
                if name not in values and spec.default is not None:
                    values[name] = spec.default_value()

        return ValidatedPayload(entity_kind=entity_kind, mode=mode, values=values)

    @staticmethod
    def _error_path(error) -> str:
        """
        Get the dotted path of the field a `jsonschema` error refers to.

        `required` errors are reported against the parent object, so the name
        of the first missing property is appended.
        """
        parts = [str(part) for part in error.absolute_path]
        if error.validator == "required" and isinstance(error.instance, dict):
            missing = [name for name in error.validator_value if name not in error.instance]
            if missing:
                parts.append(missing[0])
        return ".".join(parts) or ROOT_PATH

    @staticmethod
    def _parse_datetime(name: str, value: str) -> datetime:
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError as exc:
            raise ValidationError(
                f"'{value}' is not a valid ISO-8601 datetime", field_path=name, constraint="format"
            ) from exc
