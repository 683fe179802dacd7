##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################
"""
Utility functions for backends in the CADCAM DB application.

These convert between entity values and the representation a store can hold.
Conversion is driven by the field specs of each model, so a stored value is
always read back as the type it was written with.
"""

import json
import logging
from datetime import datetime
from typing import Any, Dict, Type

from cadcam_db.common.enums import FieldType
from cadcam_db.db_scripts.data_models import BaseDataModel


LOG = logging.getLogger(__name__)

_TRUE_STRINGS = ("1", "true", "True")


def serialize_value(field_type: FieldType, value: Any) -> Any:
    """
    Convert a single value into a form the store can hold.

    Args:
        field_type: The type of the field the value belongs to.
        value: The value to convert.

    Returns:
        The converted value. Booleans become 0/1, datetimes become ISO-8601
        text, and lists of strings become JSON text. None stays None.
    """
    if value is None:
        return None
    if field_type == FieldType.BOOLEAN:
        return int(bool(value))
    if field_type == FieldType.DATETIME and isinstance(value, datetime):
        return value.isoformat()
    if field_type == FieldType.STRING_LIST:
        return json.dumps(list(value))
    return value


def deserialize_value(field_type: FieldType, value: Any) -> Any:
    """
    Convert a stored value back into its Python type.

    Flexible JSON fields are left as text; decoding them is the repository's job.

    Args:
        field_type: The type of the field the value belongs to.
        value: The stored value.

    Returns:
        The converted value.
    """
    if value is None:
        return None
    if field_type == FieldType.BOOLEAN:
        return value in _TRUE_STRINGS if isinstance(value, str) else bool(value)
    if field_type == FieldType.NUMBER:
        return float(value)
    if field_type == FieldType.DATETIME:
        return datetime.fromisoformat(value) if isinstance(value, str) else value
    if field_type == FieldType.STRING_LIST:
        return json.loads(value) if isinstance(value, str) else list(value)
    return value


def _column_types(model_class: Type[BaseDataModel]) -> Dict[str, FieldType]:
    types = {"id": FieldType.STRING, "created_at": FieldType.DATETIME, "updated_at": FieldType.DATETIME}
    types.update({spec.attribute: spec.field_type for spec in model_class.get_field_specs()})
    return types


def serialize_values(model_class: Type[BaseDataModel], values: Dict[str, Any]) -> Dict[str, Any]:
    """
    Convert entity values keyed by column name into a form the store can hold.

    Args:
        model_class: A [`BaseDataModel`][db_scripts.data_models.BaseDataModel] subclass.
        values: The values to convert. Keys that aren't columns of the model are dropped.

    Returns:
        A new dict of converted values.
    """
    types = _column_types(model_class)
    serialized = {}
    for column, value in values.items():
        if column not in types:
            LOG.warning(f"Ignoring unknown column '{column}' for {model_class.entity_kind}.")
            continue
        serialized[column] = serialize_value(types[column], value)
    return serialized


def deserialize_entity(data: Dict[str, Any], model_class: Type[BaseDataModel]) -> BaseDataModel:
    """
    Given data that was retrieved, convert it into a data_class instance.

    Columns missing from `data` take the model's dataclass default.

    Args:
        data: The data retrieved that we need to deserialize, keyed by column name.
        model_class: A [`BaseDataModel`][db_scripts.data_models.BaseDataModel] subclass.

    Returns:
        A [`BaseDataModel`][db_scripts.data_models.BaseDataModel] instance.
    """
    types = _column_types(model_class)
    deserialized = {
        column: deserialize_value(types[column], value) for column, value in data.items() if column in types
    }
    # Redis drops None values, so optional fields come back missing
    for column in types:
        deserialized.setdefault(column, None)
    return model_class.from_dict(deserialized)
