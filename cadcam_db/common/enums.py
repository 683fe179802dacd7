##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################

"""This module provides enumerations shared by the schema, store, and error layers."""
from enum import Enum, IntEnum


__all__ = ("ErrorKind", "FieldType", "ReturnCode", "SchemaMode")


class ReturnCode(IntEnum):
    """
    Enum for CADCAM DB process return codes.

    Attributes:
        OK (int): Indicates a successful operation. Numeric value: 0.
        ERROR (int): Indicates a general error occurred. Numeric value: 1.
    """

    OK: int = 0
    ERROR: int = 1


class ErrorKind(str, Enum):
    """
    The fixed set of error kinds a caller can receive from the repository layer.

    Attributes:
        VALIDATION: The input did not match the entity's schema. Raised before any I/O.
        INVALID_FIELD: A business rule was violated (e.g. null on a required JSON field).
        NOT_FOUND: The target id does not exist.
        CONFLICT: The store rejected the write because of a uniqueness violation.
        UNKNOWN: Any other store failure.
    """

    VALIDATION = "ValidationError"
    INVALID_FIELD = "InvalidField"
    NOT_FOUND = "NotFound"
    CONFLICT = "Conflict"
    UNKNOWN = "Unknown"


class SchemaMode(str, Enum):
    """
    The schema variants held for every entity kind.

    Attributes:
        BASE: The entity's own creation fields, without ownership or scoping references.
        CREATE: The base fields plus ownership and scoping references.
        UPDATE: Every updatable field, all optional.
    """

    BASE = "base"
    CREATE = "create"
    UPDATE = "update"


class FieldType(str, Enum):
    """
    Value types an entity field can hold. Each maps to a JSON Schema type and a store column type.

    Attributes:
        STRING: Text.
        NUMBER: Integer or floating point number.
        BOOLEAN: True/False.
        DATETIME: An ISO-8601 timestamp.
        STRING_LIST: A list of strings.
        JSON: A flexible JSON document persisted as encoded text.
    """

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATETIME = "datetime"
    STRING_LIST = "string_list"
    JSON = "json"
