##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################

"""
Module of all CADCAM DB exception types.

The repository layer only ever lets the five taxonomy errors reach a caller:
`ValidationError`, `InvalidFieldError`, `NotFoundError`, `ConflictError`, and
`UnknownStoreError`. They share the `CadcamDbError` base so a boundary can catch
them all at once.
"""

from typing import Optional

from cadcam_db.common.enums import ErrorKind


__all__ = (
    "BackendNotSupportedError",
    "CadcamDbError",
    "ConflictError",
    "InvalidFieldError",
    "NotFoundError",
    "UniqueConstraintError",
    "UnknownOperationError",
    "UnknownStoreError",
    "ValidationError",
)


class CadcamDbError(Exception):
    """
    Base class for every error surfaced by the repository layer.

    Attributes:
        kind (ErrorKind): The taxonomy entry this error belongs to.
        entity_kind (str): The entity kind the failed operation targeted (e.g. "drawing").
        operation (str): The failed operation (list, get, create, update, delete).
        cause (str): A human-readable description of what went wrong.
    """

    kind: ErrorKind = ErrorKind.UNKNOWN

    def __init__(self, cause: str, entity_kind: Optional[str] = None, operation: Optional[str] = None):
        self.cause: str = cause
        self.entity_kind: Optional[str] = entity_kind
        self.operation: Optional[str] = operation
        super().__init__(cause)

    def with_context(self, entity_kind: str, operation: str) -> "CadcamDbError":
        """
        Fill in the entity kind and operation if they were not known when the error was raised.

        Args:
            entity_kind: The entity kind of the failed operation.
            operation: The name of the failed operation.

        Returns:
            This error, for chaining.
        """
        if self.entity_kind is None:
            self.entity_kind = entity_kind
        if self.operation is None:
            self.operation = operation
        return self

    def __str__(self) -> str:
        if self.entity_kind and self.operation:
            label = self.entity_kind.replace("_", " ")
            return f"Failed to {self.operation} {label}: {self.cause}"
        return self.cause


class ValidationError(CadcamDbError):
    """
    Exception for input that does not match an entity schema.

    Attributes:
        field_path (str): Dotted path of the offending field (e.g. `tags.1`), or `<root>`.
        constraint (str): The violated JSON Schema keyword (e.g. `required`, `type`).
    """

    kind = ErrorKind.VALIDATION

    def __init__(  # pylint: disable=too-many-arguments
        self,
        cause: str,
        field_path: str = "<root>",
        constraint: str = "schema",
        entity_kind: Optional[str] = None,
        operation: Optional[str] = None,
    ):
        self.field_path: str = field_path
        self.constraint: str = constraint
        super().__init__(cause, entity_kind=entity_kind, operation=operation)


class InvalidFieldError(CadcamDbError):
    """
    Exception for a business-rule violation on a single field, such as
    clearing a required flexible JSON field.

    Attributes:
        field_name (str): The wire name of the offending field.
    """

    kind = ErrorKind.INVALID_FIELD

    def __init__(
        self, cause: str, field_name: str, entity_kind: Optional[str] = None, operation: Optional[str] = None
    ):
        self.field_name: str = field_name
        super().__init__(cause, entity_kind=entity_kind, operation=operation)


class NotFoundError(CadcamDbError):
    """
    Exception to signal that no entity exists with the requested id.

    Attributes:
        entity_id (str): The id that could not be found.
    """

    kind = ErrorKind.NOT_FOUND

    def __init__(
        self, cause: str, entity_id: str, entity_kind: Optional[str] = None, operation: Optional[str] = None
    ):
        self.entity_id: str = entity_id
        super().__init__(cause, entity_kind=entity_kind, operation=operation)


class ConflictError(CadcamDbError):
    """
    Exception to signal that the store rejected a write because it would
    duplicate a unique field.
    """

    kind = ErrorKind.CONFLICT


class UnknownStoreError(CadcamDbError):
    """
    Exception wrapping any store failure that has no more specific kind.

    Attributes:
        original (Exception): The exception raised by the store, kept for diagnostics.
    """

    kind = ErrorKind.UNKNOWN

    def __init__(
        self,
        cause: str,
        original: Optional[Exception] = None,
        entity_kind: Optional[str] = None,
        operation: Optional[str] = None,
    ):
        self.original: Optional[Exception] = original
        super().__init__(cause, entity_kind=entity_kind, operation=operation)


class UniqueConstraintError(Exception):
    """
    Exception raised by stores that enforce uniqueness themselves (e.g. Redis).

    This is a store-level error; the repository translates it into a `ConflictError`.

    Attributes:
        table (str): The store key or table of the entity.
        field_name (str): The column holding the duplicated value.
    """

    def __init__(self, table: str, field_name: str, value: str):
        self.table: str = table
        self.field_name: str = field_name
        super().__init__(f"UNIQUE constraint failed: {table}.{field_name} ('{value}' is already taken)")


class BackendNotSupportedError(Exception):
    """
    Exception to signal that the provided backend is not supported.
    """


class UnknownOperationError(Exception):
    """
    Exception to signal that a tool name or resource URI is not registered.
    """
