##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################
"""
Translation of store failures into the caller-facing error taxonomy.
"""
import logging
import sqlite3
from contextlib import contextmanager
from typing import Iterator

from cadcam_db.exceptions import CadcamDbError, ConflictError, UniqueConstraintError, UnknownStoreError


LOG = logging.getLogger(__name__)


class ErrorTranslator:
    """
    Maps any exception raised while serving an operation onto one of the
    taxonomy errors in `cadcam_db.exceptions`.

    Taxonomy errors raised by the repository itself pass through with their
    entity kind and operation filled in. Uniqueness violations become a
    `ConflictError`; anything else becomes an `UnknownStoreError` that keeps
    the original exception.

    Methods:
        translate: Convert an exception into a taxonomy error.
        guard: Context manager that translates anything raised inside it.
    """

    @staticmethod
    def is_unique_violation(exc: Exception) -> bool:
        """
        Check whether an exception reports a uniqueness violation.

        Args:
            exc: The exception raised by a store.

        Returns:
            True if `exc` is a uniqueness violation, False otherwise.
        """
        if isinstance(exc, UniqueConstraintError):
            return True
        return isinstance(exc, sqlite3.IntegrityError) and "UNIQUE" in str(exc).upper()

    def translate(self, exc: Exception, entity_kind: str, operation: str) -> CadcamDbError:
        """
        Convert an exception into a taxonomy error.

        Args:
            exc: The exception to translate.
            entity_kind: The entity kind of the failed operation.
            operation: The name of the failed operation.

        Returns:
            The taxonomy error to raise in place of `exc`.
        """
        if isinstance(exc, CadcamDbError):
            return exc.with_context(entity_kind, operation)
        if self.is_unique_violation(exc):
            return ConflictError(str(exc), entity_kind=entity_kind, operation=operation)
        LOG.debug(f"Unexpected {type(exc).__name__} during {operation} of {entity_kind}: {exc}")
        return UnknownStoreError(
            str(exc) or type(exc).__name__, original=exc, entity_kind=entity_kind, operation=operation
        )

    @contextmanager
    def guard(self, entity_kind: str, operation: str) -> Iterator[None]:
        """
        Translate any exception raised inside the `with` block.

        Args:
            entity_kind: The entity kind of the operation being guarded.
            operation: The name of the operation being guarded.

        Raises:
            CadcamDbError: The translated error, chained to the original one.
        """
        try:
            yield
        except CadcamDbError as exc:
            raise exc.with_context(entity_kind, operation)
        except Exception as exc:  # pylint: disable=broad-except
            raise self.translate(exc, entity_kind, operation) from exc
