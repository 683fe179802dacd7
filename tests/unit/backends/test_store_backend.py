##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################
"""
Tests for the `store_backend.py` module.
"""
from unittest.mock import MagicMock

import pytest

from cadcam_db.backends.filter_support_mixin import FilterSupportMixin
from cadcam_db.backends.store_backend import StoreBackend


class DummyBackend(StoreBackend, FilterSupportMixin):
    """A minimal backend that routes to mock stores."""

    def __init__(self):
        self.closed = False
        super().__init__("dummy", {"drawing": MagicMock(), "tool": MagicMock()})

    def get_version(self):
        return "0.0"

    def get_connection_string(self):
        return "dummy://"

    def flush_database(self):
        pass

    def close(self):
        self.closed = True


@pytest.fixture
def backend() -> DummyBackend:
    """A `DummyBackend` instance."""
    return DummyBackend()


class TestStoreBackend:
    """Tests for the routing offered by `StoreBackend`."""

    def test_get_name(self, backend: DummyBackend):
        """
        The name given at construction is reported.

        Args:
            backend: The backend under test.
        """
        assert backend.get_name() == "dummy"

    def test_invalid_store_type(self, backend: DummyBackend):
        """
        Unknown store types are rejected.

        Args:
            backend: The backend under test.
        """
        with pytest.raises(ValueError, match="Invalid store type 'spaceship'"):
            backend.retrieve("x", "spaceship")

    def test_routing(self, backend: DummyBackend):
        """
        Every primitive is forwarded to the store of the requested kind.

        Args:
            backend: The backend under test.
        """
        store = backend.stores["drawing"]

        backend.insert("drawing", {"name": "A"})
        backend.retrieve("d1", "drawing")
        backend.retrieve_all("drawing")
        backend.update("d1", "drawing", {"name": "B"})
        backend.delete("d1", "drawing")

        store.insert.assert_called_once_with({"name": "A"})
        store.retrieve.assert_called_once_with("d1")
        store.retrieve_all.assert_called_once_with()
        store.update.assert_called_once_with("d1", {"name": "B"})
        store.delete.assert_called_once_with("d1")
        backend.stores["tool"].insert.assert_not_called()

    def test_retrieve_all_filtered(self, backend: DummyBackend):
        """
        The filter mixin forwards filters to the store.

        Args:
            backend: The backend under test.
        """
        backend.stores["tool"].retrieve_all_filtered.return_value = ["t1"]

        assert backend.retrieve_all_filtered("tool", {"organization_id": "o1"}) == ["t1"]
        backend.stores["tool"].retrieve_all_filtered.assert_called_once_with({"organization_id": "o1"})

    def test_context_manager_closes(self, backend: DummyBackend):
        """
        Leaving a `with` block closes the backend, even on error.

        Args:
            backend: The backend under test.
        """
        with pytest.raises(RuntimeError):
            with backend as entered:
                assert entered is backend
                raise RuntimeError("boom")

        assert backend.closed

    def test_cannot_instantiate_abstract(self):
        """`StoreBackend` itself is abstract."""
        with pytest.raises(TypeError):
            StoreBackend("x", {})  # pylint: disable=abstract-class-instantiated
