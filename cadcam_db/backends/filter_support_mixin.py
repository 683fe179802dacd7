##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################
"""
Provides a mixin class that adds filter-based retrieval support to backend
implementations within the CADCAM DB system.

Backends that inherit `FilterSupportMixin` filter inside the store. The
repository filters in memory for backends without it.
"""

from typing import Dict, List

from cadcam_db.db_scripts.data_models import BaseDataModel


class FilterSupportMixin:
    """
    Mixin for backends that support retrieving filtered entities from their
    underlying stores.

    It assumes the backend provides a `_get_store_by_type(store_type)` method
    and that each store supports filtering via a `retrieve_all_filtered(filters)` method.
    """

    def retrieve_all_filtered(self, store_type: str, filters: Dict) -> List[BaseDataModel]:
        """
        Retrieve all objects from the specified store that match the given filters.

        Args:
            store_type: The snake_case entity kind.
            filters: Dictionary of column-value pairs to filter on.

        Returns:
            A list of filtered data model objects.
        """
        store = self._get_store_by_type(store_type)
        return store.retrieve_all_filtered(filters)
