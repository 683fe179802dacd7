##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################
"""
Lookup table from entity kind names to their data models.

Entity kinds are accepted in any of the spellings a caller is likely to use:
`Drawing`, `drawing`, `MachineConfig`, `machine_config`, or `machine-config`.
"""
import logging
from typing import Dict, List, Type

from cadcam_db.db_scripts.data_models import ALL_MODELS, BaseDataModel
from cadcam_db.exceptions import ValidationError
from cadcam_db.utils import camel_to_snake


LOG = logging.getLogger(__name__)

ENTITY_MODELS: Dict[str, Type[BaseDataModel]] = {model.entity_kind: model for model in ALL_MODELS}

_LABEL_OVERRIDES = {"machine_config": "machine configuration"}


def normalize_entity_kind(entity_kind: str) -> str:
    """
    Convert an entity kind in any supported spelling to its snake_case form.

    Args:
        entity_kind: The entity kind as given by the caller.

    Returns:
        The snake_case entity kind (e.g. `machine_config`).

    Raises:
        ValidationError: If `entity_kind` does not name a known entity.
    """
    if not isinstance(entity_kind, str) or not entity_kind:
        raise ValidationError(f"Entity kind must be a non-empty string, got {entity_kind!r}.", constraint="entity_kind")

    normalized = camel_to_snake(entity_kind)
    if normalized not in ENTITY_MODELS:
        raise ValidationError(
            f"Unknown entity kind '{entity_kind}'. Supported kinds: {', '.join(get_entity_kinds())}.",
            constraint="entity_kind",
        )
    return normalized


def get_entity_model(entity_kind: str) -> Type[BaseDataModel]:
    """
    Get the data model for an entity kind.

    Args:
        entity_kind: The entity kind in any supported spelling.

    Returns:
        The dataclass that models `entity_kind`.
    """
    return ENTITY_MODELS[normalize_entity_kind(entity_kind)]


def get_entity_kinds() -> List[str]:
    """
    Get every supported entity kind, in registration order.

    Returns:
        A list of snake_case entity kinds.
    """
    return list(ENTITY_MODELS)


def get_entity_label(entity_kind: str) -> str:
    """
    Get the human readable label of an entity kind (e.g. `library item`).

    Args:
        entity_kind: The snake_case entity kind.

    Returns:
        The label used in operation descriptions and messages.
    """
    return _LABEL_OVERRIDES.get(entity_kind, entity_kind.replace("_", " "))
