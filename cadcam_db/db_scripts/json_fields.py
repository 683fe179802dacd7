##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################
"""
Encoding and decoding of flexible JSON fields.

Flexible fields (a drawing's `data`, a material's `properties`, a machine's
`config`, ...) hold arbitrary JSON documents. The stores persist them as
opaque text, so they are encoded on the way in and decoded on the way out.
"""
import json
import logging
from typing import Any, Optional

from cadcam_db.db_scripts.data_models import BaseDataModel


LOG = logging.getLogger(__name__)


class JsonFieldCodec:
    """
    Converts flexible JSON field values to and from their stored text form.

    Methods:
        encode: Serialize a structured value to text.
        decode: Deserialize stored text into a structured value.
        decode_optional: Deserialize stored text for an optional field.
        decode_row: Decode every flexible field of a stored row.
    """

    @staticmethod
    def encode(value: Any) -> Optional[str]:
        """
        Serialize a structured value to text.

        Args:
            value: Any JSON-serializable value, or None.

        Returns:
            The JSON text, or None when `value` is None. None is what the
            stores persist for a cleared optional field.
        """
        if value is None:
            return None
        return json.dumps(value)

    @staticmethod
    def decode(text: Any) -> Any:
        """
        Deserialize stored text into a structured value.

        Anything that is not a non-empty string (including None) decodes to an empty dict.

        Args:
            text: The stored value.

        Returns:
            The decoded JSON value.

        Raises:
            json.JSONDecodeError: If `text` is not valid JSON.
        """
        if not isinstance(text, str) or not text:
            return {}
        return json.loads(text)

    @classmethod
    def decode_optional(cls, text: Any) -> Any:
        """
        Deserialize stored text for an optional flexible field.

        Args:
            text: The stored value.

        Returns:
            None if nothing is stored, otherwise the result of `decode`.
        """
        if text is None:
            return None
        return cls.decode(text)

    @classmethod
    def decode_row(cls, model: BaseDataModel) -> BaseDataModel:
        """
        Decode every flexible field of an entity read from a store, in place.

        Required flexible fields go through `decode`; optional ones through `decode_optional`.

        Args:
            model: The entity as read from the store, flexible fields still encoded.

        Returns:
            The same entity with its flexible fields decoded.
        """
        for spec in model.get_field_specs():
            if not spec.is_flexible:
                continue
            stored = getattr(model, spec.attribute)
            decoded = cls.decode(stored) if spec.is_required_flexible else cls.decode_optional(stored)
            setattr(model, spec.attribute, decoded)
        return model
