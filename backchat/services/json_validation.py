"""
Cheap pre-decoding checks for JSON payloads.

A model lists the keys it cannot do without in ``required_keys``; received
data passes when every key occurs somewhere in it. The check is a byte search,
not a parse, and is meant as a ``ResponseDataValidator`` in front of the real
decoding done by pydantic.
"""

from __future__ import annotations

import logging
from typing import ClassVar

from pydantic import BaseModel

from backchat.services.webservice_adapter import ResponseDataValidator

logger = logging.getLogger(__name__)


class JSONValidating(BaseModel):
    required_keys: ClassVar[tuple[str, ...]] = ()

    @classmethod
    def is_valid_json_data(cls, data: bytes) -> bool:
        if not data:
            return False
        if not cls.required_keys:
            logger.info("[json] required_keys of %s is empty, accepting data", cls.__name__)
            return True
        return all(key.encode("utf-8") in data for key in cls.required_keys)

    @classmethod
    def from_json_data(cls, data: bytes):
        """Decode ``data`` into an instance; raises pydantic.ValidationError."""
        return cls.model_validate_json(data)

    @classmethod
    def validator(cls) -> ResponseDataValidator:
        return cls.is_valid_json_data
