"""Tag identifiers and the base class of every tag value.

Every value in a tree is an instance of a Tag subclass. The subclass fixes the
on-wire tag id, so a value's variant and its tag id always agree.
"""

from __future__ import annotations

import enum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict


class TagId(enum.IntEnum):
    """One-byte discriminator identifying a value's shape on the wire."""

    END = 0
    BYTE = 1
    SHORT = 2
    INT = 3
    LONG = 4
    FLOAT = 5
    DOUBLE = 6
    BYTE_ARRAY = 7
    STRING = 8
    LIST = 9
    COMPOUND = 10
    INT_ARRAY = 11
    LONG_ARRAY = 12


_UNSET: Any = object()


class Tag(BaseModel):
    """Base class for all tag values.

    Subclasses declare a single ``value`` field and set ``tag_id``. Values are
    immutable once constructed and compare structurally.

    Example:
        >>> from nbtcodec.models import Int, String
        >>> Int(20) == Int(value=20)
        True
        >>> String("Bob").tag_id
        <TagId.STRING: 8>
    """

    model_config = ConfigDict(
        # No silent coercion between tag shapes (e.g. "3" -> 3, True -> 1)
        strict=True,
        frozen=True,
        extra="forbid",
    )

    tag_id: ClassVar[TagId]

    def __init__(self, value: Any = _UNSET, /, **data: Any) -> None:
        """Allow the payload to be passed positionally: ``Int(20)``."""
        if value is not _UNSET:
            data["value"] = value
        super().__init__(**data)
