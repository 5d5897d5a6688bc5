"""Base record model, identifiers and timestamp helpers shared by every domain."""

from __future__ import annotations

import secrets
import string
import time
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

_ID_ALPHABET = string.digits + string.ascii_lowercase
_ID_SUFFIX_LENGTH = 9


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_record_id(tag: Optional[str] = None) -> str:
    """Time-based identifier: `<epoch-millis>-<9 base36 chars>`, optionally tagged (`ord-...`)."""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(_ID_SUFFIX_LENGTH))
    value = f"{int(time.time() * 1000)}-{suffix}"
    return f"{tag}-{value}" if tag else value


class CamelModel(BaseModel):
    """Pydantic base: snake_case attributes, camelCase JSON (`pricePerUnit`, `createdAt`)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        validate_default=True,
        allow_inf_nan=False,
    )

    def to_record(self) -> Dict[str, Any]:
        """JSON-safe dict in the stored (camelCase) shape."""
        return self.model_dump(mode="json", by_alias=True)


class PatchModel(CamelModel):
    """Partial update payload: only non-null fields the client actually sent are merged."""

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class SuccessResponse(CamelModel):
    success: bool = True


RecordT = TypeVar("RecordT", bound=BaseModel)


def merge_patch(record: RecordT, patch: PatchModel) -> RecordT:
    """Return a copy of `record` with the patch's explicitly-set fields applied."""
    changes = patch.changes()
    if not changes:
        return record
    merged = record.model_dump()
    merged.update(changes)
    return type(record).model_validate(merged)


def newest_first(records: Iterable[RecordT], attr: str = "created_at") -> List[RecordT]:
    return sorted(records, key=lambda r: getattr(r, attr), reverse=True)


def oldest_first(records: Iterable[RecordT], attr: str = "created_at") -> List[RecordT]:
    return sorted(records, key=lambda r: getattr(r, attr))


__all__ = [
    "CamelModel",
    "PatchModel",
    "SuccessResponse",
    "merge_patch",
    "new_record_id",
    "newest_first",
    "oldest_first",
    "utcnow",
]
