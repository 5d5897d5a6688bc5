"""Typed repository over the key-value store.

Each domain declares a `prefix` and a record model; keys are the prefix joined with the
key parts by ':' (`message:<conversationId>:<id>`). Scans always end the prefix with ':' so
`review:12:` never picks up records of user `123`.
"""

from __future__ import annotations

import logging
from typing import Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from farm_market.core.exceptions import StorageException
from farm_market.core.storage import KeyValueStore

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


class RecordRepository(Generic[RecordT]):
    prefix: str = ""
    model: Type[RecordT]

    def __init__(self, store: KeyValueStore):
        self.store = store

    def key(self, *parts: str) -> str:
        return ":".join((self.prefix, *parts))

    def scan_prefix(self, *parts: str) -> str:
        return self.key(*parts) + ":"

    def _load(self, raw) -> RecordT:
        try:
            return self.model.model_validate(raw)
        except ValidationError as exc:
            logger.error("Corrupt %s record in store: %s", self.prefix, exc)
            raise StorageException(f"Stored {self.prefix} record is malformed") from exc

    async def get(self, *parts: str) -> Optional[RecordT]:
        raw = await self.store.get(self.key(*parts))
        if raw is None:
            return None
        return self._load(raw)

    async def put(self, record: RecordT, *parts: str) -> RecordT:
        await self.store.set(self.key(*parts), record.to_record())
        return record

    async def delete(self, *parts: str) -> bool:
        return await self.store.delete(self.key(*parts))

    async def scan(self, *parts: str) -> List[RecordT]:
        raw_records = await self.store.scan_prefix(self.scan_prefix(*parts))
        return [self._load(raw) for raw in raw_records]
