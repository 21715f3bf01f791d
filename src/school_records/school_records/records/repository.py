from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Protocol, Sequence

from ..core.enums import EntityKind

Record = Dict[str, Any]


class RecordRepository(Protocol):
    """CRUD over one entity kind.

    Note (DIP): services depend on this interface, never on a concrete backend.
    """

    kind: EntityKind

    async def list(self) -> Sequence[Record]:
        raise NotImplementedError

    async def get(self, record_id: str) -> Optional[Record]:
        raise NotImplementedError

    async def add(self, record: Mapping[str, Any]) -> None:
        """Append ``record``. The caller supplies a unique ``id``."""

        raise NotImplementedError

    async def update(self, record_id: str, partial: Mapping[str, Any]) -> None:
        """Merge ``partial`` into the record; unknown ids are ignored."""

        raise NotImplementedError

    async def delete(self, record_id: str) -> None:
        raise NotImplementedError


class RecordStore(Protocol):
    """One backend, many collections."""

    backend_name: str

    def collection(self, kind: EntityKind) -> RecordRepository:
        raise NotImplementedError

    async def initialize(self) -> bool:
        """Prepare the backend on startup.

        Returns True when seed data was written during this call.
        """

        raise NotImplementedError
