from __future__ import annotations

import base64
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from werkzeug.datastructures import FileStorage

from ..core.constants import DEFAULT_MAX_ATTACHMENTS, MAX_ATTACHMENT_BYTES, PDF_MIME_TYPE
from ..core.enums import EntityKind
from ..core.exceptions import AttachmentError, AttachmentSizeError, AttachmentTypeError, ValidationError
from ..records.repository import RecordStore
from ..records.schema import schema_for

logger = logging.getLogger(__name__)


@dataclass
class AttachmentBatch:
    """Outcome of encoding one upload batch.

    ``documents`` is the full list to persist (previous documents first).
    ``rejected`` holds one error per refused file; the rest of the batch
    still goes through.
    """

    documents: List[str] = field(default_factory=list)
    rejected: List[AttachmentError] = field(default_factory=list)


def to_data_url(content: bytes, mime_type: str = PDF_MIME_TYPE) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(content).decode('ascii')}"


class AttachmentService:
    def __init__(
        self,
        store: RecordStore,
        *,
        max_bytes: int = MAX_ATTACHMENT_BYTES,
        max_files: int = DEFAULT_MAX_ATTACHMENTS,
    ):
        self._store = store
        self._max_bytes = max_bytes
        self._max_files = max_files

    def _encode_one(self, file: FileStorage) -> str:
        filename = file.filename or ""
        if file.mimetype != PDF_MIME_TYPE:
            raise AttachmentTypeError(filename, f"{filename}: only PDF files are accepted")
        content = file.read()
        if len(content) > self._max_bytes:
            limit_mb = self._max_bytes // (1024 * 1024)
            raise AttachmentSizeError(filename, f"{filename}: file exceeds {limit_mb} MB")
        return to_data_url(content)

    def encode_batch(
        self,
        files: Iterable[FileStorage],
        current: Sequence[str] = (),
        max_files: Optional[int] = None,
    ) -> AttachmentBatch:
        limit = self._max_files if max_files is None else max_files
        batch = AttachmentBatch()
        accepted: List[str] = []
        for file in files:
            try:
                accepted.append(self._encode_one(file))
            except AttachmentError as e:
                logger.info("Attachment rejected: %s", e)
                batch.rejected.append(e)
        batch.documents = [*current, *accepted][:limit]
        return batch

    async def attach_to_record(
        self,
        kind: EntityKind,
        record_id: str,
        files: Iterable[FileStorage],
    ) -> AttachmentBatch:
        kind = EntityKind(kind)
        if not schema_for(kind).has_field("documents"):
            raise ValidationError(f"{kind.value} records do not hold documents")

        repo = self._store.collection(kind)
        record = await repo.get(record_id)
        if not record:
            raise ValidationError("Unknown record")

        batch = self.encode_batch(files, current=record.get("documents") or [])
        await repo.update(record_id, {"documents": batch.documents})
        return batch
