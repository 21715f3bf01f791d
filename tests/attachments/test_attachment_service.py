from __future__ import annotations

import asyncio
import base64
import io

import pytest
from werkzeug.datastructures import FileStorage

from src.school_records.school_records.attachments.service import AttachmentService
from src.school_records.school_records.core.enums import EntityKind
from src.school_records.school_records.core.exceptions import (
    AttachmentSizeError,
    AttachmentTypeError,
    ValidationError,
)
from src.school_records.school_records.database.keyvalue import InMemoryKeyValueStore
from src.school_records.school_records.records.local_repository import LocalRecordStore


def run(coro):
    return asyncio.run(coro)


def upload(filename, content=b"%PDF-1.4 test", content_type="application/pdf"):
    return FileStorage(stream=io.BytesIO(content), filename=filename, content_type=content_type)


@pytest.fixture()
def store():
    return LocalRecordStore(InMemoryKeyValueStore())


@pytest.fixture()
def service(store):
    return AttachmentService(store)


def test_pdf_becomes_data_url(service):
    batch = service.encode_batch([upload("bulletin.pdf")])

    assert batch.rejected == []
    assert batch.documents == ["data:application/pdf;base64," + base64.b64encode(b"%PDF-1.4 test").decode()]


def test_oversized_pdf_is_rejected_for_size(service):
    batch = service.encode_batch([upload("x.pdf", content=b"0" * (12 * 1024 * 1024))])

    assert batch.documents == []
    assert len(batch.rejected) == 1
    assert isinstance(batch.rejected[0], AttachmentSizeError)
    assert batch.rejected[0].filename == "x.pdf"


def test_png_is_rejected_for_type(service):
    batch = service.encode_batch([upload("photo.png", content_type="image/png")])

    assert isinstance(batch.rejected[0], AttachmentTypeError)
    assert isinstance(batch.rejected[0], ValidationError)


def test_rejected_file_does_not_block_the_rest(service):
    batch = service.encode_batch([upload("photo.png", content_type="image/png"), upload("ok.pdf")])

    assert len(batch.documents) == 1
    assert len(batch.rejected) == 1


def test_result_is_truncated_to_max_files(service):
    current = [f"data:application/pdf;base64,{i}" for i in range(4)]

    batch = service.encode_batch([upload("a.pdf"), upload("b.pdf")], current=current)

    assert len(batch.documents) == 5
    assert batch.documents[:4] == current


def test_explicit_max_files(service):
    batch = service.encode_batch([upload("a.pdf"), upload("b.pdf")], max_files=1)

    assert len(batch.documents) == 1


def test_attach_to_record_appends_documents(service, store):
    staff = store.collection(EntityKind.STAFF)
    run(staff.add({"id": "1", "lastName": "Yao", "documents": ["data:application/pdf;base64,AA=="]}))

    batch = run(service.attach_to_record(EntityKind.STAFF, "1", [upload("contrat.pdf")]))

    assert len(batch.documents) == 2
    assert run(staff.get("1"))["documents"] == batch.documents


def test_attach_to_kind_without_documents(service):
    with pytest.raises(ValidationError):
        run(service.attach_to_record(EntityKind.STUDENTS, "1", [upload("a.pdf")]))


def test_attach_to_unknown_record(service):
    with pytest.raises(ValidationError):
        run(service.attach_to_record(EntityKind.ROOM_SCHEDULES, "missing", [upload("a.pdf")]))
