from __future__ import annotations

from flask import Flask, abort, jsonify, request

from ..common.datetime_utils import generate_id
from ..common.session_guard import current_role, login_required, roles_required
from ..core.enums import EntityKind, Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..container import Container

# Accounts and payroll are written by administrators only.
ADMIN_ONLY_KINDS = frozenset(
    {
        EntityKind.USERS,
        EntityKind.TEACHER_SALARIES,
        EntityKind.TEACHER_ADVANCES,
        EntityKind.MONTHLY_SALARY_COSTS,
    }
)
# Recorded once, never changed or removed.
IMMUTABLE_KINDS = frozenset({EntityKind.TEACHER_ADVANCES})


def _parse_kind(kind: str) -> EntityKind:
    try:
        return EntityKind(kind)
    except ValueError:
        abort(404)


def _writable_kind(kind: str, *, mutating: bool = False) -> EntityKind:
    entity_kind = _parse_kind(kind)
    if entity_kind in ADMIN_ONLY_KINDS and current_role() != Role.ADMIN:
        raise AuthorizationError(f"Only administrators can write {entity_kind.value}")
    if mutating and entity_kind in IMMUTABLE_KINDS:
        raise AuthorizationError(f"{entity_kind.value} cannot be changed once recorded")
    return entity_kind


def _json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def register(app: Flask, container: Container) -> None:
    store = container.store
    # Teachers enter grades, attendance and homework; parents only read.
    writers = (Role.ADMIN, Role.TEACHER)

    @app.route("/api/records/<kind>", methods=["GET"], endpoint="list_records")
    @login_required
    async def list_records(kind: str):
        records = await store.collection(_parse_kind(kind)).list()
        return jsonify(list(records))

    @app.route("/api/records/<kind>/<record_id>", methods=["GET"], endpoint="get_record")
    @login_required
    async def get_record(kind: str, record_id: str):
        record = await store.collection(_parse_kind(kind)).get(record_id)
        if record is None:
            abort(404)
        return jsonify(record)

    @app.route("/api/records/<kind>", methods=["POST"], endpoint="add_record")
    @roles_required(*writers)
    async def add_record(kind: str):
        repo = store.collection(_writable_kind(kind))
        record = _json_body()
        if not record.get("id"):
            record["id"] = generate_id()
        await repo.add(record)
        return jsonify(record), 201

    @app.route("/api/records/<kind>/<record_id>", methods=["PATCH"], endpoint="update_record")
    @roles_required(*writers)
    async def update_record(kind: str, record_id: str):
        changes = _json_body()
        changes.pop("id", None)
        await store.collection(_writable_kind(kind, mutating=True)).update(record_id, changes)
        return jsonify({"success": True})

    @app.route("/api/records/<kind>/<record_id>", methods=["DELETE"], endpoint="delete_record")
    @roles_required(*writers)
    async def delete_record(kind: str, record_id: str):
        await store.collection(_writable_kind(kind, mutating=True)).delete(record_id)
        return jsonify({"success": True})

    @app.route("/api/records/<kind>/<record_id>/documents", methods=["POST"], endpoint="upload_documents")
    @roles_required(Role.ADMIN)
    async def upload_documents(kind: str, record_id: str):
        batch = await container.attachment_service.attach_to_record(
            _parse_kind(kind),
            record_id,
            request.files.getlist("files"),
        )
        return jsonify(
            {
                "success": not batch.rejected,
                "documents": len(batch.documents),
                "rejected": [{"filename": e.filename, "message": str(e)} for e in batch.rejected],
            }
        )
