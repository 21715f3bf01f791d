"""Declarative per-entity schemas.

One table per entity kind. Records use camelCase field names while the
relational backend stores snake_case columns; each ``FieldSpec`` pairs the
two and tells the mapper how to convert the value. A field missing from a
schema is dropped on write and absent on read, so every schema must list
all of the record's fields.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from ..core.enums import EntityKind


class FieldType(str, Enum):
    TEXT = "text"
    INTEGER = "integer"
    NUMERIC = "numeric"
    BOOLEAN = "boolean"
    DATE = "date"
    JSON = "json"


@dataclass(frozen=True)
class FieldSpec:
    name: str
    column: str
    type: FieldType = FieldType.TEXT


@dataclass(frozen=True)
class EntitySchema:
    kind: EntityKind
    table: str
    fields: Tuple[FieldSpec, ...]
    order_by: str = "created_at"
    descending: bool = True

    def field(self, name: str) -> Optional[FieldSpec]:
        return self._by_name().get(name)

    def column(self, column: str) -> Optional[FieldSpec]:
        for spec in self.fields:
            if spec.column == column:
                return spec
        return None

    def has_field(self, name: str) -> bool:
        return name in self._by_name()

    def _by_name(self) -> Dict[str, FieldSpec]:
        return {spec.name: spec for spec in self.fields}


def _f(name: str, column: str, type_: FieldType = FieldType.TEXT) -> FieldSpec:
    return FieldSpec(name=name, column=column, type=type_)


T = FieldType

_ID = _f("id", "id")

ENTITY_SCHEMAS: Dict[EntityKind, EntitySchema] = {
    schema.kind: schema
    for schema in (
        EntitySchema(
            kind=EntityKind.USERS,
            table="users",
            fields=(
                _ID,
                _f("username", "username"),
                _f("password", "password"),
                _f("role", "role"),
                _f("name", "name"),
                _f("email", "email"),
                _f("phone", "phone"),
                _f("profilePhoto", "profile_photo"),
                _f("assignedClasses", "assigned_classes", T.JSON),
                _f("childrenIds", "children_ids", T.JSON),
                _f("permissions", "permissions", T.JSON),
                _f("isActive", "is_active", T.BOOLEAN),
                _f("createdAt", "created_at"),
            ),
        ),
        EntitySchema(
            kind=EntityKind.STUDENTS,
            table="students",
            fields=(
                _ID,
                _f("firstName", "first_name"),
                _f("lastName", "last_name"),
                _f("dateOfBirth", "date_of_birth", T.DATE),
                _f("gender", "gender"),
                _f("classId", "class_id"),
                _f("parentName", "parent_name"),
                _f("parentPhone", "parent_phone"),
                _f("parentEmail", "parent_email"),
                _f("address", "address"),
                _f("enrollmentDate", "enrollment_date", T.DATE),
                _f("profilePhoto", "profile_photo"),
                _f("studentNumber", "student_number"),
                _f("isActive", "is_active", T.BOOLEAN),
                _f("medicalInfo", "medical_info"),
            ),
        ),
        EntitySchema(
            kind=EntityKind.CLASSES,
            table="classes",
            fields=(
                _ID,
                _f("name", "name"),
                _f("level", "level"),
                _f("teacherId", "teacher_id"),
                _f("academicYear", "academic_year"),
                _f("subjects", "subjects", T.JSON),
                _f("maxStudents", "max_students", T.INTEGER),
            ),
        ),
        EntitySchema(
            kind=EntityKind.SUBJECTS,
            table="subjects",
            fields=(
                _ID,
                _f("name", "name"),
                _f("code", "code"),
                _f("coefficient", "coefficient", T.NUMERIC),
                _f("description", "description"),
            ),
            order_by="name",
            descending=False,
        ),
        EntitySchema(
            kind=EntityKind.GRADES,
            table="grades",
            fields=(
                _ID,
                _f("studentId", "student_id"),
                _f("subjectId", "subject_id"),
                _f("classId", "class_id"),
                _f("value", "value", T.NUMERIC),
                _f("maxValue", "max_value", T.NUMERIC),
                _f("type", "type"),
                _f("date", "date", T.DATE),
                _f("term", "term"),
                _f("teacherId", "teacher_id"),
                _f("comment", "comment"),
            ),
            order_by="date",
        ),
        EntitySchema(
            kind=EntityKind.PAYMENTS,
            table="payments",
            fields=(
                _ID,
                _f("studentId", "student_id"),
                _f("amount", "amount", T.NUMERIC),
                _f("type", "type"),
                _f("description", "description"),
                _f("date", "date", T.DATE),
                _f("method", "method"),
                _f("status", "status"),
                _f("receiptNumber", "receipt_number"),
                _f("academicYear", "academic_year"),
                _f("paidBy", "paid_by"),
            ),
        ),
        EntitySchema(
            kind=EntityKind.STAFF,
            table="staff",
            fields=(
                _ID,
                _f("firstName", "first_name"),
                _f("lastName", "last_name"),
                _f("position", "position"),
                _f("department", "department"),
                _f("education", "education"),
                _f("experience", "experience"),
                _f("hireDate", "hire_date", T.DATE),
                _f("phone", "phone"),
                _f("email", "email"),
                _f("address", "address"),
                _f("isActive", "is_active", T.BOOLEAN),
                _f("observations", "observations"),
                _f("profilePhoto", "profile_photo"),
                _f("documents", "documents", T.JSON),
            ),
        ),
        EntitySchema(
            kind=EntityKind.INVENTORY,
            table="inventory_items",
            fields=(
                _ID,
                _f("name", "name"),
                _f("category", "category"),
                _f("quantity", "quantity", T.INTEGER),
                _f("condition", "condition"),
                _f("location", "location"),
                _f("purchaseDate", "purchase_date", T.DATE),
                _f("value", "value", T.NUMERIC),
                _f("lastUpdated", "last_updated"),
                _f("observations", "observations"),
            ),
        ),
        EntitySchema(
            kind=EntityKind.NEWS,
            table="news",
            fields=(
                _ID,
                _f("title", "title"),
                _f("content", "content"),
                _f("type", "type"),
                _f("date", "date"),
                _f("publishDate", "publish_date", T.DATE),
                _f("authorId", "author_id"),
                _f("isPublished", "is_published", T.BOOLEAN),
                _f("priority", "priority"),
                _f("imageUrl", "image_url"),
            ),
        ),
        EntitySchema(
            kind=EntityKind.EVENTS,
            table="events",
            fields=(
                _ID,
                _f("title", "title"),
                _f("description", "description"),
                _f("date", "date", T.DATE),
                _f("startTime", "start_time"),
                _f("endTime", "end_time"),
                _f("location", "location"),
                _f("type", "type"),
                _f("isPublic", "is_public", T.BOOLEAN),
                _f("createdBy", "created_by"),
            ),
        ),
        EntitySchema(
            kind=EntityKind.HOMEWORK,
            table="homework",
            fields=(
                _ID,
                _f("title", "title"),
                _f("description", "description"),
                _f("subjectId", "subject_id"),
                _f("classId", "class_id"),
                _f("teacherId", "teacher_id"),
                _f("dueDate", "due_date", T.DATE),
                _f("isPublished", "is_published", T.BOOLEAN),
                _f("createdAt", "created_at"),
            ),
        ),
        EntitySchema(
            kind=EntityKind.ONLINE_REGISTRATIONS,
            table="online_registrations",
            fields=(
                _ID,
                _f("studentName", "student_name"),
                _f("dateOfBirth", "date_of_birth", T.DATE),
                _f("gender", "gender"),
                _f("desiredClass", "desired_class"),
                _f("parentName", "parent_name"),
                _f("parentPhone", "parent_phone"),
                _f("parentEmail", "parent_email"),
                _f("address", "address"),
                _f("previousSchool", "previous_school"),
                _f("status", "status"),
                _f("notes", "notes"),
                _f("createdAt", "created_at"),
            ),
        ),
        EntitySchema(
            kind=EntityKind.ROOMS,
            table="rooms",
            fields=(
                _ID,
                _f("name", "name"),
                _f("capacity", "capacity", T.INTEGER),
                _f("type", "type"),
                _f("equipment", "equipment", T.JSON),
                _f("isAvailable", "is_available", T.BOOLEAN),
            ),
        ),
        EntitySchema(
            kind=EntityKind.ROOM_SCHEDULES,
            table="room_schedules",
            fields=(
                _ID,
                _f("roomId", "room_id"),
                _f("classId", "class_id"),
                _f("subjectId", "subject_id"),
                _f("teacherId", "teacher_id"),
                _f("day", "day"),
                _f("startTime", "start_time"),
                _f("endTime", "end_time"),
                _f("academicYear", "academic_year"),
                _f("documents", "documents", T.JSON),
                _f("notes", "notes"),
            ),
        ),
        EntitySchema(
            kind=EntityKind.ATTENDANCE,
            table="attendance",
            fields=(
                _ID,
                _f("studentId", "student_id"),
                _f("classId", "class_id"),
                _f("date", "date", T.DATE),
                _f("status", "status"),
                _f("reason", "reason"),
                _f("recordedBy", "recorded_by"),
            ),
        ),
        EntitySchema(
            kind=EntityKind.MESSAGES,
            table="messages",
            fields=(
                _ID,
                _f("senderName", "sender_name"),
                _f("senderEmail", "sender_email"),
                _f("senderPhone", "sender_phone"),
                _f("subject", "subject"),
                _f("message", "message"),
                _f("type", "type"),
                _f("status", "status"),
                _f("priority", "priority"),
                _f("createdAt", "created_at"),
                _f("recipientId", "recipient_id"),
                _f("parentMessageId", "parent_message_id"),
                _f("isFromAdmin", "is_from_admin", T.BOOLEAN),
            ),
        ),
        EntitySchema(
            kind=EntityKind.PARENT_NOTIFICATIONS,
            table="parent_notifications",
            fields=(
                _ID,
                _f("parentId", "parent_id"),
                _f("messageId", "message_id"),
                _f("title", "title"),
                _f("content", "content"),
                _f("type", "type"),
                _f("isRead", "is_read", T.BOOLEAN),
                _f("createdAt", "created_at"),
            ),
        ),
        EntitySchema(
            kind=EntityKind.TEACHER_SALARIES,
            table="teacher_salaries",
            fields=(
                _ID,
                _f("teacherId", "teacher_id"),
                _f("baseSalary", "base_salary", T.NUMERIC),
                _f("advanceIds", "advance_ids", T.JSON),
                _f("bonuses", "bonuses", T.NUMERIC),
                _f("deductions", "deductions", T.NUMERIC),
                _f("month", "month"),
                _f("year", "year"),
                _f("totalPaid", "total_paid", T.NUMERIC),
                _f("remainingBalance", "remaining_balance", T.NUMERIC),
                _f("status", "status"),
                _f("notes", "notes"),
            ),
        ),
        EntitySchema(
            kind=EntityKind.TEACHER_ADVANCES,
            table="teacher_advances",
            fields=(
                _ID,
                _f("teacherId", "teacher_id"),
                _f("amount", "amount", T.NUMERIC),
                _f("date", "date", T.DATE),
                _f("reason", "reason"),
                _f("method", "method"),
                _f("approvedBy", "approved_by"),
                _f("receiptNumber", "receipt_number"),
                _f("month", "month"),
                _f("year", "year"),
            ),
        ),
        EntitySchema(
            kind=EntityKind.MONTHLY_SALARY_COSTS,
            table="monthly_salary_costs",
            fields=(
                _ID,
                _f("month", "month"),
                _f("year", "year"),
                _f("totalBaseSalaries", "total_base_salaries", T.NUMERIC),
                _f("totalAdvances", "total_advances", T.NUMERIC),
                _f("totalBonuses", "total_bonuses", T.NUMERIC),
                _f("totalDeductions", "total_deductions", T.NUMERIC),
                _f("totalCost", "total_cost", T.NUMERIC),
                _f("teacherCount", "teacher_count", T.INTEGER),
                _f("generatedDate", "generated_date"),
            ),
        ),
    )
}


def schema_for(kind: EntityKind) -> EntitySchema:
    return ENTITY_SCHEMAS[EntityKind(kind)]
