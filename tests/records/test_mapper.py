from datetime import date
from decimal import Decimal

from src.school_records.school_records.core.enums import EntityKind
from src.school_records.school_records.records.mapper import RowMapper
from src.school_records.school_records.records.schema import ENTITY_SCHEMAS, schema_for


def test_every_kind_has_a_schema_with_an_id():
    for kind in EntityKind:
        schema = schema_for(kind)
        assert schema.has_field("id")
        assert schema.field("id").column == "id"

    assert set(ENTITY_SCHEMAS) == set(EntityKind)


def test_record_to_row_uses_snake_case_columns():
    mapper = RowMapper(schema_for(EntityKind.TEACHER_SALARIES))

    row = mapper.to_row(
        {
            "id": "10",
            "teacherId": "2",
            "baseSalary": 300000,
            "advanceIds": ["a", "b"],
            "remainingBalance": 170000,
            "status": "partial",
        }
    )

    assert row == {
        "id": "10",
        "teacher_id": "2",
        "base_salary": 300000,
        "advance_ids": '["a", "b"]',
        "remaining_balance": 170000,
        "status": "partial",
    }


def test_unmapped_fields_are_dropped():
    mapper = RowMapper(schema_for(EntityKind.USERS))

    row = mapper.to_row({"id": "1", "name": "A", "favouriteColour": "blue"})

    assert row == {"id": "1", "name": "A"}


def test_booleans_are_stored_as_ints_and_read_back():
    mapper = RowMapper(schema_for(EntityKind.USERS))

    row = mapper.to_row({"id": "1", "isActive": True})
    assert row["is_active"] == 1
    assert mapper.from_row({"id": "1", "is_active": 0}) == {"id": "1", "isActive": False}


def test_row_to_record_converts_driver_types():
    mapper = RowMapper(schema_for(EntityKind.TEACHER_ADVANCES))

    record = mapper.from_row(
        {
            "id": "5",
            "teacher_id": "2",
            "amount": Decimal("50000.00"),
            "date": date(2025, 1, 10),
            "reason": None,
            "receipt_number": "ADV5",
        }
    )

    assert record == {
        "id": "5",
        "teacherId": "2",
        "amount": 50000,
        "date": "2025-01-10",
        "receiptNumber": "ADV5",
    }


def test_fractional_decimal_becomes_float():
    mapper = RowMapper(schema_for(EntityKind.GRADES))

    assert mapper.from_row({"id": "1", "value": Decimal("15.5")})["value"] == 15.5


def test_null_json_column_reads_as_empty_list():
    mapper = RowMapper(schema_for(EntityKind.STAFF))

    assert mapper.from_row({"id": "1", "documents": None})["documents"] == []
    assert mapper.from_row({"id": "1", "documents": '["data:x"]'})["documents"] == ["data:x"]


def test_unknown_columns_are_ignored_on_read():
    mapper = RowMapper(schema_for(EntityKind.ROOMS))

    assert mapper.from_row({"id": "1", "created_at": "2025-01-01"}) == {"id": "1"}


def test_partial_row_never_rewrites_id():
    mapper = RowMapper(schema_for(EntityKind.STUDENTS))

    assert mapper.to_partial_row({"id": "9", "firstName": "Awa"}) == {"first_name": "Awa"}


def test_round_trip_preserves_mapped_fields():
    mapper = RowMapper(schema_for(EntityKind.STAFF))
    record = {
        "id": "4",
        "firstName": "Jean",
        "lastName": "Yao",
        "hireDate": "2020-09-01",
        "isActive": True,
        "documents": ["data:application/pdf;base64,AA=="],
    }

    assert mapper.from_row(mapper.to_row(record)) == record
