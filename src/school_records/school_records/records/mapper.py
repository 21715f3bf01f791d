from __future__ import annotations

import json
import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Mapping

from .schema import EntitySchema, FieldSpec, FieldType

logger = logging.getLogger(__name__)

Row = Dict[str, Any]


def _to_column(spec: FieldSpec, value: Any) -> Any:
    if value is None:
        return None
    if spec.type == FieldType.JSON:
        return json.dumps(value, ensure_ascii=False)
    if spec.type == FieldType.BOOLEAN:
        return 1 if value else 0
    return value


def _from_column(spec: FieldSpec, value: Any) -> Any:
    if spec.type == FieldType.JSON:
        if value is None:
            return []
        if isinstance(value, (bytes, bytearray)):
            value = value.decode("utf-8")
        if isinstance(value, str):
            return json.loads(value) if value.strip() else []
        return value
    if value is None:
        return None
    if spec.type == FieldType.BOOLEAN:
        return bool(value)
    if spec.type == FieldType.INTEGER:
        return int(value)
    if spec.type == FieldType.NUMERIC:
        if isinstance(value, Decimal):
            return int(value) if value == value.to_integral_value() else float(value)
        return value
    if spec.type == FieldType.DATE and isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


class RowMapper:
    """Translates records to rows and back using one entity schema."""

    def __init__(self, schema: EntitySchema):
        self._schema = schema

    @property
    def schema(self) -> EntitySchema:
        return self._schema

    def to_row(self, record: Mapping[str, Any]) -> Row:
        row: Row = {}
        for name, value in record.items():
            spec = self._schema.field(name)
            if spec is None:
                logger.debug("Dropping unmapped field %s.%s", self._schema.kind.value, name)
                continue
            row[spec.column] = _to_column(spec, value)
        return row

    def to_partial_row(self, partial: Mapping[str, Any]) -> Row:
        return {column: value for column, value in self.to_row(partial).items() if column != "id"}

    def from_row(self, row: Mapping[str, Any]) -> Dict[str, Any]:
        """Row to record; NULL scalars are left out, NULL lists read as ``[]``."""
        record: Dict[str, Any] = {}
        for column, value in row.items():
            spec = self._schema.column(column)
            if spec is None:
                continue
            converted = _from_column(spec, value)
            if converted is None:
                continue
            record[spec.name] = converted
        return record
