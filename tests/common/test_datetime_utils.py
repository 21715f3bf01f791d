from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from src.school_records.school_records.common import datetime_utils
from src.school_records.school_records.common.datetime_utils import generate_id, is_month, year_of


@pytest.fixture()
def frozen_clock(monkeypatch):
    # Every call lands in the same millisecond
    monkeypatch.setattr(datetime_utils.time, "time", lambda: 1736942400.0)
    monkeypatch.setattr(datetime_utils, "_last_id", 0)


def test_generate_id_is_strictly_increasing_in_same_millisecond(frozen_clock):
    ids = [int(generate_id()) for _ in range(50)]

    assert ids == sorted(ids)
    assert len(set(ids)) == 50
    assert ids[0] == 1736942400000


def test_generate_id_is_unique_across_threads(frozen_clock):
    with ThreadPoolExecutor(max_workers=8) as pool:
        ids = list(pool.map(lambda _: generate_id(), range(2000)))

    assert len(set(ids)) == 2000
    assert max(int(i) for i in ids) == 1736942400000 + 1999


@pytest.mark.parametrize("value,expected", [("2025-01", True), ("2025-12", True), ("2025-13", False), ("2025-1", False), ("", False)])
def test_is_month(value, expected):
    assert is_month(value) is expected


def test_year_of():
    assert year_of("2025-01") == "2025"
