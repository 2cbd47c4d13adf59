"""
Unit tests for tagged records and the entity classifier.
"""

import logging
from dataclasses import dataclass

import pytest

from query_hub.entities import (
    EXCLUDED,
    ColumnBinding,
    TaggedRecord,
    classify_records,
    column_bindings,
    db_column,
    record_to_row,
)


@dataclass
class User:
    id: int = db_column("id")
    name: str = db_column("name")
    cache: str = db_column(EXCLUDED, default="")

    def get_table_name(self) -> str:
        return "users"


@dataclass
class Order:
    order_id: int = db_column("id")
    user_id: int = db_column("user_id")
    total: float = db_column("total", default=0.0)
    note: str = ""

    def get_table_name(self) -> str:
        return "orders"


@dataclass
class Marker:
    label: str = db_column(EXCLUDED, default="x")

    def get_table_name(self) -> str:
        return "markers"


class LegacyRow:
    """Plain class spelling out its own bindings."""

    def __init__(self, code, hidden):
        self.code = code
        self.hidden = hidden

    @classmethod
    def column_bindings(cls):
        return [("legacy_code", "code"), ("-", "hidden")]

    def get_table_name(self) -> str:
        return "legacy"


class Untagged:
    def get_table_name(self) -> str:
        return "nowhere"


@pytest.mark.unit
class TestColumnBindings:
    def test_dataclass_bindings_in_field_order(self):
        assert column_bindings(User) == (
            ColumnBinding("id", "id"),
            ColumnBinding("name", "name"),
        )

    def test_column_name_differs_from_attribute(self):
        assert column_bindings(Order)[0] == ColumnBinding("id", "order_id")

    def test_untagged_dataclass_fields_not_persisted(self):
        assert [b.attribute for b in column_bindings(Order)] == [
            "order_id",
            "user_id",
            "total",
        ]

    def test_bindings_cached_per_type(self):
        assert column_bindings(User) is column_bindings(User)

    def test_explicit_bindings(self):
        assert column_bindings(LegacyRow) == (ColumnBinding("legacy_code", "code"),)

    def test_type_without_bindings(self):
        with pytest.raises(TypeError, match="Untagged"):
            column_bindings(Untagged)

    def test_protocol_check(self):
        assert isinstance(User(1, "a"), TaggedRecord)
        assert not isinstance(object(), TaggedRecord)


@pytest.mark.unit
class TestRecordToRow:
    def test_row_uses_column_names(self):
        assert record_to_row(Order(order_id=5, user_id=1, total=9.5)) == {
            "id": 5,
            "user_id": 1,
            "total": 9.5,
        }

    def test_excluded_fields_dropped(self):
        assert record_to_row(User(1, "Ann", cache="tmp")) == {"id": 1, "name": "Ann"}

    def test_explicit_bindings_row(self):
        assert record_to_row(LegacyRow("L1", "secret")) == {"legacy_code": "L1"}


@pytest.mark.unit
class TestClassifyRecords:
    def test_groups_by_table_in_encounter_order(self):
        records = [
            User(1, "Ann"),
            Order(10, 1, 5.0),
            User(2, "Bo"),
            Order(11, 2, 7.5),
        ]
        grouped = classify_records(records)
        assert list(grouped) == ["users", "orders"]
        assert grouped["users"] == [{"id": 1, "name": "Ann"}, {"id": 2, "name": "Bo"}]
        assert [row["id"] for row in grouped["orders"]] == [10, 11]

    def test_records_without_columns_skipped(self, caplog):
        caplog.set_level(logging.DEBUG)
        grouped = classify_records([Marker(), User(1, "Ann"), Marker()])
        assert list(grouped) == ["users"]
        assert any(
            "entities.classify.skipped_empty" in record.getMessage()
            for record in caplog.records
        )

    def test_empty_input(self):
        assert classify_records([]) == {}

    def test_unbindable_record(self):
        with pytest.raises(TypeError):
            classify_records([Untagged()])
