"""Tests de la correspondance des colonnes."""

from stmtrecon.matching.mapper import extract_key_fields, map_columns
from stmtrecon.matching.schema import ColumnMapping, FieldType


def test_map_columns_end_to_end_headers() -> None:
    mappings = map_columns(["Date", "Withdrawal", "Narration"], ["Transaction Date", "Debit", "Description"])
    assert mappings == [
        ColumnMapping(0, 0, FieldType.DATE, 1.0),
        ColumnMapping(1, 1, FieldType.AMOUNT, 0.9),
        ColumnMapping(2, 2, FieldType.DESCRIPTION, 0.8),
    ]


def test_map_columns_amount_priority() -> None:
    # Withdrawal > Deposit > Amount, choisi indépendamment pour chaque fichier
    mappings = map_columns(["Amount", "Deposit", "Withdrawal"], ["Amount", "Credit"])
    assert mappings == [ColumnMapping(2, 1, FieldType.AMOUNT, 0.9)]


def test_map_columns_reference() -> None:
    mappings = map_columns(["Date", "Reference"], ["Posting Date", "Chq No"])
    assert ColumnMapping(1, 1, FieldType.REFERENCE, 0.7) in mappings
    assert len(mappings) == 2


def test_map_columns_type_absent_on_one_side() -> None:
    mappings = map_columns(["Date", "Ref No"], ["Value Date", "Amount"])
    assert [m.type for m in mappings] == [FieldType.DATE]


def test_map_columns_first_column_wins() -> None:
    mappings = map_columns(["Date", "Value Date"], ["Txn Date"])
    assert mappings == [ColumnMapping(0, 0, FieldType.DATE, 1.0)]


def test_map_columns_none_detected() -> None:
    assert map_columns(["X", "Y"], ["Z", "W"]) == []


def test_extract_key_fields() -> None:
    headers = ["Date", "Narration", "Debit", "Credit", "Ref No"]
    fields = extract_key_fields(["01/02/2024", "ATM WDL", "500.00", "", " REF1 "], headers)
    assert fields == {"date": "2024-02-01", "amount": 500.0, "description": "atm wdl", "reference": "REF1"}


def test_extract_key_fields_short_row() -> None:
    fields = extract_key_fields(["01/02/2024"], ["Date", "Narration", "Debit"])
    assert fields == {"date": "2024-02-01", "amount": 0.0, "description": "", "reference": ""}
