"""Fixtures partagées : petits relevés au format {headers, rows}."""

import pytest

from stmtrecon.matching.schema import TableData


@pytest.fixture
def super_bank() -> TableData:
    return TableData.from_lists(
        ["Date", "Withdrawal", "Narration"],
        [["01/02/2024", "500", "ATM WDL"]],
    )


@pytest.fixture
def bank_export() -> TableData:
    return TableData.from_lists(
        ["Transaction Date", "Debit", "Description"],
        [["2024-02-01", "500.00", "ATM WDL CHG"]],
    )
