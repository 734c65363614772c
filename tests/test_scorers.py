"""Tests des scorers de similarité."""

import pytest

from stmtrecon.matching.mapper import map_columns
from stmtrecon.matching.schema import FieldType
from stmtrecon.matching.scorers import (
    amount_similarity,
    date_similarity,
    positional_ratio,
    score_row,
    score_row_details,
    text_similarity,
)


def test_date_similarity_binary() -> None:
    assert date_similarity("01/02/2024", "2024-02-01") == 1.0
    assert date_similarity("01/02/2024", "2024-01-02") == 0.0


def test_amount_similarity_relative_error() -> None:
    assert amount_similarity("500", "500.00") == 1.0
    assert amount_similarity("100", "50") == pytest.approx(1 - 50 / 75)
    assert amount_similarity("100", "0") == 0.0


def test_amount_similarity_both_zero() -> None:
    assert amount_similarity("0", "") == 1.0


def test_text_similarity_equal_after_normalization() -> None:
    assert text_similarity("ATM WDL", "atm  wdl.") == 1.0
    assert text_similarity("", "") == 1.0


def test_text_similarity_containment() -> None:
    assert text_similarity("ATM WDL", "ATM WDL CHG") == 0.8
    assert text_similarity("ATM WDL CHG", "atm wdl") == 0.8


def test_text_similarity_one_empty() -> None:
    assert text_similarity("abc", "") == 0.8
    assert text_similarity("", "ATM WDL") == 0.8


def test_text_similarity_positional() -> None:
    assert text_similarity("abcd", "abxy") == 0.5
    assert positional_ratio("", "") == 0.0


def test_positional_ratio_shift_weakness() -> None:
    # Un caractère en tête décale toute la comparaison positionnelle
    assert text_similarity("xabc", "abcd") == 0.0
    assert text_similarity("xabc", "abcd", method="fuzzy_ratio") > 0.5


def test_text_similarity_token_set() -> None:
    assert text_similarity("acme ltd neft", "neft acme ltd", method="token_set") == 1.0


def test_score_row_weighted_average() -> None:
    mappings = map_columns(["Date", "Withdrawal", "Narration"], ["Transaction Date", "Debit", "Description"])
    score, details = score_row_details(
        ["01/02/2024", "500", "ATM WDL"],
        ["2024-02-01", "500.00", "ATM WDL CHG"],
        mappings,
    )
    assert details == {FieldType.DATE: 1.0, FieldType.AMOUNT: 1.0, FieldType.DESCRIPTION: 0.8}
    assert score == pytest.approx((1.0 * 1.0 + 1.0 * 0.9 + 0.8 * 0.8) / 2.7)


def test_score_row_no_mappings() -> None:
    assert score_row(["a"], ["a"], []) == 0.0


def test_score_row_ragged_rows() -> None:
    mappings = map_columns(["Date", "Withdrawal", "Narration"], ["Transaction Date", "Debit", "Description"])
    score, details = score_row_details(["01/02/2024"], ["2024-02-01", "500"], mappings)
    assert details[FieldType.AMOUNT] == 0.0
    assert details[FieldType.DESCRIPTION] == 1.0
    assert score == pytest.approx((1.0 + 0.8) / 2.7)


def test_score_row_bounds() -> None:
    mappings = map_columns(["Date", "Amount", "Narration"], ["Date", "Amount", "Narration"])
    rows = [
        ["01/02/2024", "10", "coffee"],
        ["garbage", "(1,000)", "!!!"],
        ["", "", ""],
        ["1/2/24", "₹5", "rent march"],
    ]
    for row_a in rows:
        for row_b in rows:
            assert 0.0 <= score_row(row_a, row_b, mappings) <= 1.0
