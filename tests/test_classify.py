"""Tests de la catégorisation des appariements."""

from stmtrecon.matching.classify import classify_match, classify_result, count_by_type
from stmtrecon.matching.schema import FieldType, MatchCandidate, MatchResult, RowClassification


def test_exact_requires_date_and_reference() -> None:
    c = MatchCandidate(0, 0, 0.9, {FieldType.DATE: 1.0, FieldType.AMOUNT: 0.5, FieldType.REFERENCE: 1.0})
    assert classify_match(c, 0.7) == "exact"


def test_partial_on_date_alone() -> None:
    c = MatchCandidate(0, 0, 0.5, {FieldType.DATE: 1.0, FieldType.AMOUNT: 0.0})
    assert classify_match(c, 0.7) == "partial"


def test_partial_when_reference_differs() -> None:
    c = MatchCandidate(0, 0, 0.9, {FieldType.DATE: 1.0, FieldType.REFERENCE: 0.8})
    assert classify_match(c, 0.7) == "partial"


def test_partial_without_reference_mapping() -> None:
    c = MatchCandidate(0, 0, 0.94, {FieldType.DATE: 1.0, FieldType.AMOUNT: 1.0, FieldType.DESCRIPTION: 0.8})
    assert classify_match(c, 0.7) == "partial"


def test_partial_on_score_without_date() -> None:
    c = MatchCandidate(0, 0, 0.72, {FieldType.DATE: 0.0, FieldType.AMOUNT: 1.0, FieldType.DESCRIPTION: 1.0})
    assert classify_match(c, 0.7) == "partial"


def test_no_match() -> None:
    c = MatchCandidate(0, 0, 0.3, {FieldType.DATE: 0.0})
    assert classify_match(c, 0.7) == "no-match"


def test_classify_result_covers_all_a_rows() -> None:
    result = MatchResult(
        matches=[
            MatchCandidate(2, 0, 1.0, {FieldType.DATE: 1.0, FieldType.REFERENCE: 1.0}),
            MatchCandidate(0, 1, 0.8, {FieldType.DATE: 1.0}),
        ],
        unmatched_a=[1],
        unmatched_b=[],
        column_mappings=[],
    )
    rows = classify_result(result)
    assert rows == [
        RowClassification(0, 1, "partial", 0.8),
        RowClassification(1, None, "no-match"),
        RowClassification(2, 0, "exact", 1.0),
    ]
    assert count_by_type(rows) == {"exact": 1, "partial": 1, "no-match": 1}


def test_count_by_type_empty() -> None:
    assert count_by_type([]) == {"exact": 0, "partial": 0, "no-match": 0}
