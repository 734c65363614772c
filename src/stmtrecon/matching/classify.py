"""Catégorisation qualitative des appariements (exact / partial / no-match)."""

from __future__ import annotations

from collections import Counter

from stmtrecon.matching.schema import (
    MATCH_EXACT,
    MATCH_NONE,
    MATCH_PARTIAL,
    FieldType,
    MatchCandidate,
    MatchResult,
    RowClassification,
)


def classify_match(candidate: MatchCandidate, threshold: float) -> str:
    """
    Catégorie d'un appariement, à partir des scores par champ déjà calculés.

    - exact : date et référence identiques (référence seulement si mappée)
    - partial : date identique seule, ou score global >= seuil
    - no-match : sinon
    """
    date_match = candidate.details.get(FieldType.DATE) == 1.0
    reference_match = candidate.details.get(FieldType.REFERENCE) == 1.0
    if date_match and reference_match:
        return MATCH_EXACT
    if date_match or candidate.similarity >= threshold:
        return MATCH_PARTIAL
    return MATCH_NONE


def classify_result(result: MatchResult, threshold: float | None = None) -> list[RowClassification]:
    """
    Catégorise chaque ligne du fichier A, dans l'ordre des indices.

    Les lignes A sans appariement sont toujours no-match.
    """
    thr = result.threshold if threshold is None else threshold
    rows: list[RowClassification] = [
        RowClassification(m.file_a_row_index, m.file_b_row_index, classify_match(m, thr), m.similarity)
        for m in result.matches
    ]
    rows.extend(RowClassification(i, None, MATCH_NONE) for i in result.unmatched_a)
    rows.sort(key=lambda r: r.file_a_row_index)
    return rows


def count_by_type(classifications: list[RowClassification]) -> dict[str, int]:
    """Nombre de lignes par catégorie (les trois clés sont toujours présentes)."""
    counts = Counter(c.match_type for c in classifications)
    return {key: counts.get(key, 0) for key in (MATCH_EXACT, MATCH_PARTIAL, MATCH_NONE)}
