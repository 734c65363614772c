"""Synthèse du rapprochement (console et DataFrame)."""

from __future__ import annotations

from datetime import datetime
from typing import Any

import pandas as pd

from stmtrecon import __version__
from stmtrecon.config import ReconConfig
from stmtrecon.matching.classify import classify_result, count_by_type
from stmtrecon.matching.schema import MATCH_EXACT, MATCH_NONE, MATCH_PARTIAL, MatchResult, TableData


def build_summary(result: MatchResult, n_rows_a: int, n_rows_b: int) -> dict[str, Any]:
    """
    Indicateurs du rapprochement.

    match_rate : part des lignes A appariées (0-100).
    average_similarity : moyenne des scores des appariements (0-100).
    """
    n_matched = len(result.matches)
    counts = count_by_type(classify_result(result))
    match_rate = n_matched / n_rows_a * 100 if n_rows_a else 0.0
    avg_similarity = sum(m.similarity for m in result.matches) / n_matched * 100 if n_matched else 0.0
    return {
        "total_rows_a": n_rows_a,
        "total_rows_b": n_rows_b,
        "matched_rows": n_matched,
        "unmatched_rows_a": len(result.unmatched_a),
        "unmatched_rows_b": len(result.unmatched_b),
        "match_rate": round(match_rate, 2),
        "average_similarity": round(avg_similarity, 2),
        "nb_exact": counts[MATCH_EXACT],
        "nb_partial": counts[MATCH_PARTIAL],
        "nb_no_match": counts[MATCH_NONE],
        "comparable": result.comparable,
    }


def describe_mappings(result: MatchResult, table_a: TableData, table_b: TableData) -> list[str]:
    """Une ligne lisible par correspondance de colonnes."""
    lines = []
    for m in result.column_mappings:
        header_a = table_a.headers[m.input_index] if m.input_index < len(table_a.headers) else "?"
        header_b = table_b.headers[m.output_index] if m.output_index < len(table_b.headers) else "?"
        lines.append(f"{m.type.value}: {header_a} <-> {header_b} ({m.confidence:.0%})")
    return lines


def build_report_df(
    result: MatchResult,
    table_a: TableData,
    table_b: TableData,
    config: ReconConfig,
) -> pd.DataFrame:
    """
    Construit le DataFrame Key/Value du rapport.

    Contient : indicateurs, paramètres, correspondances de colonnes, horodatage, version.
    """
    summary = build_summary(result, len(table_a), len(table_b))
    rows: list[tuple[str, Any]] = [("Metric", "Value")]
    rows.extend(summary.items())
    rows.extend(
        [
            ("", ""),
            ("Parameters", ""),
            ("threshold", result.threshold),
            ("text_method", config.text_method),
            ("blocker", config.blocker),
            ("", ""),
            ("Column mappings", ""),
        ]
    )
    for i, line in enumerate(describe_mappings(result, table_a, table_b)):
        rows.append((f"mapping_{i}", line))
    rows.extend(
        [
            ("", ""),
            ("timestamp", datetime.now().isoformat()),
            ("version", __version__),
        ]
    )
    return pd.DataFrame(rows, columns=["Key", "Value"])


def print_report_console(result: MatchResult, table_a: TableData, table_b: TableData) -> None:
    """Affiche un résumé du rapport en console."""
    summary = build_summary(result, len(table_a), len(table_b))

    print("\n=== Rapprochement de relevés ===")
    if not summary["comparable"]:
        print("  Aucune colonne commune : fichiers non comparables.")
    for line in describe_mappings(result, table_a, table_b):
        print(f"  Colonne {line}")
    print(f"  Lignes A:         {summary['total_rows_a']}")
    print(f"  Lignes B:         {summary['total_rows_b']}")
    print(f"  Appariées:        {summary['matched_rows']} ({summary['match_rate']:.2f}%)")
    print(f"  Similarité moy.:  {summary['average_similarity']:.2f}%")
    print(f"  Exact:            {summary['nb_exact']}")
    print(f"  Partiel:          {summary['nb_partial']}")
    print(f"  Orphelines A:     {summary['unmatched_rows_a']}")
    print(f"  Orphelines B:     {summary['unmatched_rows_b']}")
    print(f"  Version:          {__version__}")
    print(f"  Timestamp:        {datetime.now().isoformat()}")
    print("================================\n")
