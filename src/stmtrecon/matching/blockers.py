"""Stratégies de blocking pour réduire l'espace de recherche."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from stmtrecon.matching.schema import ColumnMapping, FieldType
from stmtrecon.normalize import DEFAULT_MONTH_NAMES, normalize_date


def get_date_mapping(mappings: Sequence[ColumnMapping]) -> ColumnMapping | None:
    for m in mappings:
        if m.type == FieldType.DATE:
            return m
    return None


def get_block_key_date(
    row: Sequence[str],
    col_idx: int,
    month_names: Mapping[str, int] = DEFAULT_MONTH_NAMES,
) -> str:
    """Clé de bloc : la date normalisée de la ligne ("" si cellule absente)."""
    if col_idx >= len(row):
        return ""
    return normalize_date(row[col_idx], month_names)


def build_blocks(
    rows: Sequence[Sequence[str]],
    col_idx: int,
    month_names: Mapping[str, int] = DEFAULT_MONTH_NAMES,
) -> dict[str, list[int]]:
    """
    Construit un index de blocs : date normalisée -> liste d'indices de lignes.

    Args:
        rows: Lignes du fichier B.
        col_idx: Index de la colonne date dans ce fichier.
        month_names: Table des mois pour la normalisation.

    Returns:
        Dict {date: [row_indices]}, indices dans l'ordre croissant.
    """
    blocks: dict[str, list[int]] = {}
    for idx, row in enumerate(rows):
        key = get_block_key_date(row, col_idx, month_names)
        blocks.setdefault(key, []).append(idx)
    return blocks


def get_candidate_indices(
    row_a: Sequence[str],
    date_mapping: ColumnMapping,
    blocks_b: dict[str, list[int]],
    month_names: Mapping[str, int] = DEFAULT_MONTH_NAMES,
) -> list[int]:
    """
    Retourne les indices B candidats pour une ligne A : ceux qui partagent sa date.

    Une date absente de l'index ne donne aucun candidat.
    """
    key = get_block_key_date(row_a, date_mapping.input_index, month_names)
    return blocks_b.get(key, [])
