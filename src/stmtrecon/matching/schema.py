"""Schémas et types pour le rapprochement."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any


class FieldType(str, Enum):
    """Rôle sémantique d'une colonne, déduit de son en-tête."""

    DATE = "date"
    AMOUNT = "amount"
    DESCRIPTION = "description"
    WITHDRAWAL = "withdrawal"
    DEPOSIT = "deposit"
    BALANCE = "balance"
    REFERENCE = "reference"
    UNKNOWN = "unknown"


# Ordre de priorité de la classification des en-têtes
CLASSIFY_ORDER: tuple[FieldType, ...] = (
    FieldType.DATE,
    FieldType.AMOUNT,
    FieldType.DESCRIPTION,
    FieldType.WITHDRAWAL,
    FieldType.DEPOSIT,
    FieldType.BALANCE,
    FieldType.REFERENCE,
)

# Poids statiques par type de correspondance
MAPPING_CONFIDENCE: Mapping[FieldType, float] = MappingProxyType(
    {
        FieldType.DATE: 1.0,
        FieldType.AMOUNT: 0.9,
        FieldType.DESCRIPTION: 0.8,
        FieldType.REFERENCE: 0.7,
    }
)

MATCH_EXACT = "exact"
MATCH_PARTIAL = "partial"
MATCH_NONE = "no-match"


@dataclass(frozen=True)
class TableData:
    """Un fichier tabulaire déjà découpé : en-têtes et lignes de texte."""

    headers: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...]

    @classmethod
    def from_lists(cls, headers: Sequence[Any], rows: Sequence[Sequence[Any]]) -> TableData:
        return cls(
            headers=tuple("" if h is None else str(h) for h in headers),
            rows=tuple(tuple("" if c is None else str(c) for c in row) for row in rows),
        )

    @classmethod
    def coerce(cls, data: TableData | Mapping[str, Any]) -> TableData:
        """Accepte un TableData ou un dict {"headers": [...], "rows": [[...]]}."""
        if isinstance(data, TableData):
            return data
        return cls.from_lists(data.get("headers", []), data.get("rows", []))

    def __len__(self) -> int:
        return len(self.rows)


@dataclass(frozen=True)
class ColumnMapping:
    """Correspondance entre une colonne du fichier A et une colonne du fichier B."""

    input_index: int
    output_index: int
    type: FieldType
    confidence: float


@dataclass
class MatchCandidate:
    """Appariement d'une ligne A avec une ligne B."""

    file_a_row_index: int
    file_b_row_index: int
    similarity: float
    details: dict[FieldType, float] = field(default_factory=dict)  # score par champ

    def __repr__(self) -> str:
        return (
            f"MatchCandidate(a={self.file_a_row_index}, b={self.file_b_row_index}, "
            f"similarity={self.similarity:.3f})"
        )


@dataclass
class MatchResult:
    """Résultat d'un rapprochement entre deux fichiers."""

    matches: list[MatchCandidate]
    unmatched_a: list[int]
    unmatched_b: list[int]
    column_mappings: list[ColumnMapping]
    threshold: float = 0.7

    @property
    def comparable(self) -> bool:
        """False si aucune colonne commune n'a été détectée."""
        return bool(self.column_mappings)


@dataclass(frozen=True)
class RowClassification:
    """Catégorie qualitative d'une ligne A après rapprochement."""

    file_a_row_index: int
    file_b_row_index: int | None
    match_type: str  # exact, partial, no-match
    similarity: float = 0.0
