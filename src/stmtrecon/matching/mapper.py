"""Correspondance des colonnes entre deux fichiers à partir de leurs en-têtes."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from stmtrecon.matching.headers import HeaderClassifier
from stmtrecon.matching.schema import MAPPING_CONFIDENCE, ColumnMapping, FieldType
from stmtrecon.normalize import DEFAULT_MONTH_NAMES, normalize_amount, normalize_date, normalize_description

logger = logging.getLogger(__name__)

# Une colonne débit/crédit est préférée à une colonne montant générique
AMOUNT_PRIORITY: tuple[FieldType, ...] = (FieldType.WITHDRAWAL, FieldType.DEPOSIT, FieldType.AMOUNT)


def _first(types: Mapping[FieldType, list[int]], *candidates: FieldType) -> int | None:
    for ftype in candidates:
        if types[ftype]:
            return types[ftype][0]
    return None


def map_columns(
    headers_a: Sequence[str],
    headers_b: Sequence[str],
    classifier: HeaderClassifier | None = None,
) -> list[ColumnMapping]:
    """
    Associe les colonnes des deux fichiers, au plus une par type sémantique.

    - date : première colonne Date de chaque côté, confiance 1.0
    - amount : pour chaque fichier, Withdrawal, sinon Deposit, sinon Amount ; 0.9
    - description : première colonne Description de chaque côté, 0.8
    - reference : première colonne Reference de chaque côté, 0.7

    Un type absent d'un des fichiers ne produit aucune correspondance.
    Une liste vide signifie que les fichiers ne sont pas comparables.
    """
    classifier = classifier or HeaderClassifier()
    types_a = classifier.detect_column_types(headers_a)
    types_b = classifier.detect_column_types(headers_b)

    pairs: list[tuple[FieldType, int | None, int | None]] = [
        (FieldType.DATE, _first(types_a, FieldType.DATE), _first(types_b, FieldType.DATE)),
        (FieldType.AMOUNT, _first(types_a, *AMOUNT_PRIORITY), _first(types_b, *AMOUNT_PRIORITY)),
        (FieldType.DESCRIPTION, _first(types_a, FieldType.DESCRIPTION), _first(types_b, FieldType.DESCRIPTION)),
        (FieldType.REFERENCE, _first(types_a, FieldType.REFERENCE), _first(types_b, FieldType.REFERENCE)),
    ]

    mappings: list[ColumnMapping] = []
    for ftype, idx_a, idx_b in pairs:
        if idx_a is None or idx_b is None:
            continue
        mappings.append(
            ColumnMapping(
                input_index=idx_a,
                output_index=idx_b,
                type=ftype,
                confidence=MAPPING_CONFIDENCE[ftype],
            )
        )
        logger.debug(
            "Colonne %s: A[%d]=%r <-> B[%d]=%r",
            ftype.value,
            idx_a,
            headers_a[idx_a],
            idx_b,
            headers_b[idx_b],
        )
    return mappings


def extract_key_fields(
    row: Sequence[str],
    headers: Sequence[str],
    classifier: HeaderClassifier | None = None,
    month_names: Mapping[str, int] = DEFAULT_MONTH_NAMES,
) -> dict[str, Any]:
    """
    Extrait les champs clés normalisés d'une ligne : date, amount, description, reference.

    Les cellules manquantes (lignes courtes) valent "".
    """
    classifier = classifier or HeaderClassifier()
    types = classifier.detect_column_types(headers)

    def cell(idx: int | None) -> str:
        if idx is None or idx >= len(row):
            return ""
        return row[idx] or ""

    date_idx = _first(types, FieldType.DATE)
    amount_idx = _first(types, *AMOUNT_PRIORITY)
    desc_idx = _first(types, FieldType.DESCRIPTION)
    ref_idx = _first(types, FieldType.REFERENCE)
    return {
        "date": normalize_date(cell(date_idx), month_names) if date_idx is not None else "",
        "amount": normalize_amount(cell(amount_idx)),
        "description": normalize_description(cell(desc_idx)),
        "reference": cell(ref_idx).strip(),
    }
