"""Calcul des similarités par champ et par ligne."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from rapidfuzz import fuzz

from stmtrecon.matching.schema import ColumnMapping, FieldType
from stmtrecon.normalize import DEFAULT_MONTH_NAMES, normalize_amount, normalize_date, normalize_description

CONTAINMENT_SIMILARITY = 0.8


def _cell(row: Sequence[str], idx: int) -> str:
    """Cellule d'une ligne, "" si la ligne est trop courte."""
    if idx >= len(row):
        return ""
    return row[idx] or ""


def date_similarity(
    a: str,
    b: str,
    month_names: Mapping[str, int] = DEFAULT_MONTH_NAMES,
) -> float:
    """1.0 si les dates normalisées sont identiques, sinon 0.0."""
    return 1.0 if normalize_date(a, month_names) == normalize_date(b, month_names) else 0.0


def amount_similarity(a: str, b: str) -> float:
    """
    Similarité par erreur relative : max(0, 1 - |a-b| / moyenne(a, b)).

    Deux montants nuls (ou illisibles) sont considérés identiques.
    """
    x = normalize_amount(a)
    y = normalize_amount(b)
    if x + y > 0:
        return max(0.0, 1.0 - abs(x - y) / ((x + y) / 2))
    return 1.0 if x == y else 0.0


def positional_ratio(s: str, t: str) -> float:
    """Part des caractères identiques à la même position, rapportée à la plus longue chaîne."""
    max_len = max(len(s), len(t))
    if max_len == 0:
        return 0.0
    same = sum(1 for c1, c2 in zip(s, t) if c1 == c2)
    return same / max_len


def text_similarity(a: str, b: str, method: str = "positional") -> float:
    """
    Similarité de libellés ou références (0-1).

    Égalité après normalisation = 1.0, inclusion de l'un dans l'autre = 0.8.
    Sinon, selon la méthode :
    - positional : comparaison caractère par caractère à position égale
    - fuzzy_ratio : ratio de Levenshtein normalisé (rapidfuzz)
    - token_set : ratio sur ensembles de mots, insensible à l'ordre (rapidfuzz)

    Un libellé vide est contenu dans tout libellé : il vaut donc 0.8.
    """
    s = normalize_description(a)
    t = normalize_description(b)
    if s == t:
        return 1.0
    if s in t or t in s:
        return CONTAINMENT_SIMILARITY

    if method == "fuzzy_ratio":
        return fuzz.ratio(s, t) / 100.0
    if method == "token_set":
        return fuzz.token_set_ratio(s, t) / 100.0
    return positional_ratio(s, t)


def score_field(
    val_a: str,
    val_b: str,
    mapping: ColumnMapping,
    *,
    text_method: str = "positional",
    month_names: Mapping[str, int] = DEFAULT_MONTH_NAMES,
) -> float:
    """Calcule la similarité (0-1) d'un champ selon le type de la correspondance."""
    if mapping.type == FieldType.DATE:
        return date_similarity(val_a, val_b, month_names)
    if mapping.type == FieldType.AMOUNT:
        return amount_similarity(val_a, val_b)
    if mapping.type in (FieldType.DESCRIPTION, FieldType.REFERENCE):
        return text_similarity(val_a, val_b, text_method)
    return 1.0 if val_a == val_b else 0.0


def score_row_details(
    row_a: Sequence[str],
    row_b: Sequence[str],
    mappings: Sequence[ColumnMapping],
    *,
    text_method: str = "positional",
    month_names: Mapping[str, int] = DEFAULT_MONTH_NAMES,
) -> tuple[float, dict[FieldType, float]]:
    """
    Calcule le score global (moyenne pondérée par la confiance) entre deux lignes.

    Returns:
        (score_global, {type: similarité})
    """
    total_weight = 0.0
    weighted_sum = 0.0
    details: dict[FieldType, float] = {}

    for mapping in mappings:
        sc = score_field(
            _cell(row_a, mapping.input_index),
            _cell(row_b, mapping.output_index),
            mapping,
            text_method=text_method,
            month_names=month_names,
        )
        total_weight += mapping.confidence
        weighted_sum += sc * mapping.confidence
        details[mapping.type] = sc

    if total_weight == 0:
        return 0.0, details
    return weighted_sum / total_weight, details


def score_row(
    row_a: Sequence[str],
    row_b: Sequence[str],
    mappings: Sequence[ColumnMapping],
    *,
    text_method: str = "positional",
    month_names: Mapping[str, int] = DEFAULT_MONTH_NAMES,
) -> float:
    """Score global (0-1) entre deux lignes ; 0 sans correspondance de colonnes."""
    score, _ = score_row_details(row_a, row_b, mappings, text_method=text_method, month_names=month_names)
    return score
