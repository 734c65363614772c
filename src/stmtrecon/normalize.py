"""Normalisation des dates, montants et libellés de relevés."""

from __future__ import annotations

import math
import re
import unicodedata
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

DEFAULT_MONTH_NAMES: Mapping[str, int] = MappingProxyType(
    {
        "jan": 1,
        "feb": 2,
        "mar": 3,
        "apr": 4,
        "may": 5,
        "jun": 6,
        "jul": 7,
        "aug": 8,
        "sep": 9,
        "oct": 10,
        "nov": 11,
        "dec": 12,
    }
)

_ISO_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_DMY_RE = re.compile(r"^(\d{2})[/-](\d{2})[/-](\d{4})$")
_DMY_DOT_RE = re.compile(r"^(\d{2})\.(\d{2})\.(\d{4})$")
_DAY_MONTH_NAME_RE = re.compile(r"^(\d{1,2})(?:\s+|[/-])([A-Za-z]{3})(?:\s+|[/-])(\d{4})$")
_MDY_RE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{2}|\d{4})$")

# (regex, libellé) dans l'ordre de détection
_DATE_FORMATS: tuple[tuple[re.Pattern[str], str], ...] = (
    (_ISO_RE, "YYYY-MM-DD"),
    (re.compile(r"^\d{2}/\d{2}/\d{4}$"), "DD/MM/YYYY"),
    (re.compile(r"^\d{2}-\d{2}-\d{4}$"), "DD-MM-YYYY"),
    (_DMY_DOT_RE, "DD.MM.YYYY"),
    (re.compile(r"^\d{1,2} [A-Za-z]{3} \d{4}$"), "DD MMM YYYY"),
    (re.compile(r"^\d{1,2}/[A-Za-z]{3}/\d{4}$"), "DD/MMM/YYYY"),
    (re.compile(r"^\d{1,2}-[A-Za-z]{3}-\d{4}$"), "DD-MMM-YYYY"),
    (_MDY_RE, "M/D/YYYY"),
)

_AMOUNT_STRIP_RE = re.compile(r"[₹$€£¥,()\s]")
_CURRENCY_CODE_RE = re.compile(r"^(?:rs\.?|inr|usd|eur|gbp)", re.IGNORECASE)
_NUMBER_PREFIX_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_PUNCT_RE = re.compile(r"[^\w\s]")


def _is_missing(s: Any) -> bool:
    return s is None or (isinstance(s, float) and not math.isfinite(s))


def norm_text(
    s: str | float | int | None,
    *,
    lower: bool = True,
    strip: bool = True,
) -> str:
    """
    Normalise un texte : NFKC, espaces multiples → espace simple, lower, strip.

    Args:
        s: Valeur à normaliser (convertie en str si numérique).
        lower: Mettre en minuscules.
        strip: Supprimer espaces en début/fin.

    Returns:
        Chaîne normalisée.
    """
    if _is_missing(s):
        return ""
    text = str(s).strip() if strip else str(s)
    text = unicodedata.normalize("NFKC", text)
    text = re.sub(r"\s+", " ", text)
    if strip:
        text = text.strip()
    if lower:
        text = text.lower()
    return text


def detect_date_format(s: str | None) -> str | None:
    """Retourne le libellé du format reconnu (ex. "DD/MM/YYYY") ou None."""
    if _is_missing(s):
        return None
    text = str(s).strip()
    if not text:
        return None
    for regex, label in _DATE_FORMATS:
        if regex.match(text):
            return label
    return None


def normalize_date(
    s: str | None,
    month_names: Mapping[str, int] = DEFAULT_MONTH_NAMES,
) -> str:
    """
    Convertit une date de relevé en ISO "YYYY-MM-DD".

    Formats reconnus, dans l'ordre :
    - ISO déjà formé (YYYY-MM-DD)
    - DD/MM/YYYY ou DD-MM-YYYY, DD.MM.YYYY
    - DD MMM YYYY, DD/MMM/YYYY, DD-MMM-YYYY (mois sur 3 lettres)
    - M/D/YY ou M/D/YYYY (format américain, année 2 chiffres → 20YY)

    Une valeur non reconnue est renvoyée telle quelle (après strip),
    sans jamais lever d'exception. La fonction est idempotente.

    Args:
        s: Valeur brute de la cellule.
        month_names: Table mois abrégé (minuscules) → numéro de mois.

    Returns:
        Date ISO, ou la valeur d'origine nettoyée.
    """
    if _is_missing(s):
        return ""
    text = str(s).strip()
    if not text or _ISO_RE.match(text):
        return text

    m = _DMY_RE.match(text) or _DMY_DOT_RE.match(text)
    if m:
        day, month, year = m.groups()
        return f"{year}-{month}-{day}"

    m = _DAY_MONTH_NAME_RE.match(text)
    if m:
        day, month_name, year = m.groups()
        month = month_names.get(month_name.lower())
        if month is None:
            return text
        return f"{year}-{month:02d}-{int(day):02d}"

    m = _MDY_RE.match(text)
    if m:
        month_s, day_s, year = m.groups()
        if len(year) == 2:
            year = f"20{year}"
        return f"{year}-{int(month_s):02d}-{int(day_s):02d}"

    return text


def normalize_amount(s: str | float | int | None) -> float:
    """
    Convertit un montant textuel en flottant positif.

    Retire symboles monétaires, séparateurs de milliers, parenthèses
    (montants négatifs de certains exports) et espaces, puis lit le
    préfixe numérique. Le sens (débit/crédit) dépend de la colonne,
    jamais du signe : la valeur absolue est toujours renvoyée.

    Returns:
        Montant >= 0, ou 0.0 si illisible.
    """
    if _is_missing(s):
        return 0.0
    if isinstance(s, (int, float)) and not isinstance(s, bool):
        return abs(float(s))
    cleaned = _AMOUNT_STRIP_RE.sub("", unicodedata.normalize("NFKC", str(s)))
    cleaned = _CURRENCY_CODE_RE.sub("", cleaned)
    m = _NUMBER_PREFIX_RE.match(cleaned)
    if not m:
        return 0.0
    value = float(m.group(0))
    if not math.isfinite(value):
        return 0.0
    return abs(value)


def normalize_description(s: str | float | int | None) -> str:
    """Libellé pour comparaison floue : minuscules, sans ponctuation, espaces réduits."""
    text = _PUNCT_RE.sub("", norm_text(s))
    return re.sub(r"\s+", " ", text).strip()


def safe_str(val: Any) -> str:
    """Convertit une valeur en chaîne pour affichage/stockage."""
    if _is_missing(val):
        return ""
    return str(val)
