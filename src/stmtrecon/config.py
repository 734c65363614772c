"""Configuration et chargement du fichier config JSON."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

VALID_TEXT_METHODS = frozenset({"positional", "fuzzy_ratio", "token_set"})
VALID_BLOCKERS = frozenset({"none", "date"})
VALID_FIELD_TYPES = frozenset({"date", "amount", "description", "withdrawal", "deposit", "balance", "reference"})


class StmtReconError(Exception):
    """Exception de base pour stmtrecon."""


class ConfigError(StmtReconError, ValueError):
    """Erreur de validation de la configuration."""


class ConfigFileError(StmtReconError):
    """Erreur de chargement du fichier de configuration (fichier absent, JSON invalide)."""


def _parse_header_patterns(raw: Any) -> dict[str, list[str]]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError("header_patterns doit être un objet {type: [variantes]}")
    patterns: dict[str, list[str]] = {}
    for key, variants in raw.items():
        ftype = str(key).lower()
        if ftype not in VALID_FIELD_TYPES:
            raise ConfigError(f"type d'en-tête invalide: {key!r}. Valides: {sorted(VALID_FIELD_TYPES)}")
        if isinstance(variants, str) or not isinstance(variants, list):
            raise ConfigError(f"header_patterns[{key!r}] doit être une liste de chaînes")
        patterns[ftype] = [str(v) for v in variants]
    return patterns


def _parse_month_names(raw: Any) -> dict[str, int]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError("month_names doit être un objet {abréviation: numéro}")
    months: dict[str, int] = {}
    for name, num in raw.items():
        try:
            month = int(num)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"month_names[{name!r}] doit être un entier (got {num!r})") from e
        if not 1 <= month <= 12:
            raise ConfigError(f"month_names[{name!r}] doit être entre 1 et 12 (got {month})")
        months[str(name).lower()] = month
    return months


@dataclass
class ReconConfig:
    """Configuration principale du rapprochement."""

    file_a: str = ""
    file_b: str = ""
    sheet_a: str | None = None  # None = première feuille
    sheet_b: str | None = None

    threshold: float = 0.7
    text_method: str = "positional"  # positional, fuzzy_ratio, token_set
    blocker: str = "none"  # none, date
    max_comparisons: int | None = None  # None = pas de plafond
    min_contains_length: int = 3

    # type -> variantes, remplace les variantes par défaut de ce type
    header_patterns: dict[str, list[str]] = field(default_factory=dict)
    # abréviation -> numéro, complète la table des mois par défaut
    month_names: dict[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """
        Vérifie la cohérence des paramètres.

        Raises:
            ConfigError: Si un paramètre est hors bornes ou inconnu.
        """
        if not 0 <= self.threshold <= 1:
            raise ConfigError(f"threshold doit être entre 0 et 1 (got {self.threshold})")
        if self.text_method not in VALID_TEXT_METHODS:
            raise ConfigError(
                f"text_method invalide: {self.text_method!r}. Valides: {sorted(VALID_TEXT_METHODS)}"
            )
        if self.blocker not in VALID_BLOCKERS:
            raise ConfigError(f"blocker invalide: {self.blocker!r}. Valides: {sorted(VALID_BLOCKERS)}")
        if self.max_comparisons is not None and self.max_comparisons < 1:
            raise ConfigError(f"max_comparisons doit être >= 1 (got {self.max_comparisons})")
        if self.min_contains_length < 1:
            raise ConfigError(f"min_contains_length doit être >= 1 (got {self.min_contains_length})")

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> ReconConfig:
        try:
            threshold = float(d.get("threshold", 0.7))
            max_comparisons = d.get("max_comparisons")
            max_comparisons = int(max_comparisons) if max_comparisons is not None else None
            min_contains_length = int(d.get("min_contains_length", 3))
        except (TypeError, ValueError) as e:
            raise ConfigError(f"valeur numérique invalide: {e}") from e

        return cls(
            file_a=d.get("file_a", ""),
            file_b=d.get("file_b", ""),
            sheet_a=d.get("sheet_a"),
            sheet_b=d.get("sheet_b"),
            threshold=threshold,
            text_method=d.get("text_method", "positional"),
            blocker=d.get("blocker", "none"),
            max_comparisons=max_comparisons,
            min_contains_length=min_contains_length,
            header_patterns=_parse_header_patterns(d.get("header_patterns")),
            month_names=_parse_month_names(d.get("month_names")),
        )

    @classmethod
    def load(cls, path: str | Path) -> ReconConfig:
        """
        Charge la configuration depuis un fichier JSON.

        Raises:
            ConfigFileError: Si le fichier est absent ou le JSON invalide.
            ConfigError: Si la configuration est invalide.
        """
        path = Path(path).resolve()
        if not path.exists():
            raise ConfigFileError(f"Fichier de configuration introuvable: {path}")

        try:
            with open(path, encoding="utf-8") as f:
                d = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigFileError(f"JSON invalide dans {path}: {e}") from e
        except OSError as e:
            raise ConfigFileError(f"Impossible de lire {path}: {e}") from e

        if not isinstance(d, dict):
            raise ConfigFileError(f"Fichier de configuration invalide: {path} doit contenir un objet JSON")

        config = cls.from_dict(d)
        config.resolve_paths(path.parent)
        return config

    def resolve_paths(self, base_dir: Path) -> None:
        """
        Résout les chemins relatifs par rapport au répertoire de base (ex. dossier du fichier config).

        Modifie file_a et file_b en place.
        """
        base = Path(base_dir)
        if self.file_a and not Path(self.file_a).is_absolute():
            self.file_a = str((base / self.file_a).resolve())
        if self.file_b and not Path(self.file_b).is_absolute():
            self.file_b = str((base / self.file_b).resolve())
