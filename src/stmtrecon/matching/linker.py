"""Moteur de rapprochement : appariement glouton un-à-un des lignes A et B."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import replace
from types import MappingProxyType
from typing import Any

from stmtrecon.config import ReconConfig, StmtReconError
from stmtrecon.matching.blockers import build_blocks, get_candidate_indices, get_date_mapping
from stmtrecon.matching.headers import DEFAULT_HEADER_PATTERNS, HeaderClassifier
from stmtrecon.matching.mapper import map_columns
from stmtrecon.matching.schema import ColumnMapping, FieldType, MatchCandidate, MatchResult, TableData
from stmtrecon.matching.scorers import score_row_details
from stmtrecon.normalize import DEFAULT_MONTH_NAMES

logger = logging.getLogger(__name__)


class ReconSizeError(StmtReconError):
    """Le nombre de comparaisons |A| x |B| dépasse le plafond configuré."""

    def __init__(self, n_a: int, n_b: int, limit: int) -> None:
        self.n_a = n_a
        self.n_b = n_b
        self.limit = limit
        super().__init__(f"{n_a} x {n_b} = {n_a * n_b} comparaisons, plafond {limit}")


def build_classifier(config: ReconConfig) -> HeaderClassifier:
    """Classifieur d'en-têtes : variantes par défaut, remplacées type par type par la config."""
    patterns: dict[FieldType, tuple[str, ...]] = dict(DEFAULT_HEADER_PATTERNS)
    for name, variants in config.header_patterns.items():
        patterns[FieldType(name)] = tuple(variants)
    return HeaderClassifier(patterns, min_contains_length=config.min_contains_length)


def build_month_names(config: ReconConfig) -> Mapping[str, int]:
    months = dict(DEFAULT_MONTH_NAMES)
    months.update(config.month_names)
    return MappingProxyType(months)


class Matcher:
    """
    Rapproche deux fichiers de transactions sans clé commune.

    Pour chaque ligne A, dans l'ordre, la meilleure ligne B non encore
    réclamée est retenue si son score atteint le seuil. Aucun retour en
    arrière : une ligne B réclamée ne l'est jamais deux fois, et l'affectation
    n'est pas un optimum global.
    """

    def __init__(self, config: ReconConfig | None = None) -> None:
        self.config = config or ReconConfig()
        self.threshold = self.config.threshold
        self.text_method = self.config.text_method
        self.blocker = self.config.blocker
        self.max_comparisons = self.config.max_comparisons
        self.classifier = build_classifier(self.config)
        self.month_names = build_month_names(self.config)

    def map_columns(self, headers_a: Sequence[str], headers_b: Sequence[str]) -> list[ColumnMapping]:
        return map_columns(headers_a, headers_b, self.classifier)

    def score(
        self,
        row_a: Sequence[str],
        row_b: Sequence[str],
        mappings: Sequence[ColumnMapping],
    ) -> tuple[float, dict[FieldType, float]]:
        return score_row_details(
            row_a,
            row_b,
            mappings,
            text_method=self.text_method,
            month_names=self.month_names,
        )

    def _check_size(self, n_a: int, n_b: int) -> None:
        if self.max_comparisons is not None and n_a * n_b > self.max_comparisons:
            raise ReconSizeError(n_a, n_b, self.max_comparisons)

    def run(
        self,
        file_a: TableData | Mapping[str, Any],
        file_b: TableData | Mapping[str, Any],
    ) -> MatchResult:
        """
        Exécute le rapprochement.

        Returns:
            MatchResult : appariements, lignes A et B orphelines, correspondances
            de colonnes. Sans colonne commune, toutes les lignes sont orphelines.

        Raises:
            ReconSizeError: Si max_comparisons est dépassé.
        """
        table_a = TableData.coerce(file_a)
        table_b = TableData.coerce(file_b)
        n_a, n_b = len(table_a), len(table_b)

        mappings = self.map_columns(table_a.headers, table_b.headers)
        if not mappings:
            logger.warning("Aucune colonne commune détectée : fichiers non comparables")
            return MatchResult(
                matches=[],
                unmatched_a=list(range(n_a)),
                unmatched_b=list(range(n_b)),
                column_mappings=[],
                threshold=self.threshold,
            )

        self._check_size(n_a, n_b)

        date_mapping = get_date_mapping(mappings) if self.blocker == "date" else None
        blocks_b = (
            build_blocks(table_b.rows, date_mapping.output_index, self.month_names)
            if date_mapping is not None
            else None
        )

        matches: list[MatchCandidate] = []
        unmatched_a: list[int] = []
        used_b: set[int] = set()

        for i, row_a in enumerate(table_a.rows):
            candidate_indices: Iterable[int]
            if blocks_b is not None and date_mapping is not None:
                candidate_indices = get_candidate_indices(row_a, date_mapping, blocks_b, self.month_names)
            else:
                candidate_indices = range(n_b)

            best: MatchCandidate | None = None
            for j in candidate_indices:
                if j in used_b:
                    continue
                score, details = self.score(row_a, table_b.rows[j], mappings)
                if best is None or score > best.similarity:
                    best = MatchCandidate(i, j, score, details)

            if best is not None and best.similarity >= self.threshold:
                matches.append(best)
                used_b.add(best.file_b_row_index)
            else:
                unmatched_a.append(i)

        unmatched_b = [j for j in range(n_b) if j not in used_b]
        logger.info(
            "Rapprochement: %d/%d lignes A appariées, %d lignes B orphelines (seuil %.2f)",
            len(matches),
            n_a,
            len(unmatched_b),
            self.threshold,
        )
        return MatchResult(
            matches=matches,
            unmatched_a=unmatched_a,
            unmatched_b=unmatched_b,
            column_mappings=mappings,
            threshold=self.threshold,
        )


def match(
    file_a: TableData | Mapping[str, Any],
    file_b: TableData | Mapping[str, Any],
    threshold: float | None = None,
    *,
    config: ReconConfig | None = None,
) -> MatchResult:
    """
    Rapproche deux fichiers {headers, rows}.

    Args:
        file_a: Fichier de référence (parcouru dans l'ordre).
        file_b: Fichier à rapprocher.
        threshold: Seuil de similarité (défaut : celui de la config, 0.7).
        config: Configuration optionnelle (méthode texte, blocking, dictionnaires).
    """
    cfg = config or ReconConfig()
    if threshold is not None:
        cfg = replace(cfg, threshold=threshold)
    return Matcher(cfg).run(file_a, file_b)
