"""Module de rapprochement de relevés."""

from stmtrecon.matching.classify import classify_match, classify_result
from stmtrecon.matching.headers import HeaderClassifier, classify
from stmtrecon.matching.linker import Matcher, ReconSizeError, match
from stmtrecon.matching.mapper import map_columns
from stmtrecon.matching.schema import ColumnMapping, FieldType, MatchCandidate, MatchResult, TableData
from stmtrecon.matching.scorers import score_row

__all__ = [
    "ColumnMapping",
    "FieldType",
    "HeaderClassifier",
    "MatchCandidate",
    "MatchResult",
    "Matcher",
    "ReconSizeError",
    "TableData",
    "classify",
    "classify_match",
    "classify_result",
    "map_columns",
    "match",
    "score_row",
]
