"""Classification des en-têtes de colonnes par type sémantique."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sequence
from types import MappingProxyType

from stmtrecon.matching.schema import CLASSIFY_ORDER, FieldType

DEFAULT_HEADER_PATTERNS: Mapping[FieldType, tuple[str, ...]] = MappingProxyType(
    {
        FieldType.DATE: (
            "date", "transaction date", "txn date", "value date", "posting date",
            "trans date", "trn date", "dt", "dated", "transaction_date", "txndate",
            "valuedate", "value_date", "tran_date", "trans_date",
        ),
        FieldType.AMOUNT: (
            "amount", "amt", "value", "transaction amount", "txn amount",
            "transaction_amount", "txnamount", "amt.", "amountraw", "amount raw",
            "transaction value",
        ),
        FieldType.DESCRIPTION: (
            "description", "narration", "particular", "particulars", "details",
            "transaction details", "txn details", "remarks", "desc",
            "transaction description", "txn description", "narration/description",
            "transaction_description", "txndescription",
        ),
        FieldType.WITHDRAWAL: (
            "withdrawal", "debit", "dr", "withdrawal amt", "withdrawal amount",
            "debit amount", "dr amount", "withdrawals", "debits", "withdrawal_amt",
            "withdrawalamt", "debit_amount",
        ),
        FieldType.DEPOSIT: (
            "deposit", "credit", "cr", "deposit amt", "deposit amount",
            "credit amount", "cr amount", "deposits", "credits", "deposit_amt",
            "depositamt", "credit_amount",
        ),
        FieldType.BALANCE: (
            "balance", "closing balance", "closing bal", "balance amt", "bal",
            "available balance", "book balance", "closingbalance", "closing_balance",
        ),
        FieldType.REFERENCE: (
            "reference", "ref", "ref no", "reference no", "cheque no", "chq no",
            "cheque number", "transaction ref", "txn ref", "chq./ref.no.",
            "chq/ref no", "reference_no", "refno",
        ),
    }
)

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]")


def normalize_header(header: str | None) -> str:
    """Minuscules, sans aucun caractère non alphanumérique."""
    if header is None:
        return ""
    return _NON_ALNUM_RE.sub("", str(header).lower())


class HeaderClassifier:
    """
    Associe un en-tête brut à un type sémantique via un dictionnaire de variantes.

    Un en-tête correspond à un type s'il est égal à une variante, la contient
    ou y est contenu (après normalisation). Les égalités sont testées pour
    tous les types avant les inclusions ; à chaque passe, le premier type dans
    l'ordre Date, Amount, Description, Withdrawal, Deposit, Balance, Reference
    l'emporte. Les inclusions ignorent les chaînes de moins de
    ``min_contains_length`` caractères ("dr", "cr", "dt" ne valent qu'en égalité).
    """

    def __init__(
        self,
        patterns: Mapping[FieldType, Iterable[str]] | None = None,
        *,
        min_contains_length: int = 3,
    ) -> None:
        source = DEFAULT_HEADER_PATTERNS if patterns is None else patterns
        normalized: dict[FieldType, tuple[str, ...]] = {}
        for ftype in CLASSIFY_ORDER:
            variants = (normalize_header(v) for v in source.get(ftype, ()))
            normalized[ftype] = tuple(dict.fromkeys(v for v in variants if v))
        self.patterns: Mapping[FieldType, tuple[str, ...]] = MappingProxyType(normalized)
        self.min_contains_length = min_contains_length

    def classify(self, header: str | None) -> FieldType:
        """Type sémantique d'un en-tête ; UNKNOWN si aucune variante ne correspond."""
        norm = normalize_header(header)
        if not norm:
            return FieldType.UNKNOWN

        for ftype in CLASSIFY_ORDER:
            if norm in self.patterns[ftype]:
                return ftype

        min_len = self.min_contains_length
        for ftype in CLASSIFY_ORDER:
            for variant in self.patterns[ftype]:
                if len(variant) >= min_len and variant in norm:
                    return ftype
                if len(norm) >= min_len and norm in variant:
                    return ftype
        return FieldType.UNKNOWN

    def detect_column_types(self, headers: Sequence[str]) -> dict[FieldType, list[int]]:
        """
        Partitionne les indices de colonnes par type sémantique.

        Returns:
            {type: [indices dans l'ordre des colonnes]}, UNKNOWN inclus.
        """
        result: dict[FieldType, list[int]] = {ftype: [] for ftype in FieldType}
        for idx, header in enumerate(headers):
            result[self.classify(header)].append(idx)
        return result


_default_classifier = HeaderClassifier()


def classify(header: str | None) -> FieldType:
    """Classe un en-tête avec le dictionnaire par défaut."""
    return _default_classifier.classify(header)


def detect_column_types(headers: Sequence[str]) -> dict[FieldType, list[int]]:
    """Partitionne les colonnes avec le dictionnaire par défaut."""
    return _default_classifier.detect_column_types(headers)
