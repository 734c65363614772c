"""I/O tableurs : chargement des relevés (CSV, Excel, ODS) en texte brut."""

from __future__ import annotations

import csv
import logging
from pathlib import Path

import pandas as pd

from stmtrecon.config import ReconConfig, StmtReconError
from stmtrecon.matching.schema import TableData
from stmtrecon.normalize import safe_str

logger = logging.getLogger(__name__)

SUPPORTED_INPUT_EXTENSIONS = (".xlsx", ".xls", ".ods", ".csv")
_CSV_DELIMITERS = [",", ";", "\t", "|"]


class TableFileError(StmtReconError):
    """Erreur de chargement d'un fichier (fichier absent, feuille inexistante)."""


def _get_engine(path: Path) -> str | None:
    """Retourne le moteur pandas selon l'extension, ou None pour auto."""
    suffix = path.suffix.lower()
    if suffix == ".xlsx":
        return "openpyxl"
    if suffix == ".xls":
        return "xlrd"
    if suffix in (".ods", ".odt"):
        return "odf"
    return None


def _is_csv(path: Path) -> bool:
    return path.suffix.lower() == ".csv"


def _detect_csv_delimiter(path: Path, encoding: str) -> str | None:
    try:
        with path.open("r", encoding=encoding, errors="replace") as f:
            sample_lines: list[str] = []
            for line in f:
                if line.strip() == "":
                    continue
                sample_lines.append(line)
                if len(sample_lines) >= 5:
                    break
    except OSError:
        return None
    if not sample_lines:
        return None
    sample = "".join(sample_lines)
    try:
        return csv.Sniffer().sniff(sample, delimiters=_CSV_DELIMITERS).delimiter
    except csv.Error:
        first = sample_lines[0]
        counts = {d: first.count(d) for d in _CSV_DELIMITERS}
        best = max(counts, key=lambda d: counts[d])
        return best if counts[best] > 0 else None


def _read_csv(path: Path) -> pd.DataFrame:
    last_error: Exception | None = None
    for encoding in ("utf-8-sig", "latin-1"):
        delimiter = _detect_csv_delimiter(path, encoding) or ","
        try:
            return pd.read_csv(
                path,
                dtype=str,
                keep_default_na=False,
                encoding=encoding,
                sep=delimiter,
                engine="python",
                on_bad_lines="warn",
            )
        except UnicodeDecodeError as e:
            logger.debug("Encodage %s refusé pour %s: %s", encoding, path, e)
            last_error = e
        except pd.errors.EmptyDataError as e:
            raise TableFileError(f"Fichier CSV vide: {path}") from e
        except (pd.errors.ParserError, ValueError) as e:
            raise TableFileError(f"Erreur CSV {path}: {e}. Vérifiez la ligne d'en-tête et le séparateur.") from e
    raise TableFileError(f"Erreur CSV {path}: {last_error}")


def load_sheet(filepath: str | Path, sheet_name: str | None = None) -> pd.DataFrame:
    """
    Charge une feuille dans un DataFrame en préservant le texte des cellules.

    Formats supportés : .xlsx, .xls, .ods, .csv.

    Args:
        filepath: Chemin vers le fichier.
        sheet_name: Nom de la feuille (None = première). Ignoré pour CSV.

    Returns:
        DataFrame dont toutes les cellules sont des chaînes.

    Raises:
        TableFileError: Si le fichier est absent, illisible ou si la feuille n'existe pas.
    """
    path = Path(filepath)
    if not path.exists():
        raise TableFileError(f"Fichier introuvable: {path}")
    if _is_csv(path):
        return _read_csv(path)

    try:
        engine = _get_engine(path)
        xl = pd.ExcelFile(path, engine=engine) if engine else pd.ExcelFile(path)
    except ImportError as e:
        raise TableFileError(f"Moteur de lecture manquant pour {path.suffix}: {e}") from e
    except Exception as e:
        raise TableFileError(f"Impossible de lire le fichier {path}: {e}") from e

    if sheet_name is None:
        sheet_name = str(xl.sheet_names[0])
    elif sheet_name not in xl.sheet_names:
        sheets = [str(s) for s in xl.sheet_names]
        raise TableFileError(f"Feuille '{sheet_name}' introuvable dans {path}. Feuilles: {', '.join(sheets)}")

    try:
        return pd.read_excel(xl, sheet_name=sheet_name, dtype=str, keep_default_na=False)
    except Exception as e:
        raise TableFileError(f"Erreur feuille '{sheet_name}' dans {path}: {e}") from e


def table_from_dataframe(df: pd.DataFrame) -> TableData:
    """Convertit un DataFrame en TableData (cellules vides ou NaN → "")."""
    headers = [safe_str(c) for c in df.columns]
    rows = [[safe_str(v) for v in record] for record in df.itertuples(index=False, name=None)]
    return TableData.from_lists(headers, rows)


def load_table(filepath: str | Path, sheet_name: str | None = None) -> TableData:
    """Charge un relevé sous forme {headers, rows} de chaînes."""
    df = load_sheet(filepath, sheet_name)
    logger.debug("Chargé %s: %d colonnes, %d lignes", filepath, len(df.columns), len(df))
    return table_from_dataframe(df)


def load_tables(config: ReconConfig) -> tuple[TableData, TableData]:
    """
    Charge les fichiers A et B selon la configuration.

    Returns:
        (table_a, table_b)
    """
    if not config.file_a or not config.file_b:
        raise TableFileError("file_a et file_b requis")
    return load_table(config.file_a, config.sheet_a), load_table(config.file_b, config.sheet_b)
