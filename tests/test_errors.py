"""Tests des cas d'erreur."""

from pathlib import Path

import pandas as pd
import pytest

from stmtrecon.cli import main
from stmtrecon.config import ConfigFileError, ReconConfig
from stmtrecon.io_tables import TableFileError, load_sheet, load_tables


def test_config_load_file_not_found(tmp_path: Path) -> None:
    """ReconConfig.load() lève ConfigFileError si le fichier n'existe pas."""
    with pytest.raises(ConfigFileError, match="introuvable"):
        ReconConfig.load(tmp_path / "inexistant.json")


def test_config_load_invalid_json(tmp_path: Path) -> None:
    bad_json = tmp_path / "config.json"
    bad_json.write_text("{ invalid json }", encoding="utf-8")
    with pytest.raises(ConfigFileError, match="JSON invalide"):
        ReconConfig.load(bad_json)


def test_config_load_not_dict(tmp_path: Path) -> None:
    bad_config = tmp_path / "config.json"
    bad_config.write_text("[1, 2, 3]", encoding="utf-8")
    with pytest.raises(ConfigFileError, match="objet JSON"):
        ReconConfig.load(bad_config)


def test_load_sheet_file_not_found(tmp_path: Path) -> None:
    with pytest.raises(TableFileError, match="introuvable"):
        load_sheet(tmp_path / "inexistant.csv")


def test_load_sheet_missing_sheet(tmp_path: Path) -> None:
    xlsx = tmp_path / "test.xlsx"
    pd.DataFrame({"a": [1]}).to_excel(xlsx, sheet_name="Feuille1", index=False, engine="openpyxl")
    with pytest.raises(TableFileError, match="Feuille 'Inexistante' introuvable"):
        load_sheet(xlsx, sheet_name="Inexistante")


def test_load_sheet_empty_csv(tmp_path: Path) -> None:
    empty = tmp_path / "vide.csv"
    empty.write_text("", encoding="utf-8")
    with pytest.raises(TableFileError, match="vide"):
        load_sheet(empty)


def test_load_tables_requires_both_files() -> None:
    with pytest.raises(TableFileError, match="file_a et file_b requis"):
        load_tables(ReconConfig(file_a="a.csv"))


def test_cli_missing_file_exit_code(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    """La CLI retourne 1 et affiche un message en cas d'erreur."""
    exit_code = main(["run", str(tmp_path / "a.csv"), str(tmp_path / "b.csv")])
    assert exit_code == 1
    assert "Erreur" in capsys.readouterr().err


def test_cli_config_error_exit_code() -> None:
    assert main(["run", "--config", "/chemin/inexistant.json"]) == 1
