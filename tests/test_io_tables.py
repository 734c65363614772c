"""Tests du module I/O tableurs."""

from pathlib import Path

import pandas as pd

from stmtrecon.config import ReconConfig
from stmtrecon.io_tables import load_table, load_tables, table_from_dataframe


def test_load_table_csv_semicolon_ragged(tmp_path: Path) -> None:
    path = tmp_path / "releve.csv"
    path.write_text("Date;Narration;Debit\n01/02/2024;ATM;500.00\n02/02/2024;POS\n", encoding="utf-8")
    table = load_table(path)
    assert table.headers == ("Date", "Narration", "Debit")
    assert table.rows[0] == ("01/02/2024", "ATM", "500.00")
    assert table.rows[1] == ("02/02/2024", "POS", "")


def test_load_table_csv_keeps_text(tmp_path: Path) -> None:
    path = tmp_path / "releve.csv"
    path.write_text("Ref No,Amount\n007,NA\n", encoding="utf-8")
    table = load_table(path)
    assert table.rows == (("007", "NA"),)


def test_load_table_csv_latin1(tmp_path: Path) -> None:
    path = tmp_path / "releve.csv"
    path.write_bytes("Date,Libellé\n01/02/2024,Café\n".encode("latin-1"))
    table = load_table(path)
    assert table.headers == ("Date", "Libellé")
    assert table.rows[0][1] == "Café"


def test_load_table_xlsx(tmp_path: Path) -> None:
    path = tmp_path / "releve.xlsx"
    pd.DataFrame({"Date": ["01/02/2024"], "Amount": ["500.00"]}).to_excel(path, index=False, engine="openpyxl")
    table = load_table(path)
    assert table.headers == ("Date", "Amount")
    assert table.rows == (("01/02/2024", "500.00"),)


def test_table_from_dataframe_missing_values() -> None:
    df = pd.DataFrame({"Date": ["01/02/2024", None], "Amount": [float("nan"), "10"]})
    table = table_from_dataframe(df)
    assert table.rows == (("01/02/2024", ""), ("", "10"))


def test_load_tables_from_config(tmp_path: Path) -> None:
    a = tmp_path / "a.csv"
    b = tmp_path / "b.csv"
    a.write_text("Date\n01/02/2024\n", encoding="utf-8")
    b.write_text("Txn Date\n2024-02-01\n", encoding="utf-8")
    table_a, table_b = load_tables(ReconConfig(file_a=str(a), file_b=str(b)))
    assert table_a.headers == ("Date",)
    assert table_b.rows == (("2024-02-01",),)
