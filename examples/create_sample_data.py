"""Crée deux relevés de démonstration pour stmtrecon (CSV interne, export bancaire Excel)."""

import pandas as pd
from pathlib import Path

DATA_DIR = Path(__file__).parent / "data"
DATA_DIR.mkdir(exist_ok=True)

super_bank = pd.DataFrame({
    "Date": ["01/02/2024", "02/02/2024", "05/02/2024", "07/02/2024"],
    "Narration": ["ATM WDL", "NEFT ACME LTD", "UPI GROCERY", "UNKNOWN CHARGE"],
    "Ref No": ["R1", "R2", "R3", "R5"],
    "Withdrawal Amt": ["500.00", "1,200.00", "350.50", "80.00"],
    "Closing Balance": ["9,500.00", "8,300.00", "7,949.50", "7,869.50"],
})

bank_export = pd.DataFrame({
    "Transaction Date": ["2024-02-01", "02 Feb 2024", "05-Feb-2024", "2024-02-09"],
    "Description": ["ATM WDL CHG", "NEFT ACME LTD", "UPI GROCERY STORE", "FEE"],
    "Chq./Ref.No.": ["R1", "R2", "R3", "R9"],
    "Debit": ["₹500.00", "(1200)", "Rs. 350.50", "12"],
})

super_bank.to_csv(DATA_DIR / "super_bank.csv", index=False)
bank_export.to_excel(DATA_DIR / "bank_export.xlsx", index=False, engine="openpyxl")
print(f"Fichiers créés dans {DATA_DIR}")
