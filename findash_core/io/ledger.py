from __future__ import annotations

import logging
from pathlib import Path
from typing import List

import pandas as pd

from findash_core.domain.models import Transaction, new_id
from findash_core.domain.validation import parse_date, validate_transaction

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = {"date", "amount", "category", "type"}


def load_transactions(csv_path: str | Path) -> List[Transaction]:
    path = Path(csv_path)
    if not path.exists():
        raise FileNotFoundError(path)

    df = pd.read_csv(path, dtype={"date": str, "category": str, "type": str})
    missing = REQUIRED_COLUMNS - set(df.columns)
    if missing:
        raise ValueError(f"Missing columns in ledger CSV: {sorted(missing)}")

    if "description" not in df.columns:
        df["description"] = ""
    df["description"] = df["description"].fillna("").astype(str)

    transactions: List[Transaction] = []
    for _, row in df.iterrows():
        txn_id = row["id"] if "id" in df.columns and not pd.isna(row["id"]) else new_id()
        transactions.append(
            validate_transaction(
                Transaction(
                    id=str(txn_id),
                    date=parse_date(row["date"]),
                    amount=float(row["amount"]),
                    category="" if pd.isna(row["category"]) else str(row["category"]),
                    description=row["description"],
                    type=str(row["type"]).strip().lower(),
                )
            )
        )
    logger.debug("Loaded %d transactions from %s", len(transactions), path)
    return transactions
