"""Convert loosely-shaped rows (CSV/JSON) into strict ledger and bank records"""

import logging
import math
import re
from datetime import date, datetime
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, TypeVar

import pandas as pd

from redflag.domain.exceptions import InvalidRecordError
from redflag.domain.models import BankTransaction, LedgerEntry
from redflag.utils.date_utils import is_valid_date

logger = logging.getLogger(__name__)

T = TypeVar("T")

FIELD_ALIASES: Dict[str, List[str]] = {
    "date": ["date", "transaction date", "posted", "posted date", "posting date", "txn date"],
    "description": ["description", "memo", "vendor", "payee", "details", "name"],
    "category": ["category", "account", "gl account", "account name"],
    "amount": ["amount", "value", "total"],
    "type": ["type", "transaction type", "entry type", "kind"],
    "credit": ["credit", "credits", "deposit", "deposits"],
    "debit": ["debit", "debits", "withdrawal", "withdrawals"],
}

LEDGER_TYPES = {
    "revenue": "revenue",
    "income": "revenue",
    "sale": "revenue",
    "sales": "revenue",
    "expense": "expense",
    "expenses": "expense",
    "cost": "expense",
}

BANK_TYPES = {
    "deposit": "deposit",
    "credit": "deposit",
    "withdrawal": "withdrawal",
    "debit": "withdrawal",
    "payment": "withdrawal",
}

_AMOUNT_NOISE = re.compile(r"[,$\s]")


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and not value.strip()


def _lookup(row: Dict[str, Any], field: str) -> Any:
    normalized = {str(k).strip().lower(): v for k, v in row.items()}
    for alias in FIELD_ALIASES[field]:
        value = normalized.get(alias)
        if not _is_blank(value):
            return value
    return None


def parse_amount(value: Any) -> float:
    """
    Parse a signed amount.

    Accepts numbers and strings such as "1,234.50", "$99", "-20" and
    accounting negatives like "(500.00)". NaN and infinities are rejected.
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        amount = float(value)
        if not math.isfinite(amount):
            raise InvalidRecordError(f"Amount is not a finite number: {value!r}")
        return amount
    if not isinstance(value, str) or not value.strip():
        raise InvalidRecordError(f"Amount is empty or not a number: {value!r}")

    text = _AMOUNT_NOISE.sub("", value)
    negative = text.startswith("(") and text.endswith(")")
    if negative:
        text = text[1:-1]
    try:
        amount = float(text)
    except ValueError as e:
        raise InvalidRecordError(f"Invalid amount: {value!r}") from e
    if not math.isfinite(amount):
        raise InvalidRecordError(f"Amount is not a finite number: {value!r}")
    return -amount if negative else amount


def normalize_date(value: Any) -> str:
    """
    ISO form of a loosely formatted date.

    YYYY-MM-DD and YYYY-MM pass through. Other formats are parsed with
    pandas; text that cannot be parsed is returned unchanged so the
    engine skips it.
    """
    if isinstance(value, (datetime, date)):
        return value.strftime("%Y-%m-%d")
    text = str(value).strip()
    if is_valid_date(text):
        return text
    parsed = pd.to_datetime(text, errors="coerce")
    if pd.isna(parsed):
        return text
    return parsed.strftime("%Y-%m-%d")


def _resolve_type(raw_type: Any, amount: float, mapping: Dict[str, str], positive: str, negative: str) -> str:
    if _is_blank(raw_type):
        return negative if amount < 0 else positive
    resolved = mapping.get(str(raw_type).strip().lower())
    if resolved is None:
        raise InvalidRecordError(f"Unknown transaction type: {raw_type!r}")
    return resolved


def _require(row: Dict[str, Any], field: str) -> Any:
    value = _lookup(row, field)
    if value is None:
        raise InvalidRecordError(f"Missing {field}")
    return value


def ledger_entry_from_row(row: Dict[str, Any]) -> LedgerEntry:
    """
    Build a LedgerEntry from a raw row.

    Without a type column, negative amounts are expenses and positive
    amounts revenue. The stored amount is always non-negative.
    """
    amount = parse_amount(_require(row, "amount"))
    entry_type = _resolve_type(_lookup(row, "type"), amount, LEDGER_TYPES, "revenue", "expense")

    return LedgerEntry(
        date=normalize_date(_require(row, "date")),
        description=str(_lookup(row, "description") or "").strip(),
        category=str(_lookup(row, "category") or "Uncategorized").strip(),
        amount=abs(amount),
        type=entry_type,
    )


def bank_transaction_from_row(row: Dict[str, Any]) -> BankTransaction:
    """
    Build a BankTransaction from a raw row.

    Statements with separate credit/debit columns are supported; otherwise
    a missing type is inferred from the amount's sign.
    """
    raw_amount = _lookup(row, "amount")
    if raw_amount is not None:
        amount = parse_amount(raw_amount)
        txn_type = _resolve_type(_lookup(row, "type"), amount, BANK_TYPES, "deposit", "withdrawal")
    else:
        credit = _lookup(row, "credit")
        debit = _lookup(row, "debit")
        if credit is not None:
            amount, txn_type = parse_amount(credit), "deposit"
        elif debit is not None:
            amount, txn_type = parse_amount(debit), "withdrawal"
        else:
            raise InvalidRecordError("Missing amount")

    return BankTransaction(
        date=normalize_date(_require(row, "date")),
        description=str(_lookup(row, "description") or "").strip(),
        amount=abs(amount),
        type=txn_type,
    )


def coerce_rows(
    rows: Iterable[Dict[str, Any]],
    converter: Callable[[Dict[str, Any]], T],
) -> Tuple[List[T], int]:
    """Convert rows, skipping the ones that fail validation. Returns (records, skipped)."""
    records: List[T] = []
    skipped = 0
    for index, row in enumerate(rows, start=1):
        try:
            records.append(converter(row))
        except InvalidRecordError as e:
            skipped += 1
            logger.debug("Skipping row %d: %s", index, e)
    return records, skipped


def first_alias_field(header: str) -> Optional[str]:
    """Which record field a header cell names, if any"""
    cell = header.strip().strip('"').lower()
    for field, aliases in FIELD_ALIASES.items():
        if cell in aliases:
            return field
    return None
