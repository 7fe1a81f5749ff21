"""CSV upload parsing with header-row detection"""

import csv
import io
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

import pandas as pd

from redflag.domain.exceptions import InvalidRecordError, UploadTooLargeError
from redflag.infrastructure.parsers.records import (
    bank_transaction_from_row,
    coerce_rows,
    first_alias_field,
    ledger_entry_from_row,
)

logger = logging.getLogger(__name__)

# Exported statements often carry a title block above the real header
HEADER_SCAN_LINES = 15


@dataclass
class ParseResult:
    records: List[Any] = field(default_factory=list)
    skipped_rows: int = 0


def check_upload_size(text: str, max_bytes: Optional[int]) -> None:
    if max_bytes is not None and len(text.encode("utf-8")) > max_bytes:
        raise UploadTooLargeError(f"Upload exceeds {max_bytes} bytes")


def find_header_line(text: str) -> int:
    """
    Index of the first line naming both a date and an amount column.

    Raises:
        InvalidRecordError: No such line in the first lines of the file
    """
    lines = text.splitlines()[:HEADER_SCAN_LINES]
    for index, cells in enumerate(csv.reader(lines)):
        fields = {first_alias_field(cell) for cell in cells}
        if "date" in fields and ({"amount", "credit", "debit"} & fields):
            return index
    raise InvalidRecordError("No header row with date and amount columns found")


def read_rows(text: str) -> List[Dict[str, Any]]:
    """Read CSV text into row dicts, starting at the detected header"""
    header_line = find_header_line(text)
    body = "\n".join(text.splitlines()[header_line:])
    frame = pd.read_csv(
        io.StringIO(body),
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
    )
    return frame.to_dict(orient="records")


def _parse(text: str, converter: Callable, max_bytes: Optional[int]) -> ParseResult:
    check_upload_size(text, max_bytes)
    records, skipped = coerce_rows(read_rows(text), converter)
    if skipped:
        logger.info("Skipped invalid CSV rows", extra={"skipped_rows": skipped, "parsed_rows": len(records)})
    return ParseResult(records=records, skipped_rows=skipped)


def parse_ledger_csv(text: str, max_bytes: Optional[int] = None) -> ParseResult:
    """Parse an accounting ledger export into LedgerEntry records"""
    return _parse(text, ledger_entry_from_row, max_bytes)


def parse_bank_csv(text: str, max_bytes: Optional[int] = None) -> ParseResult:
    """Parse a bank statement export into BankTransaction records"""
    return _parse(text, bank_transaction_from_row, max_bytes)
