"""
Forensic dragnet - fast rule-based first pass over every ledger row.

Produces an activity feed of suspects for the analyst. Unlike the personal
expense detector it does not score or deduplicate; it reports every row
that trips a rule, in input order.
"""

from typing import List

from redflag.domain.exceptions import require_collection
from redflag.domain.keywords import SUSPICIOUS_KEYWORDS, WEEKEND_EXEMPT_TERMS, keyword_pattern
from redflag.domain.models import DatasetStats, DragnetFinding, LedgerEntry
from redflag.utils.date_utils import weekend_day_name

ROUND_AMOUNT_MIN = 100

_SUSPICIOUS_PATTERNS = [(k, keyword_pattern(k)) for k in SUSPICIOUS_KEYWORDS]
_WEEKEND_EXEMPT_PATTERNS = [keyword_pattern(t) for t in WEEKEND_EXEMPT_TERMS]


def dragnet_flags(entry: LedgerEntry) -> List[str]:
    """Rule hits for a single ledger entry"""
    flags: List[str] = []
    description = entry.description or ""

    if weekend_day_name(entry.date) and not any(p.search(description) for p in _WEEKEND_EXEMPT_PATTERNS):
        flags.append("Weekend Transaction")

    if entry.amount > ROUND_AMOUNT_MIN and entry.amount % 100 == 0:
        flags.append("Round Dollar Amount")

    for keyword, pattern in _SUSPICIOUS_PATTERNS:
        if pattern.search(description):
            flags.append(f'Suspicious Keyword: "{keyword}"')
            break

    return flags


def run_dragnet(ledger_entries: List[LedgerEntry]) -> List[DragnetFinding]:
    """
    Flag rows tripping the weekend, round-amount or keyword rules.

    Row numbers are 1-based positions in the input. A row with more than
    one hit is reported at "danger" level, otherwise "warning".
    """
    require_collection(ledger_entries, "ledger_entries")

    findings: List[DragnetFinding] = []
    for row_number, entry in enumerate(ledger_entries, start=1):
        flags = dragnet_flags(entry)
        if not flags:
            continue
        findings.append(
            DragnetFinding(
                row_number=row_number,
                description=entry.description,
                amount=entry.amount,
                flags=flags,
                level="danger" if len(flags) > 1 else "warning",
                message=f"Row #{row_number}: Flagged - {', '.join(flags)} ({entry.description} - ${entry.amount:,.2f})",
            )
        )
    return findings


def calculate_dataset_stats(ledger_entries: List[LedgerEntry]) -> DatasetStats:
    require_collection(ledger_entries, "ledger_entries")
    total = sum(e.amount for e in ledger_entries)
    count = len(ledger_entries)
    return DatasetStats(
        count=count,
        total_amount=total,
        average_amount=total / count if count else 0.0,
    )
