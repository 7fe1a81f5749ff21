"""Personal expense detection - multi-factor heuristics over ledger expense entries"""

import hashlib
from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, List, Optional, Sequence, Tuple

from redflag.domain.exceptions import require_collection
from redflag.domain.keywords import (
    CATEGORY_MISMATCH_RULES,
    LUXURY_VENDOR_PATTERNS,
    PERSONAL_EXPENSE_KEYWORDS,
    keyword_pattern,
)
from redflag.domain.models import LedgerEntry, PersonalExpense
from redflag.utils.date_utils import weekend_day_name

# (amount floor, points) - only the highest tier applies
AMOUNT_TIERS: List[Tuple[float, float]] = [
    (10_000, 3.0),
    (5_000, 2.0),
    (3_000, 1.5),
    (1_000, 1.0),
    (500, 0.5),
]

KEYWORD_POINTS = 0.5
KEYWORD_POINTS_CAP = 1.5
CATEGORY_MISMATCH_POINTS = 1.5
LUXURY_VENDOR_POINTS = 1.0
WEEKEND_POINTS = 0.25
WEEKEND_MIN_AMOUNT = 500

SEVERITY_RANK: Dict[str, int] = {"high": 3, "medium": 2, "low": 1}


@dataclass(frozen=True)
class SeverityThresholds:
    """Score cut-offs for the severity tiers"""

    high: float = 2.5
    medium: float = 1.5

    def classify(self, score: float) -> str:
        if score >= self.high:
            return "high"
        if score >= self.medium:
            return "medium"
        return "low"


@lru_cache(maxsize=1024)
def _pattern(keyword: str):
    return keyword_pattern(keyword)


def expense_id(entry: LedgerEntry) -> str:
    """Deterministic id from date + description + amount"""
    fingerprint = f"{entry.date}|{entry.description}|{entry.amount:.2f}"
    return "exp_" + hashlib.sha256(fingerprint.encode("utf-8")).hexdigest()[:12]


def amount_points(amount: float) -> float:
    for floor, points in AMOUNT_TIERS:
        if amount > floor:
            return points
    return 0.0


def score_expense_signals(
    amount: float,
    keyword_matches: int,
    category_mismatch: bool,
    luxury_vendor: bool,
    weekend: bool,
) -> float:
    """
    Weighted severity score for one flagged expense.

    Scoring weights:
    - amount tier: >10k 3, >5k 2, >3k 1.5, >1k 1, >500 0.5
    - 0.5 per keyword match, capped at 1.5
    - 1.5 for a category mismatch
    - 1.0 for a luxury vendor
    - 0.25 for a weekend charge
    """
    score = amount_points(amount)
    score += min(keyword_matches * KEYWORD_POINTS, KEYWORD_POINTS_CAP)
    if category_mismatch:
        score += CATEGORY_MISMATCH_POINTS
    if luxury_vendor:
        score += LUXURY_VENDOR_POINTS
    if weekend:
        score += WEEKEND_POINTS
    return score


def _matched_keywords(description: str, keywords: Sequence[str]) -> List[str]:
    return [k for k in keywords if _pattern(k).search(description)]


def _category_mismatch(category: str, description: str) -> Optional[str]:
    terms = CATEGORY_MISMATCH_RULES.get(category.strip().lower())
    if not terms:
        return None
    for term in terms:
        if _pattern(term).search(description):
            return term
    return None


def _luxury_vendor(description: str) -> Optional[str]:
    for brand, pattern in LUXURY_VENDOR_PATTERNS:
        if pattern.search(description):
            return brand
    return None


def detect_personal_expenses(
    ledger_entries: List[LedgerEntry],
    keywords: Optional[Sequence[str]] = None,
    thresholds: Optional[SeverityThresholds] = None,
) -> List[PersonalExpense]:
    """
    Scan expense entries for likely personal spending.

    Any one signal includes an entry:
    - keyword match in the description
    - suspicious category whose description contradicts it
    - luxury brand/venue pattern
    - weekend date with amount over $500

    Entries repeating an already-seen date/description/amount are dropped,
    so re-running on the same data returns the same set.

    Returns:
        Flagged expenses sorted by severity (high first) then amount descending
    """
    require_collection(ledger_entries, "ledger_entries")
    keywords = PERSONAL_EXPENSE_KEYWORDS if keywords is None else keywords
    thresholds = thresholds or SeverityThresholds()

    flagged: List[PersonalExpense] = []
    seen_ids = set()

    for entry in ledger_entries:
        if entry.type != "expense" or entry.amount <= 0:
            continue

        description = entry.description or ""
        matched = _matched_keywords(description, keywords)
        mismatch_term = _category_mismatch(entry.category or "", description)
        brand = _luxury_vendor(description)
        weekend_day = weekend_day_name(entry.date)
        weekend = weekend_day is not None and entry.amount > WEEKEND_MIN_AMOUNT

        if not (matched or mismatch_term or brand or weekend):
            continue

        entry_id = expense_id(entry)
        if entry_id in seen_ids:
            continue
        seen_ids.add(entry_id)

        reasons: List[str] = []
        if matched:
            quoted = '", "'.join(matched)
            reasons.append(f'Keyword: "{quoted}" - Likely personal expense')
        if mismatch_term:
            reasons.append(f'Category mismatch: "{mismatch_term}" booked as {entry.category}')
        if brand:
            reasons.append(f"Luxury vendor: {brand}")
        if weekend:
            reasons.append(f"Weekend transaction ({weekend_day}) over ${WEEKEND_MIN_AMOUNT}")

        score = score_expense_signals(
            entry.amount,
            keyword_matches=len(matched),
            category_mismatch=mismatch_term is not None,
            luxury_vendor=brand is not None,
            weekend=weekend,
        )

        flagged.append(
            PersonalExpense(
                id=entry_id,
                date=entry.date,
                vendor=entry.description,
                amount=entry.amount,
                category=entry.category,
                flag_reason=" | ".join(reasons),
                severity=thresholds.classify(score),
            )
        )

    return sorted(flagged, key=lambda e: (-SEVERITY_RANK[e.severity], -e.amount))
