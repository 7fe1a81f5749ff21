"""Reference tables for personal-expense and forensic detection"""

import re
from typing import Dict, List, Pattern, Tuple

# Description keywords that usually indicate owner/family spending
PERSONAL_EXPENSE_KEYWORDS: List[str] = [
    # travel & leisure
    "resort",
    "vacation",
    "cruise",
    "disney",
    "theme park",
    "ski",
    "golf",
    # luxury vehicles
    "ferrari",
    "porsche",
    "lamborghini",
    "maserati",
    "bentley",
    "yacht",
    "boat",
    # personal services
    "spa",
    "massage",
    "salon",
    "personal trainer",
    "country club",
    # family
    "family",
    "tuition",
    "private school",
    "daycare",
    "nanny",
    "summer camp",
    "wedding",
    # luxury goods
    "jewelry",
    "rolex",
    "louis vuitton",
    "gucci",
    "prada",
    "tiffany",
    # entertainment
    "concert",
    "netflix",
    "casino",
    "season tickets",
    # home services
    "landscaping",
    "pool service",
    "housekeeping",
    "home renovation",
    "interior design",
]

# Categories where the keywords below are inconsistent with a business purpose
CATEGORY_MISMATCH_RULES: Dict[str, List[str]] = {
    "office supplies": [
        "resort", "disney", "vacation", "spa", "jewelry", "rolex", "yacht",
        "golf", "casino", "cruise", "wedding", "louis vuitton", "gucci",
    ],
    "team building": [
        "family", "resort", "vacation", "cruise", "disney", "wedding", "spa",
    ],
    "employee wellness": [
        "spa", "massage", "salon", "country club", "golf", "resort",
    ],
    "training & education": [
        "tuition", "private school", "daycare", "summer camp", "nanny",
    ],
    "vehicle expenses": [
        "porsche", "ferrari", "lamborghini", "maserati", "bentley", "yacht", "boat",
    ],
}

# Curated luxury brands and venues, matched case-insensitively
LUXURY_VENDOR_PATTERNS: List[Tuple[str, Pattern[str]]] = [
    ("Ritz-Carlton", re.compile(r"\britz[\s-]?carlton\b", re.IGNORECASE)),
    ("Four Seasons", re.compile(r"\bfour\s+seasons\b", re.IGNORECASE)),
    ("St. Regis", re.compile(r"\bst\.?\s+regis\b", re.IGNORECASE)),
    ("Waldorf Astoria", re.compile(r"\bwaldorf\b", re.IGNORECASE)),
    ("Mandarin Oriental", re.compile(r"\bmandarin\s+oriental\b", re.IGNORECASE)),
    ("Louis Vuitton", re.compile(r"\blouis\s+vuitton\b", re.IGNORECASE)),
    ("Hermes", re.compile(r"\bherm[eè]s\b", re.IGNORECASE)),
    ("Cartier", re.compile(r"\bcartier\b", re.IGNORECASE)),
    ("Tiffany & Co", re.compile(r"\btiffany\b", re.IGNORECASE)),
    ("Rolex", re.compile(r"\brolex\b", re.IGNORECASE)),
    ("Gucci", re.compile(r"\bgucci\b", re.IGNORECASE)),
    ("Prada", re.compile(r"\bprada\b", re.IGNORECASE)),
    ("Chanel", re.compile(r"\bchanel\b", re.IGNORECASE)),
    ("Neiman Marcus", re.compile(r"\bneiman\s+marcus\b", re.IGNORECASE)),
    ("Saks Fifth Avenue", re.compile(r"\bsaks\b", re.IGNORECASE)),
    ("NetJets", re.compile(r"\bnet\s?jets\b", re.IGNORECASE)),
    ("Private aviation", re.compile(r"\bprivate\s+(jet|aviation|charter)\b", re.IGNORECASE)),
    ("Aspen", re.compile(r"\baspen\b", re.IGNORECASE)),
    ("Nobu", re.compile(r"\bnobu\b", re.IGNORECASE)),
]

# Forensic dragnet keywords: fast first-pass suspects, not personal by themselves
SUSPICIOUS_KEYWORDS: List[str] = [
    "casino", "bet", "poker", "draftkings", "fanduel",
    "club", "nightclub", "bar", "liquor",
    "spa", "massage", "retreat",
    "luxury", "gucci", "lv", "prada", "rolex",
    "gift card", "donation", "charity",
    "amazon", "paypal", "venmo", "cash app",
    "withdrawal", "cash", "atm",
]

# Weekend charges for these are routine and not worth flagging
WEEKEND_EXEMPT_TERMS: List[str] = ["rent", "server", "subscription"]


def keyword_pattern(keyword: str) -> Pattern[str]:
    """Whole-word, case-insensitive pattern for a keyword or phrase, plurals included"""
    return re.compile(r"\b" + re.escape(keyword) + r"(?:s|es)?\b", re.IGNORECASE)
