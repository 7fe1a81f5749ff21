"""
Demo dataset: Acme Distribution LLC with intentional red flags.

- December revenue booked $100k above what reached the bank
- Five personal expenses hidden in business categories
- One major customer losing 60% of its spend
"""

from typing import List

from redflag.domain.models import BankTransaction, CustomerData, LedgerEntry

DEMO_COMPANY = {
    "name": "Acme Distribution LLC",
    "industry": "Wholesale Distribution",
    "asking_price": 2_500_000,
}

DEMO_REPORTED_NET_INCOME = 185_000
DEMO_OTHER_ADJUSTMENTS = 15_000

DEMO_MONTHS = ["2024-07", "2024-08", "2024-09", "2024-10", "2024-11", "2024-12"]

# Lease and payroll land on weekdays
_LEASE_DAYS = ["02", "02", "03", "02", "04", "02"]
_PAYROLL_DAYS = ["26", "30", "27", "25", "29", "27"]

# (product sales, service revenue, customer payments) per month
_MONTHLY_FIGURES = [
    (68_400, 19_200, 84_900),
    (71_250, 17_800, 86_300),
    (65_900, 21_400, 85_100),
    (73_100, 18_650, 89_800),
    (69_800, 20_300, 88_400),
    (170_500, 19_900, 88_700),
]

DEMO_PERSONAL_EXPENSES = [
    ("2024-11-15", "Walt Disney World", "Office Supplies", 5_000),
    ("2024-10-22", "Porsche Leasing", "Vehicle Expenses", 2_000),
    ("2024-09-10", "Ritz Carlton Spa", "Employee Wellness", 850),
    ("2024-08-05", "Private School Tuition - St. Andrews", "Training & Education", 12_500),
    ("2024-07-18", "Family Vacation Resort", "Team Building", 3_200),
]


def demo_ledger_entries() -> List[LedgerEntry]:
    entries: List[LedgerEntry] = []
    for month, (product, service, _), lease_day, payroll_day in zip(
        DEMO_MONTHS, _MONTHLY_FIGURES, _LEASE_DAYS, _PAYROLL_DAYS
    ):
        entries.append(LedgerEntry(f"{month}-15", "Product Sales", "Revenue", product, "revenue"))
        entries.append(LedgerEntry(f"{month}-28", "Service Revenue", "Revenue", service, "revenue"))
        entries.append(LedgerEntry(f"{month}-{lease_day}", "Warehouse Lease", "Rent", 12_000, "expense"))
        entries.append(LedgerEntry(f"{month}-{payroll_day}", "Payroll", "Wages", 38_500, "expense"))

    for day, vendor, category, amount in DEMO_PERSONAL_EXPENSES:
        entries.append(LedgerEntry(day, vendor, category, amount, "expense"))
    return entries


def demo_bank_transactions() -> List[BankTransaction]:
    transactions: List[BankTransaction] = []
    for month, (_, _, deposits), payroll_day in zip(DEMO_MONTHS, _MONTHLY_FIGURES, _PAYROLL_DAYS):
        transactions.append(BankTransaction(f"{month}-20", "Customer Payments", deposits, "deposit"))
        transactions.append(BankTransaction(f"{month}-{payroll_day}", "Payroll", 38_500, "withdrawal"))
    return transactions


def demo_customers() -> List[CustomerData]:
    return [
        CustomerData("Big Box Retail Co", 45_000, 42_000, 18_000, "down", -60, True),
        CustomerData("Metro Supplies Inc", 32_000, 35_000, 38_000, "up", 19, False),
        CustomerData("Regional Hardware", 28_000, 27_500, 29_000, "stable", 4, False),
        CustomerData("Central Distributors", 22_000, 21_000, 20_500, "down", -7, False),
        CustomerData("Quick Ship Logistics", 18_000, 19_500, 21_000, "up", 17, False),
    ]
