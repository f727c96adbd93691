"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

DEFAULT_COURSE_FEE = Decimal("2000")
DEFAULT_DEFAULTER_THRESHOLD = 3
DEFAULT_SCAN_WORKERS = 8

LATE_FEE_CAP = Decimal("500")
LATE_FEE_RATE = Decimal("0.10")

# Notes accepted at the cash counter.
CASH_DENOMINATIONS = (500, 200, 100, 50, 20, 10)
SERIAL_TRACKED_DENOMINATION = 500

COURSE_FEES = {
    "MS-CIT": Decimal("3000"),
    "ADVANCE TALLY - CIT": Decimal("2500"),
    "ADVANCE TALLY - KLIC": Decimal("2500"),
    "ADVANCE EXCEL - CIT": Decimal("2000"),
    "ENGLISH TYPING - MKCL": Decimal("1500"),
    "ENGLISH TYPING - CIT": Decimal("1500"),
    "ENGLISH TYPING - GOVT": Decimal("1500"),
    "MARATHI TYPING - MKCL": Decimal("1500"),
    "MARATHI TYPING - CIT": Decimal("1500"),
    "MARATHI TYPING - GOVT": Decimal("1500"),
    "DTP - CIT": Decimal("2000"),
    "DTP - KLIC": Decimal("2000"),
    "IT - KLIC": Decimal("2500"),
    "KLIC DIPLOMA": Decimal("3500"),
}
