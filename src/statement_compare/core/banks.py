"""Bank metadata helpers."""

from __future__ import annotations

from typing import Final

# Filename fragment -> display name. Checked in order, first hit wins.
BANK_NAME_PATTERNS: Final[dict[str, str]] = {
    "chase": "Chase Bank",
    "wellsfargo": "Wells Fargo",
    "bofa": "Bank of America",
    "bankofamerica": "Bank of America",
    "citi": "Citibank",
    "usbank": "US Bank",
    "pnc": "PNC Bank",
    "regions": "Regions Bank",
    "suntrust": "SunTrust Bank",
    "ally": "Ally Bank",
    "schwab": "Charles Schwab",
    "fidelity": "Fidelity",
    "amex": "American Express",
}

UNKNOWN_BANK: Final[str] = "Unknown Bank"


def extract_bank_name(filename: str | None) -> str:
    if not filename:
        return UNKNOWN_BANK
    name = filename.lower()
    for pattern, bank_name in BANK_NAME_PATTERNS.items():
        if pattern in name:
            return bank_name
    return UNKNOWN_BANK
