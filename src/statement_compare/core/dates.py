"""Date parsing for converter output.

The converter returns dates as free-form strings. We keep the original
string on each transaction and only parse it for ordering and ranges.
"""

from datetime import date, datetime

# Tried in order after ISO 8601.
DATE_FORMATS = [
    "%Y/%m/%d",  # 2024/01/15
    "%m/%d/%Y",  # 01/15/2024
    "%m/%d/%y",  # 01/15/24
    "%m-%d-%Y",  # 01-15-2024
    "%b %d, %Y",  # Jan 15, 2024
    "%B %d, %Y",  # January 15, 2024
    "%b %d %Y",  # Jan 15 2024
    "%d %b %Y",  # 15 Jan 2024
    "%d %B %Y",  # 15 January 2024
]


def parse_date(text: str | None) -> date:
    """Parse a statement date.

    Args:
        text: Date string

    Returns:
        Parsed date

    Raises:
        ValueError: If date cannot be parsed
    """
    if not isinstance(text, str) or not text.strip():
        raise ValueError(f"Could not parse date: {text!r}")
    text = text.strip()

    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass

    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue

    raise ValueError(f"Could not parse date: {text}")


def try_parse_date(text: str | None) -> date | None:
    try:
        return parse_date(text)
    except ValueError:
        return None
