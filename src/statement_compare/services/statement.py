"""Statement processing service.

Turns the converter's normalised rows into a categorized statement:
1. Clean and sign each row (malformed rows are skipped)
2. Categorize debits; every credit is income
3. Summarize deposits, withdrawals and the covered date range
4. Group transactions into a category breakdown
"""

import logging
import math
import re
from collections.abc import Iterable, Mapping
from datetime import date
from typing import Any

from pydantic import BaseModel

from statement_compare.categorization.rules import DEFAULT_CATEGORY, INCOME_CATEGORY, categorize
from statement_compare.core.banks import extract_bank_name
from statement_compare.core.dates import try_parse_date
from statement_compare.core.exceptions import ValidationError
from statement_compare.core.money import round_money
from statement_compare.schemas.internal import (
    CategoryBreakdown,
    CategoryStat,
    ParsedStatement,
    ProcessingStats,
    StatementSummary,
    Transaction,
    ValidationReport,
)

logger = logging.getLogger(__name__)

# e.g. "ONLINE TRANSFER TO SAVINGS ACCOUNT ENDING IN 4821"
_ACCOUNT_PATTERN = re.compile(r"(?:ending|ending in|acct|account).*?(\d{4})")
_ACCOUNT_SCAN_LIMIT = 5
_TOTALS_TOLERANCE = 0.01


def _parse_amount(raw: Any) -> float | None:
    """Parse a signed decimal amount; None when it is not a finite number."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
    elif isinstance(raw, str):
        text = raw.strip().replace("$", "").replace(",", "")
        # float() also takes digit-group underscores
        if "_" in text:
            return None
        try:
            value = float(text)
        except ValueError:
            return None
    else:
        return None
    return value if math.isfinite(value) else None


def _date_sort_key(txn: Transaction) -> date:
    return try_parse_date(txn.date) or date.min


class StatementProcessor:
    """Converts converter output into :class:`ParsedStatement` objects.

    All methods are pure; the class only groups them.
    """

    @classmethod
    def convert_to_internal_format(
        cls, api_response: Mapping[str, Any] | BaseModel | None, filename: str
    ) -> ParsedStatement:
        """Convert a converter response into a categorized statement.

        Args:
            api_response: ``{"normalised": [{date, description, amount}, ...]}``
            filename: Uploaded filename, used to guess the bank

        Returns:
            ParsedStatement with summary, transactions and category breakdown

        Raises:
            ValidationError: If ``normalised`` is missing or not a list (PARSE_001),
                or no row survives conversion (PARSE_002)
        """
        if isinstance(api_response, BaseModel):
            api_response = api_response.model_dump()

        records = api_response.get("normalised") if isinstance(api_response, Mapping) else None
        if not isinstance(records, list):
            raise ValidationError("PARSE_001", {"filename": filename})

        transactions = [
            txn for txn in (cls.convert_api_transaction(record) for record in records) if txn is not None
        ]
        skipped = len(records) - len(transactions)

        if not transactions:
            raise ValidationError("PARSE_002", {"filename": filename, "records": len(records)})

        summary = cls.calculate_summary(transactions, filename)
        categories = cls.group_by_category(transactions)

        logger.info(
            "Statement converted",
            extra={
                "transactions_count": len(transactions),
                "skipped_count": skipped,
                "categories_count": len(categories),
            },
        )
        return ParsedStatement(summary=summary, transactions=transactions, categories=categories)

    @staticmethod
    def convert_api_transaction(record: Mapping[str, Any] | Any) -> Transaction | None:
        """Convert a single converter row, or return None when it is unusable."""
        if isinstance(record, BaseModel):
            record = record.model_dump()
        if not isinstance(record, Mapping):
            logger.warning("Skipping transaction: not an object", extra={"reason": "not_mapping"})
            return None

        description = record.get("description")
        raw_amount = record.get("amount")
        if not isinstance(description, str) or not description.strip() or raw_amount is None:
            logger.warning("Skipping transaction with missing required fields", extra={"reason": "missing_fields"})
            return None

        amount = _parse_amount(raw_amount)
        if amount is None:
            logger.warning("Skipping transaction with invalid amount", extra={"reason": "invalid_amount"})
            return None

        raw_date = record.get("date")
        if try_parse_date(raw_date) is None:
            logger.warning("Skipping transaction with invalid date", extra={"reason": "invalid_date"})
            return None

        is_withdrawal = amount < 0

        # Deposits are never keyword-categorized.
        category = INCOME_CATEGORY
        if is_withdrawal:
            category = categorize(description)
            if category == INCOME_CATEGORY:
                category = DEFAULT_CATEGORY

        return Transaction(
            date=raw_date,
            description=description.strip(),
            amount=abs(amount),
            category=category,
            type="debit" if is_withdrawal else "credit",
        )

    @staticmethod
    def calculate_summary(
        transactions: list[Transaction],
        filename: str | None = None,
        base: StatementSummary | None = None,
    ) -> StatementSummary:
        """Summarize totals and the covered date range.

        When ``base`` is given its bank and account are kept, and so is its
        date range if no transaction has a usable date.
        """
        deposits = sum(t.amount for t in transactions if t.type == "credit")
        withdrawals = sum(t.amount for t in transactions if t.type == "debit")

        valid_dates = sorted(d for d in (try_parse_date(t.date) for t in transactions) if d is not None)
        if valid_dates:
            start_date = valid_dates[0].isoformat()
            end_date = valid_dates[-1].isoformat()
        elif base is not None:
            start_date, end_date = base.start_date, base.end_date
        else:
            start_date = end_date = date.today().isoformat()

        if base is not None:
            bank_name, account_number = base.bank_name, base.account_number
        else:
            bank_name = extract_bank_name(filename)
            account_number = StatementProcessor.extract_account_number(transactions)

        return StatementSummary(
            total_deposits=round_money(deposits),
            total_withdrawals=round_money(withdrawals),
            start_date=start_date,
            end_date=end_date,
            bank_name=bank_name,
            account_number=account_number,
        )

    @staticmethod
    def group_by_category(transactions: Iterable[Transaction]) -> list[CategoryBreakdown]:
        """Group transactions by category, largest total first."""
        groups: dict[str, list[Transaction]] = {}
        for txn in transactions:
            groups.setdefault(txn.category, []).append(txn)

        breakdown = [
            CategoryBreakdown(
                category=category,
                total_amount=round_money(sum(t.amount for t in members)),
                transaction_count=len(members),
                transactions=sorted(members, key=_date_sort_key, reverse=True),
            )
            for category, members in groups.items()
        ]
        breakdown.sort(key=lambda c: c.total_amount, reverse=True)
        return breakdown

    @staticmethod
    def extract_account_number(transactions: list[Transaction]) -> str:
        """Find a masked account number in the first few descriptions."""
        for txn in transactions[:_ACCOUNT_SCAN_LIMIT]:
            match = _ACCOUNT_PATTERN.search(txn.description.lower())
            if match:
                return f"****{match.group(1)}"
        return "Unknown"

    @staticmethod
    def validate_parsed_statement(statement: ParsedStatement) -> ValidationReport:
        """Check a statement for internal consistency without raising."""
        errors: list[str] = []
        summary = statement.summary

        if not statement.transactions:
            errors.append("No transactions found")

        if not statement.categories:
            errors.append("No categories generated")

        calculated_deposits = sum(t.amount for t in statement.transactions if t.type == "credit")
        calculated_withdrawals = sum(t.amount for t in statement.transactions if t.type == "debit")

        if abs(calculated_deposits - summary.total_deposits) > _TOTALS_TOLERANCE:
            errors.append(
                f"Deposit calculation mismatch: expected {calculated_deposits}, got {summary.total_deposits}"
            )
        if abs(calculated_withdrawals - summary.total_withdrawals) > _TOTALS_TOLERANCE:
            errors.append(
                f"Withdrawal calculation mismatch: expected {calculated_withdrawals}, "
                f"got {summary.total_withdrawals}"
            )

        start = try_parse_date(summary.start_date)
        end = try_parse_date(summary.end_date)
        if start is None:
            errors.append("Invalid start date format")
        if end is None:
            errors.append("Invalid end date format")
        if start is not None and end is not None and start > end:
            errors.append("Start date is after end date")

        return ValidationReport(is_valid=not errors, errors=errors)

    @staticmethod
    def get_processing_stats(statement: ParsedStatement) -> ProcessingStats:
        top_categories = [
            CategoryStat(category=c.category, amount=c.total_amount, count=c.transaction_count)
            for c in statement.categories[:5]
        ]
        total_amount = sum(t.amount for t in statement.transactions)
        average = round_money(total_amount / len(statement.transactions)) if statement.transactions else 0

        return ProcessingStats(
            total_transactions=len(statement.transactions),
            date_range=f"{statement.summary.start_date} to {statement.summary.end_date}",
            top_categories=top_categories,
            average_transaction_amount=average,
        )
