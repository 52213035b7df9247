"""Internal data schemas for converted statements.

These models represent a statement after the converter's rows have been
cleaned, signed into debit/credit and categorized. Amounts are dollars
rounded to cents; the sign lives in ``type``.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

TransactionType = Literal["debit", "credit"]


class Transaction(BaseModel):
    """A single categorized transaction."""

    model_config = ConfigDict(frozen=True)

    date: str = Field(..., description="Transaction date as returned by the converter")
    description: str = Field(..., description="Transaction description (may contain PII)")
    amount: float = Field(..., ge=0, description="Magnitude of the amount; sign is carried by type")
    category: str = Field(..., description="Spending category, or 'income' for credits")
    type: TransactionType = Field(..., description="'debit' or 'credit'")

    @field_validator("description")
    @classmethod
    def description_not_empty(cls, v: str) -> str:
        """Ensure description is not empty."""
        if not v or not v.strip():
            raise ValueError("Description cannot be empty")
        return v.strip()


class StatementSummary(BaseModel):
    """Totals and metadata derived from a statement's transactions."""

    total_deposits: float = Field(..., description="Sum of credit amounts (rounded to cents)")
    total_withdrawals: float = Field(..., description="Sum of debit amounts (rounded to cents)")
    start_date: str = Field(..., description="Earliest transaction date (YYYY-MM-DD)")
    end_date: str = Field(..., description="Latest transaction date (YYYY-MM-DD)")
    bank_name: str | None = Field(None, description="Bank guessed from the uploaded filename")
    account_number: str | None = Field(None, description="Masked account number (****1234)")


class CategoryBreakdown(BaseModel):
    """Transactions of one category with their total."""

    category: str
    total_amount: float
    transaction_count: int
    transactions: list[Transaction] = Field(
        default_factory=list, description="Transactions, newest first"
    )


class ParsedStatement(BaseModel):
    """A complete converted statement.

    Created once per uploaded file and owned by the request that produced it.
    """

    summary: StatementSummary
    transactions: list[Transaction] = Field(default_factory=list)
    categories: list[CategoryBreakdown] = Field(
        default_factory=list, description="Category breakdown, largest total first"
    )


class ValidationReport(BaseModel):
    """Result of the non-throwing statement consistency check."""

    is_valid: bool
    errors: list[str] = Field(default_factory=list)


class CategoryStat(BaseModel):
    category: str
    amount: float
    count: int


class ProcessingStats(BaseModel):
    """Quick statistics for logs and debugging views."""

    total_transactions: int
    date_range: str
    top_categories: list[CategoryStat]
    average_transaction_amount: float
