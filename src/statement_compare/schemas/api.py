"""Request/response schemas for the HTTP API."""

from pydantic import BaseModel, Field

from statement_compare.schemas.comparison import ComparisonInsights, ComparisonOptions, ComparisonResult
from statement_compare.schemas.converter import StatementUpload
from statement_compare.schemas.internal import (
    ParsedStatement,
    ProcessingStats,
    Transaction,
    ValidationReport,
)


class StatementConvertResult(BaseModel):
    """Converted statement with its consistency report."""

    statement: ParsedStatement
    validation: ValidationReport
    stats: ProcessingStats


class ComparisonRequest(BaseModel):
    """Two converter payloads to compare (statement1 is the baseline)."""

    statement1: StatementUpload
    statement2: StatementUpload
    options: ComparisonOptions | None = None


class ComparisonResponse(BaseModel):
    result: ComparisonResult
    insights: ComparisonInsights


class CategoryListResult(BaseModel):
    builtin: list[str]
    custom: list[str]
    labels: dict[str, str] = Field(description="Display label per built-in category")


class CustomCategoryRequest(BaseModel):
    name: str = Field(..., description="Custom category name")


class RecategorizeRequest(BaseModel):
    """Preview of assigning a transaction to a different category."""

    transaction: Transaction
    category: str = Field(..., description="Built-in or custom category")


class RecategorizeResponse(BaseModel):
    transaction: Transaction
    previous_category: str
    applied: bool = Field(
        False, description="Always false: comparisons are not recomputed from edits"
    )
