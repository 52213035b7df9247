"""Schemas for statement comparisons and derived insights."""

import math
from datetime import date
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_serializer, model_validator

from statement_compare.schemas.internal import ParsedStatement, Transaction


class DateRange(BaseModel):
    start: date
    end: date


class ComparisonOptions(BaseModel):
    """Optional filters applied to both statements before comparing."""

    exclude_categories: list[str] = Field(default_factory=list)
    include_only_categories: list[str] = Field(default_factory=list)
    minimum_amount: float | None = Field(None, description="Drop transactions below this amount")
    date_range: DateRange | None = Field(None, description="Inclusive date window")


class ChangeKind(str, Enum):
    """How a category moved between the two statements.

    ``new_category`` rows carry an infinite ``percent_change``, which JSON
    cannot represent; the tag keeps the meaning when it is serialised as null.
    """

    FINITE = "finite"
    NEW_CATEGORY = "new_category"
    DISCONTINUED = "discontinued"


class CategoryComparison(BaseModel):
    category: str
    statement1_total: float
    statement2_total: float
    difference: float = Field(..., description="statement2_total - statement1_total")
    percent_change: float = Field(..., description="Percent change; inf for a new category")
    change: ChangeKind
    transactions1: list[Transaction] = Field(default_factory=list)
    transactions2: list[Transaction] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def restore_infinite_percent(cls, data: Any) -> Any:
        """Turn a serialised ``null`` back into ``inf`` for new categories."""
        if isinstance(data, dict) and data.get("percent_change") is None:
            if data.get("change") in (ChangeKind.NEW_CATEGORY, ChangeKind.NEW_CATEGORY.value):
                data = {**data, "percent_change": math.inf}
        return data

    @field_serializer("percent_change", when_used="json")
    def serialize_percent_change(self, value: float) -> float | None:
        return value if math.isfinite(value) else None


class ComparisonResult(BaseModel):
    statement1: ParsedStatement
    statement2: ParsedStatement
    comparison: list[CategoryComparison] = Field(
        default_factory=list, description="One row per category, largest absolute change first"
    )


class InsightsSummary(BaseModel):
    total_spending_change: float
    total_spending_change_percent: float
    total_income_change: float
    total_income_change_percent: float
    net_change: float
    net_change_percent: float


class TrendItem(BaseModel):
    category: str
    amount: float
    percent: float


class Trends(BaseModel):
    biggest_increase: TrendItem
    biggest_decrease: TrendItem
    new_categories: list[str] = Field(default_factory=list)
    disappeared_categories: list[str] = Field(default_factory=list)


class ComparisonInsights(BaseModel):
    summary: InsightsSummary
    trends: Trends
    recommendations: list[str] = Field(default_factory=list, max_length=5)


class ComparisonExport(BaseModel):
    csv_content: str
    json_content: str
