"""Statement comparison engine.

Compares two converted statements category by category, ranks the changes
and derives summary insights and plain-language recommendations.
"""

import logging
import math
from collections.abc import Mapping
from typing import Any

from statement_compare.config import settings
from statement_compare.core.dates import try_parse_date
from statement_compare.core.exceptions import ComparisonError
from statement_compare.core.money import round_money
from statement_compare.schemas.comparison import (
    CategoryComparison,
    ChangeKind,
    ComparisonExport,
    ComparisonInsights,
    ComparisonOptions,
    ComparisonResult,
    InsightsSummary,
    TrendItem,
    Trends,
)
from statement_compare.schemas.internal import CategoryBreakdown, ParsedStatement
from statement_compare.services.statement import StatementProcessor

logger = logging.getLogger(__name__)

# Category names are matched exactly, including case.
NON_SPENDING_CATEGORIES = ("Income", "Transfers & Investments")
INCOME_CATEGORY = "Income"
CATCH_ALL_CATEGORY = "Other"

# Recommendation thresholds (dollars / percent).
SIGNIFICANT_CHANGE_AMOUNT = 100
SIGNIFICANT_CHANGE_PERCENT = 20
EXPENSIVE_NEW_CATEGORY_AMOUNT = 200
SPENDING_SWING_AMOUNT = 500
INCOME_SWING_AMOUNT = 1000
MAX_RECOMMENDATIONS = 5

CSV_HEADER = (
    "Category,Statement1Total,Statement2Total,Difference,PercentChange,"
    "TransactionCount1,TransactionCount2"
)


def _percent_change(total1: float, total2: float) -> tuple[float, ChangeKind]:
    difference = total2 - total1
    if total1 > 0:
        if total2 == 0:
            return -100.0, ChangeKind.DISCONTINUED
        return round_money((difference / total1) * 100), ChangeKind.FINITE
    if total2 > 0:
        return math.inf, ChangeKind.NEW_CATEGORY
    return 0.0, ChangeKind.FINITE


def _percent_text(value: float) -> str:
    """Percent for recommendation text; an infinite change reads "new category" instead of "Infinity%"."""
    if not math.isfinite(value):
        return "new category"
    return f"{value:.1f}%"


def _csv_number(value: float) -> str:
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


class ComparisonEngine:
    """Category-level diff between two statements."""

    @staticmethod
    def compare_statements(
        statement1: ParsedStatement | None,
        statement2: ParsedStatement | None,
        options: ComparisonOptions | Mapping[str, Any] | None = None,
    ) -> ComparisonResult:
        """Compare two statements category by category.

        Args:
            statement1: Earlier (baseline) statement
            statement2: Later statement
            options: Optional filters applied to both statements first

        Returns:
            ComparisonResult whose rows are sorted by absolute difference

        Raises:
            ComparisonError: If a statement is missing or has no transactions
                or categories (CMP_001)
        """
        ComparisonEngine._validate_statements(statement1, statement2)

        if options is None:
            options = ComparisonOptions()
        elif not isinstance(options, ComparisonOptions):
            options = ComparisonOptions.model_validate(options)

        filtered1 = ComparisonEngine.apply_filters(statement1, options)
        filtered2 = ComparisonEngine.apply_filters(statement2, options)

        by_category1 = ComparisonEngine._index_categories(filtered1.categories)
        by_category2 = ComparisonEngine._index_categories(filtered2.categories)

        comparison: list[CategoryComparison] = []
        for category in ComparisonEngine.get_all_unique_categories(filtered1, filtered2):
            cat1 = by_category1.get(category)
            cat2 = by_category2.get(category)
            total1 = cat1.total_amount if cat1 else 0.0
            total2 = cat2.total_amount if cat2 else 0.0
            percent_change, change = _percent_change(total1, total2)

            comparison.append(
                CategoryComparison(
                    category=category,
                    statement1_total=round_money(total1),
                    statement2_total=round_money(total2),
                    difference=round_money(total2 - total1),
                    percent_change=percent_change,
                    change=change,
                    transactions1=list(cat1.transactions) if cat1 else [],
                    transactions2=list(cat2.transactions) if cat2 else [],
                )
            )

        # Stable: equal differences keep first-seen category order.
        comparison.sort(key=lambda c: abs(c.difference), reverse=True)

        logger.info("Statements compared", extra={"categories_count": len(comparison)})
        return ComparisonResult(statement1=filtered1, statement2=filtered2, comparison=comparison)

    @staticmethod
    def generate_insights(result: ComparisonResult) -> ComparisonInsights:
        """Summarize overall spending/income movement and notable categories."""
        comparison = result.comparison

        spending = [c for c in comparison if c.category not in NON_SPENDING_CATEGORIES]
        income = [c for c in comparison if c.category == INCOME_CATEGORY]

        spending1 = sum(c.statement1_total for c in spending)
        spending2 = sum(c.statement2_total for c in spending)
        spending_change = spending2 - spending1
        spending_change_percent = (spending_change / spending1) * 100 if spending1 > 0 else 0

        income1 = sum(c.statement1_total for c in income)
        income2 = sum(c.statement2_total for c in income)
        income_change = income2 - income1
        income_change_percent = (income_change / income1) * 100 if income1 > 0 else 0

        net_change = income_change - spending_change
        net_base = income1 - spending1
        net_change_percent = (net_change / net_base) * 100 if net_base > 0 else 0

        valid_changes = [
            c for c in comparison if math.isfinite(c.percent_change) and c.category != CATCH_ALL_CATEGORY
        ]
        increases = [c for c in valid_changes if c.difference > 0]
        decreases = [c for c in valid_changes if c.difference < 0]

        none = TrendItem(category="None", amount=0, percent=0)
        biggest_increase = none
        if increases:
            top = max(increases, key=lambda c: c.difference)
            biggest_increase = TrendItem(category=top.category, amount=top.difference, percent=top.percent_change)
        biggest_decrease = none
        if decreases:
            bottom = min(decreases, key=lambda c: c.difference)
            biggest_decrease = TrendItem(
                category=bottom.category, amount=bottom.difference, percent=bottom.percent_change
            )

        return ComparisonInsights(
            summary=InsightsSummary(
                total_spending_change=round_money(spending_change),
                total_spending_change_percent=round_money(spending_change_percent),
                total_income_change=round_money(income_change),
                total_income_change_percent=round_money(income_change_percent),
                net_change=round_money(net_change),
                net_change_percent=round_money(net_change_percent),
            ),
            trends=Trends(
                biggest_increase=biggest_increase,
                biggest_decrease=biggest_decrease,
                new_categories=[
                    c.category for c in comparison if c.statement1_total == 0 and c.statement2_total > 0
                ],
                disappeared_categories=[
                    c.category for c in comparison if c.statement1_total > 0 and c.statement2_total == 0
                ],
            ),
            recommendations=ComparisonEngine.generate_recommendations(result),
        )

    @staticmethod
    def generate_recommendations(result: ComparisonResult, currency: str | None = None) -> list[str]:
        """Build up to five recommendations from a fixed rule cascade."""
        symbol = settings.currency_symbol if currency is None else currency
        comparison = result.comparison
        recommendations: list[str] = []

        significant_increases = [
            c
            for c in comparison
            if c.difference > SIGNIFICANT_CHANGE_AMOUNT
            and c.percent_change > SIGNIFICANT_CHANGE_PERCENT
            and c.category not in NON_SPENDING_CATEGORIES
        ]
        significant_decreases = [
            c
            for c in comparison
            if c.difference < -SIGNIFICANT_CHANGE_AMOUNT
            and c.percent_change < -SIGNIFICANT_CHANGE_PERCENT
            and c.category not in NON_SPENDING_CATEGORIES
        ]

        if significant_increases:
            top = significant_increases[0]
            recommendations.append(
                f"Consider reviewing your {top.category} spending - it increased by "
                f"{symbol}{abs(top.difference):.2f} ({_percent_text(top.percent_change)})"
            )

        if significant_decreases:
            top = significant_decreases[0]
            recommendations.append(
                f"Great job reducing {top.category} spending by "
                f"{symbol}{abs(top.difference):.2f} ({_percent_text(abs(top.percent_change))})"
            )

        expensive_new = [
            c for c in comparison if c.statement1_total == 0 and c.statement2_total > EXPENSIVE_NEW_CATEGORY_AMOUNT
        ]
        if expensive_new:
            first = expensive_new[0]
            recommendations.append(
                f"New spending area detected: {first.category} ({symbol}{first.statement2_total:.2f})"
            )

        spending_change = sum(c.difference for c in comparison if c.category not in NON_SPENDING_CATEGORIES)
        if spending_change > SPENDING_SWING_AMOUNT:
            recommendations.append(
                f"Overall spending increased by {symbol}{spending_change:.2f} - consider creating a budget plan"
            )
        elif spending_change < -SPENDING_SWING_AMOUNT:
            recommendations.append(
                f"Excellent! You reduced overall spending by {symbol}{abs(spending_change):.2f}"
            )

        income_change = sum(c.difference for c in comparison if c.category == INCOME_CATEGORY)
        if income_change > INCOME_SWING_AMOUNT:
            recommendations.append(
                f"Income increased by {symbol}{income_change:.2f} - consider increasing savings or investments"
            )
        elif income_change < -INCOME_SWING_AMOUNT:
            recommendations.append(
                f"Income decreased by {symbol}{abs(income_change):.2f} - review spending priorities"
            )

        return recommendations[:MAX_RECOMMENDATIONS]

    @staticmethod
    def get_all_unique_categories(statement1: ParsedStatement, statement2: ParsedStatement) -> list[str]:
        """Union of category names, in first-seen order."""
        seen: dict[str, None] = {}
        for breakdown in (*statement1.categories, *statement2.categories):
            seen.setdefault(breakdown.category, None)
        return list(seen)

    @staticmethod
    def apply_filters(statement: ParsedStatement, options: ComparisonOptions) -> ParsedStatement:
        """Project a statement through the filters, recomputing its breakdown and summary.

        The input statement is left untouched.
        """
        transactions = list(statement.transactions)

        if options.exclude_categories:
            excluded = set(options.exclude_categories)
            transactions = [t for t in transactions if t.category not in excluded]

        if options.include_only_categories:
            included = set(options.include_only_categories)
            transactions = [t for t in transactions if t.category in included]

        if options.minimum_amount is not None:
            transactions = [t for t in transactions if t.amount >= options.minimum_amount]

        if options.date_range is not None:
            start, end = options.date_range.start, options.date_range.end
            kept = []
            for txn in transactions:
                txn_date = try_parse_date(txn.date)
                if txn_date is not None and start <= txn_date <= end:
                    kept.append(txn)
            transactions = kept

        return ParsedStatement(
            summary=StatementProcessor.calculate_summary(transactions, base=statement.summary),
            transactions=transactions,
            categories=StatementProcessor.group_by_category(transactions),
        )

    @staticmethod
    def export_comparison_data(result: ComparisonResult) -> ComparisonExport:
        """Render the comparison rows as CSV and the whole result as JSON."""
        lines = [CSV_HEADER]
        for c in result.comparison:
            category = c.category.replace('"', '""')
            lines.append(
                f'"{category}",{_csv_number(c.statement1_total)},{_csv_number(c.statement2_total)},'
                f"{_csv_number(c.difference)},{_csv_number(c.percent_change)},"
                f"{len(c.transactions1)},{len(c.transactions2)}"
            )

        return ComparisonExport(
            csv_content="\n".join(lines),
            json_content=result.model_dump_json(indent=2),
        )

    @staticmethod
    def _index_categories(categories: list[CategoryBreakdown]) -> dict[str, CategoryBreakdown]:
        index: dict[str, CategoryBreakdown] = {}
        for breakdown in categories:
            index.setdefault(breakdown.category, breakdown)
        return index

    @staticmethod
    def _validate_statements(statement1: ParsedStatement | None, statement2: ParsedStatement | None) -> None:
        if statement1 is None or statement2 is None:
            raise ComparisonError("CMP_001", message="Both statements are required for comparison")

        for number, statement in ((1, statement1), (2, statement2)):
            if not statement.transactions:
                raise ComparisonError(
                    "CMP_001", {"statement": number}, message=f"Statement {number} has no transactions"
                )
        for number, statement in ((1, statement1), (2, statement2)):
            if not statement.categories:
                raise ComparisonError(
                    "CMP_001", {"statement": number}, message=f"Statement {number} has no categories"
                )
