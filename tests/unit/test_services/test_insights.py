"""Unit tests for comparison insights and recommendations."""

import pytest

from statement_compare.schemas.internal import ParsedStatement, Transaction
from statement_compare.services.comparison import ComparisonEngine
from statement_compare.services.statement import StatementProcessor


def _statement(day: str, amounts: dict[str, float]) -> ParsedStatement:
    transactions = [
        Transaction(
            date=day,
            description=f"{category} activity",
            amount=amount,
            category=category,
            type="credit" if category == "Income" else "debit",
        )
        for category, amount in amounts.items()
    ]
    return ParsedStatement(
        summary=StatementProcessor.calculate_summary(transactions, "statement.pdf"),
        transactions=transactions,
        categories=StatementProcessor.group_by_category(transactions),
    )


@pytest.fixture
def growth_result():
    statement1 = _statement("2024-01-15", {"Income": 3000, "Dining": 400, "Travel": 150, "Other": 50})
    statement2 = _statement(
        "2024-02-15", {"Income": 4200, "Dining": 150, "Travel": 800, "Other": 300, "Gym": 250}
    )
    return ComparisonEngine.compare_statements(statement1, statement2)


@pytest.fixture
def shrink_result():
    statement1 = _statement("2024-01-15", {"Income": 5000, "Rent": 2000})
    statement2 = _statement("2024-02-15", {"Income": 3500, "Rent": 1400})
    return ComparisonEngine.compare_statements(statement1, statement2)


class TestGenerateInsights:
    def test_rows_sorted_with_stable_ties(self, growth_result):
        assert [c.category for c in growth_result.comparison] == ["Income", "Travel", "Dining", "Other", "Gym"]

    def test_summary(self, growth_result):
        summary = ComparisonEngine.generate_insights(growth_result).summary

        assert summary.total_spending_change == 900
        assert summary.total_spending_change_percent == 150
        assert summary.total_income_change == 1200
        assert summary.total_income_change_percent == 40
        assert summary.net_change == 300
        assert summary.net_change_percent == 12.5

    def test_trends(self, growth_result):
        trends = ComparisonEngine.generate_insights(growth_result).trends

        assert trends.biggest_increase.category == "Income"
        assert trends.biggest_increase.amount == 1200
        assert trends.biggest_increase.percent == 40
        assert trends.biggest_decrease.category == "Dining"
        assert trends.biggest_decrease.amount == -250
        assert trends.biggest_decrease.percent == -62.5
        assert trends.new_categories == ["Gym"]
        assert trends.disappeared_categories == []

    def test_shrinking_statement(self, shrink_result):
        insights = ComparisonEngine.generate_insights(shrink_result)

        assert insights.summary.total_spending_change == -600
        assert insights.summary.total_spending_change_percent == -30
        assert insights.summary.total_income_change == -1500
        assert insights.summary.net_change == -900
        assert insights.summary.net_change_percent == -30
        assert insights.trends.biggest_increase.category == "None"
        assert insights.trends.biggest_increase.amount == 0
        assert insights.trends.biggest_decrease.category == "Income"
        assert insights.trends.biggest_decrease.amount == -1500

    def test_catch_all_excluded_from_trends(self):
        statement1 = _statement("2024-01-15", {"Other": 100, "Dining": 100})
        statement2 = _statement("2024-02-15", {"Other": 900, "Dining": 120})
        insights = ComparisonEngine.generate_insights(ComparisonEngine.compare_statements(statement1, statement2))

        assert insights.trends.biggest_increase.category == "Dining"

    def test_lowercase_income_counts_as_spending(self, january_statement, february_statement):
        result = ComparisonEngine.compare_statements(january_statement, february_statement)
        summary = ComparisonEngine.generate_insights(result).summary

        assert summary.total_income_change == 0
        assert summary.total_spending_change == pytest.approx(235.7)


class TestGenerateRecommendations:
    def test_full_cascade(self, growth_result):
        assert ComparisonEngine.generate_recommendations(growth_result, currency="$") == [
            "Consider reviewing your Travel spending - it increased by $650.00 (433.3%)",
            "Great job reducing Dining spending by $250.00 (62.5%)",
            "New spending area detected: Gym ($250.00)",
            "Overall spending increased by $900.00 - consider creating a budget plan",
            "Income increased by $1200.00 - consider increasing savings or investments",
        ]

    def test_decreases(self, shrink_result):
        assert ComparisonEngine.generate_recommendations(shrink_result, currency="$") == [
            "Great job reducing Rent spending by $600.00 (30.0%)",
            "Excellent! You reduced overall spending by $600.00",
            "Income decreased by $1500.00 - review spending priorities",
        ]

    def test_currency_symbol(self, shrink_result):
        recommendations = ComparisonEngine.generate_recommendations(shrink_result, currency="€")
        assert recommendations[0] == "Great job reducing Rent spending by €600.00 (30.0%)"

    def test_new_category_percent_text(self):
        statement1 = _statement("2024-01-15", {"Dining": 50})
        statement2 = _statement("2024-02-15", {"Dining": 50, "Gym": 150})
        recommendations = ComparisonEngine.generate_recommendations(
            ComparisonEngine.compare_statements(statement1, statement2), currency="$"
        )

        assert recommendations == ["Consider reviewing your Gym spending - it increased by $150.00 (new category)"]

    def test_no_changes(self):
        statement = _statement("2024-01-15", {"Income": 1000, "Dining": 200})
        result = ComparisonEngine.compare_statements(statement, statement)

        assert ComparisonEngine.generate_recommendations(result) == []
        assert ComparisonEngine.generate_insights(result).recommendations == []
