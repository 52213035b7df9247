"""Unit tests for ComparisonEngine."""

import json
import math

import pytest

from statement_compare.core.exceptions import ComparisonError
from statement_compare.schemas.comparison import ChangeKind, ComparisonOptions, ComparisonResult
from statement_compare.schemas.internal import ParsedStatement, StatementSummary, Transaction
from statement_compare.services.comparison import ComparisonEngine
from statement_compare.services.statement import StatementProcessor


def _row(result, category):
    return next(c for c in result.comparison if c.category == category)


@pytest.fixture
def result(january_statement, february_statement):
    return ComparisonEngine.compare_statements(january_statement, february_statement)


class TestCompareStatements:
    def test_union_of_categories_each_once(self, result):
        categories = [c.category for c in result.comparison]
        assert sorted(categories) == sorted(
            ["income", "groceries", "gas-transport", "subscriptions", "food-dining", "shopping", "health"]
        )
        assert len(categories) == len(set(categories))

    def test_sorted_by_absolute_difference(self, result):
        assert [c.category for c in result.comparison] == [
            "income",
            "groceries",
            "shopping",
            "gas-transport",
            "health",
            "subscriptions",
            "food-dining",
        ]
        diffs = [abs(c.difference) for c in result.comparison]
        assert all(a >= b for a, b in zip(diffs, diffs[1:]))

    def test_finite_change(self, result):
        groceries = _row(result, "groceries")
        assert groceries.statement1_total == 120.4
        assert groceries.statement2_total == 210.1
        assert groceries.difference == 89.7
        assert groceries.percent_change == 74.5
        assert groceries.change == ChangeKind.FINITE
        assert len(groceries.transactions1) == 1
        assert len(groceries.transactions2) == 1

        food = _row(result, "food-dining")
        assert food.difference == 6.5
        assert food.percent_change == 113.04

    def test_new_category_is_infinite(self, result):
        shopping = _row(result, "shopping")
        assert shopping.statement1_total == 0
        assert shopping.statement2_total == 64.99
        assert shopping.difference == 64.99
        assert math.isinf(shopping.percent_change) and shopping.percent_change > 0
        assert shopping.change == ChangeKind.NEW_CATEGORY
        assert shopping.transactions1 == []

    def test_discontinued_category(self, result):
        gas = _row(result, "gas-transport")
        assert gas.statement2_total == 0
        assert gas.difference == -40.0
        assert gas.percent_change == -100
        assert gas.change == ChangeKind.DISCONTINUED

    def test_walmart_scenario(self):
        statement1 = StatementProcessor.convert_to_internal_format(
            {"normalised": [{"date": "2024-01-01", "description": "Walmart", "amount": "-50.00"}]}, "a.pdf"
        )
        statement2 = StatementProcessor.convert_to_internal_format(
            {"normalised": [{"date": "2024-02-01", "description": "Payroll", "amount": "100.00"}]}, "b.pdf"
        )

        result = ComparisonEngine.compare_statements(statement1, statement2)

        groceries = _row(result, "groceries")
        assert groceries.statement1_total == 50
        assert groceries.statement2_total == 0
        assert groceries.difference == -50
        assert groceries.percent_change == -100

    def test_idempotent(self, january_statement, february_statement):
        first = ComparisonEngine.compare_statements(january_statement, february_statement)
        second = ComparisonEngine.compare_statements(january_statement, february_statement)
        assert first == second

    def test_inputs_not_mutated(self, january_statement, february_statement):
        before = january_statement.model_copy(deep=True)
        ComparisonEngine.compare_statements(
            january_statement, february_statement, ComparisonOptions(exclude_categories=["income"])
        )
        assert january_statement == before


class TestPreconditions:
    @pytest.mark.parametrize("position", [0, 1])
    def test_missing_statement(self, january_statement, position):
        args = [january_statement, january_statement]
        args[position] = None
        with pytest.raises(ComparisonError, match="required") as exc_info:
            ComparisonEngine.compare_statements(*args)
        assert exc_info.value.error_code == "CMP_001"

    def test_no_transactions(self, january_statement):
        empty = ParsedStatement(
            summary=StatementSummary(
                total_deposits=0, total_withdrawals=0, start_date="2024-01-01", end_date="2024-01-01"
            )
        )
        with pytest.raises(ComparisonError, match="Statement 2 has no transactions"):
            ComparisonEngine.compare_statements(january_statement, empty)

    def test_no_categories(self, january_statement):
        no_categories = january_statement.model_copy(update={"categories": []})
        with pytest.raises(ComparisonError, match="Statement 1 has no categories"):
            ComparisonEngine.compare_statements(no_categories, january_statement)


class TestFilters:
    def test_exclude_categories(self, january_statement, february_statement):
        result = ComparisonEngine.compare_statements(
            january_statement, february_statement, ComparisonOptions(exclude_categories=["income"])
        )
        assert "income" not in [c.category for c in result.comparison]
        assert result.statement1.summary.total_deposits == 0
        assert result.statement1.summary.total_withdrawals == 181.64
        assert len(result.statement1.transactions) == 4

    def test_include_only_categories(self, january_statement, february_statement):
        result = ComparisonEngine.compare_statements(
            january_statement, february_statement, {"include_only_categories": ["groceries"]}
        )
        assert [c.category for c in result.comparison] == ["groceries"]
        assert result.statement2.summary.total_withdrawals == 210.1

    def test_minimum_amount(self, january_statement, february_statement):
        result = ComparisonEngine.compare_statements(
            january_statement, february_statement, ComparisonOptions(minimum_amount=50)
        )
        assert sorted(t.description for t in result.statement1.transactions) == [
            "DIRECT DEPOSIT ACME PAYROLL",
            "WALMART SUPERCENTER",
        ]
        assert {c.category for c in result.comparison} == {"income", "groceries", "shopping"}

    def test_date_range(self, january_statement, february_statement):
        options = ComparisonOptions(date_range={"start": "2024-01-01", "end": "2024-01-10"})
        result = ComparisonEngine.compare_statements(january_statement, february_statement, options)

        assert len(result.statement1.transactions) == 3
        assert result.statement1.summary.end_date == "2024-01-10"
        assert result.statement2.transactions == []
        # Date range of an emptied statement is carried over from the source
        assert result.statement2.summary.start_date == "2024-02-03"
        assert all(c.change == ChangeKind.DISCONTINUED for c in result.comparison)

    def test_summary_metadata_kept(self, january_statement, february_statement):
        result = ComparisonEngine.compare_statements(
            january_statement, february_statement, ComparisonOptions(minimum_amount=100)
        )
        assert result.statement1.summary.bank_name == "Wells Fargo"
        assert result.statement1.summary.account_number == january_statement.summary.account_number


class TestExport:
    def test_csv(self, result):
        export = ComparisonEngine.export_comparison_data(result)
        lines = export.csv_content.splitlines()

        assert lines[0] == (
            "Category,Statement1Total,Statement2Total,Difference,PercentChange,"
            "TransactionCount1,TransactionCount2"
        )
        assert lines[1] == '"income",2500,2600,100,4,1,1'
        assert lines[2] == '"groceries",120.4,210.1,89.7,74.5,1,1'
        assert lines[3] == '"shopping",0,64.99,64.99,Infinity,0,1'
        assert len(lines) == 1 + len(result.comparison)

    def test_json_marks_new_categories(self, result):
        export = ComparisonEngine.export_comparison_data(result)
        payload = json.loads(export.json_content)

        shopping = next(c for c in payload["comparison"] if c["category"] == "shopping")
        assert shopping["percent_change"] is None
        assert shopping["change"] == "new_category"

    def test_json_round_trip_restores_infinity(self, result):
        export = ComparisonEngine.export_comparison_data(result)
        restored = ComparisonResult.model_validate_json(export.json_content)

        assert restored == result


def test_transactions_are_immutable(january_statement):
    txn: Transaction = january_statement.transactions[0]
    with pytest.raises(Exception):
        txn.amount = 1.0
