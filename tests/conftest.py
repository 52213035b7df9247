import sys
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

sys.path.append(str(Path(__file__).parents[1] / "src"))

from statement_compare.config import Settings
from statement_compare.main import create_app
from statement_compare.services.statement import StatementProcessor


def _row(date: str, description: str, amount: str) -> dict:
    return {"date": date, "description": description, "amount": amount}


@pytest.fixture
def january_response() -> dict:
    """Converter payload for a January checking statement."""
    return {
        "normalised": [
            _row("2024-01-02", "STARBUCKS STORE 1234", "-5.75"),
            _row("2024-01-05", "WALMART SUPERCENTER", "-120.40"),
            _row("2024-01-10", "DIRECT DEPOSIT ACME PAYROLL", "2500.00"),
            _row("2024-01-15", "NETFLIX.COM", "-15.49"),
            _row("2024-01-20", "CIRCLE K 4455", "-40.00"),
        ]
    }


@pytest.fixture
def february_response() -> dict:
    """Converter payload for the following month."""
    return {
        "normalised": [
            _row("2024-02-03", "STARBUCKS STORE 1234", "-12.25"),
            _row("2024-02-06", "FRYS FOOD #88", "-210.10"),
            _row("2024-02-10", "DIRECT DEPOSIT ACME PAYROLL", "2600.00"),
            _row("2024-02-18", "CVS PHARMACY", "-30.00"),
            _row("2024-02-25", "AMAZON MKTPLACE", "-64.99"),
        ]
    }


@pytest.fixture
def january_statement(january_response):
    return StatementProcessor.convert_to_internal_format(january_response, "wellsfargo_jan_2024.pdf")


@pytest.fixture
def february_statement(february_response):
    return StatementProcessor.convert_to_internal_format(february_response, "wellsfargo_feb_2024.pdf")


@pytest.fixture
def app():
    """Fresh app (and custom category registry) per test."""
    return create_app(Settings(custom_categories=[]))


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
