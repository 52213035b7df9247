"""Statement conversion and comparison services."""

from .comparison import ComparisonEngine
from .statement import StatementProcessor

__all__ = ["ComparisonEngine", "StatementProcessor"]
