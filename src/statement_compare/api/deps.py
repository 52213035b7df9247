"""Shared FastAPI dependencies."""

from fastapi import Request

from statement_compare.categorization.custom import CustomCategoryRegistry


def get_custom_categories(request: Request) -> CustomCategoryRegistry:
    """Registry of custom category labels owned by the running app."""
    return request.app.state.custom_categories
