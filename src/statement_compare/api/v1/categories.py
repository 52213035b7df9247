"""Category listing and custom category management."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from statement_compare.api.deps import get_custom_categories
from statement_compare.categorization import CATEGORY_LABELS, CustomCategoryRegistry, get_available_categories
from statement_compare.core.exceptions import CategoryError
from statement_compare.schemas.api import CategoryListResult, CustomCategoryRequest

router = APIRouter(prefix="/categories", tags=["categories"])

Registry = Annotated[CustomCategoryRegistry, Depends(get_custom_categories)]


def _listing(registry: CustomCategoryRegistry) -> CategoryListResult:
    return CategoryListResult(
        builtin=get_available_categories(),
        custom=registry.names(),
        labels=dict(CATEGORY_LABELS),
    )


@router.get("", response_model=CategoryListResult, summary="List built-in and custom categories")
async def list_categories(registry: Registry) -> CategoryListResult:
    return _listing(registry)


@router.post(
    "/custom",
    response_model=CategoryListResult,
    status_code=status.HTTP_201_CREATED,
    summary="Add a custom category label",
    description="Custom categories can be picked when editing a transaction. "
    "They never change automatic categorization.",
)
async def add_custom_category(body: CustomCategoryRequest, registry: Registry) -> CategoryListResult:
    registry.add(body.name)
    return _listing(registry)


@router.delete("/custom/{name}", response_model=CategoryListResult, summary="Remove a custom category label")
async def remove_custom_category(name: str, registry: Registry) -> CategoryListResult:
    if not registry.remove(name):
        raise CategoryError("API_002", {"name": name}, message=f"Unknown custom category: {name}")
    return _listing(registry)
