"""Transaction edit endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from statement_compare.api.deps import get_custom_categories
from statement_compare.categorization import CustomCategoryRegistry
from statement_compare.core.exceptions import CategoryError
from statement_compare.schemas.api import RecategorizeRequest, RecategorizeResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.post(
    "/recategorize",
    response_model=RecategorizeResponse,
    summary="Preview a category change for one transaction",
    description="""
    Validates the new category against the built-in taxonomy plus the custom
    categories and returns the edited transaction. The edit is logged only;
    existing comparisons are not recomputed.
    """,
)
async def recategorize_transaction(
    body: RecategorizeRequest,
    registry: Annotated[CustomCategoryRegistry, Depends(get_custom_categories)],
) -> RecategorizeResponse:
    category = body.category.strip()
    if not registry.is_known(category):
        raise CategoryError("API_002", {"category": category})

    previous = body.transaction.category
    edited = body.transaction.model_copy(update={"category": category})
    logger.info(
        "Transaction category edited",
        extra={"category": category, "previous_category": previous},
    )
    return RecategorizeResponse(transaction=edited, previous_category=previous, applied=False)
