"""API version 1 routes."""

from fastapi import APIRouter

from statement_compare.api.v1 import categories, comparisons, statements, transactions

router = APIRouter(prefix="/api/v1")

router.include_router(statements.router)
router.include_router(comparisons.router)
router.include_router(categories.router)
router.include_router(transactions.router)
