"""Statement conversion endpoints."""

import logging

from fastapi import APIRouter

from statement_compare.schemas.api import StatementConvertResult
from statement_compare.schemas.converter import StatementUpload
from statement_compare.schemas.internal import ParsedStatement, ValidationReport
from statement_compare.services.statement import StatementProcessor

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/statements", tags=["statements"])


@router.post(
    "/convert",
    response_model=StatementConvertResult,
    summary="Convert converter output into a categorized statement",
    description="""
    Takes the JSON the PDF converter produced for one statement
    (`{"normalised": [{date, description, amount}, ...]}`) and returns the
    categorized statement, its consistency report and quick statistics.

    Malformed rows are skipped. A payload with no usable rows fails with
    `PARSE_002`.
    """,
)
async def convert_statement(upload: StatementUpload) -> StatementConvertResult:
    statement = StatementProcessor.convert_to_internal_format(upload.response, upload.filename)
    validation = StatementProcessor.validate_parsed_statement(statement)
    if not validation.is_valid:
        logger.warning("Converted statement failed validation", extra={"reason": "; ".join(validation.errors)})
    return StatementConvertResult(
        statement=statement,
        validation=validation,
        stats=StatementProcessor.get_processing_stats(statement),
    )


@router.post(
    "/validate",
    response_model=ValidationReport,
    summary="Check a converted statement for consistency",
)
async def validate_statement(statement: ParsedStatement) -> ValidationReport:
    return StatementProcessor.validate_parsed_statement(statement)
