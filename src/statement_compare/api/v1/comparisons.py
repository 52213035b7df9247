"""Statement comparison endpoints."""

import logging
from typing import Annotated, Literal

from fastapi import APIRouter, Query
from fastapi.responses import Response

from statement_compare.core.exceptions import ComparisonError, ValidationError
from statement_compare.schemas.api import ComparisonRequest, ComparisonResponse
from statement_compare.schemas.comparison import ComparisonResult
from statement_compare.services.comparison import ComparisonEngine
from statement_compare.services.statement import StatementProcessor

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/comparisons", tags=["comparisons"])


@router.post(
    "",
    response_model=ComparisonResponse,
    summary="Compare two statements",
    description="""
    Converts both converter payloads, compares them category by category and
    derives insights.

    ## Percent change
    - `change = "new_category"`: the category only exists in statement 2;
      `percent_change` is serialised as `null`
    - `change = "discontinued"`: the category vanished (`-100`)
    - `change = "finite"`: regular percentage
    """,
)
async def compare_statements(request: ComparisonRequest) -> ComparisonResponse:
    upload1, upload2 = request.statement1, request.statement2
    # Same name and same content: the same file was picked twice.
    if upload1.filename == upload2.filename and upload1.response == upload2.response:
        raise ComparisonError(
            "CMP_001",
            {"filename": upload1.filename},
            message="Please select two different files for comparison",
        )

    statement1 = StatementProcessor.convert_to_internal_format(upload1.response, upload1.filename)
    statement2 = StatementProcessor.convert_to_internal_format(upload2.response, upload2.filename)

    result = ComparisonEngine.compare_statements(statement1, statement2, request.options)

    for number, statement in ((1, result.statement1), (2, result.statement2)):
        report = StatementProcessor.validate_parsed_statement(statement)
        if not report.is_valid:
            raise ValidationError(
                "VAL_001",
                {"statement": number, "errors": report.errors},
                message=f"Statement {number}: {'; '.join(report.errors)}",
            )

    return ComparisonResponse(result=result, insights=ComparisonEngine.generate_insights(result))


@router.post(
    "/export",
    summary="Export a comparison as CSV or JSON",
    response_class=Response,
)
async def export_comparison(
    result: ComparisonResult,
    format: Annotated[Literal["csv", "json"], Query(description="Export format")] = "csv",
) -> Response:
    export = ComparisonEngine.export_comparison_data(result)
    if format == "json":
        return Response(
            content=export.json_content,
            media_type="application/json",
            headers={"Content-Disposition": 'attachment; filename="comparison.json"'},
        )
    return Response(
        content=export.csv_content,
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="comparison.csv"'},
    )
