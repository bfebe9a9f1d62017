"""Validation API — record validation and tree validation."""

from typing import Literal

from fastapi import APIRouter, HTTPException, Query, Request

import structlog

from recordcheck.config import get_settings
from recordcheck.decoder import decode
from recordcheck.models.requests import TreeValidationRequest
from recordcheck.models.responses import (
    ErrorResponse,
    RecordValidationResponse,
    TreeValidationResponse,
)
from recordcheck.tree import TreeValidator, load_schema, parse_tree

logger = structlog.get_logger()

router = APIRouter()

ERROR_RESPONSES = {
    413: {"description": "Document too large"},
    422: {"model": ErrorResponse, "description": "Document could not be decoded"},
}


def _enforce_size(size: int) -> None:
    limit = get_settings().MAX_DOCUMENT_BYTES
    if size > limit:
        raise HTTPException(
            status_code=413,
            detail=f"Document is {size} bytes; the limit is {limit}",
        )


@router.post(
    "/validate/record",
    response_model=RecordValidationResponse,
    responses=ERROR_RESPONSES,
)
async def validate_record(
    request: Request,
    format: Literal["json", "xml"] = Query("json", description="Body format"),
):
    """Decode the raw request body as a user record and run the field rules."""
    body = await request.body()
    _enforce_size(len(body))

    record = decode(body, format)
    result = request.app.state.record_validator.validate(record)

    logger.info(
        "record_validated",
        format=format,
        passed=result.passed,
        summary=result.summary,
    )

    return RecordValidationResponse(
        passed=result.passed,
        format=format,
        record=record,
        violations=result.violations,
        summary=result.summary,
    )


@router.post(
    "/validate/tree",
    response_model=TreeValidationResponse,
    responses=ERROR_RESPONSES,
)
async def validate_tree(body: TreeValidationRequest, request: Request):
    """Check a document's structure against a schema document."""
    _enforce_size(len(body.schema_document.encode("utf-8")) + len(body.document.encode("utf-8")))

    validator: TreeValidator = request.app.state.tree_validator
    if body.policy is not None or body.allow_extra is not None:
        validator = TreeValidator(
            policy=body.policy or validator.policy,
            allow_extra=validator.allow_extra if body.allow_extra is None else body.allow_extra,
        )

    schema = load_schema(body.schema_document, root_name=body.root_name)
    data = parse_tree(body.document, body.format, root_tag=schema.tag)
    result = validator.report(schema, data)

    logger.info(
        "tree_validated",
        format=body.format,
        policy=validator.policy.value,
        passed=result.passed,
        summary=result.summary,
    )

    return TreeValidationResponse(
        passed=result.passed,
        policy=validator.policy.value,
        schema_root=schema.tag,
        violations=result.violations,
        summary=result.summary,
    )
