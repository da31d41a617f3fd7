"""Signature verification API endpoint.

This module implements:
- POST /api/verify-signature - Recover the signer of a personal message signature

The endpoint only checks that both inputs are present. Malformed signatures are
not an HTTP error: they come back as 200 with isValid=false, so clients can tell
"bad request" (400) apart from "signature did not recover" (200) and
"server failure" (500).
"""

from typing import Any

import structlog
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, field_validator

from sigverify.services.signature_verifier import VerificationResult, verify_signature

logger = structlog.get_logger()
router = APIRouter(tags=["signatures"])

MISSING_FIELDS_ERROR = {
    "error": "Missing required fields",
    "message": "Both message and signature are required",
}


# Request/Response Models


class VerifySignatureRequest(BaseModel):
    """Request model for signature verification.

    Fields are optional at the schema level so that absent or falsy values produce
    the "Missing required fields" response instead of a schema validation error.
    """

    message: str | None = Field(
        default=None,
        description="The exact message that was signed",
    )
    signature: str | None = Field(
        default=None,
        description="Hex encoded 65-byte personal_sign signature (0x + 130 hex characters)",
    )
    type: Any = Field(
        default=None,
        description="Signature scheme tag (simple, eip712, personal_sign); currently informational",
    )

    @field_validator("message", "signature", mode="before")
    @classmethod
    def falsy_as_missing(cls, v: Any) -> Any:
        """Treat 0, false, empty strings and empty containers as absent."""
        return v or None


class MissingFieldsResponse(BaseModel):
    """Response model for requests without message or signature."""

    error: str
    message: str


# API Endpoints


@router.post(
    "/verify-signature",
    response_model=VerificationResult,
    status_code=status.HTTP_200_OK,
    responses={status.HTTP_400_BAD_REQUEST: {"model": MissingFieldsResponse}},
)
async def verify_signature_endpoint(
    request: VerifySignatureRequest | None = None,
) -> VerificationResult | JSONResponse:
    """Recover the signer address of a personal message signature.

    Returns 200 whether or not the signature recovers; isValid reports the
    outcome. isValid=true only means *some* address was recovered. Callers must
    compare signer with the address they expect.

    Example:
        POST /api/verify-signature
        {
            "message": "Hello, Web3!",
            "signature": "0x5f3c...1b",
            "type": "simple"
        }

        Response 200:
        {
            "isValid": true,
            "signer": "0x742d35Cc6634C0532925a3b844Bc9e7595f0bEb0",
            "originalMessage": "Hello, Web3!"
        }

        Response 400:
        {
            "error": "Missing required fields",
            "message": "Both message and signature are required"
        }
    """
    if request is None or not request.message or not request.signature:
        logger.info(
            "verify_signature_missing_fields",
            has_message=bool(request and request.message),
            has_signature=bool(request and request.signature),
        )
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=MISSING_FIELDS_ERROR)

    return verify_signature(
        message=request.message,
        signature=request.signature,
        message_type=request.type,
    )
