"""
FastAPI Signature Guard
=======================
Adapter between FastAPI routes and the signature verifier.

Usage:
    from apisign_core import KeyRegistry, SignatureVerifier, SignConfig, SignType
    from apisign_core.guard import SignatureGuard, register_signature_handlers

    verifier = SignatureVerifier(KeyRegistry.from_mapping(callers), SignConfig.from_env())
    register_signature_handlers(app)

    @app.get("/v1/orders")
    async def list_orders(auth: VerificationResult = Depends(SignatureGuard(verifier, SignType.MD5))):
        key_id = auth.key_id
        ...
"""

from typing import Dict, List

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException
import structlog

from .errors import InternalError, RejectReason
from .signing.algorithms import SignType
from .verification.models import RequestContext, VerificationDecision, VerificationResult
from .verification.verifier import SignatureVerifier

logger = structlog.get_logger(__name__)

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")

INTERNAL_ERROR_MESSAGE = "The server could not process the request"

STATUS_BY_REASON: Dict[RejectReason, int] = {
    RejectReason.VALIDATION_ERROR: 400,
    RejectReason.DEBUG_FORBIDDEN: 403,
    RejectReason.INTERNAL_ERROR: 500,
}

ERROR_BY_STATUS: Dict[int, str] = {
    400: "bad_request",
    401: "unauthorized",
    403: "forbidden",
    500: "internal_error",
}


class DebugSignatureResponse(BaseModel):
    Timestamp: str
    Nonce: str
    Signature: str


class SignatureErrorResponse(BaseModel):
    error: str
    message: str
    code: str


class SignatureRejected(HTTPException):
    """Raised by SignatureGuard when a request fails verification."""

    def __init__(self, result: VerificationResult):
        self.result = result
        status_code = STATUS_BY_REASON.get(result.reason, 401)
        message = INTERNAL_ERROR_MESSAGE if result.is_internal_error else result.message
        body = SignatureErrorResponse(
            error=ERROR_BY_STATUS[status_code],
            message=message or "",
            code=result.reason.value.upper(),
        )
        super().__init__(status_code=status_code, detail=body.model_dump())


class DebugSignatureIssued(HTTPException):
    """Raised by SignatureGuard to return a debug signature instead of calling the route."""

    def __init__(self, result: VerificationResult):
        self.result = result
        body = DebugSignatureResponse(**result.debug_params)
        super().__init__(status_code=200, detail=body.model_dump())


async def build_request_context(request: Request) -> RequestContext:
    """
    Collect what the verifier needs from a Starlette request.

    Form body values come before query values for the same key, so the body
    wins when a parameter is submitted in both places.

    Raises:
        InternalError: If the form body cannot be parsed
    """
    params: Dict[str, List[str]] = {}

    content_type = request.headers.get("content-type", "").lower()
    if content_type.startswith(FORM_CONTENT_TYPES):
        try:
            form = await request.form()
        except (MultiPartException, StarletteHTTPException, ValueError) as e:
            raise InternalError(f"Failed to parse form body: {e}")
        for key, value in form.multi_items():
            if isinstance(value, str):
                params.setdefault(key, []).append(value)

    for key, value in request.query_params.multi_items():
        params.setdefault(key, []).append(value)

    route = request.scope.get("route")
    path = getattr(route, "path", None) or request.url.path

    return RequestContext(
        method=request.method,
        host=request.headers.get("host", ""),
        path=path,
        params=params,
    )


class SignatureGuard:
    """
    FastAPI dependency that verifies the request signature.

    Returns the VerificationResult when the signature is accepted.
    """

    def __init__(self, verifier: SignatureVerifier, sign_type):
        self.verifier = verifier
        self.sign_type = SignType.parse(sign_type)

    async def __call__(self, request: Request) -> VerificationResult:
        try:
            context = await build_request_context(request)
        except InternalError as e:
            logger.error("signature_request_unreadable", path=request.url.path, detail=e.message)
            raise SignatureRejected(VerificationResult.rejected(e, sign_type=self.sign_type.value))

        result = self.verifier.verify(context, self.sign_type)

        if result.decision == VerificationDecision.DEBUG_ISSUED:
            raise DebugSignatureIssued(result)
        if not result.accepted:
            raise SignatureRejected(result)

        request.state.signature = result
        return result


async def signature_rejected_handler(request: Request, exc: SignatureRejected) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.detail)


async def debug_signature_handler(request: Request, exc: DebugSignatureIssued) -> JSONResponse:
    return JSONResponse(status_code=200, content=exc.detail)


def register_signature_handlers(app: FastAPI) -> None:
    """Render guard outcomes as flat JSON bodies instead of {"detail": ...}."""
    app.add_exception_handler(SignatureRejected, signature_rejected_handler)
    app.add_exception_handler(DebugSignatureIssued, debug_signature_handler)
