"""
Signature Verifier
==================
Verifies signed requests end to end.

Flow:
    extract parameters -> look up caller -> select secret
      -> debug: issue a signature (debug runmode only)
      -> otherwise: freshness -> canonical string -> signature -> nonce
"""

import time
from typing import Callable, Optional
import structlog

from ..config import SignConfig
from ..errors import (
    APISignError,
    AuthenticationFailure,
    DebugForbidden,
    ReplayDetected,
    SignatureExpired,
)
from ..keys.models import CallerRecord, SecretMaterial
from ..keys.registry import KeyRegistry
from ..metrics import record_verification
from ..signing.algorithms import SignType
from ..signing.canonical import canonicalize
from ..signing.client import generate_debug_nonce
from ..signing.engine import generate_signature, verify_signature
from .models import RequestContext, SigningParams, VerificationResult
from .nonce_store import NonceStore
from .params import NONCE_PARAM, TIMESTAMP_PARAM, extract_params, is_debug_request

logger = structlog.get_logger(__name__)


class SignatureVerifier:
    """
    Verifies requests against a key registry.

    Holds no per-request state; one instance can serve concurrent requests
    as long as the nonce store (if any) is safe to share.
    """

    def __init__(
        self,
        registry: KeyRegistry,
        config: Optional[SignConfig] = None,
        nonce_store: Optional[NonceStore] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.registry = registry
        self.config = config or SignConfig()
        self.nonce_store = nonce_store
        self._clock = clock

    def verify(self, context: RequestContext, sign_type) -> VerificationResult:
        """
        Verify one request.

        Args:
            context: Method, host, route path and submitted parameters
            sign_type: Sign type the endpoint requires

        Returns:
            VerificationResult; failures are returned, not raised
        """
        started = time.perf_counter()
        sign_type_value = getattr(sign_type, "value", str(sign_type))

        try:
            result = self._verify(context, SignType.parse(sign_type))
        except AuthenticationFailure as e:
            logger.warning(
                "signature_rejected",
                key_id=e.key_id,
                reason=e.reason.value,
                detail=e.message,
                sign_type=sign_type_value,
                path=context.path,
            )
            result = VerificationResult.rejected(e, sign_type=sign_type_value)
        except APISignError as e:
            logger.error(
                "signature_verification_error",
                key_id=e.key_id,
                detail=e.message,
                sign_type=sign_type_value,
                path=context.path,
            )
            result = VerificationResult.rejected(e, sign_type=sign_type_value)

        record_verification(
            sign_type=sign_type_value,
            decision=result.decision.value,
            reason=result.reason.value if result.reason else None,
            duration_seconds=time.perf_counter() - started,
        )
        return result

    def _verify(self, context: RequestContext, sign_type: SignType) -> VerificationResult:
        params = dict(context.params)
        debug = is_debug_request(params, self.config.debug_param)
        bound = extract_params(params, debug)

        record = self.registry.lookup(bound.key_id)
        secret = self.registry.secret_for(record, sign_type)
        now = int(self._clock())

        if bound.debug:
            if not self.config.debug_enabled:
                raise DebugForbidden("debug forbidden in release runmode", key_id=record.key_id)
            return self._issue_debug(context, params, record, secret, sign_type, now)

        self._check_freshness(bound, now)

        canonical = canonicalize(
            context.method, context.host, context.path, params, self.config.debug_param
        )
        try:
            verify_signature(canonical, sign_type, secret, bound.signature)
        except AuthenticationFailure as e:
            e.key_id = e.key_id or record.key_id
            raise

        self._check_nonce(bound)

        logger.info(
            "signature_accepted",
            key_id=record.key_id,
            sign_type=sign_type.value,
            path=context.path,
        )
        return VerificationResult.ok(record.key_id, sign_type.value)

    def _check_freshness(self, bound: SigningParams, now: int) -> None:
        """Reject future timestamps and ones at least one lifetime old."""
        if bound.timestamp > now or now - bound.timestamp >= self.config.lifetime_seconds:
            raise SignatureExpired("Signature expired", key_id=bound.key_id)

    def _check_nonce(self, bound: SigningParams) -> None:
        if self.nonce_store is None:
            return
        fresh = self.nonce_store.check_and_store(
            bound.key_id, bound.nonce, self.config.lifetime_seconds
        )
        if not fresh:
            raise ReplayDetected("Nonce already used", key_id=bound.key_id)

    def _issue_debug(
        self,
        context: RequestContext,
        params: dict,
        record: CallerRecord,
        secret: SecretMaterial,
        sign_type: SignType,
        now: int,
    ) -> VerificationResult:
        """Sign the request on the caller's behalf (debug runmode only)."""
        # Test tooling only; nonce uniqueness is not guaranteed
        timestamp = str(now)
        nonce = str(generate_debug_nonce())
        params[TIMESTAMP_PARAM] = timestamp
        params[NONCE_PARAM] = nonce

        canonical = canonicalize(
            context.method, context.host, context.path, params, self.config.debug_param
        )
        try:
            signature = generate_signature(canonical, secret, sign_type)
        except AuthenticationFailure as e:
            e.key_id = e.key_id or record.key_id
            raise

        logger.info(
            "debug_signature_issued",
            key_id=record.key_id,
            sign_type=sign_type.value,
            path=context.path,
        )
        return VerificationResult.debug_issued(
            key_id=record.key_id,
            sign_type=sign_type.value,
            timestamp=timestamp,
            nonce=nonce,
            signature=signature,
        )
