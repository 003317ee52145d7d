"""
Tests for the FastAPI signature guard.
"""

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from apisign_core import SignConfig, SignType, SignatureVerifier, VerificationResult, sign_params
from apisign_core.guard import SignatureGuard, register_signature_handlers

ROUTE = "/v1/orders/{order_id}"


def create_client(registry, clock, runmode="release", register_handlers=True):
    verifier = SignatureVerifier(
        registry,
        SignConfig(runmode=runmode, lifetime_seconds=300),
        clock=clock,
    )
    app = FastAPI()
    if register_handlers:
        register_signature_handlers(app)

    @app.get(ROUTE)
    async def get_order(order_id: str, auth: VerificationResult = Depends(SignatureGuard(verifier, SignType.MD5))):
        return {"order_id": order_id, "caller": auth.key_id}

    @app.post("/v1/orders")
    async def create_order(auth: VerificationResult = Depends(SignatureGuard(verifier, "hmac_sha256"))):
        return {"caller": auth.key_id}

    return TestClient(app)


def _sign(registry, now, method, path, sign_type, **params):
    record = registry.lookup("abc123")
    return sign_params(
        method, "testserver", path, params, "abc123",
        registry.secret_for(record, sign_type), sign_type,
        timestamp=now, nonce=7,
    )


class TestSignatureGuard:
    """Tests for SignatureGuard on real routes."""

    def test_signs_against_route_template(self, registry, clock, now):
        """Callers sign the registered route, not the concrete URL."""
        client = create_client(registry, clock)
        params = _sign(registry, now, "GET", ROUTE, "md5", expand="items")

        response = client.get("/v1/orders/991", params=params)

        assert response.status_code == 200
        assert response.json() == {"order_id": "991", "caller": "abc123"}

    def test_invalid_signature(self, registry, clock, now):
        """Bad signatures get a 401 with a flat error body."""
        client = create_client(registry, clock)
        params = _sign(registry, now, "GET", ROUTE, "md5")
        params["Signature"] = "f" * 32

        response = client.get("/v1/orders/991", params=params)

        assert response.status_code == 401
        assert response.json() == {
            "error": "unauthorized",
            "message": "Signature invalid",
            "code": "SIGNATURE_INVALID",
        }

    def test_missing_fields(self, registry, clock):
        """Missing protocol fields are a 400."""
        client = create_client(registry, clock)

        response = client.get("/v1/orders/991", params={"KeyID": "abc123"})

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_unknown_caller(self, registry, clock, now):
        """Unknown KeyIDs are a 401."""
        client = create_client(registry, clock)
        params = _sign(registry, now, "GET", ROUTE, "md5")
        params["KeyID"] = "nobody"

        response = client.get("/v1/orders/991", params=params)

        assert response.status_code == 401
        assert response.json()["code"] == "UNKNOWN_CALLER"

    def test_form_body_post(self, registry, clock, now):
        """Form-encoded bodies are part of the signed parameters."""
        client = create_client(registry, clock)
        params = _sign(registry, now, "POST", "/v1/orders", "hmac_sha256", amount="10")

        response = client.post("/v1/orders", data=params)

        assert response.status_code == 200
        assert response.json() == {"caller": "abc123"}

    def test_form_body_tampered(self, registry, clock, now):
        """Changing a body value after signing is rejected."""
        client = create_client(registry, clock)
        params = _sign(registry, now, "POST", "/v1/orders", "hmac_sha256", amount="10")
        params["amount"] = "99"

        response = client.post("/v1/orders", data=params)

        assert response.status_code == 401

    def test_body_wins_over_query(self, registry, clock, now):
        """When a key is in both body and query, the body value is signed."""
        client = create_client(registry, clock)
        params = _sign(registry, now, "POST", "/v1/orders", "hmac_sha256", amount="10")

        response = client.post("/v1/orders?amount=99", data=params)

        assert response.status_code == 200

    def test_form_content_type_is_case_insensitive(self, registry, clock, now):
        """Body parameters are read whatever the media type casing."""
        from urllib.parse import urlencode

        client = create_client(registry, clock)
        params = _sign(registry, now, "POST", "/v1/orders", "hmac_sha256", amount="10")

        response = client.post(
            "/v1/orders",
            content=urlencode(params),
            headers={"Content-Type": "Application/X-WWW-Form-Urlencoded"},
        )

        assert response.status_code == 200
        assert response.json() == {"caller": "abc123"}

    def test_debug_issuance(self, registry, clock):
        """In debug runmode the guard returns a signature triple."""
        client = create_client(registry, clock, runmode="debug")

        response = client.get("/v1/orders/991", params={"KeyID": "abc123", "debug": "1"})

        assert response.status_code == 200
        triple = response.json()
        assert set(triple) == {"Timestamp", "Nonce", "Signature"}

        followup = client.get(
            "/v1/orders/991",
            params={"KeyID": "abc123", **triple},
        )
        assert followup.status_code == 200
        assert followup.json()["caller"] == "abc123"

    def test_debug_forbidden(self, registry, clock):
        """Debug requests in release runmode are a 403."""
        client = create_client(registry, clock)

        response = client.get("/v1/orders/991", params={"KeyID": "abc123", "debug": "1"})

        assert response.status_code == 403
        assert response.json()["code"] == "DEBUG_FORBIDDEN"

    def test_without_registered_handlers(self, registry, clock):
        """Without custom handlers the error still arrives under 'detail'."""
        client = create_client(registry, clock, register_handlers=False)

        response = client.get("/v1/orders/991", params={"KeyID": "abc123"})

        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "VALIDATION_ERROR"


class TestBuildRequestContext:
    """Tests for the request context adapter."""

    @pytest.mark.parametrize("host", ["testserver", "testserver:8080"])
    def test_host_port_is_ignored(self, registry, clock, now, host):
        """A port in the Host header does not change the signature."""
        client = create_client(registry, clock)
        params = _sign(registry, now, "GET", ROUTE, "md5")

        response = client.get("/v1/orders/1", params=params, headers={"host": host})

        assert response.status_code == 200
