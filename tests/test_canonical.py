"""
Tests for canonical request strings.
"""

from collections import OrderedDict


class TestCanonicalize:
    """Tests for canonicalize()."""

    def test_example_request(self):
        """Should match the documented example layout."""
        from apisign_core.signing import canonicalize

        result = canonicalize(
            "GET", "api.example.com", "/v1/orders",
            {"Nonce": "42", "Timestamp": "1700000000"},
        )

        assert result == "GETapi.example.com/v1/ordersNonce=42Timestamp=1700000000"

    def test_independent_of_insertion_order(self):
        """Should produce the same string whatever order the params arrive in."""
        from apisign_core.signing import canonicalize

        forward = OrderedDict([("b", "2"), ("a", "1"), ("c", "3")])
        backward = OrderedDict(reversed(list(forward.items())))

        assert canonicalize("POST", "h", "/p", forward) == canonicalize("POST", "h", "/p", backward)
        assert canonicalize("POST", "h", "/p", forward) == "POSTh/pa=1b=2c=3"

    def test_excludes_signature_and_debug(self):
        """Signature and debug flag should not be signed."""
        from apisign_core.signing import canonicalize

        result = canonicalize(
            "GET", "h", "/p",
            {"KeyID": "abc", "Signature": "deadbeef", "debug": "1"},
        )

        assert result == "GETh/pKeyID=abc"

    def test_custom_debug_param(self):
        """Should exclude whichever debug parameter name is configured."""
        from apisign_core.signing import canonicalize

        result = canonicalize("GET", "h", "/p", {"dbg": "1", "debug": "1"}, debug_param="dbg")

        assert result == "GETh/pdebug=1"

    def test_strips_port_from_host(self):
        """Port suffix should not be part of the signed host."""
        from apisign_core.signing import canonicalize, normalize_host

        assert normalize_host("api.example.com:8443") == "api.example.com"
        assert canonicalize("GET", "api.example.com:8080", "/v1", {}) == "GETapi.example.com/v1"

    def test_uses_first_of_multiple_values(self):
        """Should sign only the first value of a repeated parameter."""
        from apisign_core.signing import canonicalize

        result = canonicalize("GET", "h", "/p", {"tag": ["x", "y"], "empty": []})

        assert result == "GETh/pempty=tag=x"

    def test_sorts_by_byte_order(self):
        """Uppercase keys sort before lowercase keys."""
        from apisign_core.signing import canonicalize

        result = canonicalize("GET", "h", "/p", {"a": "1", "Z": "2", "B": "3"})

        assert result == "GETh/pB=3Z=2a=1"

    def test_values_are_not_escaped(self):
        """Values containing '=' are concatenated as-is."""
        from apisign_core.signing import canonicalize

        assert canonicalize("GET", "h", "/p", {"a=1": "b"}) == canonicalize("GET", "h", "/p", {"a": "1=b"})
