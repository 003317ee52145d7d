"""
Tests for signature configuration.
"""

import pytest


class TestSignConfig:
    """Tests for SignConfig."""

    def test_debug_enabled_only_in_debug_runmode(self):
        """Only the 'debug' runmode enables debug issuance."""
        from apisign_core import SignConfig

        assert SignConfig(runmode="debug").debug_enabled is True
        assert SignConfig(runmode="release").debug_enabled is False
        assert SignConfig(runmode="DEBUG").debug_enabled is False

    def test_from_env(self, monkeypatch):
        """Should read runmode, lifetime and debug parameter from the environment."""
        from apisign_core import SignConfig

        monkeypatch.setenv("APISIGN_RUNMODE", "debug")
        monkeypatch.setenv("APISIGN_LIFETIME_SECONDS", "60")
        monkeypatch.setenv("APISIGN_DEBUG_PARAM", "dbg")

        config = SignConfig.from_env()

        assert config.runmode == "debug"
        assert config.lifetime_seconds == 60
        assert config.debug_param == "dbg"

    def test_from_env_defaults(self, monkeypatch):
        """Defaults to release runmode and a 300 second lifetime."""
        from apisign_core import SignConfig

        for name in ("APISIGN_RUNMODE", "APISIGN_LIFETIME_SECONDS", "APISIGN_DEBUG_PARAM"):
            monkeypatch.delenv(name, raising=False)

        config = SignConfig.from_env()

        assert config.runmode == "release"
        assert config.lifetime_seconds == 300
        assert config.debug_param == "debug"

    @pytest.mark.parametrize("lifetime", [0, -5])
    def test_rejects_non_positive_lifetime(self, lifetime):
        """Lifetime must be positive."""
        from apisign_core import SignConfig

        with pytest.raises(ValueError):
            SignConfig(lifetime_seconds=lifetime)
