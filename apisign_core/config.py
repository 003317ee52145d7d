"""
Signature Configuration
=======================
Runmode and signature lifetime settings.
"""

import os
from dataclasses import dataclass

# Configuration from environment
RUNMODE = os.getenv("APISIGN_RUNMODE", "release")
LIFETIME_SECONDS = int(os.getenv("APISIGN_LIFETIME_SECONDS", "300"))
DEBUG_PARAM = os.getenv("APISIGN_DEBUG_PARAM", "debug")

DEBUG_RUNMODE = "debug"


@dataclass(frozen=True)
class SignConfig:
    """Configuration for request signature verification."""
    runmode: str = RUNMODE
    lifetime_seconds: int = LIFETIME_SECONDS
    debug_param: str = DEBUG_PARAM

    def __post_init__(self):
        if self.lifetime_seconds <= 0:
            raise ValueError(
                f"lifetime_seconds must be positive, got {self.lifetime_seconds}"
            )

    @property
    def debug_enabled(self) -> bool:
        """Debug signing is only available in the debug runmode."""
        return self.runmode == DEBUG_RUNMODE

    @classmethod
    def from_env(cls) -> "SignConfig":
        """Build a config from the current environment."""
        return cls(
            runmode=os.getenv("APISIGN_RUNMODE", "release"),
            lifetime_seconds=int(os.getenv("APISIGN_LIFETIME_SECONDS", "300")),
            debug_param=os.getenv("APISIGN_DEBUG_PARAM", "debug"),
        )
