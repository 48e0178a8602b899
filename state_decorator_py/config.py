"""Configuration for state-decorator-py components.

The development flag is read once, here, and passed explicitly to the
components that need it (diff engine, change logger).
"""

import os
from typing import Optional

from pydantic import BaseModel, Field


DEVELOPMENT = "development"


class DecoratorConfig(BaseModel):
    """Build configuration shared by the diagnostic components."""

    development: bool = Field(
        default=False,
        description="Enable diffs and change logging (development builds only)",
    )
    default_delay_ms: int = Field(
        default=1000,
        ge=0,
        description="Base retry backoff used when an action declares no delay",
    )

    model_config = {
        "frozen": True,
    }

    @classmethod
    def from_env(cls, env: Optional[str] = None) -> "DecoratorConfig":
        """Build a config from STATE_DECORATOR_ENV and STATE_DECORATOR_RETRY_DELAY_MS."""
        env = env or os.getenv('STATE_DECORATOR_ENV', '')
        delay = os.getenv('STATE_DECORATOR_RETRY_DELAY_MS')
        data = {"development": env.strip().lower() == DEVELOPMENT}
        if delay:
            data["default_delay_ms"] = int(delay)
        return cls(**data)
