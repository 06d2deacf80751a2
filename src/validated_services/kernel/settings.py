"""
Runtime settings for validated services

Settings are a plain pydantic model so they can be built explicitly in tests
or read from the environment in applications.
"""

import os

from pydantic import BaseModel, Field

DEFAULT_OPTION_KEY = "current_context"


class ServiceSettings(BaseModel):
    """
    Process-wide knobs

    default_option_key is the name under which the construction context is
    exposed to schema predicates when a service does not override
    options_for_context.
    """

    default_option_key: str = Field(
        default=DEFAULT_OPTION_KEY,
        min_length=1,
        description="Option key the context is injected under by default",
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    json_logs: bool = Field(
        default=False,
        description="Emit JSON logs instead of console output",
    )

    @classmethod
    def from_env(cls) -> "ServiceSettings":
        """
        Build settings from environment variables

        VALIDATED_SERVICES_OPTION_KEY overrides the default option key,
        LOG_LEVEL sets the level, and ENVIRONMENT=production turns on JSON logs.
        """
        return cls(
            default_option_key=os.getenv("VALIDATED_SERVICES_OPTION_KEY", DEFAULT_OPTION_KEY),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            json_logs=os.getenv("ENVIRONMENT", "development").lower() == "production",
        )


default_settings = ServiceSettings.from_env()
