"""
Callable configuration.

Settings are loaded from environment variables (prefix ``ONCALL_``) and an
optional .env file. CallableOptions is the construction-time
configuration of a single callable endpoint.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from oncall.domain.ports import IdTokenVerifier
from oncall.infrastructure.firebase_token_verifier import FirebaseIdTokenVerifier


class Settings(BaseSettings):
    """Settings loaded from environment.

    Attributes:
        project_name: Display name of the hosting app.
        version: Current version string.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        firebase_project_id: Firebase project whose ID tokens are accepted.
            Identity verification is off when unset.
        auth_required: Reject calls without an ``Authorization`` header.
        handler_timeout_seconds: Upper bound for one handler call.
    """

    model_config = SettingsConfigDict(
        env_prefix="ONCALL_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    project_name: str = "oncall"
    version: str = "0.1.0"
    log_level: str = "INFO"
    firebase_project_id: Optional[str] = None
    auth_required: bool = False
    handler_timeout_seconds: Optional[float] = None


@dataclass(frozen=True)
class CallableOptions:
    """Construction-time options of a Callable.

    Attributes:
        verifier: Identity token verifier. Identity verification is off
            when None.
        auth_required: Whether a valid ID token is required. Only used
            together with a verifier.
        logger: Logger for unexpected handler failures. Defaults to the
            ``oncall`` logger, which is silent unless the host configures it.
        timeout: Upper bound in seconds for one handler call, or None.
    """

    verifier: IdTokenVerifier | None = None
    auth_required: bool = False
    logger: logging.Logger | None = None
    timeout: float | None = None

    def __post_init__(self) -> None:
        if self.auth_required and self.verifier is None:
            raise ValueError("auth_required needs an IdTokenVerifier")
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be positive")

    @classmethod
    def from_settings(
        cls,
        config: Settings,
        verifier: IdTokenVerifier | None = None,
        logger: logging.Logger | None = None,
    ) -> "CallableOptions":
        """Build options from Settings.

        A FirebaseIdTokenVerifier is created for ``firebase_project_id``
        unless an explicit verifier is given.
        """
        if verifier is None and config.firebase_project_id:
            verifier = FirebaseIdTokenVerifier(config.firebase_project_id)
        return cls(
            verifier=verifier,
            auth_required=config.auth_required,
            logger=logger,
            timeout=config.handler_timeout_seconds,
        )


settings = Settings()
