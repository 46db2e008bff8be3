# coding: utf-8

"""
Face Login Settings

Environment-driven configuration for the Face API connection, the identity
group and the training poll.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .errors import ConfigurationError

DEFAULT_GROUP_ID = "persongroupid"
DEFAULT_GROUP_NAME = "FacialRecognitionLoginGroup"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _get_float(name: str, default: Optional[float]) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from e


def _get_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {raw!r}")


@dataclass
class FaceLoginSettings:
    """Connection and behaviour settings for the face login flows"""
    endpoint: Optional[str] = None
    api_key: Optional[str] = None
    group_id: str = DEFAULT_GROUP_ID
    group_name: str = DEFAULT_GROUP_NAME
    training_timeout: float = 60.0
    poll_interval: float = 1.0
    max_poll_interval: float = 10.0
    confidence_threshold: Optional[float] = None
    rollback_on_failure: bool = True
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = ".env") -> "FaceLoginSettings":
        """
        Build settings from environment variables

        Args:
            dotenv_path: Optional .env file loaded first; existing environment
                variables are never overridden

        Returns:
            FaceLoginSettings populated from the environment
        """
        if dotenv_path and Path(dotenv_path).exists():
            load_dotenv(dotenv_path=dotenv_path, override=False)

        settings = cls(
            endpoint=os.getenv("AZURE_FACE_API_ENDPOINT") or None,
            api_key=os.getenv("AZURE_FACE_API_ACCOUNT_KEY") or None,
            group_id=os.getenv("FACE_LOGIN_GROUP_ID", DEFAULT_GROUP_ID),
            group_name=os.getenv("FACE_LOGIN_GROUP_NAME", DEFAULT_GROUP_NAME),
            training_timeout=_get_float("FACE_LOGIN_TRAINING_TIMEOUT", 60.0),
            poll_interval=_get_float("FACE_LOGIN_POLL_INTERVAL", 1.0),
            max_poll_interval=_get_float("FACE_LOGIN_MAX_POLL_INTERVAL", 10.0),
            confidence_threshold=_get_float("FACE_LOGIN_CONFIDENCE_THRESHOLD", None),
            rollback_on_failure=_get_bool("FACE_LOGIN_ROLLBACK_ON_FAILURE", True),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
        return settings

    def __post_init__(self):
        self.validate()

    def validate(self):
        """Reject values the poll loop or identify call cannot work with"""
        if not self.group_id:
            raise ConfigurationError("group_id must not be empty")
        if self.training_timeout <= 0:
            raise ConfigurationError("training_timeout must be positive")
        if self.poll_interval <= 0:
            raise ConfigurationError("poll_interval must be positive")
        if self.max_poll_interval < self.poll_interval:
            raise ConfigurationError("max_poll_interval must be >= poll_interval")
        if self.confidence_threshold is not None and not 0 <= self.confidence_threshold <= 1:
            raise ConfigurationError("confidence_threshold must be between 0 and 1")

    def require_credentials(self):
        """Ensure the Face API endpoint and key are present"""
        missing = [
            name for name, value in (
                ("AZURE_FACE_API_ENDPOINT", self.endpoint),
                ("AZURE_FACE_API_ACCOUNT_KEY", self.api_key),
            ) if not value
        ]
        if missing:
            raise ConfigurationError(f"Missing Face API settings: {', '.join(missing)}")
