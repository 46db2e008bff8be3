from __future__ import annotations

import pytest

from face_login.activity import ActivityIndicator
from face_login.config import FaceLoginSettings
from face_login.enrollment import EnrollmentOrchestrator
from face_login.removal import RemovalOrchestrator
from face_login.verification import VerificationOrchestrator

from .fakes import FakeFaceProvider


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
    """Keep a developer's Face API settings out of unit tests."""
    for name in (
        "AZURE_FACE_API_ENDPOINT",
        "AZURE_FACE_API_ACCOUNT_KEY",
        "FACE_LOGIN_GROUP_ID",
        "FACE_LOGIN_GROUP_NAME",
        "FACE_LOGIN_TRAINING_TIMEOUT",
        "FACE_LOGIN_POLL_INTERVAL",
        "FACE_LOGIN_MAX_POLL_INTERVAL",
        "FACE_LOGIN_CONFIDENCE_THRESHOLD",
        "FACE_LOGIN_ROLLBACK_ON_FAILURE",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def provider() -> FakeFaceProvider:
    return FakeFaceProvider()


@pytest.fixture
def indicator() -> ActivityIndicator:
    return ActivityIndicator()


@pytest.fixture
def settings() -> FaceLoginSettings:
    return FaceLoginSettings(training_timeout=5.0, poll_interval=0.01, max_poll_interval=0.05)


@pytest.fixture
def enrollment(provider, settings, indicator) -> EnrollmentOrchestrator:
    return EnrollmentOrchestrator(provider, settings, indicator, sleep=lambda _: None)


@pytest.fixture
def verification(provider, settings, indicator) -> VerificationOrchestrator:
    return VerificationOrchestrator(provider, settings, indicator)


@pytest.fixture
def removal(provider, settings, indicator) -> RemovalOrchestrator:
    return RemovalOrchestrator(provider, settings, indicator)
