# coding: utf-8

"""
Face Login Package

Face-based login for applications using the Azure AI Vision Face API.

Main Components:
- FacialRecognitionService: Main public API
- EnrollmentOrchestrator: Group/person/face creation and training
- VerificationOrchestrator: Detect, identify and match against a username
- RemovalOrchestrator: Idempotent person deletion
- ActivityIndicator: Process-wide network activity signal
- FaceProvider: Azure Face API client wrapper
"""

from .activity import ActivityIndicator, default_indicator, get_activity_indicator
from .config import FaceLoginSettings
from .enrollment import EnrollmentOrchestrator
from .errors import (
    ConfigurationError,
    EnrollmentError,
    FaceLoginError,
    InvalidPhotoError,
    RemovalError,
    TrainingFailedError,
    TrainingTimeoutError,
)
from .models import (
    CandidateMatch,
    EnrolledPerson,
    EnrollmentResult,
    TrainingState,
    TrainingStatus,
    VerificationResult,
)
from .provider import FaceProvider
from .removal import RemovalOrchestrator
from .service import FacialRecognitionService
from .verification import VerificationOrchestrator

__version__ = "1.0.0"

__all__ = [
    "FacialRecognitionService",
    "FaceLoginSettings",
    "FaceProvider",
    "EnrollmentOrchestrator",
    "VerificationOrchestrator",
    "RemovalOrchestrator",
    "ActivityIndicator",
    "default_indicator",
    "get_activity_indicator",
    "CandidateMatch",
    "EnrolledPerson",
    "EnrollmentResult",
    "TrainingState",
    "TrainingStatus",
    "VerificationResult",
    "FaceLoginError",
    "ConfigurationError",
    "InvalidPhotoError",
    "EnrollmentError",
    "TrainingFailedError",
    "TrainingTimeoutError",
    "RemovalError",
]
