# coding: utf-8

"""
Facial Recognition Service

High-level entry point for the login screens. Builds the Face API provider on
first use and routes enroll, verify and remove requests to their orchestrators,
all sharing one activity indicator.
"""

import logging
import threading
from typing import Optional

from .activity import ActivityIndicator, default_indicator
from .base import setup_logger
from .config import FaceLoginSettings
from .enrollment import EnrollmentOrchestrator
from .errors import FaceLoginError
from .imaging import Photo
from .models import EnrollmentResult, VerificationResult
from .provider import FaceProvider
from .removal import RemovalOrchestrator
from .verification import VerificationOrchestrator


class FacialRecognitionService:
    """
    Facial Recognition Service

    Face enrollment, verification and removal for a login flow backed by the
    Azure AI Vision Face API.
    """

    def __init__(
        self,
        settings: Optional[FaceLoginSettings] = None,
        provider=None,
        indicator: Optional[ActivityIndicator] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize Facial Recognition Service

        Args:
            settings: Face API and group settings (read from the environment if omitted)
            provider: Face provider to use instead of one built from settings
            indicator: Activity indicator (process-wide default if omitted)
            logger: Optional logger instance
        """
        self.settings = settings or FaceLoginSettings.from_env()
        self.indicator = indicator or default_indicator
        self.logger = logger or setup_logger(self.__class__.__name__, self.settings.log_level)

        self._provider = provider
        self._provider_lock = threading.Lock()
        self._enrollment: Optional[EnrollmentOrchestrator] = None
        self._verification: Optional[VerificationOrchestrator] = None
        self._removal: Optional[RemovalOrchestrator] = None

    @property
    def provider(self):
        """Face provider, created on first access"""
        if self._provider is None:
            with self._provider_lock:
                if self._provider is None:
                    self.settings.require_credentials()
                    self._provider = FaceProvider(
                        self.settings.endpoint,
                        self.settings.api_key,
                        logger=self.logger
                    )
                    self.logger.info(f"Connected Face provider: {self.settings.endpoint}")
        return self._provider

    @property
    def enrollment(self) -> EnrollmentOrchestrator:
        if self._enrollment is None:
            self._enrollment = EnrollmentOrchestrator(
                self.provider, self.settings, self.indicator, self.logger
            )
        return self._enrollment

    @property
    def verification(self) -> VerificationOrchestrator:
        if self._verification is None:
            self._verification = VerificationOrchestrator(
                self.provider, self.settings, self.indicator, self.logger
            )
        return self._verification

    @property
    def removal(self) -> RemovalOrchestrator:
        if self._removal is None:
            self._removal = RemovalOrchestrator(
                self.provider, self.settings, self.indicator, self.logger
            )
        return self._removal

    # Login flow operations
    def add_new_face(self, username: str, photo: Photo) -> str:
        """
        Enroll a new face for a username

        Returns:
            Persisted face ID

        Raises:
            EnrollmentError: if any enrollment step fails
        """
        return self.enrollment.enroll(username, photo)

    def enroll_user(self, username: str, photo: Photo) -> EnrollmentResult:
        """Enroll a new face and return the person and face IDs"""
        return self.enrollment.enroll_person(username, photo)

    def is_face_identified(self, username: str, photo: Photo) -> bool:
        """Return True if the photo matches a person enrolled under username"""
        return self.verify_face(username, photo).identified

    def verify_face(self, username: str, photo: Photo) -> VerificationResult:
        """
        Verify a photo and return the detailed outcome

        Never raises; missing Face API settings are reported through
        ``VerificationResult.error`` like any other failure.
        """
        try:
            verification = self.verification
        except FaceLoginError as e:
            self.logger.warning(f"Verification for {username} failed: {e}")
            return VerificationResult(identified=False, error=e)
        return verification.verify_detailed(username, photo)

    def remove_existing_face(self, person_id: str):
        """Remove an enrolled person; unknown IDs are ignored"""
        self.removal.remove(person_id)

    def close(self):
        """Close the provider if this service created one"""
        if self._provider is not None and hasattr(self._provider, "close"):
            self._provider.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def __str__(self) -> str:
        return f"FacialRecognitionService(group_id='{self.settings.group_id}')"

    def __repr__(self) -> str:
        return (f"FacialRecognitionService(group_id='{self.settings.group_id}', "
                f"name='{self.settings.group_name}')")
