# coding: utf-8

"""
Face Login Errors

Exception taxonomy surfaced to callers of the login flows.
"""

from typing import Optional


class FaceLoginError(Exception):
    """Base class for face login failures"""


class ConfigurationError(FaceLoginError):
    """Settings are missing or malformed"""


class InvalidPhotoError(FaceLoginError):
    """Photo could not be turned into image bytes"""


class EnrollmentError(FaceLoginError):
    """Enrollment failed at any step after validation"""

    def __init__(self, message: str, person_id: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.person_id = person_id


class TrainingFailedError(EnrollmentError):
    """Training job finished with a failed status"""


class TrainingTimeoutError(EnrollmentError):
    """Training job did not finish before the deadline"""


class RemovalError(FaceLoginError):
    """Deleting an enrolled person failed for a reason other than not-found"""

    def __init__(self, message: str, person_id: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.person_id = person_id
