# coding: utf-8

"""
Enrollment

Registers a user's face under the identity group: ensures the group exists,
creates a person for the username, uploads the photo as a face sample, trains
the group and waits for training to finish. A failure after the person was
created deletes that person again so no half-enrolled identity is left behind.
"""

import logging
import time
from typing import Callable, Optional

from .activity import ActivityIndicator
from .base import BaseOrchestrator
from .config import FaceLoginSettings
from .errors import EnrollmentError, InvalidPhotoError, TrainingFailedError, TrainingTimeoutError
from .imaging import Photo, photo_to_bytes
from .models import EnrollmentResult, TrainingState, TrainingStatus
from .provider import is_conflict, is_not_found

BACKOFF_FACTOR = 2.0


class EnrollmentOrchestrator(BaseOrchestrator):
    """
    Enrollment Orchestrator

    Sequences group creation, person creation, face upload, training and
    training status polling for one user.
    """

    def __init__(
        self,
        provider,
        settings: Optional[FaceLoginSettings] = None,
        indicator: Optional[ActivityIndicator] = None,
        logger: Optional[logging.Logger] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic
    ):
        """Initialize enrollment orchestrator"""
        super().__init__(provider, settings, indicator, logger)
        self._sleep = sleep
        self._clock = clock

    def enroll(self, username: str, photo: Photo) -> str:
        """
        Enroll a face for a username

        Args:
            username: Login name the new person is tagged with
            photo: Image bytes, binary stream or image frame

        Returns:
            Persisted face ID of the uploaded sample

        Raises:
            EnrollmentError: on any failure other than an existing group
        """
        return self.enroll_person(username, photo).persisted_face_id

    def enroll_person(self, username: str, photo: Photo) -> EnrollmentResult:
        """Enroll a face and return both the person ID and the face ID"""
        with self.indicator.track():
            if not username or not username.strip():
                raise EnrollmentError("Username is required")
            try:
                image_bytes = photo_to_bytes(photo)
            except InvalidPhotoError as e:
                raise EnrollmentError(f"Invalid photo: {e}") from e

            person_id = None
            try:
                self.ensure_group()

                person_id = self.provider.create_person(self.group_id, username)
                face_id = self.provider.add_face(self.group_id, person_id, image_bytes)

                status = self.train_and_wait()
                if status.state is TrainingState.FAILED:
                    raise TrainingFailedError(status.message or "Training failed", person_id)

                self.logger.info(f"Enrolled {username} as person {person_id} with face {face_id}")
                return EnrollmentResult(
                    person_id=person_id,
                    persisted_face_id=face_id,
                    username=username
                )
            except Exception as e:
                self.logger.error(f"An error occurred enrolling {username}: {e}")
                # Only report the person while it still exists at the provider
                orphan_id = person_id
                if person_id and self.settings.rollback_on_failure and self._rollback_person(person_id):
                    orphan_id = None
                if isinstance(e, EnrollmentError):
                    e.person_id = orphan_id
                    raise
                raise EnrollmentError(str(e), orphan_id) from e

    def ensure_group(self):
        """Create the identity group, treating an existing group as success"""
        try:
            self.provider.create_group(self.group_id, self.group_name)
        except Exception as e:
            if not is_conflict(e):
                raise
            self.logger.info(f"Group {self.group_id} already exists")

    def train_and_wait(self) -> TrainingStatus:
        """Start training and block until it succeeds, fails or times out"""
        self.provider.train_group(self.group_id)
        return self.wait_for_training()

    def wait_for_training(self) -> TrainingStatus:
        """
        Poll training status with exponential backoff under a deadline

        Returns:
            Final status (succeeded or failed)

        Raises:
            TrainingTimeoutError: if training is still unfinished at the deadline
        """
        timeout = self.settings.training_timeout
        deadline = self._clock() + timeout
        interval = self.settings.poll_interval

        while True:
            status = self.provider.get_training_status(self.group_id)
            if status.is_finished:
                self.logger.info(f"Training for group {self.group_id} {status.state.value}")
                return status

            remaining = deadline - self._clock()
            if remaining <= 0:
                raise TrainingTimeoutError(
                    f"Training for group {self.group_id} did not finish within {timeout}s "
                    f"(last status: {status.state.value})"
                )
            self.logger.debug(f"Training for group {self.group_id} is {status.state.value}, retrying in {interval:.1f}s")
            self._sleep(min(interval, remaining))
            interval = min(interval * BACKOFF_FACTOR, self.settings.max_poll_interval)

    def _rollback_person(self, person_id: str) -> bool:
        """Delete a person created by a failed enrollment; True once it is gone"""
        try:
            self.provider.delete_person(self.group_id, person_id)
            self.logger.info(f"Rolled back person {person_id} after failed enrollment")
            return True
        except Exception as e:
            if is_not_found(e):
                return True
            self.logger.error(f"Could not roll back person {person_id}: {e}")
            return False
