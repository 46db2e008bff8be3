# coding: utf-8

"""
Verification

Checks a live photo against the identity claimed by a username. Candidate
persons from identification are intersected with every enrolled person sharing
that username, so duplicate usernames at the provider are accepted as long as
one of them matches. Any failure yields "not identified".
"""

from concurrent.futures import ThreadPoolExecutor
from typing import List, Set

from .base import BaseOrchestrator
from .imaging import Photo, photo_to_bytes
from .models import EnrolledPerson, VerificationResult


class VerificationOrchestrator(BaseOrchestrator):
    """
    Verification Orchestrator

    Lists enrolled persons on a worker thread while detecting and identifying
    faces on the calling thread, then matches candidates against the username.
    """

    def verify(self, username: str, photo: Photo) -> bool:
        """Return True if the photo shows a person enrolled under username"""
        return self.verify_detailed(username, photo).identified

    def verify_detailed(self, username: str, photo: Photo) -> VerificationResult:
        """
        Verify a photo and keep the diagnostics

        Args:
            username: Claimed login name, matched case-insensitively
            photo: Image bytes, binary stream or image frame

        Returns:
            VerificationResult; ``error`` is set when a failure was absorbed
        """
        with self.indicator.track():
            try:
                return self._verify(username, photo)
            except Exception as e:
                self.logger.warning(f"Verification for {username} failed: {e}")
                return VerificationResult(identified=False, error=e)

    def _verify(self, username: str, photo: Photo) -> VerificationResult:
        with ThreadPoolExecutor(max_workers=1) as executor:
            persons_future = executor.submit(self.provider.list_persons, self.group_id)

            image_bytes = photo_to_bytes(photo)
            face_ids = self.provider.detect_faces(image_bytes)
            candidate_ids = self._identify_candidates(face_ids)

            persons = persons_future.result()

        matching_ids = self._matching_person_ids(persons, username)
        identified = bool(candidate_ids & matching_ids)

        self.logger.info(
            f"Verification for {username}: {len(face_ids)} faces, "
            f"{len(candidate_ids)} candidates, {len(matching_ids)} persons named {username}, "
            f"identified={identified}"
        )
        return VerificationResult(
            identified=identified,
            candidate_person_ids=candidate_ids,
            matching_person_ids=matching_ids,
            faces_detected=len(face_ids)
        )

    def _identify_candidates(self, face_ids: List[str]) -> Set[str]:
        if not face_ids:
            return set()
        matches = self.provider.identify(
            face_ids,
            self.group_id,
            confidence_threshold=self.settings.confidence_threshold
        )
        return {match.person_id for match in matches}

    @staticmethod
    def _matching_person_ids(persons: List[EnrolledPerson], username: str) -> Set[str]:
        wanted = (username or "").casefold()
        return {person.person_id for person in persons if person.username.casefold() == wanted}
