# coding: utf-8

"""
Face Provider

Thin wrapper over the Azure AI Vision Face SDK clients for the single identity
group used by the login flows. Every method is one remote round-trip (or a
short paginated/batched series of them) and returns the package's own data
types. Provider errors (``azure.core.exceptions.HttpResponseError``) are not
handled here; the orchestrators decide which ones are tolerated.
"""

import logging
from typing import List, Optional

from azure.ai.vision.face import FaceAdministrationClient, FaceClient
from azure.ai.vision.face.models import FaceDetectionModel, FaceRecognitionModel
from azure.core.credentials import AzureKeyCredential
from azure.core.exceptions import HttpResponseError

from .models import CandidateMatch, EnrolledPerson, TrainingState, TrainingStatus

# Service limits for large person groups
IDENTIFY_BATCH_SIZE = 10
PERSONS_PAGE_SIZE = 1000

DETECTION_MODEL = FaceDetectionModel.DETECTION03
RECOGNITION_MODEL = FaceRecognitionModel.RECOGNITION04


def status_code_of(error: BaseException) -> Optional[int]:
    """HTTP status carried by a provider error, if any"""
    if isinstance(error, HttpResponseError):
        if error.status_code is not None:
            return error.status_code
        response = getattr(error, "response", None)
        return getattr(response, "status_code", None)
    return None


def is_conflict(error: BaseException) -> bool:
    return status_code_of(error) == 409


def is_not_found(error: BaseException) -> bool:
    return status_code_of(error) == 404


class FaceProvider:
    """
    Face Provider

    Owns the Face API clients and exposes the group, person, face, training,
    detection and identification calls the login flows are built from.
    """

    def __init__(
        self,
        endpoint: str,
        api_key: str,
        logger: Optional[logging.Logger] = None,
        face_client: Optional[FaceClient] = None,
        face_admin_client: Optional[FaceAdministrationClient] = None
    ):
        """Initialize provider with Face API clients"""
        self.endpoint = endpoint
        self.logger = logger or logging.getLogger(__name__)

        credential = AzureKeyCredential(api_key)
        self.face_client = face_client or FaceClient(endpoint, credential)
        self.face_admin_client = face_admin_client or FaceAdministrationClient(endpoint, credential)

    # Group operations
    def create_group(self, group_id: str, group_name: str):
        """Create the large person group; raises on conflict"""
        self.face_admin_client.large_person_group.create(
            group_id,
            name=group_name,
            recognition_model=RECOGNITION_MODEL
        )
        self.logger.info(f"Created group: {group_id}")

    def train_group(self, group_id: str):
        """Start a training job for the group without waiting for it"""
        self.face_admin_client.large_person_group.begin_train(group_id)
        self.logger.info(f"Training started for group: {group_id}")

    def get_training_status(self, group_id: str) -> TrainingStatus:
        """Fetch the current training job status"""
        result = self.face_admin_client.large_person_group.get_training_status(group_id)
        return TrainingStatus(
            state=TrainingState.parse(result.status),
            message=result.message or ""
        )

    # Person operations
    def create_person(self, group_id: str, username: str) -> str:
        """Create a person named after the username; returns the person ID"""
        person = self.face_admin_client.large_person_group.create_person(group_id, name=username)
        self.logger.info(f"Created person {username} with ID: {person.person_id} in group {group_id}")
        return str(person.person_id)

    def add_face(self, group_id: str, person_id: str, image_bytes: bytes) -> str:
        """Upload one face sample for a person; returns the persisted face ID"""
        face = self.face_admin_client.large_person_group.add_face(
            large_person_group_id=group_id,
            person_id=person_id,
            image_content=image_bytes,
            detection_model=DETECTION_MODEL
        )
        self.logger.info(f"Added face {face.persisted_face_id} to person {person_id} in group {group_id}")
        return str(face.persisted_face_id)

    def list_persons(self, group_id: str) -> List[EnrolledPerson]:
        """List every person in the group, following pagination"""
        persons: List[EnrolledPerson] = []
        start = None
        while True:
            page = self.face_admin_client.large_person_group.get_persons(
                group_id, start=start, top=PERSONS_PAGE_SIZE
            )
            page = list(page or [])
            for person in page:
                persons.append(EnrolledPerson(
                    person_id=str(person.person_id),
                    username=person.name or "",
                    persisted_face_ids=[str(f) for f in (person.persisted_face_ids or [])]
                ))
            if len(page) < PERSONS_PAGE_SIZE:
                break
            start = str(page[-1].person_id)
        return persons

    def delete_person(self, group_id: str, person_id: str):
        """Delete a person and all of their face samples"""
        self.face_admin_client.large_person_group.delete_person(group_id, person_id)
        self.logger.info(f"Deleted person {person_id} from group {group_id}")

    # Detection and identification
    def detect_faces(self, image_bytes: bytes) -> List[str]:
        """Detect faces and return their transient face IDs"""
        detected = self.face_client.detect(
            image_bytes,
            detection_model=DETECTION_MODEL,
            recognition_model=RECOGNITION_MODEL,
            return_face_id=True
        )
        return [str(face.face_id) for face in detected or [] if face.face_id]

    def identify(self, face_ids: List[str], group_id: str,
                 confidence_threshold: Optional[float] = None) -> List[CandidateMatch]:
        """Identify detected faces against the group in service-sized batches"""
        matches: List[CandidateMatch] = []
        for i in range(0, len(face_ids), IDENTIFY_BATCH_SIZE):
            batch = face_ids[i:i + IDENTIFY_BATCH_SIZE]
            kwargs = {}
            if confidence_threshold is not None:
                kwargs["confidence_threshold"] = confidence_threshold
            results = self.face_client.identify_from_large_person_group(
                face_ids=batch,
                large_person_group_id=group_id,
                **kwargs
            )
            for result in results or []:
                for candidate in result.candidates or []:
                    matches.append(CandidateMatch(
                        face_id=str(result.face_id),
                        person_id=str(candidate.person_id),
                        confidence=float(candidate.confidence)
                    ))
        return matches

    def close(self):
        """Release the underlying HTTP pipelines"""
        self.face_client.close()
        self.face_admin_client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def __repr__(self) -> str:
        return f"FaceProvider(endpoint='{self.endpoint}')"
