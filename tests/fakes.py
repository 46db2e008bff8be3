"""
In-memory stand-in for FaceProvider.

Photos are comma-separated "faceprint" tokens (b"alice-a,bob-a"); each token is
one detectable face and the token itself is what identification matches on.
The token "noface" is ignored by detection. Faces only become identifiable
after a training job succeeds, as with the real service.
"""

import itertools
import threading
from typing import Dict, List, Optional

from azure.core.exceptions import HttpResponseError

from face_login.models import CandidateMatch, EnrolledPerson, TrainingState, TrainingStatus


def http_error(status_code: int, message: str = "provider error") -> HttpResponseError:
    error = HttpResponseError(message=message)
    error.status_code = status_code
    return error


class FakeFaceProvider:
    def __init__(self, training_plan: Optional[List[TrainingStatus]] = None):
        self.groups: Dict[str, str] = {}
        self.persons: Dict[str, dict] = {}
        self.trained: Dict[str, set] = {}
        self.training_plan = training_plan
        self.failures: Dict[str, Exception] = {}
        self.calls: List[str] = []

        self._pending: List[TrainingStatus] = []
        self._status = TrainingStatus(TrainingState.NOT_STARTED)
        self._detected: Dict[str, str] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

        # Lets a test hold enrollment inside the training poll
        self.training_gate: Optional[threading.Event] = None
        self.training_entered = threading.Event()

    def fail(self, method: str, error: Exception):
        self.failures[method] = error

    def _call(self, method: str):
        with self._lock:
            self.calls.append(method)
        if method in self.failures:
            raise self.failures[method]

    def _next_id(self, prefix: str) -> str:
        with self._lock:
            return f"{prefix}-{next(self._ids)}"

    def create_group(self, group_id: str, group_name: str):
        self._call("create_group")
        if group_id in self.groups:
            raise http_error(409, "PersonGroupExists")
        self.groups[group_id] = group_name

    def create_person(self, group_id: str, username: str) -> str:
        self._call("create_person")
        if group_id not in self.groups:
            raise http_error(404, "PersonGroupNotFound")
        person_id = self._next_id("person")
        self.persons[person_id] = {"username": username, "faces": {}}
        return person_id

    def add_face(self, group_id: str, person_id: str, image_bytes: bytes) -> str:
        self._call("add_face")
        if person_id not in self.persons:
            raise http_error(404, "PersonNotFound")
        tokens = _tokens(image_bytes)
        if len(tokens) != 1:
            raise http_error(400, "InvalidImage: expected exactly one face")
        face_id = self._next_id("face")
        self.persons[person_id]["faces"][face_id] = tokens[0]
        return face_id

    def train_group(self, group_id: str):
        self._call("train_group")
        plan = self.training_plan
        if plan is None:
            plan = [TrainingStatus(TrainingState.RUNNING), TrainingStatus(TrainingState.SUCCEEDED)]
        self._pending = list(plan)
        self._status = TrainingStatus(TrainingState.RUNNING)

    def get_training_status(self, group_id: str) -> TrainingStatus:
        self._call("get_training_status")
        if self.training_gate is not None:
            self.training_entered.set()
            self.training_gate.wait(5)
        if self._pending:
            self._status = self._pending.pop(0)
            if self._status.state is TrainingState.SUCCEEDED:
                self._snapshot()
        return self._status

    def _snapshot(self):
        index: Dict[str, set] = {}
        for person_id, person in self.persons.items():
            for token in person["faces"].values():
                index.setdefault(token, set()).add(person_id)
        self.trained = index

    def list_persons(self, group_id: str) -> List[EnrolledPerson]:
        self._call("list_persons")
        return [
            EnrolledPerson(person_id=pid, username=p["username"], persisted_face_ids=list(p["faces"]))
            for pid, p in self.persons.items()
        ]

    def delete_person(self, group_id: str, person_id: str):
        self._call("delete_person")
        if person_id not in self.persons:
            raise http_error(404, "PersonNotFound")
        del self.persons[person_id]

    def detect_faces(self, image_bytes: bytes) -> List[str]:
        self._call("detect_faces")
        face_ids = []
        for token in _tokens(image_bytes):
            face_id = self._next_id("detected")
            self._detected[face_id] = token
            face_ids.append(face_id)
        return face_ids

    def identify(self, face_ids, group_id, confidence_threshold=None) -> List[CandidateMatch]:
        self._call("identify")
        matches = []
        for face_id in face_ids:
            token = self._detected[face_id]
            for person_id in sorted(self.trained.get(token, ())):
                matches.append(CandidateMatch(face_id=face_id, person_id=person_id, confidence=0.9))
        return matches


def _tokens(image_bytes: bytes) -> List[str]:
    text = image_bytes.decode("utf-8")
    return [t.strip() for t in text.split(",") if t.strip() and t.strip() != "noface"]
