# coding: utf-8

"""
Face Login Data Types

Plain data holders shared by the provider wrapper and the orchestrators.
Provider SDK objects are converted into these at the provider boundary so the
enrollment, verification and removal flows never touch SDK models directly.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Set


class TrainingState(str, Enum):
    """Training job states reported by the Face service"""
    NOT_STARTED = "notStarted"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @classmethod
    def parse(cls, value) -> "TrainingState":
        # SDK enums and raw strings both end up here
        raw = getattr(value, "value", value)
        for state in cls:
            if state.value.lower() == str(raw).lower():
                return state
        raise ValueError(f"Unknown training status: {value!r}")


@dataclass
class TrainingStatus:
    """Snapshot of the group's training job"""
    state: TrainingState
    message: str = ""

    @property
    def is_finished(self) -> bool:
        return self.state in (TrainingState.SUCCEEDED, TrainingState.FAILED)


@dataclass
class EnrolledPerson:
    """Person record in the identity group"""
    person_id: str
    username: str
    persisted_face_ids: List[str] = field(default_factory=list)


@dataclass
class CandidateMatch:
    """Identification candidate for one detected face"""
    face_id: str
    person_id: str
    confidence: float


@dataclass
class EnrollmentResult:
    """Outcome of a successful enrollment"""
    person_id: str
    persisted_face_id: str
    username: str


@dataclass
class VerificationResult:
    """
    Detailed verification outcome

    ``identified`` is the fail-closed answer; ``error`` carries whatever was
    absorbed on the way so callers can tell "no match" from "system error".
    """
    identified: bool
    candidate_person_ids: Set[str] = field(default_factory=set)
    matching_person_ids: Set[str] = field(default_factory=set)
    faces_detected: int = 0
    error: Optional[Exception] = None

    def __bool__(self) -> bool:
        return self.identified
