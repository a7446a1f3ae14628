"""
Enrichment Models - Tagged states of the AI study-aid request lifecycle.
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, ClassVar, Dict, Union


class StudyAidKind(str, Enum):
    """Study aids the AI studio can produce."""
    PLAN = "plan"
    QUIZ = "quiz"
    SUMMARY = "summary"


@dataclass(frozen=True)
class Idle:
    status: ClassVar[str] = "idle"


@dataclass(frozen=True, eq=False)
class Requesting:
    """
    In-flight request stamped with the record it was issued for.
    Compared by identity so a completion can tell whether it is still the current request.
    """
    record_id: str
    kind: StudyAidKind
    status: ClassVar[str] = "requesting"


@dataclass(frozen=True)
class Ready:
    record_id: str
    kind: StudyAidKind
    content: str
    status: ClassVar[str] = "ready"


@dataclass(frozen=True)
class Failed:
    record_id: str
    kind: StudyAidKind
    reason: str
    status: ClassVar[str] = "failed"


EnrichmentState = Union[Idle, Requesting, Ready, Failed]


def describe_state(state: EnrichmentState) -> Dict[str, Any]:
    """Flatten a state into a JSON-friendly dict for the studio panel."""
    data: Dict[str, Any] = {"status": state.status}
    for key, value in asdict(state).items():
        data[key] = value.value if isinstance(value, Enum) else value
    return data
