from dataclasses import dataclass, field
from typing import List, Optional
from uuid import UUID

GENERAL_PRIZE = "GENERAL"


@dataclass(frozen=True)
class Submission:
    devpost_url: str
    title: str = ""
    repo_url: str = ""
    demo_url: str = ""
    video_url: str = ""
    prizes: List[str] = field(default_factory=lambda: [GENERAL_PRIZE])
    id: Optional[UUID] = None
    number: Optional[int] = None


@dataclass(frozen=True)
class SubmissionLink:
    participant_id: UUID
    submission_id: UUID
