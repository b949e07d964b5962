from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List


class DevpostColumn:
    """Column positions of the DevPost project export."""

    OPT_IN_PRIZE = 0
    PROJECT_TITLE = 1
    SUBMISSION_URL = 2
    PROJECT_STATUS = 3
    VIDEO_DEMO_LINK = 9
    SUBMITTER_FIRST_NAME = 11
    SUBMITTER_LAST_NAME = 12
    SUBMITTER_EMAIL = 13
    DEPLOY_LINK = 15
    GIT_LINK = 16
    ADDITIONAL_TEAM_MEMBER_COUNT = 18
    TEAM_MEMBERS_START = 19
    TEAM_MEMBER_WIDTH = 3


UNTITLED_PROJECT = "Untitled"
SUBMITTED_STATUS_PREFIX = "Submitted"


class RowKind(str, Enum):
    ELIGIBLE = "eligible"
    DRAFT = "draft"
    SKIP = "skip"


@dataclass(frozen=True)
class TeamMember:
    first_name: str
    last_name: str
    email: str


@dataclass(frozen=True)
class DevpostRow:
    submission_url: str
    title: str
    status: str
    prize: str = ""
    video_url: str = ""
    demo_url: str = ""
    repo_url: str = ""
    submitter: TeamMember = field(default_factory=lambda: TeamMember("", "", ""))
    team_members: List[TeamMember] = field(default_factory=list)

    @property
    def people(self) -> List[TeamMember]:
        return [self.submitter, *self.team_members]
