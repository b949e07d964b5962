from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional
from uuid import UUID

from domain.models.identity import Participant, Profile
from domain.models.import_result import DataCounts
from domain.models.submission import Submission, SubmissionLink


class RepositoryPort(ABC):
    """Storage contract of the dashboard.

    Write methods commit on success and raise RepositoryError on failure,
    leaving whatever earlier calls committed in place.
    """

    # =========================
    # Participants
    # =========================

    @abstractmethod
    def upsert_participants(self, participants: List[Participant]) -> int:
        """Insert or merge by email. Empty names never erase stored ones."""

    @abstractmethod
    def get_participant_ids(self, emails: Iterable[str]) -> Dict[str, UUID]:
        pass

    # =========================
    # Submissions
    # =========================

    @abstractmethod
    def get_submission_prizes(self, devpost_urls: Iterable[str]) -> Dict[str, List[str]]:
        pass

    @abstractmethod
    def upsert_submissions(self, submissions: List[Submission]) -> int:
        """Insert or merge by devpost_url.

        prizes are written as given. Empty title/link fields keep the stored
        value. number is never written; new rows draw it from the sequence.
        """

    @abstractmethod
    def get_submission_ids(self, devpost_urls: Iterable[str]) -> Dict[str, UUID]:
        pass

    # =========================
    # Links
    # =========================

    @abstractmethod
    def upsert_submission_links(self, links: List[SubmissionLink]) -> int:
        pass

    # =========================
    # Profiles
    # =========================

    @abstractmethod
    def get_profile(self, user_id: UUID) -> Optional[Profile]:
        pass

    # =========================
    # Administration
    # =========================

    @abstractmethod
    def get_counts(self) -> DataCounts:
        pass

    @abstractmethod
    def delete_all_submission_links(self) -> None:
        pass

    @abstractmethod
    def delete_all_submissions(self) -> None:
        pass

    @abstractmethod
    def delete_all_participants(self) -> None:
        pass

    @abstractmethod
    def reset_submission_sequence(self) -> None:
        """Restart the submission display number at 1."""
