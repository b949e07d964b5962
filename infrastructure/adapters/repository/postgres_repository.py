from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import delete, func, text
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from domain.exceptions.ingest import RepositoryError
from domain.models.identity import Participant, Profile
from domain.models.import_result import DataCounts
from domain.models.submission import Submission, SubmissionLink
from domain.ports.repository import RepositoryPort

from infrastructure.persistence.tables import (
    SUBMISSION_NUMBER_SEQUENCE,
    ParticipantTable,
    ProfileTable,
    SubmissionTable,
    submission_participants,
)

T = TypeVar("T")

logger = logging.getLogger(__name__)


def _chunks(items: Sequence[T], size: int) -> Iterator[Sequence[T]]:
    for start in range(0, len(items), size):
        yield items[start:start + size]


def _or_none(value: str) -> Optional[str]:
    return value or None


class PostgresRepository(RepositoryPort):
    def __init__(self, session: Session, batch_size: int = 1000):
        self.session = session
        self.batch_size = batch_size

    # =========================
    # Participants
    # =========================

    def upsert_participants(self, participants: List[Participant]) -> int:
        if not participants:
            return 0

        def statements():
            for chunk in _chunks(participants, self.batch_size):
                stmt = pg_insert(ParticipantTable).values(
                    [
                        {
                            "email": p.email,
                            "first_name": _or_none(p.first_name),
                            "last_name": _or_none(p.last_name),
                        }
                        for p in chunk
                    ]
                )
                yield stmt.on_conflict_do_update(
                    index_elements=[func.lower(ParticipantTable.email)],
                    set_={
                        "first_name": func.coalesce(stmt.excluded.first_name, ParticipantTable.first_name),
                        "last_name": func.coalesce(stmt.excluded.last_name, ParticipantTable.last_name),
                    },
                )

        self._write("upsert_participants", statements())
        return len(participants)

    def get_participant_ids(self, emails: Iterable[str]) -> Dict[str, UUID]:
        return self._lookup_ids("get_participant_ids", ParticipantTable, func.lower(ParticipantTable.email), emails)

    # =========================
    # Submissions
    # =========================

    def get_submission_prizes(self, devpost_urls: Iterable[str]) -> Dict[str, List[str]]:
        urls = list(devpost_urls)
        out: Dict[str, List[str]] = {}
        try:
            for chunk in _chunks(urls, self.batch_size):
                rows = (
                    self.session.query(SubmissionTable.devpost_url, SubmissionTable.prizes)
                    .filter(SubmissionTable.devpost_url.in_(chunk))
                    .all()
                )
                out.update({row.devpost_url: list(row.prizes or []) for row in rows})
        except SQLAlchemyError as e:
            self._fail("get_submission_prizes", e)
        return out

    def upsert_submissions(self, submissions: List[Submission]) -> int:
        if not submissions:
            return 0

        def statements():
            for chunk in _chunks(submissions, self.batch_size):
                stmt = pg_insert(SubmissionTable).values(
                    [
                        {
                            "devpost_url": s.devpost_url,
                            "title": _or_none(s.title),
                            "repo_url": _or_none(s.repo_url),
                            "demo_url": _or_none(s.demo_url),
                            "video_url": _or_none(s.video_url),
                            "prizes": list(s.prizes),
                        }
                        for s in chunk
                    ]
                )
                keep = {
                    name: func.coalesce(getattr(stmt.excluded, name), getattr(SubmissionTable, name))
                    for name in ("title", "repo_url", "demo_url", "video_url")
                }
                yield stmt.on_conflict_do_update(
                    index_elements=[SubmissionTable.devpost_url],
                    set_={**keep, "prizes": stmt.excluded.prizes},
                )

        self._write("upsert_submissions", statements())
        return len(submissions)

    def get_submission_ids(self, devpost_urls: Iterable[str]) -> Dict[str, UUID]:
        return self._lookup_ids("get_submission_ids", SubmissionTable, SubmissionTable.devpost_url, devpost_urls)

    # =========================
    # Links
    # =========================

    def upsert_submission_links(self, links: List[SubmissionLink]) -> int:
        if not links:
            return 0

        def statements():
            for chunk in _chunks(links, self.batch_size):
                yield (
                    pg_insert(submission_participants)
                    .values(
                        [
                            {"participant_id": link.participant_id, "submission_id": link.submission_id}
                            for link in chunk
                        ]
                    )
                    .on_conflict_do_nothing(
                        index_elements=[
                            submission_participants.c.participant_id,
                            submission_participants.c.submission_id,
                        ]
                    )
                )

        self._write("upsert_submission_links", statements())
        return len(links)

    # =========================
    # Profiles
    # =========================

    def get_profile(self, user_id: UUID) -> Optional[Profile]:
        try:
            p = self.session.query(ProfileTable).filter_by(id=user_id).first()
        except SQLAlchemyError as e:
            self._fail("get_profile", e)
        if not p:
            return None
        return Profile(id=p.id, role=p.role)

    # =========================
    # Administration
    # =========================

    def get_counts(self) -> DataCounts:
        try:
            return DataCounts(
                participants=self.session.query(func.count(ParticipantTable.id)).scalar() or 0,
                submissions=self.session.query(func.count(SubmissionTable.id)).scalar() or 0,
                links=self.session.query(func.count()).select_from(submission_participants).scalar() or 0,
            )
        except SQLAlchemyError as e:
            self._fail("get_counts", e)

    def delete_all_submission_links(self) -> None:
        self._write("delete_all_submission_links", [delete(submission_participants)])

    def delete_all_submissions(self) -> None:
        self._write("delete_all_submissions", [delete(SubmissionTable)])

    def delete_all_participants(self) -> None:
        self._write("delete_all_participants", [delete(ParticipantTable)])

    def reset_submission_sequence(self) -> None:
        self._write(
            "reset_submission_sequence",
            [text(f"ALTER SEQUENCE {SUBMISSION_NUMBER_SEQUENCE} RESTART WITH 1")],
        )

    # =========================
    # Private helpers
    # =========================

    def _lookup_ids(self, operation: str, table: Any, key_column: Any, keys: Iterable[str]) -> Dict[str, UUID]:
        wanted = list(keys)
        out: Dict[str, UUID] = {}
        try:
            for chunk in _chunks(wanted, self.batch_size):
                rows = self.session.query(table.id, key_column).filter(key_column.in_(chunk)).all()
                out.update({row[1]: row[0] for row in rows})
        except SQLAlchemyError as e:
            self._fail(operation, e)
        return out

    def _write(self, operation: str, statements: Iterable[Any]) -> None:
        """Execute statements in one transaction."""
        try:
            for stmt in statements:
                self.session.execute(stmt)
            self.session.commit()
        except SQLAlchemyError as e:
            self._fail(operation, e)

    def _fail(self, operation: str, error: SQLAlchemyError) -> None:
        self.session.rollback()
        details = str(getattr(error, "orig", None) or error)
        logger.error(f"{operation} failed: {details}")
        raise RepositoryError(operation, details) from error
