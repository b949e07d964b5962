from __future__ import annotations

import logging
from typing import Callable, Dict, List, TypeVar
from uuid import UUID

from domain.exceptions.ingest import PersistenceFailure, RepositoryError
from domain.models.import_result import ImportSummary
from domain.models.submission import Submission, SubmissionLink
from domain.ports.repository import RepositoryPort
from domain.services.devpost_csv import decode_upload, parse_csv
from domain.services.import_batch import ImportBatch, merge_prizes

T = TypeVar("T")


class ImportService:
    """
    DevPost CSV import pipeline.

    parse -> fold into an ImportBatch -> persist in four phases
    (participants, submissions, id_lookup, links). Each phase commits on its
    own; a failing phase raises PersistenceFailure and leaves earlier phases
    in place. Every write is an upsert, so re-running the same file is safe.
    """

    def __init__(self, repository: RepositoryPort):
        self.repository = repository
        self.logger = logging.getLogger(__name__)

    def import_csv(self, data: bytes) -> ImportSummary:
        rows = parse_csv(decode_upload(data))
        batch = ImportBatch.from_rows(rows)
        self.logger.info(
            f"Parsed {len(rows)} rows: {len(batch.submissions)} submissions, "
            f"{len(batch.participants)} participants, {batch.skipped_drafts} drafts skipped"
        )
        return self.persist(batch)

    def persist(self, batch: ImportBatch) -> ImportSummary:
        participants = list(batch.participants.values())
        self._run_phase("participants", lambda: self.repository.upsert_participants(participants))

        submissions = self._run_phase("submissions", lambda: self._merge_and_upsert_submissions(batch))

        participant_ids, submission_ids = self._run_phase(
            "id_lookup",
            lambda: (
                self.repository.get_participant_ids(batch.participants.keys()),
                self.repository.get_submission_ids(batch.submissions.keys()),
            ),
        )

        links = self.build_links(batch, participant_ids, submission_ids)
        self._run_phase("links", lambda: self.repository.upsert_submission_links(links))

        summary = ImportSummary(
            participants=len(participants),
            submissions=len(submissions),
            links=len(links),
            skipped_drafts=batch.skipped_drafts,
        )
        self.logger.info(f"Import finished: {summary}")
        return summary

    @staticmethod
    def build_links(
        batch: ImportBatch,
        participant_ids: Dict[str, UUID],
        submission_ids: Dict[str, UUID],
    ) -> List[SubmissionLink]:
        links: List[SubmissionLink] = []
        for devpost_url, emails in batch.links.items():
            submission_id = submission_ids.get(devpost_url)
            if submission_id is None:
                continue
            for email in emails:
                participant_id = participant_ids.get(email)
                if participant_id is None:
                    continue
                links.append(SubmissionLink(participant_id=participant_id, submission_id=submission_id))
        return links

    def _merge_and_upsert_submissions(self, batch: ImportBatch) -> List[Submission]:
        stored = self.repository.get_submission_prizes(batch.submissions.keys())
        submissions = [
            Submission(
                devpost_url=s.devpost_url,
                title=s.title,
                repo_url=s.repo_url,
                demo_url=s.demo_url,
                video_url=s.video_url,
                prizes=merge_prizes(stored.get(s.devpost_url, []), s.prizes),
            )
            for s in batch.submissions.values()
        ]
        self.repository.upsert_submissions(submissions)
        return submissions

    def _run_phase(self, phase: str, step: Callable[[], T]) -> T:
        try:
            return step()
        except RepositoryError as e:
            self.logger.error(f"Import aborted in phase '{phase}': {e}")
            raise PersistenceFailure(phase, e.details or str(e)) from e
