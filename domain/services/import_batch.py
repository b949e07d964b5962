from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence

from domain.models.devpost import DevpostRow, RowKind
from domain.models.identity import Participant
from domain.models.submission import GENERAL_PRIZE, Submission
from domain.services.devpost_csv import classify, map_row


def merge_prizes(existing: Sequence[str], incoming: Sequence[str]) -> List[str]:
    """
    Union of two prize lists.

    GENERAL always comes first, then the existing prizes in their stored
    order, then incoming prizes not seen yet. Comparison is case-sensitive.
    """
    merged = [GENERAL_PRIZE]
    for prize in (*existing, *incoming):
        if prize and prize not in merged:
            merged.append(prize)
    return merged


@dataclass
class ImportBatch:
    """
    Rows of one upload folded by natural identity.

    - submissions: devpost_url -> Submission, first row seeds the fields,
      later rows only add prizes
    - participants: lower-cased email -> Participant, first-seen names win
    - links: devpost_url -> emails of the team, in first-seen order
    """

    submissions: Dict[str, Submission] = field(default_factory=dict)
    participants: Dict[str, Participant] = field(default_factory=dict)
    links: Dict[str, Dict[str, None]] = field(default_factory=dict)
    skipped_drafts: int = 0
    skipped_rows: int = 0

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[str]]) -> "ImportBatch":
        batch = cls()
        for row in rows:
            batch.add_row(row)
        return batch

    def add_row(self, row: Sequence[str]) -> RowKind:
        return self.add_record(map_row(row))

    def add_record(self, record: DevpostRow) -> RowKind:
        kind = classify(record)
        if kind is RowKind.SKIP:
            self.skipped_rows += 1
            return kind
        if kind is RowKind.DRAFT:
            self.skipped_drafts += 1
            return kind

        self._add_submission(record)

        team = self.links.setdefault(record.submission_url, {})
        for person in record.people:
            if not person.email:
                continue
            if person.email not in self.participants:
                self.participants[person.email] = Participant(
                    email=person.email,
                    first_name=person.first_name,
                    last_name=person.last_name,
                )
            team[person.email] = None

        return kind

    def _add_submission(self, record: DevpostRow) -> None:
        existing = self.submissions.get(record.submission_url)
        if existing is not None:
            if record.prize and record.prize not in existing.prizes:
                existing.prizes.append(record.prize)
            return

        prizes = [GENERAL_PRIZE]
        if record.prize and record.prize != GENERAL_PRIZE:
            prizes.append(record.prize)

        self.submissions[record.submission_url] = Submission(
            devpost_url=record.submission_url,
            title=record.title,
            repo_url=record.repo_url,
            demo_url=record.demo_url,
            video_url=record.video_url,
            prizes=prizes,
        )

    def team_emails(self, devpost_url: str) -> List[str]:
        return list(self.links.get(devpost_url, {}))

    @property
    def link_count(self) -> int:
        return sum(len(emails) for emails in self.links.values())
