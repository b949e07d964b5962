from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class ImportSummary:
    participants: int
    submissions: int
    links: int
    skipped_drafts: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": True,
            "participants": self.participants,
            "submissions": self.submissions,
            "links": self.links,
            "skippedDrafts": self.skipped_drafts,
        }


@dataclass(frozen=True)
class DataCounts:
    participants: int
    submissions: int
    links: int
