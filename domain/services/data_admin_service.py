import logging

from domain.exceptions.ingest import RequestMalformed
from domain.models.import_result import DataCounts
from domain.ports.repository import RepositoryPort

CLEAR_CONFIRMATION = "DELETE"


class DataAdminService:
    def __init__(self, repository: RepositoryPort):
        self.repository = repository
        self.logger = logging.getLogger(__name__)

    def counts(self) -> DataCounts:
        return self.repository.get_counts()

    def clear_all(self, confirmation: str) -> DataCounts:
        """
        Delete every imported row and restart submission numbering.

        Links go first, then submissions and participants, so no step
        leaves a dangling reference behind.
        """
        if confirmation != CLEAR_CONFIRMATION:
            raise RequestMalformed(f"Type {CLEAR_CONFIRMATION} to confirm")

        before = self.repository.get_counts()
        self.repository.delete_all_submission_links()
        self.repository.delete_all_submissions()
        self.repository.delete_all_participants()
        self.repository.reset_submission_sequence()
        self.logger.warning(
            f"Cleared {before.participants} participants, {before.submissions} submissions, {before.links} links"
        )
        return before
