from __future__ import annotations

import pytest

from domain.exceptions import RepositoryError, RequestMalformed
from domain.services.data_admin_service import DataAdminService
from domain.services.import_service import ImportService
from tests.fakes import InMemoryRepository, devpost_csv, devpost_row


def test_clear_all_deletes_rows_and_resets_numbering(repo: InMemoryRepository) -> None:
    ImportService(repo).import_csv(devpost_csv([devpost_row(url="u1"), devpost_row(url="u2")]))
    repo.next_number = 42

    deleted = DataAdminService(repo).clear_all("DELETE")

    assert (deleted.participants, deleted.submissions, deleted.links) == (1, 2, 2)
    assert repo.get_counts().__dict__ == {"participants": 0, "submissions": 0, "links": 0}
    assert repo.next_number == 1


def test_clear_all_needs_exact_confirmation(repo: InMemoryRepository) -> None:
    ImportService(repo).import_csv(devpost_csv([devpost_row()]))

    with pytest.raises(RequestMalformed):
        DataAdminService(repo).clear_all("yes")

    assert repo.get_counts().submissions == 1


def test_clear_all_stops_before_reset_when_a_delete_fails(repo: InMemoryRepository) -> None:
    ImportService(repo).import_csv(devpost_csv([devpost_row()]))
    repo.next_number = 7
    repo.fail_on.add("delete_all_submissions")

    with pytest.raises(RepositoryError):
        DataAdminService(repo).clear_all("DELETE")

    assert repo.next_number == 7
