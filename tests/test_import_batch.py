from __future__ import annotations

from domain.services.import_batch import ImportBatch, merge_prizes
from tests.fakes import devpost_row

U1 = "https://devpost.com/software/one"
U2 = "https://devpost.com/software/two"


def test_repeated_submission_only_adds_prizes() -> None:
    batch = ImportBatch.from_rows(
        [
            devpost_row(url=U1, title="Proj", git="https://github.com/a/b"),
            devpost_row(url=U1, title="Other title", prize="BEST_DESIGN", git=""),
            devpost_row(url=U1, prize="BEST_DESIGN"),
            devpost_row(url=U1, prize="BEST_HACK"),
        ]
    )

    sub = batch.submissions[U1]
    assert sub.title == "Proj"
    assert sub.repo_url == "https://github.com/a/b"
    assert sub.prizes == ["GENERAL", "BEST_DESIGN", "BEST_HACK"]


def test_general_prize_is_never_duplicated() -> None:
    batch = ImportBatch.from_rows(
        [devpost_row(url=U1, prize="GENERAL"), devpost_row(url=U1, prize="GENERAL")]
    )

    assert batch.submissions[U1].prizes == ["GENERAL"]


def test_prize_comparison_is_case_sensitive() -> None:
    batch = ImportBatch.from_rows(
        [devpost_row(url=U1, prize="best design"), devpost_row(url=U1, prize="BEST DESIGN")]
    )

    assert batch.submissions[U1].prizes == ["GENERAL", "best design", "BEST DESIGN"]


def test_first_seen_participant_name_wins() -> None:
    batch = ImportBatch.from_rows(
        [
            devpost_row(url=U1, submitter=("Jo", "Lee", "a@x.com")),
            devpost_row(url=U2, submitter=("Joanna", "Lee2", "A@X.com")),
        ]
    )

    p = batch.participants["a@x.com"]
    assert (p.first_name, p.last_name) == ("Jo", "Lee")
    assert len(batch.participants) == 1
    assert batch.team_emails(U1) == ["a@x.com"]
    assert batch.team_emails(U2) == ["a@x.com"]


def test_untitled_and_blank_urls_are_not_counted() -> None:
    batch = ImportBatch.from_rows(
        [devpost_row(url=U1, title="Untitled"), devpost_row(url="", status="Draft")]
    )

    assert batch.submissions == {}
    assert batch.participants == {}
    assert batch.skipped_drafts == 0
    assert batch.skipped_rows == 2


def test_drafts_are_counted_and_excluded() -> None:
    batch = ImportBatch.from_rows(
        [
            devpost_row(url=U1, status="Draft", submitter=("D", "R", "draft@x.com")),
            devpost_row(url=U2),
        ]
    )

    assert batch.skipped_drafts == 1
    assert list(batch.submissions) == [U2]
    assert "draft@x.com" not in batch.participants


def test_team_members_link_and_empty_emails_are_skipped() -> None:
    batch = ImportBatch.from_rows(
        [
            devpost_row(
                url=U1,
                submitter=("Alice", "Smith", "alice@x.com"),
                members=[("Bob", "Jones", "bob@x.com"), ("No", "Email", "")],
            )
        ]
    )

    assert batch.team_emails(U1) == ["alice@x.com", "bob@x.com"]
    assert set(batch.participants) == {"alice@x.com", "bob@x.com"}


def test_submitter_repeated_as_member_yields_one_link() -> None:
    batch = ImportBatch.from_rows(
        [
            devpost_row(url=U1, submitter=("Alice", "Smith", "alice@x.com")),
            devpost_row(
                url=U1,
                submitter=("Bob", "Jones", "bob@x.com"),
                members=[("Alice", "Smith", "ALICE@x.com")],
            ),
        ]
    )

    assert batch.team_emails(U1) == ["alice@x.com", "bob@x.com"]
    assert batch.link_count == 2


def test_batches_do_not_share_state() -> None:
    first = ImportBatch.from_rows([devpost_row(url=U1)])
    second = ImportBatch()

    assert first.submissions
    assert second.submissions == {}
    assert second.links == {}


def test_merge_prizes_keeps_stored_order_and_general_first() -> None:
    assert merge_prizes(["GENERAL", "B", "A"], ["GENERAL", "A", "C"]) == ["GENERAL", "B", "A", "C"]
    assert merge_prizes([], ["GENERAL", "X"]) == ["GENERAL", "X"]
    assert merge_prizes(["X", "GENERAL"], []) == ["GENERAL", "X"]
