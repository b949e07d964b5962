"""
DevPost export reader.

Turns the raw bytes of a DevPost "projects" CSV export into structured
``DevpostRow`` records. The column layout is fixed by DevPost, so the mapping
is positional; everything past ``TEAM_MEMBERS_START`` is a repeating
(first name, last name, email) triple for each additional team member.
"""

from __future__ import annotations

import io
import logging
import re
from typing import Any, Dict, List, Sequence

import pandas as pd

from domain.exceptions.ingest import CsvParseError
from domain.models.devpost import (
    SUBMITTED_STATUS_PREFIX,
    UNTITLED_PROJECT,
    DevpostColumn as COL,
    DevpostRow,
    RowKind,
    TeamMember,
)

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_ERROR_LINE = re.compile(r"(?:line|row) (\d+)")
_FIELD_OVERFLOW = re.compile(r"Expected \d+ fields in line \d+, saw (\d+)")


def decode_upload(data: bytes) -> str:
    """UTF-8 with the BOM removed; undecodable bytes become U+FFFD."""
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        logger.warning(f"Upload is not valid UTF-8 ({e}), undecodable bytes replaced")
        return data.decode("utf-8-sig", errors="replace")


def _max_field_count(text: str) -> int:
    """
    Widest record in the text, counting only delimiters outside quotes.

    Physical lines are joined while a quoted field is open, so multi-line
    cells count towards their record.
    """
    widest = 0
    commas = 0
    in_quotes = False
    for line in text.split("\n"):
        for i, part in enumerate(line.split('"')):
            if i:
                in_quotes = not in_quotes
            if not in_quotes:
                commas += part.count(",")
        if not in_quotes:
            widest = max(widest, commas + 1)
            commas = 0
    return max(widest, commas + 1)


def _trim_padding(row: List[str]) -> List[str]:
    end = len(row)
    while end and row[end - 1] == "":
        end -= 1
    return row[:end]


def _read_frame(text: str, width: int) -> pd.DataFrame:
    return pd.read_csv(
        io.StringIO(text),
        header=None,
        names=list(range(width)),
        index_col=False,
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
    )


def parse_csv(text: str) -> List[List[str]]:
    """
    Parse CSV text into raw rows, header excluded.

    Blank lines are skipped and rows may have any number of fields.
    Quoted fields may span lines and have no length limit.

    Raises:
        CsvParseError: the text is not structurally valid CSV
    """
    width = _max_field_count(text)
    while True:
        try:
            df = _read_frame(text, width)
            break
        except pd.errors.EmptyDataError:
            return []
        except pd.errors.ParserError as e:
            message = str(e).strip()
            # a stray quote in an unquoted cell can hide delimiters from the estimate
            overflow = _FIELD_OVERFLOW.search(message)
            if overflow and int(overflow.group(1)) > width:
                width = int(overflow.group(1))
                continue
            m = _ERROR_LINE.search(message)
            diagnostics: List[Dict[str, Any]] = [{"row": int(m.group(1)) if m else None, "message": message}]
            logger.warning(f"CSV rejected: {message}")
            raise CsvParseError(diagnostics) from e

    # short rows are padded out to the widest record
    rows = [_trim_padding(row) for row in df.fillna("").values.tolist()]
    return rows[1:]


def _cell(row: Sequence[str], index: int) -> str:
    if index < len(row):
        return (row[index] or "").strip()
    return ""


def _parse_count(value: str) -> int:
    m = _LEADING_INT.match(value or "")
    if not m:
        return 0
    return max(int(m.group(1)), 0)


def map_row(row: Sequence[str]) -> DevpostRow:
    """Map one raw export row onto a DevpostRow. Never raises."""
    submitter = TeamMember(
        first_name=_cell(row, COL.SUBMITTER_FIRST_NAME),
        last_name=_cell(row, COL.SUBMITTER_LAST_NAME),
        email=_cell(row, COL.SUBMITTER_EMAIL).lower(),
    )

    members: List[TeamMember] = []
    for i in range(_parse_count(_cell(row, COL.ADDITIONAL_TEAM_MEMBER_COUNT))):
        base = COL.TEAM_MEMBERS_START + i * COL.TEAM_MEMBER_WIDTH
        # only complete triples
        if base + 2 >= len(row):
            break
        members.append(
            TeamMember(
                first_name=_cell(row, base),
                last_name=_cell(row, base + 1),
                email=_cell(row, base + 2).lower(),
            )
        )

    return DevpostRow(
        submission_url=_cell(row, COL.SUBMISSION_URL),
        title=_cell(row, COL.PROJECT_TITLE),
        status=_cell(row, COL.PROJECT_STATUS),
        prize=_cell(row, COL.OPT_IN_PRIZE),
        video_url=_cell(row, COL.VIDEO_DEMO_LINK),
        demo_url=_cell(row, COL.DEPLOY_LINK),
        repo_url=_cell(row, COL.GIT_LINK),
        submitter=submitter,
        team_members=members,
    )


def classify(record: DevpostRow) -> RowKind:
    if not record.submission_url or record.title == UNTITLED_PROJECT:
        return RowKind.SKIP
    if not record.status.startswith(SUBMITTED_STATUS_PREFIX):
        return RowKind.DRAFT
    return RowKind.ELIGIBLE
