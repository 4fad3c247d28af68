"""
System Import from CSV.

Expected layout (UTF-8, comma separated, header on the first line):

    NAME,TYPE,RAW,CAP,POP,MOR,IND
    Senor Prime,HW,5,12,10,8,10

The header is skipped by position, not checked by name. Rows that do not
have exactly seven fields, that the csv module cannot read, or whose numeric
fields are not non-negative integers that fit an SQLite INTEGER, are
skipped with a warning and reported in ImportResult.skipped.

Valid rows are inserted one at a time. There is no enclosing transaction:
if an insert fails, the rows before it stay in the campaign.
"""

from __future__ import annotations

import csv
import io
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from ...core.logging import get_logger
from .errors import CampaignIOError, CampaignParseError
from .models import System

if TYPE_CHECKING:
    from .database import CampaignDatabase

logger = get_logger(__name__)

CSV_COLUMNS = ("NAME", "TYPE", "RAW", "CAP", "POP", "MOR", "IND")
NUMERIC_COLUMNS = CSV_COLUMNS[2:]

# Largest value an SQLite INTEGER column can hold
MAX_STORED_INT = 2**63 - 1


@dataclass
class SkippedRow:
    """A CSV row that was not imported."""

    line: int
    reason: str


@dataclass
class ImportResult:
    """Outcome of a systems import."""

    imported: int = 0
    skipped: list[SkippedRow] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "imported": self.imported,
            "skipped": [{"line": s.line, "reason": s.reason} for s in self.skipped],
        }


def parse_system_row(fields: list[str]) -> System:
    """
    Build an unsaved System from one CSV record.

    Raises:
        CampaignParseError: Wrong field count or a bad numeric value
    """
    if len(fields) != len(CSV_COLUMNS):
        raise CampaignParseError(
            f"expected {len(CSV_COLUMNS)} fields, found {len(fields)}"
        )

    name, ptype, *numbers = (f.strip() for f in fields)
    values: list[int] = []
    for column, text in zip(NUMERIC_COLUMNS, numbers):
        try:
            value = int(text)
        except ValueError as e:
            raise CampaignParseError(f"{column} is not an integer: {text!r}") from e
        if value < 0:
            raise CampaignParseError(f"{column} must not be negative: {value}")
        if value > MAX_STORED_INT:
            raise CampaignParseError(f"{column} is too large to store: {value}")
        values.append(value)

    raw, cap, pop, mor, ind = values
    return System(name=name, ptype=ptype, raw=raw, cap=cap, pop=pop, mor=mor, ind=ind)


def parse_systems_csv(text: str) -> tuple[list[System], list[SkippedRow]]:
    """
    Parse CSV text into systems.

    Returns:
        Tuple of (valid systems in file order, skipped rows)
    """
    systems: list[System] = []
    skipped: list[SkippedRow] = []

    records = _read_records(text)
    next(records, None)  # header

    for line, fields in records:
        try:
            if isinstance(fields, csv.Error):
                raise CampaignParseError(f"malformed CSV record: {fields}")
            if not fields:
                continue
            systems.append(parse_system_row(fields))
        except CampaignParseError as e:
            logger.warning("Skipping CSV line %d: %s", line, e)
            skipped.append(SkippedRow(line=line, reason=str(e)))

    return systems, skipped


def _read_records(text: str) -> Iterator[tuple[int, list[str] | csv.Error]]:
    """
    Yield (line number, fields) for each CSV record.

    A record the csv module cannot read, such as a field over its size
    limit, yields the csv.Error in place of the fields and reading resumes
    on the next line.
    """
    reader = csv.reader(io.StringIO(text))
    while True:
        try:
            fields = next(reader)
        except StopIteration:
            return
        except csv.Error as e:
            yield reader.line_num, e
            continue
        yield reader.line_num, fields


def read_systems_csv(path: Path | str) -> tuple[list[System], list[SkippedRow]]:
    """
    Read and parse a systems CSV file.

    Raises:
        CampaignIOError: The file cannot be read or is not UTF-8
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise CampaignIOError(f"Cannot read {path}: {e}") from e
    return parse_systems_csv(text)


async def import_systems(database: CampaignDatabase, path: Path | str) -> ImportResult:
    """
    Import systems from a CSV file into an open campaign database.

    Storage errors propagate after the rows inserted so far are committed.
    """
    systems, skipped = read_systems_csv(path)
    result = ImportResult(skipped=skipped)

    for system in systems:
        await database.insert_system(system)
        result.imported += 1

    logger.info(
        "Imported %d systems from %s (%d rows skipped)",
        result.imported,
        Path(path).name,
        len(result.skipped),
    )
    return result
