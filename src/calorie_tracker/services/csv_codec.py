"""CSV export and import for the consumption log.

Each cell holds a JSON literal (strings quoted and escaped), so names with
commas or quotes survive a round trip. Ids and timestamps are not exported;
imported rows get fresh ones.
"""

import json
import logging
import re
from collections.abc import Callable
from datetime import UTC, date, datetime
from uuid import UUID, uuid4

import pydantic
from pydantic import BaseModel, ConfigDict

from calorie_tracker.domain.errors import LogImportError
from calorie_tracker.domain.log import LogEntry, Meal
from calorie_tracker.services.food_log import now_ms

_logger = logging.getLogger(__name__)

EXPORT_FIELDS = ("name", "meal", "grams", "kcal", "protein", "carbs", "fat")

_LINE_BREAK = re.compile(r"\r?\n")


def _reject_constant(name: str) -> object:
    raise LogImportError(f"Invalid number: {name}")


_DECODER = json.JSONDecoder(parse_constant=_reject_constant)


class CsvRow(BaseModel):
    """Validated row of an imported log."""

    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)

    name: str
    meal: Meal = Meal.ANY
    grams: float
    kcal: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0


def export_filename(today: date | None = None) -> str:
    """Return the download name for an export made on ``today``."""
    day = today or datetime.now(tz=UTC).date()
    return f"calorie-log-{day.isoformat()}.csv"


def encode_csv(entries: list[LogEntry]) -> str:
    """Encode entries as CSV with JSON-literal cells; empty log gives ""."""
    if not entries:
        return ""
    lines = [",".join(EXPORT_FIELDS)]
    for entry in entries:
        row = _export_row(entry)
        lines.append(",".join(_encode_cell(row[key]) for key in EXPORT_FIELDS))
    return "\n".join(lines)


def decode_csv(
    text: str,
    *,
    id_factory: Callable[[], UUID] = uuid4,
    clock: Callable[[], int] = now_ms,
) -> list[LogEntry]:
    """Parse exported CSV back into entries with fresh ids and timestamps.

    Raises LogImportError when any row fails to parse; nothing partial is
    returned.
    """
    stripped = text.strip()
    if not stripped:
        return []
    header, *lines = _LINE_BREAK.split(stripped)
    columns = [column.strip() for column in header.split(",")]
    entries: list[LogEntry] = []
    for line_number, line in enumerate(lines, start=2):
        if not line.strip():
            continue
        values = _split_literals(line, line_number)
        if len(values) != len(columns):
            raise LogImportError(
                f"Line {line_number}: expected {len(columns)} fields, "
                f"got {len(values)}"
            )
        try:
            row = CsvRow.model_validate(dict(zip(columns, values, strict=True)))
        except pydantic.ValidationError as exc:
            raise LogImportError(f"Line {line_number}: {exc}") from exc
        entries.append(
            LogEntry(
                id=id_factory(),
                name=row.name,
                meal=row.meal,
                grams=row.grams,
                kcal=row.kcal,
                protein=row.protein,
                carbs=row.carbs,
                fat=row.fat,
                ts=clock(),
            )
        )
    _logger.info("Decoded %s log entries from CSV", len(entries))
    return entries


def _export_row(entry: LogEntry) -> dict[str, object]:
    return {
        "name": entry.name,
        "meal": entry.meal.value,
        "grams": entry.grams,
        "kcal": entry.kcal,
        "protein": entry.protein,
        "carbs": entry.carbs,
        "fat": entry.fat,
    }


def _encode_cell(value: object) -> str:
    if value is None:
        return json.dumps("")
    if isinstance(value, float) and value.is_integer():
        return json.dumps(int(value))
    return json.dumps(value)


def _split_literals(line: str, line_number: int) -> list[object]:
    """Split a line into JSON literals separated by commas."""
    values: list[object] = []
    position = 0
    length = len(line)
    while True:
        while position < length and line[position] in " \t":
            position += 1
        try:
            value, position = _DECODER.raw_decode(line, position)
        except json.JSONDecodeError as exc:
            raise LogImportError(
                f"Line {line_number}: invalid value at column {position + 1}"
            ) from exc
        values.append(value)
        while position < length and line[position] in " \t":
            position += 1
        if position == length:
            return values
        if line[position] != ",":
            raise LogImportError(
                f"Line {line_number}: expected ',' at column {position + 1}"
            )
        position += 1
