from __future__ import annotations

from collections.abc import Mapping

from ..config.loader import GradesConfig
from ..errors import InvalidValueError
from ..models.dataset import Dataset
from ..models.record import Record
from ..models.reports import StudentReport
from ..models.row_data import RowData
from .reducers import average, min_max, safe_divide

"""Grade analyzer: students with integer scores -> average / min / max / grade."""

__all__ = [
    "parse_score",
    "student_from_row",
    "grade_for",
    "analyze_student",
    "class_average",
]


def parse_score(raw: object) -> int:
    """Parse one score cell. Accepts ``"85"`` and integral floats like ``"85.0"``."""
    text = str(raw).strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        raise InvalidValueError(f"score is not a number: {text!r}") from None
    if not number.is_integer():
        raise InvalidValueError(f"score must be a whole number: {text!r}")
    return int(number)


def student_from_row(row: RowData) -> Record:
    """Build a student Record: ``name`` column plus any number of score columns.

    Blank score cells are skipped so students may have different subject counts.
    """
    name = str(row.values.get("name") or "").strip()
    if not name:
        raise InvalidValueError("student name is empty")
    scores = tuple(
        parse_score(value)
        for column, value in row.values.items()
        if column != "name" and value is not None and str(value).strip() != ""
    )
    return Record(name=name, values=scores)


def grade_for(avg: float, thresholds: Mapping[str, float], fallback: str = "D") -> str:
    """Letter grade for an average; thresholds are checked from the highest minimum down."""
    for grade, minimum in sorted(thresholds.items(), key=lambda kv: kv[1], reverse=True):
        if avg >= minimum:
            return grade
    return fallback


def analyze_student(record: Record, config: GradesConfig) -> StudentReport:
    """Project one student through the reducers.

    Raises:
        EmptyInputError: If the student has no scores
    """
    scores = tuple(int(v) for v in record.values)
    avg = average(scores)
    lowest, highest = min_max(scores)
    return StudentReport(
        name=record.name,
        scores=scores,
        average=avg,
        minimum=lowest,
        maximum=highest,
        grade=grade_for(avg, config.thresholds, config.fallback_grade),
    )


def class_average(students: Dataset) -> int:
    """Integer average over every score of every student.

    Raises:
        DivisionByZeroError: If no scores were recorded at all
    """
    points = 0
    count = 0
    for record in students:
        points += sum(int(v) for v in record.values)
        count += len(record.values)
    return safe_divide(points, count)
