from __future__ import annotations

from ..models.processing_result import ProcessingResult

"""SUMMARY line rendering.

Format:
SUMMARY program={program} records={total} accepted={accepted} failed={failed} elapsed_sec={elapsed}
"""


def _format_number(value: float) -> str:
    # 整数値は小数点なし、極小値は指数表記を避ける
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(round(value, 6))


def render_summary_line(result: ProcessingResult) -> str:
    """Render the SUMMARY line for one run.

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2024, 1, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> result = ProcessingResult(
        ...     program="grades", total_records=3, accepted_records=2, failed_records=1,
        ...     start_time=start, end_time=end, elapsed_seconds=2.0,
        ... )
        >>> render_summary_line(result)
        'SUMMARY program=grades records=3 accepted=2 failed=1 elapsed_sec=2'
    """
    return (
        f"SUMMARY program={result.program} "
        f"records={result.total_records} "
        f"accepted={result.accepted_records} "
        f"failed={result.failed_records} "
        f"elapsed_sec={_format_number(result.elapsed_seconds)}"
    )
