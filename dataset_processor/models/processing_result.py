from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

"""Processing result model: per-run metrics plus the rendered report."""


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated results of one program run.

    Contains everything needed for the SUMMARY output line and the report body.
    """
    program: str
    total_records: int  # 入力行数 (prompt / file rows)
    accepted_records: int
    failed_records: int  # rejected rows + failed reductions
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    report_lines: tuple[str, ...] = ()
    error_log_path: str | None = None  # flush 先 (エラー無しなら None)

    @property
    def has_failures(self) -> bool:
        return self.failed_records > 0
