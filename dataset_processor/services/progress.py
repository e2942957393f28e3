from __future__ import annotations

import sys
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Progress display with tqdm (TTY only).

One tqdm instance per dataset build; disabled entirely when stdout is not a
TTY so CI logs and piped reports stay free of control sequences.
"""

__all__ = [
    "ProgressTracker",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    """True if stdout is a TTY and progress should be displayed."""
    return sys.stdout.isatty()


class ProgressTracker:
    """Progress tracker for building a dataset record by record."""

    def __init__(self, total_records: int, *, description: str = "Building dataset") -> None:
        """Initialize progress tracker.

        Args:
            total_records: Number of input rows to process
            description: Description for the progress bar
        """
        self.total_records = total_records
        self.description = description
        self.current_record = 0
        self.failed_records = 0

        self.enabled = is_tty_enabled()
        self.pbar: TqdmType[Any] | None
        if self.enabled:
            self.pbar = tqdm(
                total=total_records,
                desc=description,
                unit="record",
                leave=False,
                ncols=80,
                ascii=True,
            )
        else:
            self.pbar = None

    def start_record(self, name: str) -> None:
        self.current_record += 1
        if self.enabled and self.pbar is not None:
            self.pbar.set_description(f"{self.description} ({name})")

    def finish_record(self, success: bool = True) -> None:
        """Advance the bar; failed records are counted in the postfix."""
        if not success:
            self.failed_records += 1
        if self.enabled and self.pbar is not None:
            self.pbar.update(1)
            self.pbar.set_description(self.description)
            self.set_postfix(accepted=self.current_record - self.failed_records, rejected=self.failed_records)

    def set_postfix(self, **kwargs: Any) -> None:
        if self.enabled and self.pbar is not None:
            self.pbar.set_postfix(**kwargs)

    def close(self) -> None:
        if self.enabled and self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
