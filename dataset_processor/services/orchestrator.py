from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from ..config.loader import ProcessorConfig
from ..errors import DatasetError, DivisionByZeroError
from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..models.dataset import Dataset
from ..models.processing_result import ProcessingResult
from ..models.record import Record
from ..models.row_data import RowData
from . import render
from .cart import build_catalog, catalog_prices, checkout, item_from_row, payment_message
from .collections_demo import entry_from_row, split_entries, split_entries_by_keys
from .devices import analyze_device, device_from_row
from .discount import DiscountGenerator
from .grades import analyze_student, class_average, student_from_row
from .progress import ProgressTracker
from .reducers import count_active, get_status, longest_name, lookup_price, safe_divide

logger = logging.getLogger(__name__)

"""Service orchestration.

Coordinates one program run: input rows -> Dataset (rejected rows go to the
error log) -> reducers -> rendered report -> ProcessingResult.
"""

PROGRAMS = ("grades", "cart", "devices", "collections")


class ProcessingError(Exception):
    """Fatal error that prevents a program run."""


@dataclass(frozen=True)
class _Outcome:
    total: int
    accepted: int
    failed: int
    lines: list[str]


def _row_label(row: RowData) -> str:
    for key in ("name", "item"):
        value = row.values.get(key)
        if value:
            return str(value)
    return f"row {row.row_number}"


def _record_error(error_log: ErrorLogBuffer, program: str, name: str, position: int, error: DatasetError) -> None:
    logger.warning(f"{program}: {name or '-'} rejected ({error.error_type}): {error}")
    error_log.append(
        ErrorRecord.create(
            program=program,
            record=name,
            position=position,
            error_type=error.error_type,
            message=str(error),
        )
    )


def _ingest(
    program: str,
    rows: Sequence[RowData],
    accept: Callable[[RowData], None],
    error_log: ErrorLogBuffer,
) -> int:
    """Feed every row to ``accept``; DatasetErrors are logged and counted, not raised.

    Returns:
        Number of rejected rows
    """
    rejected = 0
    with ProgressTracker(len(rows), description=f"Building {program} dataset") as progress:
        for row in rows:
            label = _row_label(row)
            progress.start_record(label)
            try:
                accept(row)
            except DatasetError as e:
                rejected += 1
                _record_error(error_log, program, label, row.row_number, e)
                progress.finish_record(success=False)
                continue
            progress.finish_record(success=True)
    return rejected


def _process_grades(rows: Sequence[RowData], config: ProcessorConfig, error_log: ErrorLogBuffer) -> _Outcome:
    students = Dataset(duplicate_policy=config.duplicate_policy)
    positions: dict[str, int] = {}

    def accept(row: RowData) -> None:
        record = student_from_row(row)
        students.add_record(record)
        positions.setdefault(record.name, row.row_number)

    rejected = _ingest("grades", rows, accept, error_log)

    failed_reductions = 0
    lines = ["--- Results ---"]
    for record in students:
        try:
            report = analyze_student(record, config.grades)
        except DatasetError as e:
            failed_reductions += 1
            _record_error(error_log, "grades", record.name, positions.get(record.name, -1), e)
            lines += render.render_student_error(record.name, e)
            continue
        lines += render.render_student(report)

    try:
        class_avg: int | None = class_average(students)
        reason = None
    except DivisionByZeroError as e:
        logger.debug(f"grades: class average unavailable: {e}")
        class_avg, reason = None, str(e)
    lines += render.render_grades_footer(class_avg, reason, safe_divide(100, 5))

    return _Outcome(
        total=len(rows),
        accepted=len(rows) - rejected - failed_reductions,
        failed=rejected + failed_reductions,
        lines=lines,
    )


def _process_cart(
    rows: Sequence[RowData],
    config: ProcessorConfig,
    error_log: ErrorLogBuffer,
    payment_method: str | None,
) -> _Outcome:
    catalog = build_catalog(config.cart.catalog, duplicate_policy=config.duplicate_policy)
    prices = catalog_prices(catalog)
    items: list[str] = []

    def accept(row: RowData) -> None:
        item = item_from_row(row)
        price = lookup_price(item, prices)
        items.append(item)
        logger.info(f"Added {item} ({price:.2f}) to cart")

    rejected = _ingest("cart", rows, accept, error_log)

    generator = DiscountGenerator(config.cart.discount_base, config.cart.discount_step)
    try:
        report = checkout(items, catalog, generator)
    except DatasetError as e:
        _record_error(error_log, "cart", "", -1, e)
        lines = ["--- Shopping Cart ---", f"Items: {render.format_values(items)}", f"Error: {e}"]
        # checkout is all-or-nothing: every cart row fails with it
        return _Outcome(total=len(rows), accepted=0, failed=len(rows), lines=lines)

    payment = None
    if payment_method is not None and not report.is_empty:
        ok, payment = payment_message(payment_method, config.cart.payment_methods)
        if not ok:
            logger.warning(f"cart: unknown payment method {payment_method!r}")
    return _Outcome(
        total=len(rows),
        accepted=len(rows) - rejected,
        failed=rejected,
        lines=render.render_cart(report, payment),
    )


def _process_devices(rows: Sequence[RowData], config: ProcessorConfig, error_log: ErrorLogBuffer) -> _Outcome:
    devices = Dataset(duplicate_policy=config.duplicate_policy)
    rejected = _ingest("devices", rows, lambda row: devices.add_record(device_from_row(row)), error_log)

    reports = [analyze_device(record, config.devices) for record in devices]
    status = devices.status_map()
    lines = render.render_device_summary(reports)
    if len(devices) == 0:
        lines += render.render_device_analysis(0, 0, None, None)
    else:
        first = devices.names[0]
        lines += render.render_device_analysis(
            len(devices),
            count_active(status),
            longest_name(devices.names),
            (first, get_status(first, status)),
        )
    lines += render.render_device_configs(reports)
    return _Outcome(total=len(rows), accepted=len(rows) - rejected, failed=rejected, lines=lines)


def _process_collections(
    rows: Sequence[RowData] | None,
    config: ProcessorConfig,
    error_log: ErrorLogBuffer,
) -> _Outcome:
    # None: no input source, the configured mapping is the dataset
    if rows is None:
        mapping = dict(config.collections.mapping)
        rejected = 0
        total = len(mapping)
    else:
        entries = Dataset(duplicate_policy=config.duplicate_policy)

        def accept(row: RowData) -> None:
            name, value = entry_from_row(row)
            entries.add_record(Record(name=name, values=(value,)))

        rejected = _ingest("collections", rows, accept, error_log)
        mapping = {name: int(values[0]) for name, values in entries.value_map().items()}
        total = len(rows)

    keys = list(mapping)
    lines = render.render_collections(split_entries(mapping), keys, split_entries_by_keys(mapping, keys))
    return _Outcome(total=total, accepted=total - rejected, failed=rejected, lines=lines)


def process_program(
    program: str,
    rows: Sequence[RowData] | None,
    config: ProcessorConfig,
    *,
    payment_method: str | None = None,
    error_log: ErrorLogBuffer | None = None,
) -> ProcessingResult:
    """Run one program over its input rows.

    Args:
        program: One of PROGRAMS
        rows: Parsed input rows (file or interactive prompts). None means no
            input source was given; collections then uses the configured mapping
        config: Loaded processor configuration
        payment_method: Cart only; payment method to settle with
        error_log: Buffer for rejected rows (default: one under ``config.error_log_dir``)

    Returns:
        ProcessingResult with metrics and the rendered report lines

    Raises:
        ProcessingError: For an unknown program name
    """
    if program not in PROGRAMS:
        raise ProcessingError(f"unknown program: {program}")

    start_time = datetime.now(UTC)
    if error_log is None:
        error_log = ErrorLogBuffer(Path(config.error_log_dir))

    if rows is None:
        logger.debug(f"{program}: no input source")
    else:
        logger.debug(f"{program}: processing {len(rows)} input rows")

    if program == "grades":
        outcome = _process_grades(rows or [], config, error_log)
    elif program == "cart":
        outcome = _process_cart(rows or [], config, error_log, payment_method)
    elif program == "devices":
        outcome = _process_devices(rows or [], config, error_log)
    else:
        outcome = _process_collections(rows, config, error_log)

    error_log_path = None
    try:
        flushed = error_log.flush()
    except OSError as e:
        # エラーログ書き込み失敗で処理全体は失敗させない
        logger.warning(f"error log flush failed: {e}")
    else:
        if flushed is not None:
            error_log_path = str(flushed)
            logger.info(f"error log written: {flushed}")

    end_time = datetime.now(UTC)
    return ProcessingResult(
        program=program,
        total_records=outcome.total,
        accepted_records=outcome.accepted,
        failed_records=outcome.failed,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        report_lines=tuple(outcome.lines),
        error_log_path=error_log_path,
    )
