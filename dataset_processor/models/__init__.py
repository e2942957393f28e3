"""Domain models for the dataset processor.

Records and Datasets are the core data model; RowData / ErrorRecord /
ProcessingResult carry input rows, rejected rows and per-run metrics.
"""

from .dataset import Dataset
from .error_record import ErrorRecord
from .processing_result import ProcessingResult
from .record import Record
from .reports import CartReport, DeviceReport, StudentReport
from .row_data import RowData

__all__ = [
    # Core data model
    "Dataset",
    "Record",
    # Processing models
    "RowData",
    "ErrorRecord",
    "ProcessingResult",
    # Report projections
    "StudentReport",
    "CartReport",
    "DeviceReport",
]
