"""
Services package for Reports module
"""

from .base import BaseReportService, ReportGenerationError
from .aggregation import AggregationResult, RecordReportService

__all__ = [
    "AggregationResult",
    "BaseReportService",
    "RecordReportService",
    "ReportGenerationError",
]
