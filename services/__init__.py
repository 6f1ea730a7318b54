"""
Services Package
================

Business logic layer for the EPG AdZone Validator.

Services:
- ValidationService: Validation workflow and error tags
- ExportService: CSV / JSON report export
- StatisticsService: PHT presence and summary tables
"""

from .validation_service import ValidationService
from .export_service import ExportService
from .statistics_service import StatisticsService

__all__ = [
    'ValidationService',
    'ExportService',
    'StatisticsService',
]
