"""
Validators Package
==================

This package contains all EPG XML validation logic:
- PHT rule catalog and scalar value checks
- Line attribution for findings
- Logical validation of AdZone documents

Modules:
- epg_validator.py: Validation engine (validate / validate_file)
- validation_pipeline.py: Batch validation and markdown reports
- pht_rules.py: Per-PHT rule catalog
- line_index.py: Source line lookup
- models.py: ValidationError / ValidationResult data contract
"""

from .epg_validator import EPGValidator, validate, validate_file
from .models import ValidationError, ValidationResult, ValidationSummary
from .validation_pipeline import ValidationPipeline

__all__ = [
    'EPGValidator',
    'ValidationError',
    'ValidationPipeline',
    'ValidationResult',
    'ValidationSummary',
    'validate',
    'validate_file',
]
