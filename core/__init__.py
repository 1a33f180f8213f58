"""
Core definition harvester components.

This package contains the building blocks shared by the harvesting pipeline:
- Configuration and logging setup
- Result, job and outcome data models
- Error taxonomy
"""

from .config import HarvestConfig, get_config, reset_config, setup_logging
from .errors import FetchError, HarvestError, InvalidJobNumber, PersistError, SourceLoadError
from .models import DefinitionResult, Job, JobSummary, WordOutcome, validate_job_number

__all__ = [
    'HarvestConfig',
    'get_config',
    'reset_config',
    'setup_logging',
    'HarvestError',
    'SourceLoadError',
    'FetchError',
    'PersistError',
    'InvalidJobNumber',
    'DefinitionResult',
    'Job',
    'JobSummary',
    'WordOutcome',
    'validate_job_number',
]
