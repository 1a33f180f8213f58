"""
Definition harvesting pipeline.

This package contains the components for harvesting word definitions:
- Word list loading
- Rate-paced page fetching
- Definition markup extraction
- Incremental result persistence
- Job partitioning and execution
"""

from .word_source import WordSource
from .page_fetcher import PageFetcher, build_definition_url
from .definition_extractor import DefinitionExtractor
from .pacing import FixedDelayPacing, NoPacing
from .result_store import ResultStore, load_results, merge_result_files, write_results
from .job_runner import JobRunner

__all__ = [
    'WordSource',
    'PageFetcher',
    'build_definition_url',
    'DefinitionExtractor',
    'FixedDelayPacing',
    'NoPacing',
    'ResultStore',
    'load_results',
    'merge_result_files',
    'write_results',
    'JobRunner',
]
