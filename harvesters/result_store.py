#!/usr/bin/env python3
"""
Incremental JSON persistence for harvested definitions.

The whole word -> result map is rewritten after every insertion. Each write
lands in a temporary sibling file that replaces the output in one step, so
a process killed mid-job always leaves a complete, parseable document.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Iterable, Optional, Union

from core.errors import PersistError
from core.models import DefinitionResult

logger = logging.getLogger(__name__)


def write_results(path: Union[str, Path], results: Dict[str, DefinitionResult]):
    """Atomically replace ``path`` with the JSON form of ``results``"""
    path = Path(path)
    payload = {word: result.to_dict() for word, result in results.items()}
    tmp_path = None

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile('w', encoding='utf-8', dir=path.parent,
                                         prefix=f".{path.name}.", suffix='.tmp',
                                         delete=False) as tmp_file:
            tmp_path = tmp_file.name
            json.dump(payload, tmp_file, ensure_ascii=False)
            tmp_file.flush()
            os.fsync(tmp_file.fileno())
        os.replace(tmp_path, path)
    except OSError as e:
        if tmp_path and os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise PersistError(f"Cannot write results to {path}: {e}") from e


def load_results(path: Union[str, Path]) -> Dict[str, DefinitionResult]:
    """Read a persisted result map back into DefinitionResult objects"""
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except OSError as e:
        raise PersistError(f"Cannot read results from {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise PersistError(f"Malformed results file {path}: {e}") from e

    if not isinstance(data, dict):
        raise PersistError(f"Malformed results file {path}: expected a JSON object")

    try:
        return {word: DefinitionResult.from_dict(entry) for word, entry in data.items()}
    except (KeyError, TypeError, ValueError) as e:
        raise PersistError(f"Malformed entry in {path}: {e}") from e


def merge_result_files(paths: Iterable[Union[str, Path]]) -> Dict[str, DefinitionResult]:
    """Merge several result files; later files win on duplicate words"""
    merged: Dict[str, DefinitionResult] = {}
    for path in paths:
        results = load_results(path)
        logger.info(f"Loaded {len(results)} entries from {path}")
        merged.update(results)
    return merged


class ResultStore:
    """Word -> DefinitionResult map owned by a single job run"""

    def __init__(self, path: Union[str, Path], resume: bool = False):
        self.path = Path(path)
        self.resume = resume
        self._results: Dict[str, DefinitionResult] = {}

    def open(self) -> "ResultStore":
        """Start the job's output, carrying over earlier results when resuming.

        Writing immediately surfaces an unwritable destination before any
        word is fetched.
        """
        if self.resume and self.path.exists():
            self._results = load_results(self.path)
            logger.info(f"Resuming with {len(self._results)} entries from {self.path}")
        else:
            self._results = {}
        self.flush()
        return self

    def record(self, result: DefinitionResult):
        """Insert (or overwrite) the entry for ``result.word`` and persist"""
        self._results[result.word] = result
        self.flush()

    def flush(self):
        write_results(self.path, self._results)

    def get(self, word: str) -> Optional[DefinitionResult]:
        return self._results.get(word)

    @property
    def results(self) -> Dict[str, DefinitionResult]:
        return dict(self._results)

    def __contains__(self, word: str) -> bool:
        return word in self._results

    def __len__(self) -> int:
        return len(self._results)
