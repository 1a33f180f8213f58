#!/usr/bin/env python3
"""
Data containers shared across the harvesting pipeline.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from core.errors import InvalidJobNumber


def validate_job_number(job_number: Any) -> int:
    """Return ``job_number`` if it is a positive integer, else raise."""

    # bool is an int subclass; True must not pass as job 1
    if isinstance(job_number, bool) or not isinstance(job_number, int):
        raise InvalidJobNumber(f"Job number must be a positive integer, got {job_number!r}")
    if job_number < 1:
        raise InvalidJobNumber(f"Job number must be a positive integer, got {job_number}")
    return job_number


@dataclass(frozen=True)
class DefinitionResult:
    """Definition content harvested for a single word."""

    index: int
    word: str
    content: str

    def to_dict(self) -> Dict[str, Any]:
        return {"index": self.index, "word": self.word, "content": self.content}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DefinitionResult":
        """Build a result from its JSON form.

        Files written by the older loader used ``id`` and ``html`` for the
        index and content fields; both spellings are accepted.
        """

        index = data["index"] if "index" in data else data["id"]
        content = data["content"] if "content" in data else data.get("html", "")
        return cls(index=int(index), word=data["word"], content=content or "")

    def __str__(self) -> str:
        return f"id: {self.index}\nword: {self.word}\nhtml: \n{self.content}"


@dataclass(frozen=True)
class Job:
    """A contiguous slice of the word list, identified by a 1-based number."""

    number: int
    size: int

    def __post_init__(self):
        validate_job_number(self.number)
        if isinstance(self.size, bool) or not isinstance(self.size, int) or self.size < 1:
            raise ValueError(f"Job size must be a positive integer, got {self.size!r}")

    @property
    def start(self) -> int:
        return (self.number - 1) * self.size

    @property
    def end(self) -> int:
        return self.number * self.size

    def select(self, words: Sequence[str]) -> List[str]:
        """Return this job's words; slicing clamps to the list length."""
        return list(words[self.start:self.end])

    def bounds(self, total: int) -> tuple:
        """Return ``(start, end)`` clamped to a list of ``total`` words."""
        return min(self.start, total), min(self.end, total)

    @staticmethod
    def count_for(total_words: int, size: int) -> int:
        """Number of jobs needed to cover ``total_words``."""
        if total_words <= 0:
            return 0
        return math.ceil(total_words / size)


@dataclass
class WordOutcome:
    """Per-word result of a harvest attempt.

    Exactly one of ``result`` or ``error`` is set unless the word was
    skipped because an earlier run already recorded it.
    """

    word: str
    index: int
    result: Optional[DefinitionResult] = None
    error: Optional[str] = None
    skipped: bool = False

    @property
    def ok(self) -> bool:
        return self.result is not None and self.error is None

    @property
    def empty(self) -> bool:
        return self.ok and not self.result.content


@dataclass
class JobSummary:
    """Counters describing one job run."""

    job_number: int
    output_path: Path
    attempted: int = 0
    recorded: int = 0
    failed: int = 0
    empty: int = 0
    skipped: int = 0
    failures: Dict[str, str] = field(default_factory=dict)

    def add(self, outcome: WordOutcome) -> None:
        if outcome.skipped:
            self.skipped += 1
            return
        self.attempted += 1
        if outcome.ok:
            self.recorded += 1
            if outcome.empty:
                self.empty += 1
        else:
            self.failed += 1
            self.failures[outcome.word] = outcome.error or "unknown error"
