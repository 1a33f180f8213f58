"""Tests for job partitioning and result models."""

import pytest

from core.errors import InvalidJobNumber
from core.models import DefinitionResult, Job, JobSummary, WordOutcome, validate_job_number


WORDS = ["cat", "dog", "fish"]


def test_job_slices_example_list():
    assert Job(1, 2).select(WORDS) == ["cat", "dog"]
    assert Job(2, 2).select(WORDS) == ["fish"]
    assert Job(3, 2).select(WORDS) == []


def test_job_bounds_are_half_open_and_clamped():
    job = Job(2, 2)
    assert (job.start, job.end) == (2, 4)
    assert job.bounds(len(WORDS)) == (2, 3)
    assert Job(5, 2).bounds(len(WORDS)) == (3, 3)


def test_consecutive_jobs_partition_the_list():
    words = [f"w{i}" for i in range(23)]
    size = 5
    count = Job.count_for(len(words), size)

    rebuilt = []
    for number in range(1, count + 1):
        rebuilt.extend(Job(number, size).select(words))

    assert count == 5
    assert rebuilt == words


def test_job_selection_is_reproducible():
    words = [f"w{i}" for i in range(10)]
    assert Job(2, 3).select(words) == Job(2, 3).select(list(words)) == ["w3", "w4", "w5"]


def test_count_for_empty_list():
    assert Job.count_for(0, 10) == 0


@pytest.mark.parametrize("bad", [0, -1, 1.0, "1", None, True])
def test_validate_job_number_rejects(bad):
    with pytest.raises(InvalidJobNumber):
        validate_job_number(bad)


def test_invalid_job_number_is_a_value_error():
    with pytest.raises(ValueError):
        Job(0, 10)


def test_job_size_must_be_positive():
    with pytest.raises(ValueError, match="Job size"):
        Job(1, 0)


def test_definition_result_round_trips_through_dict():
    result = DefinitionResult(index=4, word="cat", content="<li>feline</li>\n")
    assert result.to_dict() == {"index": 4, "word": "cat", "content": "<li>feline</li>\n"}
    assert DefinitionResult.from_dict(result.to_dict()) == result


def test_definition_result_reads_legacy_keys():
    legacy = {"id": 10, "word": "one", "html": "<li>1</li>"}
    assert DefinitionResult.from_dict(legacy) == DefinitionResult(10, "one", "<li>1</li>")


def test_definition_result_str():
    result = DefinitionResult(index=1, word="dog", content="a canine")
    assert str(result) == "id: 1\nword: dog\nhtml: \na canine"


def test_summary_counts_outcomes():
    summary = JobSummary(job_number=1, output_path=None)
    summary.add(WordOutcome("cat", 0, result=DefinitionResult(0, "cat", "x")))
    summary.add(WordOutcome("dog", 1, result=DefinitionResult(1, "dog", "")))
    summary.add(WordOutcome("fish", 2, error="HTTP 503"))
    summary.add(WordOutcome("bird", 3, skipped=True))

    assert (summary.attempted, summary.recorded, summary.empty) == (3, 2, 1)
    assert (summary.failed, summary.skipped) == (1, 1)
    assert summary.failures == {"fish": "HTTP 503"}
