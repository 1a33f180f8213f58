#!/usr/bin/env python3
"""
Job runner for definition harvesting.

The word list is partitioned into fixed-size jobs; job ``n`` covers the
half-open range ``[(n - 1) * size, n * size)`` clamped to the list length.
One invocation processes one job: words are fetched one at a time behind a
pacing delay, failures are isolated per word, and every success is persisted
immediately.
"""

import logging
import re
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Union

from tqdm import tqdm

from core.config import DEFAULT_URL_TEMPLATE, HarvestConfig
from core.errors import FetchError
from core.models import DefinitionResult, Job, JobSummary, WordOutcome, validate_job_number
from harvesters.definition_extractor import DefinitionExtractor
from harvesters.page_fetcher import PageFetcher, build_definition_url
from harvesters.pacing import FixedDelayPacing
from harvesters.result_store import ResultStore
from harvesters.word_source import WordSource

logger = logging.getLogger(__name__)


class JobRunner:
    """Runs one harvesting job at a time over a word list"""

    def __init__(
        self,
        words: Union[Sequence[str], WordSource],
        output_path_for: Callable[[int], Path],
        fetcher: Optional[PageFetcher] = None,
        extractor: Optional[DefinitionExtractor] = None,
        pacing=None,
        job_size: int = 2271,
        plain_text: bool = False,
        url_template: str = DEFAULT_URL_TEMPLATE,
        resume: bool = False,
        debug_dump_dir: Optional[Union[str, Path]] = None,
        show_progress: bool = False,
    ):
        if job_size < 1:
            raise ValueError("Job size must be a positive integer")
        self.words = words
        self.output_path_for = output_path_for
        self.fetcher = fetcher if fetcher is not None else PageFetcher()
        self.extractor = extractor if extractor is not None else DefinitionExtractor()
        self.pacing = pacing if pacing is not None else FixedDelayPacing()
        self.job_size = job_size
        self.plain_text = plain_text
        self.url_template = url_template
        self.resume = resume
        self.debug_dump_dir = Path(debug_dump_dir) if debug_dump_dir else None
        self.show_progress = show_progress
        self._word_list: Optional[List[str]] = None

    @classmethod
    def from_config(cls, config: HarvestConfig, resume: bool = False,
                    show_progress: bool = False, **overrides) -> "JobRunner":
        """Build a runner wired with the configured fetcher, extractor and pacing"""
        options = dict(
            words=WordSource(config.words_file),
            output_path_for=config.output_path_for,
            fetcher=PageFetcher(
                user_agent=config.user_agent,
                timeout=config.timeout,
                max_attempts=config.max_attempts,
                default_charset=config.default_charset,
            ),
            extractor=DefinitionExtractor(config.marker_class, config.list_tag),
            pacing=FixedDelayPacing(config.delay_seconds),
            job_size=config.job_size,
            plain_text=config.plain_text,
            url_template=config.url_template,
            resume=resume,
            debug_dump_dir=config.debug_dump_dir,
            show_progress=show_progress,
        )
        options.update(overrides)
        return cls(**options)

    def load_words(self) -> List[str]:
        """Word list, read from the source on first use"""
        if self._word_list is None:
            if isinstance(self.words, WordSource):
                self._word_list = self.words.load()
            else:
                self._word_list = list(self.words)
        return self._word_list

    def job_count(self) -> int:
        return Job.count_for(len(self.load_words()), self.job_size)

    def select(self, job_number: int) -> List[str]:
        """Words belonging to ``job_number``"""
        return Job(validate_job_number(job_number), self.job_size).select(self.load_words())

    def run_job(self, job_number: int) -> JobSummary:
        """Harvest every word in the job's slice and persist results as they arrive"""
        job = Job(validate_job_number(job_number), self.job_size)
        words = self.load_words()
        start, end = job.bounds(len(words))
        job_words = words[start:end]
        total = len(job_words)

        output_path = Path(self.output_path_for(job.number))
        summary = JobSummary(job_number=job.number, output_path=output_path)

        if not job_words:
            logger.warning(
                f"Job {job.number} starts at word {job.start} but the list has only "
                f"{len(words)} words; nothing to harvest"
            )
        else:
            logger.info(f"Job {job.number}: words {start} to {end - 1} ({total} words) -> {output_path}")

        store = ResultStore(output_path, resume=self.resume).open()

        progress = tqdm(total=total, desc=f"Job {job.number}", unit="word", disable=not self.show_progress)
        try:
            for offset, word in enumerate(job_words):
                index = start + offset
                if self.resume and word in store:
                    logger.debug(f"Already harvested {word}; skipping")
                    outcome = WordOutcome(word=word, index=index, skipped=True)
                else:
                    self.pacing.wait()
                    logger.info(f"Iteration {offset + 1} of {total} ... saving word: {word}")
                    outcome = self.harvest_word(index, word)
                    if outcome.ok:
                        store.record(outcome.result)
                summary.add(outcome)
                progress.update(1)
        finally:
            progress.close()

        logger.info(
            f"Job {job.number} complete: {summary.recorded} recorded "
            f"({summary.empty} without definition), {summary.failed} failed, "
            f"{summary.skipped} already present"
        )
        return summary

    def harvest_word(self, index: int, word: str) -> WordOutcome:
        """Fetch and extract one word; failures come back as a failed outcome"""
        url = build_definition_url(word, self.url_template)

        try:
            page = self.fetcher.fetch(url)
        except FetchError as e:
            logger.warning(f"Error -- skipping {word}: {e}")
            return WordOutcome(word=word, index=index, error=str(e))

        if self.debug_dump_dir is not None:
            self._dump_page(word, page)

        try:
            content = self.extractor.extract(page, plain_text=self.plain_text)
        except Exception as e:
            logger.warning(f"Error -- skipping {word}: extraction failed: {e}")
            return WordOutcome(word=word, index=index, error=f"extraction failed: {e}")

        if not content:
            logger.info(f"No definition found for {word}; recording empty entry")

        return WordOutcome(
            word=word,
            index=index,
            result=DefinitionResult(index=index, word=word, content=content),
        )

    def _dump_page(self, word: str, page: str):
        safe_word = re.sub(r"[^a-z0-9]+", "_", word.lower()).strip("_") or "word"
        dump_path = self.debug_dump_dir / f"{safe_word}.html"
        try:
            dump_path.parent.mkdir(parents=True, exist_ok=True)
            dump_path.write_text(page, encoding='utf-8')
        except OSError as e:
            logger.warning(f"Could not dump page for {word} to {dump_path}: {e}")
