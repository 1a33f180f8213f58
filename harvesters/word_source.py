#!/usr/bin/env python3
"""
Word list loading for definition harvesting.
"""

import logging
from pathlib import Path
from typing import List, Union

from core.errors import SourceLoadError

logger = logging.getLogger(__name__)


class WordSource:
    """Ordered sequence of candidate words read from a line-delimited file."""

    def __init__(self, path: Union[str, Path], encoding: str = 'utf-8'):
        self.path = Path(path)
        self.encoding = encoding

    def load(self) -> List[str]:
        """Return one word per non-empty line, in file order.

        Only the line terminator is removed; surrounding whitespace is kept
        and duplicates are not collapsed.
        """
        try:
            with open(self.path, 'r', encoding=self.encoding, newline='') as f:
                lines = f.read().split('\n')
        except (OSError, UnicodeDecodeError) as e:
            raise SourceLoadError(f"Cannot load word list {self.path}: {e}") from e

        # only \n and \r\n end a line; form feeds and the like stay in the word
        words = [line[:-1] if line.endswith('\r') else line for line in lines]
        words = [word for word in words if word]
        logger.info(f"Loaded {len(words)} words from {self.path}")
        return words
