#!/usr/bin/env python3
"""
Definition markup extraction.

The definition for a ``define:`` query sits in ordered lists carrying the
``dict`` class. Each qualifying list contributes one block to the output,
in document order, terminated by a newline.
"""

import re
from typing import List

from bs4 import BeautifulSoup, Tag


def clean_text(s: str) -> str:
    """Collapse runs of whitespace and trim."""
    return re.sub(r"\s+", " ", s or "").strip()


class DefinitionExtractor:
    """Pull definition blocks out of a search results page"""

    def __init__(self, marker_class: str = 'dict', list_tag: str = 'ol'):
        self.marker_class = marker_class
        self.list_tag = list_tag.lower()

    def definition_blocks(self, html: str) -> List[Tag]:
        """Elements carrying the marker class whose tag is the list tag

        Class names compare case-insensitively, as browsers do in quirks mode.
        """
        soup = BeautifulSoup(html or "", "html.parser")
        marker = re.compile(rf"^{re.escape(self.marker_class)}$", re.I)
        return [
            element for element in soup.find_all(class_=marker)
            if element.name and element.name.lower() == self.list_tag
        ]

    def extract_html(self, html: str) -> str:
        """Concatenated inner markup of every definition block"""
        return "".join(block.decode_contents() + "\n" for block in self.definition_blocks(html))

    def extract_text(self, html: str) -> str:
        """Concatenated plain text of every definition block"""
        return "".join(clean_text(block.get_text(" ")) + "\n" for block in self.definition_blocks(html))

    def extract(self, html: str, plain_text: bool = False) -> str:
        if plain_text:
            return self.extract_text(html)
        return self.extract_html(html)

    def count_blocks(self, html: str) -> int:
        return len(self.definition_blocks(html))
