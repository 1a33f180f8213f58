"""Tests for definition markup extraction."""

import textwrap

from conftest import definition_page
from harvesters.definition_extractor import DefinitionExtractor


def test_single_definition_markup():
    html = '<html><body><ol class="dict"><li>a small domesticated carnivore</li></ol></body></html>'
    assert DefinitionExtractor().extract_html(html) == "<li>a small domesticated carnivore</li>\n"


def test_no_definition_returns_empty_string():
    html = "<html><body><p>No results</p><ol><li>not marked</li></ol></body></html>"
    extractor = DefinitionExtractor()
    assert extractor.extract_html(html) == ""
    assert extractor.extract_text(html) == ""


def test_marker_class_on_other_tags_is_ignored():
    html = textwrap.dedent(
        """
        <div class="dict"><ol><li>nested list, container is not an ol</li></ol></div>
        <ul class="dict"><li>unordered</li></ul>
        <ol class="dict"><li>kept</li></ol>
        """
    )
    assert DefinitionExtractor().extract_html(html) == "<li>kept</li>\n"


def test_blocks_concatenate_in_document_order():
    html = definition_page(["first sense"], ["second sense", "third sense"])
    assert DefinitionExtractor().extract_html(html) == (
        "<li>first sense</li>\n"
        "<li>second sense</li><li>third sense</li>\n"
    )


def test_marker_class_matches_among_several_classes():
    html = '<ol class="lr dict big"><li>sense</li></ol>'
    assert DefinitionExtractor().extract_html(html) == "<li>sense</li>\n"


def test_plain_text_variant():
    html = definition_page(["a feline", "a  spiteful\n woman"], ["jazz enthusiast"])
    assert DefinitionExtractor().extract_text(html) == "a feline a spiteful woman\njazz enthusiast\n"


def test_markup_and_text_agree_on_block_count():
    html = textwrap.dedent(
        """
        <ol class="dict">
          <li>one</li>
        </ol>
        <ol class="dict">
          <li>two</li>
          <li>three</li>
        </ol>
        <ol class="dict"><li>four</li></ol>
        """
    )
    extractor = DefinitionExtractor()
    blocks = extractor.definition_blocks(html)

    markup = extractor.extract_html(html)
    text_lines = [line for line in extractor.extract_text(html).split("\n") if line]

    assert markup == "".join(block.decode_contents() + "\n" for block in blocks)
    assert markup.count("\n") > len(blocks)
    assert text_lines == ["one", "two three", "four"]
    assert len(blocks) == extractor.count_blocks(html) == 3


def test_malformed_html_is_tolerated():
    html = '<html><body><ol class="dict"><li>unclosed item<li>another</ol><div></span>'
    content = DefinitionExtractor().extract_text(html)
    assert "unclosed item" in content
    assert "another" in content


def test_custom_marker_and_tag():
    html = '<dl class="defs"><dd>custom</dd></dl><ol class="dict"><li>default</li></ol>'
    extractor = DefinitionExtractor(marker_class="defs", list_tag="DL")
    assert extractor.extract_html(html) == "<dd>custom</dd>\n"


def test_extract_dispatches_on_plain_text_flag():
    html = definition_page(["<b>bold</b> sense"])
    extractor = DefinitionExtractor()
    assert extractor.extract(html) == "<li><b>bold</b> sense</li>\n"
    assert extractor.extract(html, plain_text=True) == "bold sense\n"


def test_marker_class_matches_regardless_of_case():
    html = '<OL class="Dict"><li>upper</li></OL><ol class="lr DICT"><li>shouted</li></ol><ol class="dictionary"><li>no</li></ol>'
    assert DefinitionExtractor().extract_html(html) == "<li>upper</li>\n<li>shouted</li>\n"
