"""
Unit tests for block serialization to and from content_blocks rows.

Covers:
- Round trip of every variant, including the empty sequence
- Unused variant columns are NULL
- Rows are re-ordered by block_order on read
- Unknown block types are skipped without affecting siblings
"""

import logging

import pytest

from core.domain.content import (
    Article,
    AudioBlock,
    ImageBlock,
    SponsorshipBlock,
    TextBlock,
    UnknownBlockTypeError,
)
from core.serialization import (
    BLOCK_COLUMNS,
    article_from_row,
    article_to_row,
    deserialize_blocks,
    serialize_block,
    serialize_blocks,
)

MIXED_BLOCKS = [
    TextBlock(id="t1", content='<p>He said "bespoke".</p>'),
    ImageBlock(id="i1", src="data:image/png;base64,AAAA", caption="Atelier"),
    AudioBlock(id="a1", src="https://cdn.example.com/interview.mp3", title="Interview"),
    SponsorshipBlock(id="s1", company="Maison", logo_src="", link="https://maison.example.com"),
]


def test_round_trip_preserves_variants_values_and_order():
    rows = serialize_blocks("art-1", MIXED_BLOCKS)
    assert deserialize_blocks(rows) == MIXED_BLOCKS


def test_round_trip_of_empty_sequence():
    assert serialize_blocks("art-1", []) == []
    assert deserialize_blocks([]) == []


def test_block_order_is_sequence_index():
    rows = serialize_blocks("art-1", MIXED_BLOCKS)
    assert [row["block_order"] for row in rows] == [0, 1, 2, 3]
    assert all(row["article_id"] == "art-1" for row in rows)


def test_unused_columns_are_null():
    row = serialize_block(ImageBlock(id="i1", src="x.jpg", caption=""), "art-1", 0)

    assert row["type"] == "image"
    assert row["src"] == "x.jpg"
    assert row["caption"] == ""
    for column in set(BLOCK_COLUMNS) - {"src", "caption"}:
        assert row[column] is None


def test_serialize_rejects_non_block():
    with pytest.raises(UnknownBlockTypeError):
        serialize_block(object(), "art-1", 0)


def test_rows_are_sorted_by_block_order():
    rows = serialize_blocks("art-1", MIXED_BLOCKS)
    shuffled = [rows[2], rows[0], rows[3], rows[1]]
    assert deserialize_blocks(shuffled) == MIXED_BLOCKS


def test_null_used_column_reads_as_empty_string():
    row = serialize_block(AudioBlock(id="a1"), "art-1", 0)
    row["src"] = None
    row["title"] = None
    assert deserialize_blocks([row]) == [AudioBlock(id="a1", src="", title="")]


def test_unknown_type_is_skipped_with_warning(caplog):
    rows = serialize_blocks("art-1", MIXED_BLOCKS[:2])
    rows.insert(1, {**rows[0], "id": "v1", "type": "video", "block_order": 5})

    with caplog.at_level(logging.WARNING, logger="core.serialization"):
        blocks = deserialize_blocks(rows)

    assert blocks == MIXED_BLOCKS[:2]
    assert "video" in caplog.text


def test_article_row_mapping():
    article = Article(
        id="art-1",
        title="Title",
        subtitle="Sub",
        author="Author",
        publish_date="May 1, 2024",
        hero_image="hero.jpg",
        content=tuple(MIXED_BLOCKS),
    )
    row = article_to_row(article)

    assert row == {
        "id": "art-1",
        "title": "Title",
        "subtitle": "Sub",
        "author": "Author",
        "publish_date": "May 1, 2024",
        "hero_image": "hero.jpg",
    }
    assert article_from_row(row, serialize_blocks("art-1", MIXED_BLOCKS)) == article


def test_article_from_row_fills_missing_scalars():
    article = article_from_row({"id": "art-2", "title": None})
    assert article.title == ""
    assert article.hero_image == ""
    assert article.content == ()
