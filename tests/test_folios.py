"""Tests for folio arithmetic and leaf generation."""

from __future__ import annotations

import pytest

from quiremap.folios import generate_leaves, inc_folio, leading_folio_number
from quiremap.leaves import Leaf


@pytest.mark.parametrize(
    "number, expected",
    [(0, "1"), ("9", "10"), (" 41", "42"), ("1v", None), ("", None), (None, None), ("xii", None)],
)
def test_inc_folio(number: str | int | None, expected: str | None) -> None:
    assert inc_folio(number) == expected


@pytest.mark.parametrize(
    "label, expected",
    [("12", 12), ("12v", 12), ("xii", 0), ("", 0), (None, 0), ("  7r", 7)],
)
def test_leading_folio_number(label: str | None, expected: int) -> None:
    assert leading_folio_number(label) == expected


def test_generate_leaves_counts_up():
    leaves = generate_leaves(3, "10")
    assert leaves == [Leaf(1, "11"), Leaf(2, "12"), Leaf(3, "13")]


def test_generate_leaves_from_zero():
    assert [leaf.folio_number for leaf in generate_leaves(2)] == ["1", "2"]


def test_generate_leaves_unparsable_start():
    assert [leaf.folio_number for leaf in generate_leaves(2, "1v")] == [None, None]


def test_generate_leaves_marks_singles():
    leaves = generate_leaves(4, 0, singles={2})
    assert [leaf.single for leaf in leaves] == [False, True, False, False]


def test_generate_no_leaves():
    assert generate_leaves(0) == []


def test_generate_negative_count():
    with pytest.raises(ValueError):
        generate_leaves(-1)
