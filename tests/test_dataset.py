"""Dataset 테스트: 레코드 검증, 초성 사전 계산, 카테고리/태그 집계."""

from __future__ import annotations

import dataclasses

import pytest

from choseong_finder.services.dataset import Dataset, Entry


def test_entry_choseong_is_computed_from_name():
    entry = Entry(category="animal", name="돼지", tags=["mammal"])
    assert entry.choseong == "ㄷㅈ"
    assert entry.tags == ("mammal",)


def test_entry_is_immutable():
    entry = Entry(category="animal", name="돼지")
    with pytest.raises(dataclasses.FrozenInstanceError):
        entry.name = "고양이"


def test_records_missing_category_or_name_are_skipped():
    ds = Dataset.from_records([
        {"category": "animal", "name": "고양이"},
        {"category": "", "name": "강아지"},
        {"category": "animal", "name": ""},
        {"name": "까치"},
        {"category": "food", "name": "김치", "tags": ["dish", " ", ""]},
    ])
    assert [e.name for e in ds] == ["고양이", "김치"]
    assert ds.entries[1].tags == ("dish",)


def test_categories_sorted_and_counted(dataset):
    assert dataset.categories == ["animal", "food", "plant"]
    assert dataset.category_counts()["animal"] == 7
    assert dataset.has_category("food")
    assert not dataset.has_category("all")


def test_tag_counts_ordered_by_count(dataset):
    assert dataset.tag_counts("animal") == [("mammal", 4), ("pet", 2), ("bird", 1)]
    assert dataset.tag_counts("food") == [("dish", 2)]
    assert dataset.tag_counts("missing") == []


def test_find_by_name(dataset):
    assert dataset.find_by_name("까치").category == "animal"
    assert dataset.find_by_name("까마귀") is None
