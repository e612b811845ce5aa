import logging

import pytest

from toolbox_website.categories import CATEGORIES
from toolbox_website.categories import CategoryIndex
from toolbox_website.categories import category_index
from toolbox_website.models import Category


def test_index_has_twelve_categories_in_fixed_order():
    ids = [category.id for category in category_index]
    assert ids == [
        "calculation",
        "converter",
        "image",
        "pdf",
        "text",
        "downloader",
        "color",
        "developer",
        "seo",
        "writing",
        "grammar-plagiarism",
        "writing-assistance",
    ]
    assert len(category_index) == len(CATEGORIES) == 12


def test_by_id_returns_matching_category():
    assert category_index.by_id("pdf").name == category_index.all()[3].name
    assert category_index.contains("seo")


def test_unknown_id_falls_back_to_default_without_warning(caplog):
    with caplog.at_level(logging.DEBUG, logger="toolbox_website.categories"):
        category = category_index.by_id("does-not-exist")

    assert category == category_index.default
    assert category.id == "calculation"
    assert not category_index.contains("does-not-exist")
    assert all(record.levelno <= logging.DEBUG for record in caplog.records)


def test_empty_id_falls_back_to_default():
    assert category_index.by_id("") is category_index.default


def test_default_is_first_category_of_custom_index():
    index = CategoryIndex([Category(id="b", name="B"), Category(id="a", name="A")])
    assert index.default.id == "b"
    assert index.by_id("zzz").id == "b"


def test_index_requires_categories():
    with pytest.raises(ValueError):
        CategoryIndex([])
