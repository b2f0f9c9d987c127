"""Unit tests for the pluralization helpers."""

import pytest

from recordbase.domain.services.pluralize import (
    is_plural,
    pluralize,
    preserve_case,
    singularize,
)


class TestPluralize:

    @pytest.mark.parametrize(
        "word,expected",
        [
            ("task", "tasks"),
            ("category", "categories"),
            ("box", "boxes"),
            ("church", "churches"),
            ("dish", "dishes"),
            ("bus", "buses"),
            ("leaf", "leaves"),
            ("knife", "knives"),
            ("wolf", "wolves"),
            ("hero", "heroes"),
            ("photo", "photos"),
            ("day", "days"),
            ("roof", "roofs"),
        ],
    )
    def test_regular_rules(self, word, expected):
        assert pluralize(word) == expected

    @pytest.mark.parametrize(
        "word,expected",
        [("person", "people"), ("child", "children"), ("mouse", "mice"), ("datum", "data")],
    )
    def test_irregular(self, word, expected):
        assert pluralize(word) == expected

    @pytest.mark.parametrize("word", ["sheep", "fish", "series", "news", "equipment"])
    def test_uncountable_unchanged(self, word):
        assert pluralize(word) == word
        assert singularize(word) == word

    def test_preserves_case(self):
        assert pluralize("Task") == "Tasks"
        assert pluralize("TASK") == "TASKS"
        assert pluralize("Person") == "People"
        assert pluralize("PERSON") == "PEOPLE"
        assert pluralize("Category") == "Categories"

    def test_empty_string(self):
        assert pluralize("") == ""
        assert singularize("") == ""


class TestSingularize:

    @pytest.mark.parametrize(
        "word,expected",
        [
            ("tasks", "task"),
            ("categories", "category"),
            ("boxes", "box"),
            ("churches", "church"),
            ("buses", "bus"),
            ("leaves", "leaf"),
            ("knives", "knife"),
            ("wives", "wife"),
            ("potatoes", "potato"),
            ("users", "user"),
            ("class", "class"),
        ],
    )
    def test_regular_rules(self, word, expected):
        assert singularize(word) == expected

    @pytest.mark.parametrize(
        "word,expected",
        [("people", "person"), ("children", "child"), ("criteria", "criterion"), ("oxen", "ox")],
    )
    def test_irregular(self, word, expected):
        assert singularize(word) == expected

    def test_preserves_case(self):
        assert singularize("Tasks") == "Task"
        assert singularize("People") == "Person"
        assert singularize("CHILDREN") == "CHILD"
        assert singularize("Categories") == "Category"


class TestIsPlural:

    def test_plural_words(self):
        assert is_plural("tasks") is True
        assert is_plural("people") is True
        assert is_plural("categories") is True

    def test_singular_words(self):
        assert is_plural("task") is False
        assert is_plural("person") is False

    def test_uncountable_is_singular(self):
        assert is_plural("sheep") is False


def test_preserve_case_helper():
    assert preserve_case("ABC", "xyz") == "XYZ"
    assert preserve_case("Abc", "xyz") == "Xyz"
    assert preserve_case("abc", "XYZ") == "xyz"
    assert preserve_case("", "xyz") == "xyz"
