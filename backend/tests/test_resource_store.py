"""
TextShelf Backend - Resource Store Unit Tests
===============================================

What:  Tests for ResourceStore list/search/get/random/create/update/delete.
How:   Plain synchronous tests against in-memory stores; no HTTP involved.

What we test:
    ✅ Limit normalization (default, non-numeric, non-positive, "5abc")
    ✅ Literal, case-insensitive search and its three failure kinds
    ✅ Id assignment stays unique after deletions
    ✅ update/delete keep id, creator and ordering intact
    ✅ random() is roughly uniform
"""

import random
import re
from collections import Counter
from unittest.mock import patch

import pytest

from app.exceptions import (
    InvalidInputError,
    InvalidQueryError,
    NotFoundError,
    SearchFailedError,
)
from app.models.resource import Resource
from app.services.resource_store import ResourceStore, normalize_limit, validate_text


def make_store(count, **kwargs):
    return ResourceStore(
        [Resource(id=str(i), creator=f"c{i}", text=f"resource number {i}") for i in range(1, count + 1)],
        **kwargs,
    )


class TestValidation:
    """Tests for the text rule shared by create and update."""

    def test_valid_text_returned_untrimmed(self):
        assert validate_text("  abc  ") == "  abc  "

    @pytest.mark.parametrize("text", [None, "", "ab", "   ab   ", 123, ["abc"]])
    def test_invalid_text_rejected(self, text):
        with pytest.raises(InvalidInputError, match="at least 3 characters"):
            validate_text(text)


class TestList:
    """Tests for list() and limit normalization."""

    def test_default_limit_is_ten(self):
        store = make_store(15)
        result = store.list()
        assert [r.id for r in result] == [str(i) for i in range(1, 11)]

    def test_explicit_limit(self):
        store = make_store(15)
        assert [r.id for r in store.list(3)] == ["1", "2", "3"]

    @pytest.mark.parametrize("limit", [0, -1, "0", "-5", "abc", "", None, -1.5, "٣", "５"])
    def test_bad_limits_behave_like_default(self, limit):
        store = make_store(15)
        assert store.list(limit) == store.list(10)

    def test_leading_integer_in_string(self):
        assert normalize_limit("5abc") == 5
        assert normalize_limit("2.7") == 2
        assert normalize_limit(" 7") == 7

    def test_only_ascii_digits_count(self):
        # Arabic-Indic three and fullwidth five are not parsed as numbers
        assert normalize_limit("٣", default=10) == 10
        assert normalize_limit("4٣", default=10) == 4

    def test_limit_larger_than_store(self, store):
        assert len(store.list(100)) == 3

    def test_results_are_copies(self, store):
        first = store.list()[0]
        first.text = "changed outside the store"
        assert store.get("1").text == "Hello World from the first resource"


class TestSearch:
    """Tests for search() semantics."""

    def test_case_insensitive(self, store):
        result = store.search("hello world")
        assert [r.id for r in result] == ["1"]

    def test_dot_is_literal(self, store):
        # "a.b" must not match "a" + any char + "b"
        store.create(text="this has axb but no dot")
        result = store.search("a.b")
        assert [r.id for r in result] == ["2"]

    @pytest.mark.parametrize("query", ["[x]", "(y)*", "*", "("])
    def test_metacharacters_are_literal(self, store, query):
        result = store.search(query)
        assert [r.id for r in result] == ["3"]

    @pytest.mark.parametrize(
        "query",
        ["+", "?", "^", "$", "{", "}", "|", "\\", "{1,2}", "x+y?", "a|b", "^start$", "c:\\path"],
    )
    def test_remaining_metacharacters_are_literal(self, store, query):
        added = store.create(text="c:\\path ^start$ {1,2} a|b x+y?")

        result = store.search(query)
        assert [r.id for r in result] == [added.id]

    @pytest.mark.parametrize("query", ["^", "$", "^$"])
    def test_anchors_do_not_match_every_resource(self, store, query):
        # Unescaped, these would match any text
        with pytest.raises(NotFoundError):
            store.search(query)

    def test_matches_in_collection_order(self, store):
        result = store.search("e")
        assert [r.id for r in result] == ["1", "2", "3"]

    @pytest.mark.parametrize("query", [None, ""])
    def test_missing_query(self, store, query):
        with pytest.raises(InvalidQueryError):
            store.search(query)

    def test_no_matches(self, store):
        with pytest.raises(NotFoundError):
            store.search("zzzznomatch")

    def test_pattern_failure_reported(self, store):
        with patch("app.services.resource_store.re") as mock_re:
            mock_re.compile.side_effect = re.error("boom")
            with pytest.raises(SearchFailedError) as exc_info:
                store.search("hello")
        assert "error_type" in exc_info.value.context


class TestGetAndRandom:
    """Tests for get() and random()."""

    def test_get_exact_match(self, store):
        assert store.get("2").creator == "Grace"

    @pytest.mark.parametrize("resource_id", ["4", " 1", "01", ""])
    def test_get_unknown(self, store, resource_id):
        with pytest.raises(NotFoundError):
            store.get(resource_id)

    def test_random_empty_store(self):
        with pytest.raises(NotFoundError):
            ResourceStore().random()

    def test_random_single(self):
        store = make_store(1)
        assert store.random().id == "1"

    def test_random_is_roughly_uniform(self):
        store = make_store(3, rng=random.Random(42))
        draws = 30000
        counts = Counter(store.random().id for _ in range(draws))

        assert set(counts) == {"1", "2", "3"}
        for resource_id in ("1", "2", "3"):
            assert abs(counts[resource_id] - draws / 3) < draws * 0.05


class TestCreate:
    """Tests for create() and id assignment."""

    def test_create_appends_with_next_id(self, store):
        created = store.create(text="Hello world", creator="Linus")

        assert created.id == "4"
        assert created.creator == "Linus"
        assert store.list()[-1].id == "4"
        assert len(store) == 4

    @pytest.mark.parametrize("creator", [None, ""])
    def test_creator_defaults_to_unknown(self, store, creator):
        assert store.create(text="Hello world", creator=creator).creator == "Unknown"

    def test_invalid_text_leaves_store_unchanged(self, store):
        with pytest.raises(InvalidInputError):
            store.create(text=None)
        assert len(store) == 3

    def test_ids_unique_after_deleting_from_middle(self, store):
        store.delete("2")
        first = store.create(text="first new one")
        second = store.create(text="second new one")

        ids = [r.id for r in store.list(100)]
        assert len(ids) == len(set(ids))
        assert (first.id, second.id) == ("4", "5")

    def test_deleted_id_never_reused(self, store):
        store.delete("3")
        assert store.create(text="replacement").id == "4"

    def test_counter_starts_after_highest_numeric_id(self):
        store = ResourceStore([
            Resource(id="1", text="one one"),
            Resource(id="10", text="ten ten"),
            Resource(id="intro", text="not numeric"),
        ])
        assert store.create(text="eleven").id == "11"

    def test_empty_store_starts_at_one(self):
        assert ResourceStore().create(text="first!").id == "1"


class TestUpdate:
    """Tests for update()."""

    def test_update_replaces_text_only(self, store):
        updated = store.update("2", text="Hi there")

        assert updated.id == "2"
        assert updated.creator == "Grace"
        assert updated.text == "Hi there"
        assert store.get("2").text == "Hi there"

    def test_update_unknown_id(self, store):
        with pytest.raises(NotFoundError, match="to update"):
            store.update("99", text="Hi there")

    def test_unknown_id_checked_before_text(self, store):
        with pytest.raises(NotFoundError):
            store.update("99", text="Hi")

    def test_update_short_text_rejected(self, store):
        with pytest.raises(InvalidInputError):
            store.update("1", text="Hi")
        assert store.get("1").text == "Hello World from the first resource"


class TestDelete:
    """Tests for delete()."""

    def test_delete_returns_removed_and_keeps_order(self):
        store = make_store(5)
        removed = store.delete("3")

        assert removed.id == "3"
        assert [r.id for r in store.list()] == ["1", "2", "4", "5"]

    def test_delete_unknown(self, store):
        with pytest.raises(NotFoundError, match="to delete"):
            store.delete("99")
        assert len(store) == 3

    def test_delete_then_get(self, store):
        store.delete("1")
        with pytest.raises(NotFoundError):
            store.get("1")
