"""Session backed form state store tests."""

from __future__ import annotations

import pytest

from siloplanner.clipboard import SESSION_KEY as COPIED_SESSION_KEY
from siloplanner.services import check_validity
from siloplanner.store import SESSION_KEY, SiloPlannerStore
from siloplanner.types import Classification, Post

from .conftest import sequential_ids


@pytest.fixture()
def session():
    return {}


@pytest.fixture()
def store(session):
    return SiloPlannerStore(session, id_factory=sequential_ids("post"))


def test_fresh_store_starts_with_the_warning(store, session):
    assert store.state.posts == ()
    assert store.verification == check_validity(())
    assert store.verification.classification is Classification.WARNING
    assert SESSION_KEY not in session


def test_every_mutation_recomputes_verification(store):
    store.update_fields(target_page_url="https://example.com/widgets")
    assert store.verification.classification is Classification.WARNING

    store.add_post("https://example.com/one")
    assert store.verification.classification is Classification.WARNING

    store.add_post()
    assert store.verification.classification is Classification.SUCCESS

    store.remove_post("post-1")
    assert store.verification.classification is Classification.WARNING


def test_add_post_uses_url_as_title(store):
    post = store.add_post("https://example.com/one")
    assert post == Post(id="post-1", title="https://example.com/one", url="https://example.com/one")
    assert store.add_post() == Post(id="post-2", title="", url="")


def test_bulk_add_appends_in_order(store):
    store.add_post("https://example.com/existing")

    added = store.add_posts_from_bulk(" https://example.com/a \n\n https://example.com/b\n")

    assert [post.url for post in added] == ["https://example.com/a", "https://example.com/b"]
    assert [post.url for post in store.state.posts] == [
        "https://example.com/existing",
        "https://example.com/a",
        "https://example.com/b",
    ]
    assert store.verification.classification is Classification.SUCCESS


def test_bulk_add_with_nothing_to_add_is_not_a_mutation(store, session):
    assert store.add_posts_from_bulk("\n   \n") == []
    assert store.verification.classification is Classification.WARNING
    assert SESSION_KEY not in session


def test_edit_post_title_keeps_url(store):
    store.add_posts_from_bulk("https://example.com/a\nhttps://example.com/b")

    edited = store.edit_post_title("post-2", "Widget care basics")

    assert edited == Post(id="post-2", title="Widget care basics", url="https://example.com/b")
    assert store.state.posts[0].title == "https://example.com/a"


def test_unknown_post_ids_raise_key_error(store):
    with pytest.raises(KeyError):
        store.remove_post("missing")
    with pytest.raises(KeyError):
        store.edit_post_title("missing", "title")


def test_update_fields_rejects_unknown_names(store):
    with pytest.raises(TypeError):
        store.update_fields(posts="nope")


def test_update_fields_treats_none_as_empty(store):
    store.update_fields(home_page_url=None, target_page_keyword="widgets")
    assert store.state.home_page_url == ""
    assert store.state.target_page_keyword == "widgets"


def test_state_survives_a_new_store_on_the_same_session(store, session):
    store.update_fields(reddit_url="https://www.reddit.com/r/seo")
    store.add_posts_from_bulk("https://example.com/a\nhttps://example.com/b")

    reloaded = SiloPlannerStore(session)

    assert reloaded.state == store.state
    assert reloaded.verification == store.verification


def test_snapshots_are_not_affected_by_later_mutations(store):
    store.add_post("https://example.com/a")
    snapshot = store.state

    store.add_post("https://example.com/b")

    assert len(snapshot.posts) == 1
    assert len(store.state.posts) == 2


def test_reset_clears_everything(store, session):
    store.update_fields(target_page_url="https://example.com/widgets")
    store.add_posts_from_bulk("https://example.com/a\nhttps://example.com/b")
    session[COPIED_SESSION_KEY] = {"key": "all-post-1", "text": "x", "expires_at": 9e12}

    store.reset()

    assert store.state.target_page_url == ""
    assert store.state.posts == ()
    assert store.verification.classification is Classification.WARNING
    assert COPIED_SESSION_KEY not in session
    assert SiloPlannerStore(session).state.posts == ()
