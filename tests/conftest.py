"""Pytest configuration shared across test modules."""

from __future__ import annotations

import itertools
import os
from typing import Iterable

import pytest

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "silo_planner_tool.settings")
os.environ.setdefault("DJANGO_SECRET_KEY", "test-secret")
os.environ.setdefault("DJANGO_DEBUG", "true")

from siloplanner.types import Post, SiloFormState  # noqa: E402


def sequential_ids(prefix: str = "synthetic"):
    """Return an id factory yielding ``prefix-1``, ``prefix-2``, ..."""

    counter = itertools.count(1)
    return lambda: f"{prefix}-{next(counter)}"


def make_posts(*urls: str) -> tuple[Post, ...]:
    return tuple(Post(id=f"post-{index}", title=url, url=url) for index, url in enumerate(urls, start=1))


def make_state(posts: Iterable[Post] = (), **fields: str) -> SiloFormState:
    return SiloFormState(posts=tuple(posts), **fields)


@pytest.fixture()
def id_factory():
    return sequential_ids()


@pytest.fixture()
def two_posts():
    return make_posts(
        "https://example.com/blog/alpha-guide",
        "https://example.com/blog/beta-tips",
    )
