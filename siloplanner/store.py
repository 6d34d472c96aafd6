"""Session backed store for the planner form.

The store owns the single mutable copy of the user's input. Views read
immutable :class:`SiloFormState` snapshots from it and every mutation
recomputes the verification result before the session is saved.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Any, List, MutableMapping

from .clipboard import SESSION_KEY as COPIED_SESSION_KEY
from .services import check_validity, new_id, parse_bulk_urls
from .types import FORM_FIELDS, Post, SiloFormState, VerificationResult

logger = logging.getLogger(__name__)

SESSION_KEY = 'siloplanner'


class SiloPlannerStore:
    """Read and mutate the planner state kept in ``session``."""

    def __init__(self, session: MutableMapping[str, Any], *, id_factory=new_id) -> None:
        self.session = session
        self.id_factory = id_factory
        data = session.get(SESSION_KEY) or {}
        self._state = SiloFormState.from_dict(data.get('state'))
        if data.get('verification'):
            self._verification = VerificationResult.from_dict(data['verification'])
        else:
            self._verification = check_validity(self._state.posts)

    @property
    def state(self) -> SiloFormState:
        return self._state

    @property
    def verification(self) -> VerificationResult:
        return self._verification

    def update_fields(self, **fields: str) -> SiloFormState:
        unknown = set(fields) - set(FORM_FIELDS)
        if unknown:
            raise TypeError(f'Unknown planner fields: {", ".join(sorted(unknown))}')
        values = {name: value or '' for name, value in fields.items()}
        logger.debug('Updating planner fields: %s', sorted(values))
        return self._commit(dataclasses.replace(self._state, **values))

    def add_post(self, url: str = '') -> Post:
        post = Post(id=self.id_factory(), title=url, url=url)
        logger.debug('Adding supporting post %s', post.id)
        self._commit(dataclasses.replace(self._state, posts=self._state.posts + (post,)))
        return post

    def add_posts_from_bulk(self, text: str) -> List[Post]:
        urls = parse_bulk_urls(text)
        if not urls:
            return []
        added = [Post(id=self.id_factory(), title=url, url=url) for url in urls]
        logger.debug('Adding %d supporting posts from bulk paste', len(added))
        self._commit(dataclasses.replace(self._state, posts=self._state.posts + tuple(added)))
        return added

    def edit_post_title(self, post_id: str, title: str) -> Post:
        self._index_of(post_id)
        posts = tuple(
            dataclasses.replace(post, title=title) if post.id == post_id else post
            for post in self._state.posts
        )
        self._commit(dataclasses.replace(self._state, posts=posts))
        return posts[self._index_of(post_id)]

    def remove_post(self, post_id: str) -> Post:
        removed = self._state.posts[self._index_of(post_id)]
        logger.debug('Removing supporting post %s', post_id)
        posts = tuple(post for post in self._state.posts if post.id != post_id)
        self._commit(dataclasses.replace(self._state, posts=posts))
        return removed

    def reset(self) -> None:
        self.session.pop(COPIED_SESSION_KEY, None)
        self._commit(SiloFormState())

    def _index_of(self, post_id: str) -> int:
        for index, post in enumerate(self._state.posts):
            if post.id == post_id:
                return index
        raise KeyError(post_id)

    def _commit(self, state: SiloFormState) -> SiloFormState:
        self._state = state
        self._verification = check_validity(state.posts)
        self._save()
        return state

    def _save(self) -> None:
        self.session[SESSION_KEY] = {
            'state': self._state.to_dict(),
            'verification': self._verification.to_dict(),
        }
