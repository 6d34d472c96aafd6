"""Typed data structures shared by the silo planner core and its views."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

SIMPLE_SILO = 'Simple Reverse Silo'
OUTSIDE_IN_SILO = 'Outside-In Reverse Silo'

TARGET_PAGE_ID = 'target-page'
TARGET_PAGE_LABEL = 'Target Page'


class PageKind(str, Enum):
    """Where a page in the silo chain came from."""

    SUPPORTING = 'supporting'
    EXTERNAL = 'external'
    STAT_PAGE = 'stat_page'
    TARGET_PAGE = 'target_page'


class Classification(str, Enum):
    NONE = 'none'
    WARNING = 'warning'
    SUCCESS = 'success'


@dataclass(frozen=True)
class Post:
    """A supporting article entered by the user."""

    id: str
    title: str
    url: str


@dataclass(frozen=True)
class SiloPage:
    """A page in the ordered silo chain.

    ``position`` is the 1-based index in the original supporting post list
    and is only set for ``PageKind.SUPPORTING`` pages.
    """

    kind: PageKind
    id: str
    title: str
    url: str
    position: Optional[int] = None

    @property
    def label(self) -> str:
        if self.kind is PageKind.SUPPORTING and self.position is not None:
            return f'Article {self.position}'
        return self.title

    @property
    def slug_source(self) -> str:
        return self.title or self.url


@dataclass(frozen=True)
class PlannedLink:
    """One link the user should add to a source page."""

    url: str
    anchor_text: str


@dataclass(frozen=True)
class LinkPlanEntry:
    """All links that should be placed on a single source page."""

    id: str
    source_url: str
    source_label: str
    target_links: Tuple[PlannedLink, ...]
    kind: PageKind = PageKind.SUPPORTING

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'kind': self.kind.value,
            'source_url': self.source_url,
            'source_label': self.source_label,
            'target_links': [
                {'url': link.url, 'anchor_text': link.anchor_text}
                for link in self.target_links
            ],
        }


@dataclass(frozen=True)
class VerificationResult:
    classification: Classification = Classification.NONE
    message: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {'classification': self.classification.value, 'message': self.message}

    @classmethod
    def from_dict(cls, data: Dict[str, Any] | None) -> 'VerificationResult':
        if not data:
            return cls()
        return cls(
            classification=Classification(data.get('classification', Classification.NONE.value)),
            message=data.get('message'),
        )


# Scalar fields of the planner form, in display order.
FORM_FIELDS: Tuple[str, ...] = (
    'home_page_url',
    'target_page_url',
    'target_page_keyword',
    'stat_page_1_url',
    'stat_page_2_url',
    'reddit_url',
    'perplexity_url',
)


@dataclass(frozen=True)
class SiloFormState:
    """Immutable snapshot of everything the user has entered."""

    home_page_url: str = ''
    target_page_url: str = ''
    target_page_keyword: str = ''
    stat_page_1_url: str = ''
    stat_page_2_url: str = ''
    reddit_url: str = ''
    perplexity_url: str = ''
    posts: Tuple[Post, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['posts'] = [asdict(post) for post in self.posts]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any] | None) -> 'SiloFormState':
        if not data:
            return cls()
        values = {name: str(data.get(name) or '') for name in FORM_FIELDS}
        posts = tuple(
            Post(id=str(item['id']), title=str(item.get('title', '')), url=str(item.get('url', '')))
            for item in data.get('posts', [])
        )
        return cls(posts=posts, **values)
