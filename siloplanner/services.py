"""Service functions for planning a reverse content silo.

These functions hold the core logic of the planner so they can be unit
tested and reused from the views. They derive slugs from URLs, build the
ordered chain of silo pages, generate the internal links each page should
carry, and check whether the supporting post list forms a silo. None of
them touch the session or any other state.
"""

from __future__ import annotations

import math
import uuid
from typing import Callable, List, Optional, Sequence, Tuple
from urllib.parse import urlsplit

from .config import PlannerConfig, load_config
from .types import (
    OUTSIDE_IN_SILO,
    SIMPLE_SILO,
    TARGET_PAGE_ID,
    TARGET_PAGE_LABEL,
    Classification,
    LinkPlanEntry,
    PageKind,
    PlannedLink,
    Post,
    SiloFormState,
    SiloPage,
    VerificationResult,
)

MIN_SUPPORTING_POSTS = 2
WARNING_MESSAGE = 'Add at least two supporting posts to form a silo.'
SUCCESS_MESSAGE = '🎉 Great job! Your silo plan looks correct!'

IdFactory = Callable[[], str]


def new_id() -> str:
    """Return a fresh opaque identifier."""
    return uuid.uuid4().hex


def url_slug(text: str) -> str:
    """Derive a human readable fragment from a URL or free text.

    When ``text`` parses with a URL scheme, the last non-empty path segment is
    returned with hyphens replaced by spaces (an empty string when the path
    has no segments). Anything else is treated as literal text: hyphens
    become spaces and surrounding whitespace is trimmed.

    Parameters
    ----------
    text:
        A URL, a post title or any other user supplied string.

    Returns
    -------
    str
        The slug, possibly empty. This function never raises.
    """

    try:
        parsed = urlsplit(text.strip())
    except ValueError:
        parsed = None

    if parsed is not None and parsed.scheme:
        segments = [segment for segment in parsed.path.split('/') if segment]
        return segments[-1].replace('-', ' ') if segments else ''
    return text.replace('-', ' ').strip()


def _is_set(value: str) -> bool:
    return bool(value and value.strip())


def has_stat_pages(state: SiloFormState) -> bool:
    return _is_set(state.stat_page_1_url) and _is_set(state.stat_page_2_url)


def has_external_links(state: SiloFormState) -> bool:
    return _is_set(state.reddit_url) or _is_set(state.perplexity_url)


def classify_silo(state: SiloFormState) -> str:
    """Return the silo type name for the given form state."""

    if has_stat_pages(state) or has_external_links(state):
        return OUTSIDE_IN_SILO
    return SIMPLE_SILO


def build_page_sequence(state: SiloFormState, *, id_factory: IdFactory = new_id) -> List[SiloPage]:
    """Return the final ordered chain of silo pages.

    Supporting posts keep their order. External discussion links (Reddit
    first, then Perplexity) are spliced in at ``ceil(len / 2)`` and the two
    stat pages, when both are present, bound the chain at either end.
    Synthetic pages receive a fresh identifier on every call.
    """

    pages: List[SiloPage] = [
        SiloPage(kind=PageKind.SUPPORTING, id=post.id, title=post.title, url=post.url, position=index)
        for index, post in enumerate(state.posts, start=1)
    ]

    if has_external_links(state):
        external: List[SiloPage] = []
        if _is_set(state.reddit_url):
            external.append(SiloPage(PageKind.EXTERNAL, id_factory(), 'Reddit URL', state.reddit_url))
        if _is_set(state.perplexity_url):
            external.append(SiloPage(PageKind.EXTERNAL, id_factory(), 'Perplexity URL', state.perplexity_url))
        midpoint = math.ceil(len(pages) / 2)
        pages[midpoint:midpoint] = external

    if has_stat_pages(state):
        pages.insert(0, SiloPage(PageKind.STAT_PAGE, id_factory(), 'Stat Page 1', state.stat_page_1_url))
        pages.append(SiloPage(PageKind.STAT_PAGE, id_factory(), 'Stat Page 2', state.stat_page_2_url))

    return pages


def _chain_links(
    pages: Sequence[SiloPage],
    index: int,
    state: SiloFormState,
    config: PlannerConfig,
) -> List[PlannedLink]:
    # Only the target page and the two chain neighbours may be linked.
    links: List[PlannedLink] = []
    if _is_set(state.target_page_url):
        links.append(PlannedLink(url=state.target_page_url, anchor_text=f'{state.target_page_keyword}'))
    if index < len(pages) - 1:
        following = pages[index + 1]
        links.append(PlannedLink(
            url=following.url,
            anchor_text=config.anchor('next', slug=url_slug(following.slug_source)),
        ))
    if index > 0:
        previous = pages[index - 1]
        links.append(PlannedLink(
            url=previous.url,
            anchor_text=config.anchor('previous', slug=url_slug(previous.slug_source)),
        ))
    return links


def _target_page_entry(
    pages: Sequence[SiloPage],
    state: SiloFormState,
    config: PlannerConfig,
) -> Optional[LinkPlanEntry]:
    links: List[PlannedLink] = []
    if _is_set(state.home_page_url):
        links.append(PlannedLink(url=state.home_page_url, anchor_text=config.anchor('home')))
    if pages:
        first = pages[0]
        links.append(PlannedLink(
            url=first.url,
            anchor_text=config.anchor('first', slug=url_slug(first.slug_source)),
        ))
    if len(pages) > 1:
        last = pages[-1]
        links.append(PlannedLink(
            url=last.url,
            anchor_text=config.anchor('last', slug=url_slug(last.slug_source)),
        ))
    if not links:
        return None
    return LinkPlanEntry(
        id=TARGET_PAGE_ID,
        source_url=state.target_page_url,
        source_label=TARGET_PAGE_LABEL,
        target_links=tuple(links),
        kind=PageKind.TARGET_PAGE,
    )


def generate_link_plan(
    state: SiloFormState,
    *,
    config: PlannerConfig | None = None,
    id_factory: IdFactory = new_id,
) -> Tuple[List[LinkPlanEntry], str]:
    """Build the internal linking plan for the current form state.

    Parameters
    ----------
    state:
        Snapshot of the planner form.
    config:
        Anchor text templates; defaults are used when omitted.
    id_factory:
        Source of identifiers for synthetic (stat and external) pages.

    Returns
    -------
    tuple of (entries, silo_type)
        One entry per page that carries at least one link, with the
        target page entry (if any) first, and the silo type name.
    """

    config = config or load_config(None)
    pages = build_page_sequence(state, id_factory=id_factory)

    entries: List[LinkPlanEntry] = []
    for index, page in enumerate(pages):
        links = _chain_links(pages, index, state, config)
        if links:
            entries.append(LinkPlanEntry(
                id=page.id,
                source_url=page.url,
                source_label=page.label,
                target_links=tuple(links),
                kind=page.kind,
            ))

    if _is_set(state.target_page_url):
        target_entry = _target_page_entry(pages, state, config)
        if target_entry is not None:
            entries.insert(0, target_entry)

    return entries, classify_silo(state)


def check_validity(posts: Sequence[Post]) -> VerificationResult:
    """Gate the plan on having enough supporting posts."""

    if len(posts) < MIN_SUPPORTING_POSTS:
        return VerificationResult(Classification.WARNING, WARNING_MESSAGE)
    return VerificationResult(Classification.SUCCESS, SUCCESS_MESSAGE)


def parse_bulk_urls(text: str) -> List[str]:
    """Split pasted text into URLs, one per non-blank line."""

    return [line.strip() for line in (text or '').splitlines() if line.strip()]


def format_entry_for_clipboard(entry: LinkPlanEntry) -> str:
    """Render an entry as the plain text block users paste into their notes."""

    parts = [f'From: {entry.source_url}\n\n']
    for link in entry.target_links:
        parts.append(f'Link to: {link.url}\n')
        parts.append(f'Anchor Text: {link.anchor_text}\n\n')
    return ''.join(parts)

