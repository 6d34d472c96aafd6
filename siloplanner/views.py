"""Django views for the silo planner app.

These views render the single planner page and handle the small POST
actions that mutate the session backed form state. The link plan itself
is never stored: it is regenerated from the current state on every
request.
"""

from __future__ import annotations

from django.conf import settings
from django.contrib import messages
from django.http import Http404, HttpRequest, HttpResponse, JsonResponse
from django.shortcuts import redirect, render
from django.views.decorators.http import require_GET, require_POST

from .clipboard import SessionClipboard, copied_key, copy_to_clipboard
from .config import PlannerConfig, load_config
from .forms import BulkUrlsForm, CopyForm, PlannerFieldsForm, PostTitleForm
from .services import format_entry_for_clipboard, generate_link_plan
from .store import SiloPlannerStore
from .types import FORM_FIELDS

VERIFICATION_RULES = [
    'Does each supporting post link to only one Target Page?',
    'Does each supporting post link out to only one or two other silo pages?',
    'Are there no other outbound links in the body of the supporting content?',
]


def planner_config() -> PlannerConfig:
    return load_config(getattr(settings, 'SILO_PLANNER_CONFIG', None))


def _render_planner(
    request: HttpRequest,
    store: SiloPlannerStore,
    *,
    fields_form: PlannerFieldsForm | None = None,
    bulk_form: BulkUrlsForm | None = None,
    status: int = 200,
) -> HttpResponse:
    state = store.state
    config = planner_config()
    entries, silo_type = generate_link_plan(state, config=config)
    verification = store.verification

    if fields_form is None:
        fields_form = PlannerFieldsForm(initial={name: getattr(state, name) for name in FORM_FIELDS})

    return render(
        request,
        'siloplanner/planner.html',
        {
            'fields_form': fields_form,
            'bulk_form': bulk_form or BulkUrlsForm(),
            'posts': state.posts,
            'plan_rows': [(entry, format_entry_for_clipboard(entry)) for entry in entries],
            'silo_type': silo_type,
            'verification': verification,
            'verification_rules': VERIFICATION_RULES,
            'copied_key': copied_key(request.session),
            'copied_reset_ms': int(config.copied_reset_seconds * 1000),
        },
        status=status,
    )


@require_GET
def planner(request: HttpRequest) -> HttpResponse:
    """Render the planner form, the generated plan and the silo check."""

    return _render_planner(request, SiloPlannerStore(request.session))


@require_POST
def update_fields(request: HttpRequest) -> HttpResponse:
    """Store the core page and outside-in fields."""

    store = SiloPlannerStore(request.session)
    form = PlannerFieldsForm(request.POST)
    if not form.is_valid():
        return _render_planner(request, store, fields_form=form, status=400)
    store.update_fields(**form.cleaned_data)
    messages.success(request, 'Silo pages updated.')
    return redirect('siloplanner:planner')


@require_POST
def add_post(request: HttpRequest) -> HttpResponse:
    """Append a single, empty supporting post."""

    SiloPlannerStore(request.session).add_post()
    return redirect('siloplanner:planner')


@require_POST
def bulk_add(request: HttpRequest) -> HttpResponse:
    """Append one supporting post per pasted URL."""

    store = SiloPlannerStore(request.session)
    form = BulkUrlsForm(request.POST)
    if not form.is_valid():
        return _render_planner(request, store, bulk_form=form, status=400)
    urls: list[str] = form.cleaned_data['urls']
    if not urls:
        messages.warning(request, 'Paste at least one URL to add supporting posts.')
        return redirect('siloplanner:planner')
    added = store.add_posts_from_bulk('\n'.join(urls))
    messages.success(request, f'Added {len(added)} supporting posts.')
    return redirect('siloplanner:planner')


@require_POST
def edit_post(request: HttpRequest, post_id: str) -> HttpResponse:
    """Rename a supporting post; the new title drives its anchor text."""

    store = SiloPlannerStore(request.session)
    form = PostTitleForm(request.POST)
    if not form.is_valid():
        return _render_planner(request, store, status=400)
    try:
        store.edit_post_title(post_id, form.cleaned_data['title'])
    except KeyError as exc:
        raise Http404('Supporting post not found.') from exc
    return redirect('siloplanner:planner')


@require_POST
def remove_post(request: HttpRequest, post_id: str) -> HttpResponse:
    store = SiloPlannerStore(request.session)
    try:
        store.remove_post(post_id)
    except KeyError as exc:
        raise Http404('Supporting post not found.') from exc
    return redirect('siloplanner:planner')


@require_POST
def reset(request: HttpRequest) -> HttpResponse:
    SiloPlannerStore(request.session).reset()
    messages.info(request, 'Planner cleared.')
    return redirect('siloplanner:planner')


@require_POST
def copy(request: HttpRequest) -> JsonResponse:
    """Record a copy the browser has already written to the clipboard.

    Copy buttons carry their text in the page, so the indicator is stored
    only after the browser write succeeds. The response echoes the
    resolved ``text`` and the ``reset_after_ms`` label delay.
    """

    form = CopyForm(request.POST)
    if not form.is_valid():
        return JsonResponse({'errors': form.errors.get_json_data()}, status=400)

    config = planner_config()
    entries, _ = generate_link_plan(SiloPlannerStore(request.session).state, config=config)
    entry_index: int = form.cleaned_data['entry_index']
    if entry_index >= len(entries):
        return JsonResponse({'detail': 'Plan entry not found.'}, status=404)
    entry = entries[entry_index]

    target = form.cleaned_data['target']
    if target == CopyForm.TARGET_ALL:
        text = format_entry_for_clipboard(entry)
    elif target == CopyForm.TARGET_LINK:
        link_index: int = form.cleaned_data['link_index']
        if link_index >= len(entry.target_links):
            return JsonResponse({'detail': 'Link not found.'}, status=404)
        text = entry.target_links[link_index].url
    else:
        text = entry.source_url

    key = form.indicator_key(entry.id)
    writer = SessionClipboard(request.session, key, reset_after=config.copied_reset_seconds)
    result = copy_to_clipboard(text, writer, key=key)
    if not result.success:
        return JsonResponse({'copied': None})
    return JsonResponse({
        'copied': result.key,
        'text': text,
        'reset_after_ms': int(config.copied_reset_seconds * 1000),
    })


@require_GET
def plan_json(request: HttpRequest) -> JsonResponse:
    """Expose the current plan for scripts and the copy helpers."""

    store = SiloPlannerStore(request.session)
    entries, silo_type = generate_link_plan(store.state, config=planner_config())
    return JsonResponse({
        'silo_type': silo_type,
        'entries': [entry.to_dict() for entry in entries],
        'verification': store.verification.to_dict(),
    })
