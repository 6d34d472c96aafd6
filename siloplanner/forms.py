"""Forms for the silo planner app.

The forms define the user-facing inputs of the planner page: the core and
outside-in page fields, the bulk URL paste box, the per-post title editor
and the copy buttons. All URLs are accepted as opaque text; a malformed
URL only degrades into a literal slug later on.
"""

from __future__ import annotations

from django import forms

from .services import parse_bulk_urls


def _text_field(label: str, placeholder: str, help_text: str = '') -> forms.CharField:
    return forms.CharField(
        required=False,
        label=label,
        help_text=help_text,
        widget=forms.TextInput(attrs={'placeholder': placeholder}),
    )


class PlannerFieldsForm(forms.Form):
    """Core pages plus the optional outside-in links."""

    home_page_url = _text_field('Home Page URL', 'Home Page URL')
    target_page_url = _text_field(
        'Target Page URL',
        'Target Page URL (e.g., /products/my-tool)',
        'The single page you want to rank higher.',
    )
    target_page_keyword = forms.CharField(
        required=False,
        strip=False,
        label='Primary Keyword',
        help_text='Used verbatim as the anchor text for every link to the target page.',
        widget=forms.TextInput(attrs={'placeholder': "Primary Keyword (e.g., 'best social media tool')"}),
    )
    stat_page_1_url = _text_field('Stat Page 1 URL', 'Stat Page 1 URL')
    stat_page_2_url = _text_field('Stat Page 2 URL', 'Stat Page 2 URL')
    reddit_url = _text_field('Reddit URL', 'Reddit URL')
    perplexity_url = _text_field('Perplexity URL', 'Perplexity URL')


class BulkUrlsForm(forms.Form):
    """Paste box for adding several supporting posts at once."""

    urls = forms.CharField(
        required=False,
        label='Bulk Add from URLs',
        help_text='Paste multiple URLs, one per line.',
        widget=forms.Textarea(attrs={'rows': 4, 'placeholder': 'Paste your URLs here...'}),
    )

    def clean_urls(self) -> list[str]:
        """Return the non-blank, trimmed lines of the paste box."""

        return parse_bulk_urls(self.cleaned_data.get('urls', ''))


class PostTitleForm(forms.Form):
    title = forms.CharField(
        required=False,
        label='Post Title/Topic (or URL)',
        widget=forms.TextInput(attrs={'placeholder': 'Post Title/Topic (or URL)'}),
    )


class CopyForm(forms.Form):
    """Identifies what a copy button should place on the clipboard."""

    TARGET_URL = 'url'
    TARGET_LINK = 'link'
    TARGET_ALL = 'all'

    target = forms.ChoiceField(
        choices=[
            (TARGET_URL, 'Source URL'),
            (TARGET_LINK, 'Single link URL'),
            (TARGET_ALL, 'All links'),
        ],
    )
    entry_index = forms.IntegerField(min_value=0)
    link_index = forms.IntegerField(required=False, min_value=0)

    def clean(self) -> dict[str, object]:  # type: ignore[override]
        cleaned_data = super().clean()
        if cleaned_data.get('target') == self.TARGET_LINK and cleaned_data.get('link_index') is None:
            raise forms.ValidationError('A link index is required to copy a single link.')
        return cleaned_data

    def indicator_key(self, entry_id: str) -> str:
        target = self.cleaned_data['target']
        if target == self.TARGET_LINK:
            return f"link-{entry_id}-{self.cleaned_data['link_index']}"
        return f'{target}-{entry_id}'
