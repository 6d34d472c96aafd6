"""Configuration helpers for the silo planner."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

import yaml


@dataclass(frozen=True)
class PlannerConfig:
    """Typed wrapper around the planner configuration dictionary."""

    raw: Dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        return self.raw.get(key, default)

    def anchor(self, name: str, **values: str) -> str:
        template = self.raw.get('anchors', {}).get(name, DEFAULTS['anchors'][name])
        return template.format(**values)

    @property
    def copied_reset_seconds(self) -> float:
        return float(self.raw.get('copied_reset_seconds', DEFAULTS['copied_reset_seconds']))


DEFAULTS: Dict[str, Any] = {
    # How long the "copied" indicator stays visible.
    'copied_reset_seconds': 2,
    'anchors': {
        'next': 'Learn more about {slug}',
        'previous': 'Go back to our article on {slug}',
        'home': 'Return to our Home Page',
        'first': 'Explore our first guide on {slug}',
        'last': 'Find out more from our last article on {slug}',
    },
}


def load_config(path: str | Path | None = None) -> PlannerConfig:
    """Load configuration from YAML, merging with defaults."""

    data: Dict[str, Any] = copy.deepcopy(DEFAULTS)

    if path is not None and Path(path).exists():
        with Path(path).open('r', encoding='utf-8') as stream:
            user = yaml.safe_load(stream) or {}
        merge_into(data, user)

    return PlannerConfig(data)


def merge_into(base: Dict[str, Any], override: Dict[str, Any]) -> None:
    """Recursively merge override into base dict."""

    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            merge_into(base[key], value)
        else:
            base[key] = value
