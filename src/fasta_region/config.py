from __future__ import annotations

from copy import deepcopy
from pathlib import Path
from typing import Any

import yaml


DEFAULT_CONFIG: dict[str, Any] = {
    "index": {"suffix": ".fai"},
    "io": {"read_mode": "auto", "max_workers": 4},
    "output": {"line_width": 60},
}


def _deep_merge(base: dict[str, Any], updates: dict[str, Any]) -> dict[str, Any]:
    out = deepcopy(base)
    for k, v in updates.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def load_config(path: str | None) -> dict[str, Any]:
    if not path:
        return deepcopy(DEFAULT_CONFIG)
    with Path(path).open() as f:
        user = yaml.safe_load(f) or {}
    return merge_config(user)


def merge_config(config: dict[str, Any] | None) -> dict[str, Any]:
    """Fill in every setting missing from a caller-supplied (possibly partial) config."""
    return _deep_merge(DEFAULT_CONFIG, config or {})
