"""YAML-based parse-option profiles.

A profile holds defaults for every provider plus per-provider overrides::

    default:
      removeLinks: true
    providers:
      gemini:
        removeHeader: true
        invertColors: true
      AIMODE:
        removeFooter: false
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from aiparser.items import ParseOptions, ProviderIdentity


def load_profile_data(path: str | Path) -> dict[str, Any]:
    """Read a profile file; anything but a mapping at the top level counts as empty."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    return data if isinstance(data, dict) else {}


def load_profile(path: str | Path, provider: ProviderIdentity | str | None = None) -> ParseOptions:
    """Load the YAML profile at *path* and return merged options for *provider*.

    ``default`` is applied first, then the entry under ``providers`` whose key
    matches *provider* case-insensitively.
    """
    data = load_profile_data(path)
    default = data.get("default", {})
    providers = data.get("providers", {})

    merged: dict[str, Any] = {}
    if isinstance(default, dict):
        merged.update(default)

    if provider is not None and isinstance(providers, dict):
        wanted = str(provider).lower()
        for key, cfg in providers.items():
            if isinstance(key, str) and isinstance(cfg, dict) and key.lower() == wanted:
                merged.update(cfg)

    return ParseOptions.coerce(merged)
