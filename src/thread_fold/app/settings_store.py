"""Settings schema and the resolved FoldSettings snapshot.

// [LAW:one-source-of-truth] All known settings and their defaults live in SCHEMA.
// [LAW:single-enforcer] Validation and fallback happen in create() only.

Precedence: SCHEMA defaults < settings file < THREAD_FOLD_DEFAULT_VIEW < overrides.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from thread_fold.core.regions import FoldStyle, FoldView

logger = logging.getLogger(__name__)

# [LAW:one-source-of-truth] All known settings and their defaults
SCHEMA: dict[str, object] = {
    "default_view": FoldView.UNFOLDED.value,
    "style:root-folded": "bold #d7af5f",
    "style:root-unfolded": "bold",
    "style:child-folded": "italic #8a8a8a",
    "style:child-unfolded": "",
    "key:toggle_at_point": "tab",
    "key:toggle_all": "shift+tab",
    "key:fold_at_point": "left",
    "key:unfold_at_point": "right",
}

ENV_DEFAULT_VIEW = "THREAD_FOLD_DEFAULT_VIEW"


# ─── Settings file ────────────────────────────────────────────────────


def config_path() -> Path:
    """$XDG_CONFIG_HOME/thread-fold/settings.json (XDG default: ~/.config)."""
    base = os.environ.get("XDG_CONFIG_HOME") or os.path.expanduser("~/.config")
    return Path(base, "thread-fold", "settings.json")


def read_file() -> dict:
    """Raw file contents, or {} when there is no usable settings object."""
    try:
        data = json.loads(config_path().read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.debug("no usable settings file: %s", exc)
        return {}
    return data if isinstance(data, dict) else {}


def write_file(data: dict) -> None:
    """Replace the settings file in one rename so readers never see half a file."""
    path = config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = tempfile.NamedTemporaryFile(
        "w", encoding="utf-8", dir=path.parent, suffix=".tmp", delete=False
    )
    try:
        with tmp:
            json.dump(data, tmp, indent=2, sort_keys=True)
            tmp.write("\n")
        os.replace(tmp.name, path)
    except Exception:
        Path(tmp.name).unlink(missing_ok=True)
        raise


def save_value(key: str, value: object) -> None:
    data = read_file()
    data[key] = value
    write_file(data)


# ─── Resolved settings ────────────────────────────────────────────────


def _schema_styles() -> dict[FoldStyle, str]:
    return {style: str(SCHEMA[f"style:{style.value}"]) for style in FoldStyle}


def _schema_keys() -> dict[str, str]:
    return {k.removeprefix("key:"): str(v) for k, v in SCHEMA.items() if k.startswith("key:")}


@dataclass(frozen=True)
class FoldSettings:
    default_view: FoldView = FoldView.UNFOLDED
    styles: dict[FoldStyle, str] = field(default_factory=_schema_styles)
    keys: dict[str, str] = field(default_factory=_schema_keys)

    def style_for(self, style: FoldStyle) -> str:
        return self.styles.get(style, str(SCHEMA[f"style:{style.value}"]))

    def key_for(self, command: str) -> str | None:
        return self.keys.get(command)


def _parse_view(raw: object, source: str) -> FoldView | None:
    try:
        return FoldView.parse(raw)
    except ValueError:
        logger.warning("ignoring invalid default_view %r from %s", raw, source)
        return None


def create(initial_overrides: dict | None = None) -> FoldSettings:
    """Resolve settings from disk, environment, and explicit overrides."""
    disk_data = read_file()
    # Filter disk data to known keys only
    merged = {k: disk_data.get(k, default) for k, default in SCHEMA.items()}

    view = _parse_view(merged["default_view"], "settings file") or FoldView.UNFOLDED
    env_view = os.environ.get(ENV_DEFAULT_VIEW, "").strip()
    if env_view:
        view = _parse_view(env_view, ENV_DEFAULT_VIEW) or view

    if initial_overrides:
        merged.update(initial_overrides)
        if "default_view" in initial_overrides:
            view = _parse_view(initial_overrides["default_view"], "overrides") or view

    styles: dict[FoldStyle, str] = {}
    for style in FoldStyle:
        key = f"style:{style.value}"
        raw = merged[key]
        if not isinstance(raw, str):
            logger.warning("ignoring non-string %s=%r", key, raw)
            raw = SCHEMA[key]
        styles[style] = raw

    keys: dict[str, str] = {}
    for key, default in SCHEMA.items():
        if not key.startswith("key:"):
            continue
        raw = merged[key]
        if not isinstance(raw, str) or not raw.strip():
            logger.warning("ignoring invalid key binding %s=%r", key, raw)
            raw = default
        keys[key.removeprefix("key:")] = raw.strip()

    return FoldSettings(default_view=view, styles=styles, keys=keys)


def save_default_view(view: FoldView) -> None:
    save_value("default_view", view.value)
