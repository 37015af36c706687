"""Engine configuration: highlight palette and triage keyword list."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields, replace
from typing import Mapping, Optional

from triage_engine.highlight import DEFAULT_TRIAGE_KEYWORDS, Palette

ENV_PREFIX = "TRIAGE_ENGINE_"


@dataclass(frozen=True, slots=True)
class EngineConfig:
    palette: Palette = field(default_factory=Palette)
    triage_keywords: tuple[str, ...] = DEFAULT_TRIAGE_KEYWORDS

    def __post_init__(self) -> None:
        keywords = tuple(self.triage_keywords)
        if any(not keyword.strip() for keyword in keywords):
            raise ValueError("triage keywords cannot be blank")
        object.__setattr__(self, "triage_keywords", keywords)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EngineConfig":
        """Overlay ``TRIAGE_ENGINE_*`` variables on the defaults.

        ``TRIAGE_ENGINE_TRIAGE_KEYWORDS`` is a comma-separated list; each
        palette field maps to ``TRIAGE_ENGINE_<FIELD>`` (for example
        ``TRIAGE_ENGINE_SEARCH_COLOR=#FFA500``).
        """

        env = os.environ if environ is None else environ
        palette_changes = {}
        for item in fields(Palette):
            raw = env.get(f"{ENV_PREFIX}{item.name.upper()}")
            if raw:
                palette_changes[item.name] = raw
        palette = replace(Palette(), **palette_changes)

        raw_keywords = env.get(f"{ENV_PREFIX}TRIAGE_KEYWORDS")
        if raw_keywords:
            keywords = tuple(
                part.strip() for part in raw_keywords.split(",") if part.strip()
            )
        else:
            keywords = DEFAULT_TRIAGE_KEYWORDS
        return cls(palette=palette, triage_keywords=keywords)


__all__ = ["EngineConfig", "ENV_PREFIX"]
