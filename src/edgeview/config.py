"""Runtime settings for the filter engine and its collaborators."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping

BACKEND_ENV = "EDGEVIEW_BACKEND"
MAX_WIDTH_ENV = "EDGEVIEW_MAX_WIDTH"
LOG_LEVEL_ENV = "EDGEVIEW_LOG_LEVEL"

DEFAULT_MAX_WIDTH = 1024
"""Widest image the loader hands to the engine before downscaling."""

SAMPLE_IMAGE_URL = "https://picsum.photos/seed/edgedetect/800/600"
"""Fixed-seed sample so the same picture comes back every time."""

FETCH_TIMEOUT = 10.0
"""Seconds to wait for a remote image before giving up."""

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class EngineSettings:
    """Container bundling the knobs that are not part of the filter maths.

    The threshold constants and channel deltas of the filters themselves are
    fixed; only backend choice, loader sizing and log verbosity are tunable.
    """

    backend: str = "auto"
    max_width: int = DEFAULT_MAX_WIDTH
    log_level: str = "INFO"

    def clamp(self) -> "EngineSettings":
        """Return a copy with out-of-range values replaced by safe ones."""

        level = self.log_level.upper()
        if level not in _LOG_LEVELS:
            level = "INFO"
        return replace(
            self,
            backend=self.backend.strip().lower() or "auto",
            max_width=max(1, int(self.max_width)),
            log_level=level,
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "EngineSettings":
        """Build settings from ``EDGEVIEW_*`` environment variables."""

        env = os.environ if environ is None else environ
        defaults = cls()
        raw_width = env.get(MAX_WIDTH_ENV)
        try:
            max_width = int(raw_width) if raw_width else defaults.max_width
        except ValueError:
            max_width = defaults.max_width
        settings = cls(
            backend=env.get(BACKEND_ENV, defaults.backend),
            max_width=max_width,
            log_level=env.get(LOG_LEVEL_ENV, defaults.log_level),
        )
        return settings.clamp()
