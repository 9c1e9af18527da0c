"""The closed set of filters the engine knows how to run."""

from __future__ import annotations

import re
from enum import Enum

from ..errors import UnsupportedFilterKindError

_SLUG_SEPARATORS = re.compile(r"[\s\-]+")


def _slug(text: str) -> str:
    return _SLUG_SEPARATORS.sub("_", text.strip()).lower()


class FilterKind(Enum):
    """Filter selector; values are the human readable display names."""

    IDENTITY = "Normal"
    GRAYSCALE = "Grayscale"
    EDGE_DETECTION = "Edge Detection"
    INVERT = "Invert"
    SEPIA = "Sepia"
    THRESHOLD = "Threshold"
    WARM = "Warm Color"
    COOL = "Cool Color"

    @property
    def slug(self) -> str:
        """Return the lower-case, underscore separated form of the value."""

        return _slug(self.value)

    @classmethod
    def parse(cls, selector: "FilterKind | str") -> "FilterKind":
        """Resolve *selector* to a member.

        Members pass through unchanged.  Strings match a member's name or
        display value, ignoring case and treating spaces and hyphens as
        underscores, so ``"edge-detection"`` and ``"Edge Detection"`` both
        resolve to :attr:`EDGE_DETECTION`.
        """

        if isinstance(selector, cls):
            return selector
        if isinstance(selector, str):
            key = _slug(selector)
            for member in cls:
                if key in (member.name.lower(), member.slug):
                    return member
        raise UnsupportedFilterKindError(f"Unsupported filter kind: {selector!r}")
