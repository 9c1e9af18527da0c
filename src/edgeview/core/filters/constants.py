"""Fixed coefficients of the filter formulas."""

from __future__ import annotations

GRAY_R = 0.299
GRAY_G = 0.587
GRAY_B = 0.114

LUMA_R = 0.2126
LUMA_G = 0.7152
LUMA_B = 0.0722

SEPIA_MATRIX = (
    (0.393, 0.769, 0.189),
    (0.349, 0.686, 0.168),
    (0.272, 0.534, 0.131),
)

THRESHOLD_LEVEL = 128.0
EDGE_MAGNITUDE_THRESHOLD = 50.0

# Per-channel (R, G, B) offsets.
WARM_SHIFT = (40, 10, -20)
COOL_SHIFT = (-10, 10, 50)
