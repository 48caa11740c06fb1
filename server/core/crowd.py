"""Crowd-level banding for the map's POI markers."""
from models.geo import CrowdIndicator

# (upper bound inclusive, band, marker colour)
CROWD_BANDS = [
    (3, "low", "#22c55e"),
    (6, "moderate", "#f59e0b"),
]
HIGH_CROWD = ("high", "#ef4444")


def crowd_band(level: int) -> CrowdIndicator:
    """Map a 1-10 crowd level to its marker band."""
    for upper, band, color in CROWD_BANDS:
        if level <= upper:
            return CrowdIndicator(level=level, band=band, color=color)
    band, color = HIGH_CROWD
    return CrowdIndicator(level=level, band=band, color=color)
