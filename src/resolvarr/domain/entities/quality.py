"""Video quality tiers used to rank stream candidates.

Pure value object with no framework dependencies and no I/O.

Two numbers are attached to every tier and they are deliberately
independent:

- ``priority`` defines the ordering (``<``, ``>``, ``sorted``).
- ``height`` is the reference pixel height.  ``auto`` and ``manual`` report
  an unbounded height but a low priority, so a sort by quality is *not*
  a sort by height.
"""

from __future__ import annotations

from enum import Enum

# Height reported by adaptive tiers (auto/manual).
UNBOUNDED_HEIGHT = 1_000_000_000


class Quality(Enum):
    """Discrete resolution tier (value = serialized form)."""

    P360 = "360p"
    P480 = "480p"
    P720 = "720p"
    P1080 = "1080p"
    K4 = "4k"
    AUTO = "auto"
    UNKNOWN = "unknown"
    MANUAL = "Manual"

    @property
    def priority(self) -> int:
        return _PRIORITY[self]

    @property
    def height(self) -> int:
        return _HEIGHT[self]

    @property
    def label(self) -> str:
        """Human-readable label for pickers."""
        return _LABEL[self]

    # ------------------------------------------------------------------
    # Ordering (priority only)
    # ------------------------------------------------------------------

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Quality):
            return NotImplemented
        return self.priority < other.priority

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Quality):
            return NotImplemented
        return self.priority <= other.priority

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Quality):
            return NotImplemented
        return self.priority > other.priority

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Quality):
            return NotImplemented
        return self.priority >= other.priority

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def selectable(cls) -> list[Quality]:
        """Tiers a user may pick as a preference."""
        return [cls.P360, cls.P480, cls.P720, cls.P1080, cls.K4, cls.MANUAL]

    @classmethod
    def from_height(cls, height: int) -> Quality | None:
        """Nearest fixed tier at or below *height*, or None below 360."""
        for tier in (cls.K4, cls.P1080, cls.P720, cls.P480, cls.P360):
            if height >= tier.height:
                return tier
        return None

    @classmethod
    def from_text(cls, text: str | None) -> Quality | None:
        """Infer a tier from a label or URL fragment.

        Scans for the literal tokens in a fixed precedence order and returns
        the first hit.  The heuristic is lossy: a string holding both "480"
        and "1080" classifies as 480p.  Callers depend on this exact order.
        """
        if text is None:
            return None
        for token, tier in _TEXT_TOKENS:
            if token in text:
                return tier
        return None

    @classmethod
    def from_url(cls, url: str) -> Quality:
        """Like :meth:`from_text` but never None (falls back to UNKNOWN)."""
        return cls.from_text(url) or cls.UNKNOWN


_PRIORITY: dict[Quality, int] = {
    Quality.UNKNOWN: 0,
    Quality.MANUAL: 0,
    Quality.AUTO: 1,
    Quality.P360: 2,
    Quality.P480: 3,
    Quality.P720: 4,
    Quality.P1080: 5,
    Quality.K4: 6,
}

_HEIGHT: dict[Quality, int] = {
    Quality.UNKNOWN: 0,
    Quality.P360: 360,
    Quality.P480: 480,
    Quality.P720: 720,
    Quality.P1080: 1080,
    Quality.K4: 2160,
    Quality.AUTO: UNBOUNDED_HEIGHT,
    Quality.MANUAL: UNBOUNDED_HEIGHT,
}

_LABEL: dict[Quality, str] = {
    Quality.P360: "360p",
    Quality.P480: "480p",
    Quality.P720: "720p",
    Quality.P1080: "1080p",
    Quality.K4: "Max",
    Quality.AUTO: "Auto",
    Quality.UNKNOWN: "Unknown",
    Quality.MANUAL: "Manual",
}

# Order is significant: first match wins.
_TEXT_TOKENS: tuple[tuple[str, Quality], ...] = (
    ("360", Quality.P360),
    ("480", Quality.P480),
    ("720", Quality.P720),
    ("1080", Quality.P1080),
    ("4K", Quality.K4),
    ("auto", Quality.AUTO),
)
