"""Detect Cloudflare interstitials in adapter responses.

An adapter that hits one raises ``CaptchaError`` with the page URL and
stops; nothing here tries to get past the challenge.
"""

from __future__ import annotations

# Challenge pages are served as 503 and WAF blocks as 403, but Cloudflare
# mixes the markers often enough that either status accepts any of them.
_CHALLENGE_STATUSES = frozenset({403, 503})

_CF_MARKERS: tuple[str, ...] = (
    "Just a moment",
    "challenge-platform",
    "cf-turnstile",
    "Attention Required",
    "cf-error-details",
)


def is_cloudflare_challenge(status_code: int, html: str) -> bool:
    """True if the response looks like a Cloudflare challenge or block page."""
    if status_code not in _CHALLENGE_STATUSES or not html:
        return False
    return any(marker in html for marker in _CF_MARKERS)
