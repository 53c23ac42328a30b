from .media import (
    PLACEHOLDER_POSTER_URL,
    CatalogEntry,
    Episode,
    MediaKind,
    MediaSection,
    Movie,
    Season,
    Show,
    Source,
    non_empty_sections,
    poster_or_placeholder,
)
from .quality import Quality
from .stream import Stream, Subtitle, best_stream, sort_streams

__all__ = [
    "PLACEHOLDER_POSTER_URL",
    "CatalogEntry",
    "Episode",
    "MediaKind",
    "MediaSection",
    "Movie",
    "Quality",
    "Season",
    "Show",
    "Source",
    "Stream",
    "Subtitle",
    "best_stream",
    "non_empty_sections",
    "poster_or_placeholder",
    "sort_streams",
]
