"""Heading detection for plain-text documents.

Plain text has no markup, so headings are guessed from the first line of
each paragraph: a short line that is either a numbered outline entry
(``1.``, ``2.3 Results``) or simply starts with a letter or digit.  Markers
only feed the ``section`` field of each chunk; chunk boundaries do not
depend on them.
"""

from __future__ import annotations

import re

import structlog

from sectionrag.models.chunk import SectionMarker

logger = structlog.get_logger(logger_name=__name__)

_NUMBERED_OUTLINE = re.compile(r"^\d+(\.\d+)*\s+.+$")
_ALNUM_LEAD = re.compile(r"^[^\W_].{0,78}$")

# Paragraphs are joined with two newlines in the canonical text.
_SEPARATOR_LEN = 2


class SectionDetector:
    """Finds heading-like paragraph openers and records where they start.

    Parameters
    ----------
    min_length, max_length:
        Inclusive bounds on the trimmed first line's length.
    max_heading_chars:
        Stored heading text is cut to this many characters.
    """

    def __init__(
        self,
        min_length: int = 2,
        max_length: int = 80,
        max_heading_chars: int = 120,
    ) -> None:
        if min_length < 1 or max_length < min_length:
            raise ValueError(
                f"Invalid heading length bounds: min_length={min_length}, max_length={max_length}"
            )
        self._min_length = min_length
        self._max_length = max_length
        self._max_heading_chars = max_heading_chars

    def is_heading(self, line: str) -> bool:
        """Return ``True`` if a trimmed first line looks like a heading."""
        if not self._min_length <= len(line) <= self._max_length:
            return False
        return bool(_NUMBERED_OUTLINE.match(line) or _ALNUM_LEAD.match(line))

    def detect(self, paragraphs: list[str]) -> list[SectionMarker]:
        """Scan *paragraphs* in order and return markers with increasing offsets.

        The offset of paragraph *i* is the sum of ``len(p) + 2`` over the
        paragraphs before it, i.e. its position in the canonical text.
        """
        markers: list[SectionMarker] = []
        offset = 0
        for paragraph in paragraphs:
            first_line = paragraph.split("\n", 1)[0].strip()
            if self.is_heading(first_line):
                markers.append(
                    SectionMarker(offset=offset, text=first_line[: self._max_heading_chars])
                )
            offset += len(paragraph) + _SEPARATOR_LEN

        logger.debug("sections_detected", paragraphs=len(paragraphs), markers=len(markers))
        return markers


def current_section(offset: int, markers: list[SectionMarker]) -> str | None:
    """Return the text of the last marker at or before *offset*.

    *markers* must be in increasing offset order; the scan stops at the
    first marker past *offset*.  Returns ``None`` when no marker precedes
    the offset (including negative offsets).
    """
    section: str | None = None
    for marker in markers:
        if marker.offset > offset:
            break
        section = marker.text
    return section
