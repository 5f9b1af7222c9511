"""Text normalization utilities for plain-text documents.

This module handles the first stage of the chunking pipeline:

1. **Normalization** -- Unicode NFKC folding (full-width forms, ligatures),
   line-ending unification, control-character blanking and per-line
   whitespace cleanup, so that downstream sentence splitting sees a stable
   character stream regardless of where the document came from.

2. **Paragraph splitting** -- Blank-line separated blocks become the units
   the section detector inspects for headings.

3. **Canonical text** -- Paragraphs re-joined with a fixed two-newline
   separator.  Every character offset recorded on sentences, chunks and
   section markers indexes into this canonical string.
"""

import re
import unicodedata

PARAGRAPH_SEPARATOR = "\n\n"

_WHITESPACE_RUN = re.compile(r"\s{3,}")
_PARAGRAPH_BREAK = re.compile(r"\n{2,}")


def normalize_text(raw: str) -> str:
    """Normalize raw document text into a stable form.

    Applies NFKC, converts CRLF/CR to LF, replaces every control character
    except the newline with a single space, trims each line and collapses
    runs of three or more whitespace characters inside a line to one space.
    Single and double spaces inside a line are preserved.

    Args:
        raw: Raw document text (any line-ending convention).

    Returns:
        The normalized text with leading/trailing whitespace removed.
        Applying the function twice yields the same result.
    """
    if not raw:
        return ""

    text = unicodedata.normalize("NFKC", raw)
    text = text.replace("\r\n", "\n").replace("\r", "\n")

    # Tabs and other Cc characters become plain spaces; newlines survive.
    text = "".join(
        " " if ch != "\n" and unicodedata.category(ch) == "Cc" else ch
        for ch in text
    )

    lines = [_WHITESPACE_RUN.sub(" ", line.strip()) for line in text.split("\n")]
    return "\n".join(lines).strip()


def split_paragraphs(text: str) -> list[str]:
    """Split normalized text into paragraphs on runs of two or more newlines.

    Each paragraph is trimmed; empty paragraphs are discarded.
    """
    return [p.strip() for p in _PARAGRAPH_BREAK.split(text) if p.strip()]


def build_canonical_text(raw: str) -> tuple[str, list[str]]:
    """Normalize *raw* and return ``(canonical_text, paragraphs)``.

    The canonical text is the paragraphs joined by :data:`PARAGRAPH_SEPARATOR`.
    Paragraph *i* starts at ``sum(len(p) + 2 for p in paragraphs[:i])``.
    """
    paragraphs = split_paragraphs(normalize_text(raw))
    return PARAGRAPH_SEPARATOR.join(paragraphs), paragraphs
