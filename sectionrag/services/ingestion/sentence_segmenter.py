"""Sentence segmentation with character-offset tracking.

Sentences are found by a single left-to-right scan: a terminal mark
(``. ! ? …`` or the full-width ``。``) ends a sentence unless it sits
between two digits, so decimals like ``3.14`` stay intact.  A newline
always ends a sentence, which makes paragraph breaks and hard-wrapped
headings their own units.

Very short sentences make poor retrieval units, so a post-pass merges
neighbours into units of up to ``threshold`` characters.
"""

from __future__ import annotations

from sectionrag.models.chunk import Sentence

DEFAULT_SHORT_SENTENCE_THRESHOLD = 60

_TERMINALS = frozenset(".!?…。")


def _between_digits(text: str, index: int) -> bool:
    if index == 0 or index + 1 >= len(text):
        return False
    return text[index - 1].isdigit() and text[index + 1].isdigit()


def _flush(text: str, start: int, end: int, out: list[Sentence]) -> None:
    segment = text[start:end]
    stripped = segment.strip()
    if not stripped:
        return
    begin = start + (len(segment) - len(segment.lstrip()))
    out.append(Sentence(text=stripped, start=begin, end=begin + len(stripped)))


def split_sentences(text: str) -> list[Sentence]:
    """Split *text* into trimmed sentences with their offsets in *text*.

    Args:
        text: Normalized (canonical) document text.

    Returns:
        Sentences in document order.  Empty input yields ``[]``; text with
        no terminal mark and no newline yields a single sentence.
    """
    sentences: list[Sentence] = []
    buffer_start = 0

    for i, ch in enumerate(text):
        if ch == "\n" or (ch in _TERMINALS and not _between_digits(text, i)):
            _flush(text, buffer_start, i + 1, sentences)
            buffer_start = i + 1

    _flush(text, buffer_start, len(text), sentences)
    return sentences


def merge_short_sentences(
    sentences: list[Sentence],
    threshold: int = DEFAULT_SHORT_SENTENCE_THRESHOLD,
) -> list[Sentence]:
    """Merge adjacent sentences into units of at most *threshold* characters.

    Sentences are appended to a running accumulator, separated by one
    space, while ``len(acc) + 1 + len(next) <= threshold``.  Once the next
    sentence would not fit, the accumulator is emitted and a new one starts
    with that sentence.  A sentence longer than the threshold is emitted on
    its own.

    The merged unit keeps the first constituent's start offset and the last
    constituent's end offset.
    """
    merged: list[Sentence] = []
    group: list[Sentence] = []
    group_len = 0

    for sentence in sentences:
        if group and group_len + 1 + len(sentence.text) > threshold:
            merged.append(_join(group))
            group, group_len = [], 0
        group_len = len(sentence.text) if not group else group_len + 1 + len(sentence.text)
        group.append(sentence)

    if group:
        merged.append(_join(group))
    return merged


def _join(group: list[Sentence]) -> Sentence:
    if len(group) == 1:
        return group[0]
    return Sentence(
        text=" ".join(s.text for s in group),
        start=group[0].start,
        end=group[-1].end,
    )
