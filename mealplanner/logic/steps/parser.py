"""Split free-text recipe instructions into individual steps."""
import re
from typing import List

_NUMBERED = re.compile(r"^\s*\d+\.?\s+(.+)$", re.MULTILINE)
_BULLETED = re.compile(r"^\s*[-*•]\s+(.+)$", re.MULTILINE)
_SENTENCE_END = re.compile(r"[.!?]+\s+")

# unstructured text longer than this is split into sentences
SENTENCE_SPLIT_MIN_LENGTH = 100
MIN_SENTENCE_LENGTH = 10


def _clean(parts) -> List[str]:
    return [p.strip() for p in parts if p and p.strip()]


def _sentences(text: str) -> List[str]:
    steps = []
    for fragment in _clean(_SENTENCE_END.split(text)):
        if len(fragment) <= MIN_SENTENCE_LENGTH:
            continue
        if not fragment.endswith((".", "!", "?")):
            fragment += "."
        steps.append(fragment)
    return steps


def parse_steps_from_text(text: str) -> List[str]:
    """Return the steps found in `text`, trying in order:

    numbered lines, bulleted lines, blank-line paragraphs, single lines,
    sentences (long text only), and finally the whole text as one step.
    """
    text = (text or "").strip()
    if not text:
        return []

    steps = _clean(_NUMBERED.findall(text))
    if steps:
        return steps

    steps = _clean(_BULLETED.findall(text))
    if steps:
        return steps

    if "\n\n" in text:
        steps = _clean(text.split("\n\n"))
        if steps:
            return steps

    if "\n" in text:
        steps = _clean(text.split("\n"))
        if steps:
            return steps

    if len(text) > SENTENCE_SPLIT_MIN_LENGTH:
        steps = _sentences(text)
        if steps:
            return steps

    return [text]
