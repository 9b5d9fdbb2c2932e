"""Bracket convention for fill-in-the-blank text.

Authors write ``"The sky is [blue] and grass is [green]."``; the stored form is
the parallel ``text_parts`` / ``answers`` lists of :class:`ClozeContent`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from minigames.models import ClozeContent

_BLANK_RE = re.compile(r"\[(.*?)\]")


@dataclass(frozen=True, slots=True)
class PromptSegment:
    text: str
    blank_index: int | None = None

    @property
    def is_blank(self) -> bool:
        return self.blank_index is not None


def parse_cloze_text(text: str) -> ClozeContent:
    """Split bracketed author text into text parts and answers.

    Raises ValueError when the text has no blanks.
    """

    pieces = _BLANK_RE.split(text)
    # re.split with one capture group alternates text, answer, text, ...
    text_parts = pieces[0::2]
    answers = pieces[1::2]
    if not answers:
        raise ValueError("Use [brackets] to define blanks")
    return ClozeContent(text_parts=text_parts, answers=answers)


def render_cloze_text(content: ClozeContent) -> str:
    out: list[str] = []
    for idx, part in enumerate(content.text_parts):
        out.append(part)
        if idx < len(content.answers):
            out.append(f"[{content.answers[idx]}]")
    return "".join(out)


def prompt_segments(content: ClozeContent) -> list[PromptSegment]:
    """Interleave text parts with blank markers for presentation."""

    segments: list[PromptSegment] = []
    for idx, part in enumerate(content.text_parts):
        if part:
            segments.append(PromptSegment(text=part))
        if idx < len(content.answers):
            segments.append(PromptSegment(text="", blank_index=idx))
    return segments
