"""
PDF report for a ranked candidate list.

One A4 page per candidate, drawn top-down with PyMuPDF's built-in Helvetica
fonts: header, match summary, skill summary, feedback assessment and
transcript. Text that doesn't fit above the bottom margin is dropped; a
candidate never spills onto a second page.
"""

import re
import logging
from typing import Dict, List, Optional, Sequence

import fitz  # PyMuPDF

from schemas import MatchResult

logger = logging.getLogger(__name__)

PAGE_WIDTH, PAGE_HEIGHT = fitz.paper_size("a4")
MARGIN = 50
CONTENT_WIDTH = PAGE_WIDTH - 2 * MARGIN
# Body text stops once the baseline is this close to the bottom edge
BOTTOM_LIMIT = MARGIN + 50

FONT = "helv"
FONT_BOLD = "hebo"
BLACK = (0, 0, 0)

RESERVED_FEEDBACK_KEY = "raw"
SPEAKER_MARKERS = ("Assistant:", "User:", "Interviewer:", "Candidate:")
_SPEAKER_SPLIT_RE = re.compile("(?=" + "|".join(re.escape(m) for m in SPEAKER_MARKERS) + ")")

STATUS_GLYPHS = {
    "⚠": "[WARNING]",
    "✅": "[SUITABLE]",
    "❌": "[NOT SUITABLE]",
}
_NON_ASCII_RE = re.compile(r"[^\x00-\x7F]")
_WHITESPACE_RE = re.compile(r"\s+")

NO_FEEDBACK = "No feedback data available"
NO_TRANSCRIPT = "Not available"
NO_CANDIDATES = "No matching candidates found."


def sanitize_text(text: Optional[str]) -> str:
    """Reduce text to single-spaced printable ASCII the base-14 fonts can draw."""
    if not text:
        return ""
    for glyph, label in STATUS_GLYPHS.items():
        text = text.replace(glyph, label)
    # Unicode spaces become plain spaces first; the second collapse closes gaps
    # left where non-ASCII characters sat between spaces
    text = _WHITESPACE_RE.sub(" ", text)
    text = _NON_ASCII_RE.sub("", text)
    text = _WHITESPACE_RE.sub(" ", text)
    return text.strip()


def text_width(text: str, fontname: str = FONT, fontsize: float = 10) -> float:
    return fitz.get_text_length(text, fontname=fontname, fontsize=fontsize)


def wrap_text(text: str, max_width: float, fontname: str = FONT, fontsize: float = 10) -> List[str]:
    """Greedy word wrap. A word wider than max_width gets a line of its own."""
    lines: List[str] = []
    current = ""
    for word in text.split(" "):
        if not word:
            continue
        candidate = f"{current} {word}" if current else word
        if current and text_width(candidate, fontname, fontsize) > max_width:
            lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines


def format_feedback(feedback: Dict[str, str]) -> List[str]:
    """`KEY NAME: value` lines, skipping the raw free-text dump."""
    lines = []
    for key, value in feedback.items():
        if key == RESERVED_FEEDBACK_KEY:
            continue
        lines.append(f"{key.replace('_', ' ').upper()}: {value}")
    return lines or [NO_FEEDBACK]


def format_transcript(transcript: Optional[str]) -> List[str]:
    """Split a transcript into speaker turns when it carries speaker labels."""
    if not transcript:
        return [NO_TRANSCRIPT]
    turns = [t.strip() for t in _SPEAKER_SPLIT_RE.split(transcript)]
    turns = [t for t in turns if t]
    if len(turns) > 1:
        return turns
    return [transcript]


class _PageWriter:
    """Draws lines top-down on one page, ignoring anything past the bottom limit."""

    def __init__(self, page: "fitz.Page"):
        self.page = page
        self.y = MARGIN
        self.limit = page.rect.height - BOTTOM_LIMIT

    @property
    def full(self) -> bool:
        return self.y > self.limit

    def line(self, text: str, fontsize: float, advance: float, bold: bool = False) -> None:
        if not self.full:
            self.page.insert_text(
                (MARGIN, self.y),
                text,
                fontsize=fontsize,
                fontname=FONT_BOLD if bold else FONT,
                color=BLACK,
            )
        self.y += advance

    def paragraphs(self, blocks: Sequence[str], fontsize: float, line_height: float) -> None:
        for block in blocks:
            for line in wrap_text(sanitize_text(block), CONTENT_WIDTH, FONT, fontsize):
                if self.full:
                    return
                self.line(line, fontsize, line_height)

    def gap(self, amount: float) -> None:
        self.y += amount


def _draw_candidate(page: "fitz.Page", index: int, candidate: MatchResult) -> None:
    w = _PageWriter(page)

    w.line(sanitize_text(f"Candidate {index}: {candidate.candidate_name}"), 16, 30, bold=True)
    w.line(f"Match Count: {candidate.match_count}", 12, 20)
    w.line(sanitize_text(f"Matched Skills: {', '.join(candidate.matched_skills)}"), 10, 30)

    w.line("Skill Summary:", 12, 20, bold=True)
    w.paragraphs([candidate.summary], 10, 15)
    w.gap(20)

    if candidate.feedback is not None:
        w.line("Feedback Assessment:", 12, 20, bold=True)
        w.paragraphs(format_feedback(candidate.feedback), 9, 12)
        w.gap(20)

    w.line("Transcript:", 12, 20, bold=True)
    w.paragraphs(format_transcript(candidate.transcript), 9, 12)


def render_report(candidates: Sequence[MatchResult]) -> bytes:
    """Render the ranked candidates, one page each, and return the PDF bytes.

    MuPDF can't save a document without pages, so an empty list yields a
    single page saying no candidates matched.
    """
    doc = fitz.open()
    try:
        for i, candidate in enumerate(candidates, start=1):
            page = doc.new_page(width=PAGE_WIDTH, height=PAGE_HEIGHT)
            _draw_candidate(page, i, candidate)
        if not candidates:
            page = doc.new_page(width=PAGE_WIDTH, height=PAGE_HEIGHT)
            _PageWriter(page).line(NO_CANDIDATES, 12, 20, bold=True)
        data = doc.tobytes()
    finally:
        doc.close()
    logger.info("Rendered report: %d candidate page(s), %d bytes", len(candidates), len(data))
    return data
