"""Response parsers — free model text to structured report content.

Report text
-----------
The report prompt asks for six numbered sections with fixed headings
(``REPORT_SECTIONS``).  :func:`parse_report` locates those headings
case-insensitively (``"<digit>. <HEADING>"``), cuts the text at them and
drops the headings themselves, so each section is just its body text.
Sections are routed with an explicit precedence:

  1. **keyword** — the section body mentions its content: ``observation``
     → observations, ``recommend`` → recommendations, ``red flag`` → red
     flags (checked in that order);
  2. **positional** — a body without a keyword falls back to its slot:
     1 → observations, 3 → red flags, 4 → recommendations;
  3. **unclassified** — everything else.  Kept on the parse result,
     dropped from the report.

Slots count matched headings, not non-empty fragments.  An empty section
is discarded but still holds its slot, and text before the first heading
(the preamble) has no slot at all, so a missing red-flags section or a
chatty opening line never moves recommendations into the red flags.  A
plain split-and-filter over the text would renumber in both cases.

Every non-blank line of a routed section becomes one entry, with two
clean-ups on top of that: lines made only of Markdown decoration
(``**``, ``---``) are skipped, and a leading bullet marker is removed
from each entry.  Nothing here raises: text without a recognizable
heading parses to three empty lists.

Analysis text
-------------
:func:`parse_analysis` expects a bare JSON object (optionally wrapped in a
Markdown code fence) and returns ``None`` when it cannot be read.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from enum import Enum

from pydantic import ValidationError

from screening_core.constants import OBSERVATION_CATEGORY, REPORT_SECTIONS
from screening_core.models.analysis import AnalysisResult
from screening_core.models.report import GeneratedReport, Observation

logger = logging.getLogger(__name__)

_HEADING_RE = re.compile(
    r"\d\.\s+(" + "|".join(re.escape(h) for h in REPORT_SECTIONS) + r")",
    re.IGNORECASE,
)

# Lines made only of Markdown emphasis / rule characters (e.g. "**", "---")
_DECORATION_RE = re.compile(r"^[#*_\-=\s]*$")
_BULLET_RE = re.compile(r"^(?:[-*•]\s+)")
_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL | re.IGNORECASE)


class SectionKind(str, Enum):
    OBSERVATIONS = "observations"
    RECOMMENDATIONS = "recommendations"
    RED_FLAGS = "red_flags"
    UNCLASSIFIED = "unclassified"


# Checked in order; first keyword found in the section body wins.
_KEYWORDS: list[tuple[str, SectionKind]] = [
    ("observation", SectionKind.OBSERVATIONS),
    ("recommend", SectionKind.RECOMMENDATIONS),
    ("red flag", SectionKind.RED_FLAGS),
]

_POSITIONS: dict[int, SectionKind] = {
    1: SectionKind.OBSERVATIONS,
    3: SectionKind.RED_FLAGS,
    4: SectionKind.RECOMMENDATIONS,
}


@dataclass
class ParsedSection:
    heading: str | None
    position: int | None
    kind: SectionKind
    # "keyword", "positional" or "none"
    rule: str
    lines: list[str] = field(default_factory=list)


@dataclass
class ParsedReport:
    sections: list[ParsedSection] = field(default_factory=list)

    def of_kind(self, kind: SectionKind) -> list[ParsedSection]:
        return [s for s in self.sections if s.kind is kind]

    def to_generated(self) -> GeneratedReport:
        """Flatten routed sections into the report's three arrays."""
        observations = [
            Observation(category=OBSERVATION_CATEGORY, details=line)
            for s in self.of_kind(SectionKind.OBSERVATIONS)
            for line in s.lines
        ]
        recommendations = [
            line for s in self.of_kind(SectionKind.RECOMMENDATIONS) for line in s.lines
        ]
        red_flags = [
            line for s in self.of_kind(SectionKind.RED_FLAGS) for line in s.lines
        ]
        return GeneratedReport(
            observations=observations,
            recommendations=recommendations,
            red_flags=red_flags,
        )


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------

def classify_section(text: str, position: int | None) -> tuple[SectionKind, str]:
    """Return ``(kind, rule)`` for a section body using keyword → position → none."""
    lowered = text.lower()
    for keyword, kind in _KEYWORDS:
        if keyword in lowered:
            return kind, "keyword"
    if position is not None and position in _POSITIONS:
        return _POSITIONS[position], "positional"
    return SectionKind.UNCLASSIFIED, "none"


def _content_lines(body: str) -> list[str]:
    lines = []
    for raw in body.splitlines():
        line = raw.strip()
        if not line or _DECORATION_RE.match(line):
            continue
        line = _BULLET_RE.sub("", line).strip()
        if line:
            lines.append(line)
    return lines


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse_sections(text: str | None) -> ParsedReport:
    """Cut *text* into headed sections and classify each one."""
    if not text:
        return ParsedReport()

    matches = list(_HEADING_RE.finditer(text))
    if not matches:
        logger.info("Report text has no recognizable section heading")
        return ParsedReport()

    sections: list[ParsedSection] = []

    preamble = text[: matches[0].start()]
    preamble_lines = _content_lines(preamble)
    if preamble_lines:
        kind, rule = classify_section(preamble, None)
        sections.append(
            ParsedSection(
                heading=None, position=None, kind=kind, rule=rule, lines=preamble_lines,
            )
        )

    for position, match in enumerate(matches):
        end = matches[position + 1].start() if position + 1 < len(matches) else len(text)
        body = text[match.end():end]
        lines = _content_lines(body)
        if not lines:
            continue
        kind, rule = classify_section(body, position)
        sections.append(
            ParsedSection(
                heading=match.group(1).upper(),
                position=position,
                kind=kind,
                rule=rule,
                lines=lines,
            )
        )

    return ParsedReport(sections=sections)


def parse_report(text: str | None) -> GeneratedReport:
    """Parse report text into observations, recommendations and red flags."""
    return parse_sections(text).to_generated()


def parse_analysis(text: str | None) -> AnalysisResult | None:
    """Parse a JSON analysis object; ``None`` if the text is not usable."""
    if not text:
        return None
    cleaned = text.strip()
    fenced = _FENCE_RE.match(cleaned)
    if fenced:
        cleaned = fenced.group(1)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError:
        logger.warning("Analysis text is not valid JSON (%d chars)", len(cleaned))
        return None
    if not isinstance(data, dict):
        logger.warning("Analysis JSON is a %s, expected an object", type(data).__name__)
        return None
    try:
        return AnalysisResult.model_validate(data)
    except ValidationError as exc:
        logger.warning("Analysis JSON failed validation: %d error(s)", exc.error_count())
        return None
