"""Rule-table severity assessment.

Figures are pulled out of the text with several regexes and the largest
value wins, so conflicting reports resolve toward the more severe reading.
Counts quoted as rates ("300 patients a day") never become totals, but the
sentence around them is kept as narrative context for the reasoning text.
"""

from __future__ import annotations

import logging
import re
from typing import List, Tuple

from .models import SeverityAssessment, SeverityLevel, SystemStatus
from .taxonomy import first_matching, normalize_text

_log = logging.getLogger(__name__)

_NUM = r"(\d+(?:,\d+)*)"
# Confine lazy gaps to a single sentence.
_GAP = r"[^.!?]*?"

# ── Figure patterns ──────────────────────────────────────────────────

_DEATH_PATTERNS = [
    re.compile(_NUM + r"\s+(?:people\s+)?(?:have\s+)?died\b", re.IGNORECASE),
    re.compile(r"\bdeath\s+toll" + _GAP + _NUM, re.IGNORECASE),
    re.compile(_NUM + r"\s+deaths\b", re.IGNORECASE),
    re.compile(r"\bkilled\s+(?:at\s+least\s+)?" + _NUM, re.IGNORECASE),
    re.compile(_NUM + r"\s+(?:people\s+)?killed\b", re.IGNORECASE),
]

_AFFECTED_PATTERNS = [
    re.compile(
        _NUM + r"\s+(?:people|survivors|patients)\b" + _GAP
        + r"\b(?:affected|displaced|evacuated|facing|sought|reached)\b",
        re.IGNORECASE,
    ),
    re.compile(
        r"\b(?:affected|displaced|evacuated|sought|reached)\b" + _GAP
        + _NUM + r"\s+(?:people|survivors|patients|families)\b",
        re.IGNORECASE,
    ),
    re.compile(r"(\d+(?:,\d+)*(?:\.\d+)?)\s+(?:million|m)\s+(?:people|survivors|patients)\b", re.IGNORECASE),
    re.compile(_NUM + r"\s+(?:families|residents|civilians|survivors)\b", re.IGNORECASE),
]

_RATE_PATTERN = re.compile(
    _NUM + r"\s+(?:(?:people|survivors|patients|individuals)\s+)?(?:a|per)\s+(?:day|week|month)\b",
    re.IGNORECASE,
)
_RATE_MARKER = re.compile(r"\b(?:a|per)\s+(?:day|week|month)\b", re.IGNORECASE)
# Anchored at the end of the captured number.
_MILLION_MARKER = re.compile(r"\s+(?:million|m)\b", re.IGNORECASE)

_QUALITATIVE_PATTERNS = [
    re.compile(r"too late for (?:preventive )?treatment", re.IGNORECASE),
    re.compile(r"never reached (?:care|help|assistance)", re.IGNORECASE),
    re.compile(r"overwhelmed (?:by|with)", re.IGNORECASE),
    re.compile(r"running out of", re.IGNORECASE),
    re.compile(r"insufficient (?:supplies|resources|capacity)", re.IGNORECASE),
    re.compile(r"desperate (?:need|situation)", re.IGNORECASE),
    re.compile(r"critical (?:shortage|condition)", re.IGNORECASE),
    re.compile(r"rapidly (?:spreading|worsening|deteriorating)", re.IGNORECASE),
    re.compile(r"escalating (?:crisis|emergency)", re.IGNORECASE),
    re.compile(r"unprecedented (?:scale|numbers)", re.IGNORECASE),
]

# ── Status vocabulary ────────────────────────────────────────────────

SYSTEM_STATUS_RULES: List[Tuple[SystemStatus, List[str]]] = [
    ("collapsed", ["collapsed", "no access", "completely destroyed", "system failure"]),
    ("overwhelmed", ["overwhelmed", "at capacity", "running out", "insufficient"]),
    ("strained", ["strained", "struggling", "limited capacity"]),
    ("coping", ["coping", "managing", "responding"]),
]

IMMINENT_TERMS = ["imminent", "spreading", "worsening", "escalating", "approaching", "urgent"]
MASS_CASUALTY_TERMS = ["famine", "epidemic"]

LOW_SEVERITY_REASON = "limited scale or potential future impact"
DISABLED_REASON = "Severity assessment disabled"

_SNIPPET_MIN_CHARS = 30
_SNIPPET_OVERLAP_LIMIT = 0.8
_MAX_SNIPPETS = 2


def _to_int(raw: str) -> int:
    return int(float(raw.replace(",", "")))


def _window(content: str, start: int, end: int, pad: int) -> str:
    snippet = content[max(0, start - pad):min(len(content), end + pad)]
    return " ".join(snippet.split())


def _sentence_context(content: str, start: int) -> str:
    """The sentence containing *start* plus its neighbours."""
    bounds = [0]
    bounds.extend(m.end() for m in re.finditer(r"[.!?]+", content))
    bounds.append(len(content))
    sentences = [content[a:b] for a, b in zip(bounds, bounds[1:])]
    index = 0
    for i, (a, b) in enumerate(zip(bounds, bounds[1:])):
        if a <= start < b:
            index = i
            break
    chosen = sentences[max(0, index - 1):index + 2]
    return " ".join(" ".join(chosen).split())


def extract_death_toll(content: str) -> Tuple[int | None, str | None]:
    best: int | None = None
    snippet: str | None = None
    for pattern in _DEATH_PATTERNS:
        for match in pattern.finditer(content):
            value = _to_int(match.group(1))
            if best is None or value > best:
                best = value
                snippet = _window(content, match.start(), match.end(), 50)
    return best, snippet


def extract_people_affected(content: str) -> Tuple[int | None, List[str]]:
    best: int | None = None
    best_snippet: str | None = None
    rate_snippets: List[str] = []
    for pattern in _AFFECTED_PATTERNS:
        for match in pattern.finditer(content):
            text = match.group(0)
            if _RATE_MARKER.search(text):
                rate_snippets.append(_sentence_context(content, match.start()))
                continue
            value = float(match.group(1).replace(",", ""))
            if _MILLION_MARKER.match(content, match.end(1)):
                value *= 1_000_000
            if best is None or value > best:
                best = int(value)
                best_snippet = _window(content, match.start(), match.end(), 80)
    if best is not None:
        return best, [best_snippet] if best_snippet else []
    for match in _RATE_PATTERN.finditer(content):
        rate_snippets.append(_sentence_context(content, match.start()))
    return None, rate_snippets


def system_status_for(content: str) -> SystemStatus:
    haystack = content.casefold()
    for status, terms in SYSTEM_STATUS_RULES:
        if first_matching(haystack, terms) is not None:
            return status
    return "normal"


def has_imminent_risk(content: str) -> bool:
    haystack = content.casefold()
    return first_matching(haystack, IMMINENT_TERMS) is not None


def _overlap(first: str, second: str) -> float:
    shorter, longer = sorted((first, second), key=len)
    shorter = normalize_text(shorter)
    longer = normalize_text(longer)
    if shorter in longer:
        return 1.0
    size = len(shorter) // 2
    if size == 0:
        return 0.0
    for i in range(len(shorter) - size + 1):
        if shorter[i:i + size] in longer:
            return size / len(shorter)
    return 0.0


def dedupe_snippets(snippets: List[str]) -> List[str]:
    """Longest first, dropping near-duplicates, at most two."""
    candidates = sorted((s for s in snippets if len(s) > _SNIPPET_MIN_CHARS), key=len, reverse=True)
    unique: List[str] = []
    for snippet in candidates:
        if not any(_overlap(snippet, kept) > _SNIPPET_OVERLAP_LIMIT for kept in unique):
            unique.append(snippet)
        if len(unique) >= _MAX_SNIPPETS:
            break
    return unique


def _grade(
    content: str,
    death_toll: int | None,
    affected: int | None,
    status: SystemStatus,
    imminent: bool,
) -> Tuple[SeverityLevel, List[str]]:
    deaths = death_toll or 0
    people = affected or 0
    reasons: List[str] = []
    haystack = content.casefold()
    mass_casualty = imminent and any(t in haystack for t in MASS_CASUALTY_TERMS)

    if deaths > 100 or people > 1_000_000 or status == "collapsed" or mass_casualty:
        if deaths > 100:
            reasons.append(f"{deaths} deaths")
        if people > 1_000_000:
            reasons.append(f"{people / 1_000_000:.1f}M people affected")
        if status == "collapsed":
            reasons.append("system collapsed")
        if imminent:
            reasons.append("imminent mass casualties")
        return "extreme", reasons

    if deaths >= 10 or people >= 100_000 or status == "overwhelmed" or (imminent and status == "strained"):
        if deaths >= 10:
            reasons.append(f"{deaths} deaths")
        if people >= 100_000:
            reasons.append(f"{people / 1000:.0f}K people affected")
        if status == "overwhelmed":
            reasons.append("system overwhelmed")
        if imminent:
            reasons.append("serious imminent risk")
        return "high", reasons

    if deaths > 0 or people >= 10_000 or status == "strained":
        if deaths:
            reasons.append(f"{deaths} deaths")
        if people >= 10_000:
            reasons.append(f"{people / 1000:.0f}K people affected")
        if status == "strained":
            reasons.append("system strained")
        return "moderate", reasons

    return "low", [LOW_SEVERITY_REASON]


def assess_severity(content: str) -> SeverityAssessment:
    """Grade *content* on the four-level severity scale."""
    narrative: List[str] = []

    death_toll, death_snippet = extract_death_toll(content)
    if death_snippet:
        narrative.append(death_snippet)

    affected, affected_snippets = extract_people_affected(content)
    narrative.extend(affected_snippets)

    for pattern in _QUALITATIVE_PATTERNS:
        match = pattern.search(content)
        if match:
            narrative.append(_window(content, match.start(), match.end(), 60))

    status = system_status_for(content)
    imminent = has_imminent_risk(content)
    level, reasons = _grade(content, death_toll, affected, status, imminent)

    reasoning = "; ".join(reasons)
    snippets = dedupe_snippets(narrative)
    if snippets:
        reasoning += "\n\nContext: " + " ... ".join(snippets)

    _log.debug("Severity %s (deaths=%s affected=%s status=%s)", level, death_toll, affected, status)
    return SeverityAssessment(
        level=level,
        death_toll=death_toll,
        people_affected=affected,
        system_status=status,
        imminent_risk=imminent,
        reasoning=reasoning,
    )


def neutral_assessment() -> SeverityAssessment:
    return SeverityAssessment(reasoning=DISABLED_REASON)
