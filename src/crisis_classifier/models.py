"""Pydantic models for patterns, per-pattern analyses, and classifications."""

from __future__ import annotations

from typing import Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

CauseCategory = Literal[
    "disaster_relief",
    "health_crisis",
    "climate_events",
    "humanitarian_crisis",
    "social_justice",
]

CrisisType = Literal[
    "natural_disaster",
    "health_emergency",
    "conflict_displacement",
    "climate_disaster",
    "human_rights_violation",
    "none",
]

RootCause = Literal[
    "climate_driven",
    "conflict_driven",
    "poverty_driven",
    "policy_driven",
    "natural_phenomenon",
    "systemic_inequality",
    "multiple_factors",
    "unknown",
]

IdentifiedNeed = Literal[
    "food",
    "shelter",
    "medical",
    "water",
    "legal_aid",
    "rescue",
    "education",
    "mental_health",
    "winterization",
    "sanitation",
]

SeverityLevel = Literal["extreme", "high", "moderate", "low"]
SystemStatus = Literal["collapsed", "overwhelmed", "strained", "coping", "normal"]


class SemanticPattern(BaseModel):
    """Keyword evidence for one cause category."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    cause: CauseCategory
    crisis_type: CrisisType
    core_indicators: List[str] = Field(min_length=1)
    supporting_context: List[str] = Field(default_factory=list)
    action_indicators: List[str] = Field(default_factory=list)
    negative_indicators: List[str] = Field(default_factory=list)
    min_score: float = Field(default=6, ge=0)
    geo_keywords: Dict[str, List[str]] = Field(default_factory=dict)
    typical_root_causes: List[RootCause] = Field(default_factory=list)

    @field_validator("core_indicators", "supporting_context", "action_indicators", "negative_indicators")
    @classmethod
    def drop_blank_keywords(cls, value: List[str], info: ValidationInfo) -> List[str]:
        cleaned = [k for k in (v.strip() for v in value) if k]
        if info.field_name == "core_indicators" and not cleaned:
            raise ValueError("At least one core indicator is required.")
        return cleaned


class GeoMatch(BaseModel):
    model_config = ConfigDict(frozen=True)

    geo: str = "global"
    geo_name: str = "Global"
    match_count: int = 0
    context_score: int = 0
    is_subject: bool = False


class AnalysisResult(BaseModel):
    """Score of a single pattern against one content string."""

    model_config = ConfigDict(frozen=True)

    cause: CauseCategory
    score: float = 0
    matched_keywords: List[str] = Field(default_factory=list)
    context_score: float = 0
    action_score: float = 0
    negative_score: float = 0
    geo_score: float = 0
    geo: str = "global"
    geo_name: str = "Global"
    detected_themes: List[str] = Field(default_factory=list)
    crisis_type: CrisisType = "none"
    root_cause: RootCause = "unknown"

    @classmethod
    def empty(cls, cause: CauseCategory) -> "AnalysisResult":
        return cls(cause=cause)


class SeverityAssessment(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: SeverityLevel = "low"
    death_toll: int | None = None
    people_affected: int | None = None
    system_status: SystemStatus = "normal"
    imminent_risk: bool = False
    reasoning: str = ""


class Classification(BaseModel):
    """Accepted classification; the engine returns None instead of a rejected one."""

    model_config = ConfigDict(frozen=True)

    cause: CauseCategory
    crisis_type: CrisisType
    root_cause: RootCause
    identified_needs: List[IdentifiedNeed] = Field(default_factory=list)
    geo: str
    geo_name: str
    affected_groups: List[str] = Field(default_factory=list)
    confidence: float = Field(ge=0, le=1)
    article_title: str | None = None
    article_url: str | None = None
    matched_keywords: List[str] = Field(default_factory=list)
    relevant_excerpts: List[str] = Field(default_factory=list)
    has_matching_charities: bool = True
    detected_themes: List[str] | None = None
    severity_assessment: SeverityAssessment
