"""Pattern registry: keyword evidence for each cause category.

The built-in registry is plain data (``PATTERN_RECORDS``), validated into
``SemanticPattern`` models by :func:`load_patterns`.  A JSON file holding a
list of the same records can replace it (see :func:`load_patterns_file`),
which is also how tests swap in a minimal registry.

Keyword tiers, strongest first:
  core indicators     at least one must appear (substring match)
  supporting context  corroborating vocabulary
  action indicators   response / relief vocabulary
  negative indicators whole-word matches that subtract points
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List

from .config import canonicalize_cause
from .models import CauseCategory, SemanticPattern

_log = logging.getLogger(__name__)

PATTERN_REGISTRY_VERSION = "1"

# ── Shared negative vocabulary ───────────────────────────────────────
# Entertainment, sports, tech, business, opinion and retrospective
# coverage regularly borrows crisis words ("fire performance").

COMMON_NEGATIVE_INDICATORS: List[str] = [
    # Entertainment & music
    "concert", "tour", "album", "song", "band", "musician", "artist", "performance",
    "documentary", "film", "movie", "show", "series", "episode", "streaming",
    "festival", "venue", "tickets", "setlist", "tracklist", "release date",
    "music video", "premiere", "debut", "soundtrack", "lyrics", "guitar", "drums",
    "metal injection", "rolling stone", "pitchfork", "billboard", "mtv", "vh1",
    "grammy", "oscar", "emmy", "award show", "red carpet", "nominees announced",
    # Sports
    "game", "match", "tournament", "championship", "playoff", "season", "league",
    "team", "player", "coach", "score", "goal", "touchdown", "basket", "run",
    "espn", "sports", "athletic", "stadium", "arena", "field",
    "nfl", "nba", "mlb", "nhl", "fifa", "olympics", "medal count",
    # Technology & products
    "review", "unboxing", "specs", "features", "price", "release", "launch",
    "iphone", "android", "laptop", "gaming", "console", "app", "software",
    "tech", "gadget", "device", "product", "brand", "model",
    "apple", "google", "microsoft", "samsung", "sony",
    # Business & finance
    "stock", "market", "earnings", "revenue", "profit", "investment",
    "ceo", "company", "business", "corporate", "merger", "acquisition",
    "wall street", "nasdaq", "dow jones",
    # Opinion & analysis
    "opinion", "editorial", "commentary", "analysis", "perspective", "viewpoint",
    "op-ed", "column", "blog post", "think piece", "hot take",
    # Historical / past events
    "anniversary", "remembering", "looking back", "history of", "years ago",
    "retrospective", "throwback", "archive", "vintage",
    # Metaphorical language
    "fire performance", "killing it", "slaying", "crushing it", "explosive growth",
    "viral", "trending", "heated debate", "burning question",
    # Titles that contain crisis words
    "star wars", "game of thrones", "breaking bad", "the wire",
    "midnight fire", "dark waters", "fire emblem",
]


# ── Cause records ────────────────────────────────────────────────────

DISASTER_RELIEF: Dict[str, Any] = {
    "cause": "disaster_relief",
    "crisis_type": "natural_disaster",
    "typical_root_causes": ["natural_phenomenon", "climate_driven"],
    "core_indicators": [
        "earthquake", "flood", "hurricane", "tornado", "tsunami",
        "landslide", "avalanche", "cyclone", "typhoon", "wildfire",
        "disaster", "natural disaster", "emergency", "catastrophe",
        "destruction", "devastation", "storm", "severe weather",
        "displaced", "displace", "displacement", "evacuate", "evacuation",
    ],
    "supporting_context": [
        "destroyed", "damage", "collapsed", "debris",
        "survivors", "casualties", "missing", "trapped", "rescue",
        "homes destroyed", "buildings collapsed", "infrastructure damage",
        "power outage", "roads blocked", "emergency services",
        "thousands", "hundreds", "families", "residents",
    ],
    "action_indicators": [
        "emergency response", "rescue operations", "relief efforts",
        "emergency shelter", "search and rescue", "disaster relief", "aid workers",
        "red cross", "fema", "emergency management", "disaster zone",
    ],
    "negative_indicators": COMMON_NEGATIVE_INDICATORS + [
        "election", "campaign", "congress", "senate", "legislation",
        "bill", "vote", "political", "debate", "policy discussion",
        "war", "conflict", "military operation", "occupation", "siege",
        "ice", "deportation", "immigration", "border patrol",
        # Slow-onset climate stories belong to climate_events
        "climate change", "global warming", "sea level rise", "coral bleaching",
        "permafrost", "ice caps melting",
    ],
    "min_score": 6,
    "geo_keywords": {
        "Bangladesh": ["bangladesh", "dhaka", "chittagong"],
        "Chile": ["chile", "santiago"],
        "Japan": ["japan", "tokyo", "osaka"],
        "Philippines": ["philippines", "manila"],
        "United States": ["california", "florida", "texas", "louisiana", "midwest"],
    },
}

HEALTH_CRISIS: Dict[str, Any] = {
    "cause": "health_crisis",
    "crisis_type": "health_emergency",
    "typical_root_causes": ["natural_phenomenon", "poverty_driven", "conflict_driven"],
    "core_indicators": [
        "outbreak", "epidemic", "pandemic", "disease spread", "virus outbreak",
        "infection rate", "health emergency", "medical emergency",
        "disease", "virus", "illness", "sick", "hospital", "medical crisis",
        "health crisis", "public health", "contagious", "infectious",
        "cholera", "measles", "ebola", "malaria", "tuberculosis", "dengue",
        "meningitis", "hepatitis", "diphtheria", "polio",
    ],
    "supporting_context": [
        "patients", "hospitals overwhelmed", "healthcare system", "medical supplies",
        "ventilators", "icu beds", "mortality rate", "death toll", "infected",
        "symptoms", "treatment", "vaccine", "medication", "doctors", "nurses",
        "healthcare workers", "medical staff", "hospital capacity",
        "refugee camp", "displaced", "vulnerable populations",
        "kills", "deaths", "casualties", "children", "widespread",
    ],
    "action_indicators": [
        "vaccination campaign", "medical response", "treatment centers",
        "healthcare workers deployed", "emergency medical", "quarantine measures",
        "testing", "contact tracing", "isolation", "medical aid",
    ],
    "negative_indicators": COMMON_NEGATIVE_INDICATORS + [
        "election", "campaign", "congress", "senate", "legislation",
        "political debate", "policy proposal", "budget discussion",
        "ice", "deportation", "immigration", "border patrol",
        "humanitarian crisis worsens", "humanitarian emergency",
    ],
    "min_score": 6,
    "geo_keywords": {
        "Global": ["global", "worldwide", "international", "multiple countries"],
        "Africa": ["africa", "congo", "nigeria", "kenya", "ebola"],
        "Asia": ["asia", "india", "china"],
        "Yemen": ["yemen", "yemeni"],
        "Afghanistan": ["afghanistan", "afghan"],
        "Samoa": ["samoa", "samoan"],
    },
}

CLIMATE_EVENTS: Dict[str, Any] = {
    "cause": "climate_events",
    "crisis_type": "climate_disaster",
    "typical_root_causes": ["climate_driven"],
    "core_indicators": [
        "wildfire", "drought", "heatwave", "extreme heat", "record temperatures",
        "flooding", "sea level rise", "glacier melting", "extreme weather",
        "climate emergency", "environmental disaster",
        "monsoon", "heavy rain", "torrential rain", "deluge",
        "coral bleaching", "coral reef", "permafrost", "ice caps", "ice melt",
        "melting ice", "polar ice", "arctic ice", "deforestation", "rainforest fires",
        "rising sea levels", "rising sea level",
    ],
    "supporting_context": [
        "climate change", "global warming", "environmental disaster",
        "ecosystem collapse", "habitat destruction", "species extinction",
        "carbon emissions", "temperature records", "weather patterns",
        "rising temperatures", "melting ice", "sea levels", "coral bleaching",
        "rainfall", "precipitation", "seasonal", "weather system",
        "threatens", "threatening", "kills", "deaths", "casualties",
        "millions", "thousands", "hundreds", "east africa", "europe",
        "amazon", "great barrier reef", "arctic", "antarctic",
        "devastates", "devastation", "faster", "accelerating", "rapid",
        "unprecedented", "alarming", "predicted", "pacific island",
    ],
    "action_indicators": [
        "firefighting efforts", "evacuation orders", "emergency cooling centers",
        "water rationing", "climate adaptation", "disaster response",
        "fire crews", "containment", "climate action", "environmental response",
    ],
    "negative_indicators": COMMON_NEGATIVE_INDICATORS + [
        "election", "campaign", "congress", "senate", "legislation debate",
        "political discussion", "policy proposal", "budget hearing",
        "war", "conflict", "military", "refugee", "displacement", "occupation",
        "ice", "deportation", "immigration", "border patrol",
        "rethinking",
    ],
    "min_score": 6,
    "geo_keywords": {
        "Asia": ["asia", "asian", "south asia", "southeast asia", "east asia", "monsoon"],
        "India": ["india", "indian", "mumbai", "delhi", "kolkata", "chennai", "bangalore"],
        "Bangladesh": ["bangladesh", "bangladeshi", "dhaka", "chittagong"],
        "Pakistan": ["pakistan", "pakistani", "karachi", "lahore", "islamabad"],
        "Nepal": ["nepal", "nepalese", "kathmandu"],
        "Myanmar": ["myanmar", "burma", "yangon", "mandalay"],
        "Thailand": ["thailand", "thai", "bangkok"],
        "Vietnam": ["vietnam", "vietnamese", "hanoi", "ho chi minh"],
        "Philippines": ["philippines", "filipino", "manila"],
        "Indonesia": ["indonesia", "indonesian", "jakarta", "bali"],
        "China": ["china", "chinese", "beijing", "shanghai", "guangzhou"],
        "California": ["california", "ca", "los angeles", "san francisco", "sacramento"],
        "Australia": ["australia", "australian", "sydney", "melbourne", "queensland"],
        "Greece": ["greece", "greek", "athens"],
        "Amazon": ["amazon", "brazil", "rainforest", "brazilian"],
        "Europe": ["europe", "european"],
        "Africa": ["africa", "african", "east africa"],
        "Pacific": ["pacific", "pacific island", "tuvalu", "kiribati", "marshall islands"],
    },
}

HUMANITARIAN_CRISIS: Dict[str, Any] = {
    "cause": "humanitarian_crisis",
    "crisis_type": "conflict_displacement",
    "typical_root_causes": ["conflict_driven", "multiple_factors"],
    "core_indicators": [
        "refugee crisis", "displaced persons", "mass displacement", "fleeing violence",
        "humanitarian emergency", "famine", "starvation", "food insecurity crisis",
        "kidnapped", "abducted", "hostages", "captivity", "armed groups",
        "refugees fleeing", "asylum seekers", "humanitarian", "crisis", "conflict",
        "war", "violence", "persecution", "suffering",
        "siege", "blockade", "occupation", "military operation", "civilian casualties",
        "gaza", "palestine", "west bank", "refugee camp", "idp camp",
        "ethnic cleansing", "genocide", "war crimes", "atrocities",
        "trapped", "besieged", "fleeing to", "seeking refuge", "escaping war",
    ],
    "supporting_context": [
        "refugee camps", "internally displaced", "humanitarian aid",
        "food shortage", "malnutrition", "lack of shelter", "water scarcity",
        "conflict zone", "war-torn",
        "schoolchildren", "students", "families", "terror", "militants",
        "civilians", "innocent people", "vulnerable populations", "emergency aid",
        "humanitarian corridor", "safe zone", "buffer zone", "ceasefire",
        "palestinian", "israeli", "hamas", "idf", "un agency", "unrwa",
        "aid convoy", "humanitarian access", "border crossing", "evacuation route",
        "myanmar", "rohingya", "south sudan", "syria",
    ],
    "action_indicators": [
        "humanitarian response", "aid distribution", "refugee assistance",
        "emergency food", "shelter provision", "unhcr", "red cross",
        "humanitarian organizations", "relief operations", "rescue mission",
        "negotiation", "release secured", "freed", "liberation",
        "relief supplies", "emergency assistance",
        "peacekeeping", "ceasefire talks", "humanitarian pause",
    ],
    "negative_indicators": COMMON_NEGATIVE_INDICATORS + [
        "election campaign", "political fundraising", "campaign strategy",
        "legislative debate", "budget discussion", "committee hearing",
        "earthquake", "flood", "hurricane", "wildfire", "natural disaster",
        # No disease names here: outbreaks in camps stay humanitarian.
        "mass incarceration", "prison system", "criminal justice system",
        "police brutality", "ice raids", "deportation of",
    ],
    "min_score": 6,
    "geo_keywords": {
        "Gaza": ["gaza", "gaza strip", "palestinian territories", "rafah", "khan younis"],
        "Palestine": ["palestine", "palestinian", "west bank", "occupied territories"],
        "Syria": ["syria", "syrian", "aleppo", "damascus", "idlib"],
        "Ukraine": ["ukraine", "ukrainian", "kyiv", "kharkiv", "mariupol"],
        "Yemen": ["yemen", "yemeni", "sanaa", "aden"],
        "Sudan": ["sudan", "darfur", "khartoum"],
        "Myanmar": ["myanmar", "rohingya", "rakhine"],
        "Nigeria": ["nigeria", "nigerian", "boko haram", "kaduna", "lagos"],
        "Afghanistan": ["afghanistan", "afghan", "kabul", "kandahar"],
        "South Sudan": ["south sudan", "juba"],
        "Somalia": ["somalia", "mogadishu"],
    },
}

SOCIAL_JUSTICE: Dict[str, Any] = {
    "cause": "social_justice",
    "crisis_type": "human_rights_violation",
    "typical_root_causes": ["systemic_inequality", "policy_driven"],
    "core_indicators": [
        "civil rights movement", "protest movement", "social justice campaign",
        "discrimination lawsuit", "inequality crisis", "systemic racism",
        "human rights violation", "oppression of minorities",
        "discrimination", "inequality", "injustice", "racism", "prejudice",
        "civil rights", "social justice", "protest", "demonstration",
        "ice raids", "immigration enforcement", "border patrol",
        "immigration rights", "immigrant rights", "undocumented", "daca",
        "asylum denied", "immigration detention", "family separation",
        "deported", "deportation", "removal", "immigration court",
        "mass incarceration", "incarceration", "prison system", "criminal justice",
        "police brutality", "excessive force", "racial profiling", "wrongful arrest",
        "indigenous rights", "land rights", "treaty violation", "pipeline construction",
    ],
    "supporting_context": [
        "protesters", "demonstrations", "activists", "advocacy groups",
        "marginalized communities", "human rights", "social change", "justice reform",
        "equality", "fairness", "oppression", "marginalized", "underserved",
        "immigrants", "undocumented immigrants", "immigration policy",
        "deportation defense", "legal aid", "immigration lawyers",
        "detention centers", "visa issues", "citizenship", "green card", "asylum process",
        "immigration reform", "border policy", "sanctuary cities",
        "police", "law enforcement", "officers", "sparks", "outrage",
        "prison", "inmates", "incarcerated", "sentencing", "indigenous", "tribal",
        "disproportionately", "affects", "black americans", "communities of color",
    ],
    "action_indicators": [
        "community organizing", "advocacy campaign",
        "education programs", "support services", "grassroots movement",
        "civil rights organization", "justice initiative",
        "rally", "march", "petition", "activism",
        "immigration legal services", "know your rights",
        "immigrant support", "aclu", "immigration advocacy", "legal representation",
    ],
    "negative_indicators": COMMON_NEGATIVE_INDICATORS + [
        "election campaign", "political fundraising", "campaign strategy",
        "budget discussion",
        "war", "conflict zone", "military operation", "refugee camp",
        "fleeing to", "seeking refuge", "escaping war", "humanitarian corridor",
        "armed groups", "militants", "siege", "blockade",
        "optimistic about",
    ],
    "min_score": 6,
    "geo_keywords": {
        "United States": ["us", "usa", "america", "american", "border", "texas", "arizona", "california"],
        "Honduras": ["honduras", "honduran", "tegucigalpa"],
        "Mexico": ["mexico", "mexican", "border"],
        "Central America": ["central america", "guatemala", "el salvador"],
        "Global": ["global", "worldwide", "international"],
    },
}

PATTERN_RECORDS: List[Dict[str, Any]] = [
    DISASTER_RELIEF,
    HEALTH_CRISIS,
    CLIMATE_EVENTS,
    HUMANITARIAN_CRISIS,
    SOCIAL_JUSTICE,
]


# ── Static lookups ───────────────────────────────────────────────────

AFFECTED_GROUPS: Dict[str, List[str]] = {
    "disaster_relief": ["families", "communities", "displaced residents", "survivors"],
    "health_crisis": ["patients", "vulnerable populations", "healthcare workers", "affected communities"],
    "climate_events": ["residents", "families", "local communities", "wildlife"],
    "humanitarian_crisis": ["refugees", "displaced families", "children", "vulnerable populations", "civilians"],
    "social_justice": [
        "marginalized communities", "students", "activists", "underserved populations",
        "immigrants", "undocumented individuals",
    ],
}

CAUSE_LABELS: Dict[str, str] = {
    "disaster_relief": "Disaster Relief",
    "health_crisis": "Health Crisis",
    "climate_events": "Climate Events",
    "humanitarian_crisis": "Humanitarian Crisis",
    "social_justice": "Social Justice",
}


def cause_label(cause: CauseCategory) -> str:
    return CAUSE_LABELS.get(cause, cause.replace("_", " ").title())


def affected_groups_for(cause: CauseCategory) -> List[str]:
    return list(AFFECTED_GROUPS.get(cause, []))


# ── Loading ──────────────────────────────────────────────────────────

def _canonical_record(record: Dict[str, Any]) -> Dict[str, Any]:
    cause = record.get("cause")
    if isinstance(cause, str):
        # Alias spellings ("Disaster", "health-crisis") resolve to the canonical name.
        canonical = canonicalize_cause(cause)
        if canonical and canonical != cause:
            return {**record, "cause": canonical}
    return record


def load_patterns(records: Iterable[Dict[str, Any]]) -> tuple[SemanticPattern, ...]:
    """Validate pattern records into an immutable, ordered registry."""
    patterns = tuple(SemanticPattern.model_validate(_canonical_record(r)) for r in records)
    seen: set[str] = set()
    for pattern in patterns:
        if pattern.cause in seen:
            raise ValueError(f"Duplicate pattern for cause: {pattern.cause}")
        seen.add(pattern.cause)
    return patterns


def load_patterns_file(path: str | Path) -> tuple[SemanticPattern, ...]:
    """Load a registry from JSON: a list of records or ``{"version", "patterns"}``."""
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Pattern file not found: {file_path}")
    payload = json.loads(file_path.read_text(encoding="utf-8"))
    if isinstance(payload, dict):
        _log.info(
            "Pattern registry loaded from %s (version=%s)",
            file_path.name,
            payload.get("version", "unversioned"),
        )
        payload = payload.get("patterns", [])
    if not isinstance(payload, list):
        raise ValueError(f"Pattern file must hold a list of records: {file_path}")
    return load_patterns(payload)


def default_patterns() -> tuple[SemanticPattern, ...]:
    return load_patterns(PATTERN_RECORDS)
