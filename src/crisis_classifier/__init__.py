from .classifier import CrisisClassifier, build_default_classifier, classify_content
from .config import ALLOWED_CAUSES, ClassifierConfig, ScoringWeights
from .models import AnalysisResult, Classification, SemanticPattern, SeverityAssessment

__all__ = [
    "ALLOWED_CAUSES",
    "AnalysisResult",
    "Classification",
    "ClassifierConfig",
    "CrisisClassifier",
    "ScoringWeights",
    "SemanticPattern",
    "SeverityAssessment",
    "build_default_classifier",
    "classify_content",
]
