"""Rule-based interpretation of free-text fault descriptions.

Each category scores the description by how much of its keyword vocabulary
appears in it; the category whose top part ends up with the highest
weighted confidence wins. Matching is a plain substring test on the
lowercased text, so a keyword also matches inside a longer word.
"""
from __future__ import annotations

import logging
from typing import Sequence

from .catalog import CATEGORY_KEYWORD_SETS, FALLBACK_CATEGORY, FALLBACK_PART, CategoryKeywordSet
from .models import SuggestedPart

logger = logging.getLogger(__name__)

MAX_DENSITY_CONFIDENCE = 0.95
DENSITY_SCALE = 0.8
DENSITY_FLOOR = 0.2


def count_keyword_matches(text: str, keywords: Sequence[str]) -> int:
    return sum(1 for keyword in keywords if keyword in text)


def density_confidence(matches: int, total_keywords: int) -> float:
    """Confidence from the fraction of a category's keywords present in the text."""
    return min(MAX_DENSITY_CONFIDENCE, (matches / total_keywords) * DENSITY_SCALE + DENSITY_FLOOR)


def fallback_suggestion() -> SuggestedPart:
    return SuggestedPart(
        id=FALLBACK_PART.id,
        name=FALLBACK_PART.name,
        category=FALLBACK_CATEGORY,
        confidence=FALLBACK_PART.weight,
        matchedKeywords=0,
    )


def classify(text: str, categories: Sequence[CategoryKeywordSet] = CATEGORY_KEYWORD_SETS) -> SuggestedPart:
    """Map a free-text description to the best matching part.

    Never raises: text that matches no keyword yields the generic
    inspection suggestion. The returned confidence is not rounded.
    """
    normalized = text.lower()
    best: SuggestedPart | None = None
    highest = 0.0

    for category in categories:
        matches = count_keyword_matches(normalized, category.keywords)
        if matches == 0:
            continue
        part = category.top_part
        adjusted = part.weight * density_confidence(matches, len(category.keywords))
        # Strict comparison: on a tie the earlier category keeps the lead.
        if adjusted > highest:
            highest = adjusted
            best = SuggestedPart(
                id=part.id,
                name=part.name,
                category=category.name,
                confidence=adjusted,
                matchedKeywords=matches,
            )

    if best is None:
        logger.debug("classify text=%r matched no category, using fallback", normalized)
        return fallback_suggestion()
    logger.debug(
        "classify text=%r category=%s part=%s confidence=%.4f matches=%s",
        normalized,
        best.category,
        best.id,
        best.confidence,
        best.matchedKeywords,
    )
    return best


def confidence_level(confidence: float) -> str:
    if confidence >= 0.8:
        return "Yüksek"
    if confidence >= 0.6:
        return "Orta"
    if confidence >= 0.4:
        return "Düşük"
    return "Çok Düşük"


def recommendations_for(suggestion: SuggestedPart) -> list[str]:
    """Advisory messages shown next to an interpreted part."""
    recommendations: list[str] = []
    if suggestion.confidence > 0.7:
        recommendations.append("Bu parça tahmini yüksek güvenilirlik seviyesinde")
    if suggestion.category == "fren":
        recommendations.append("Fren parçaları güvenlik açısından kritiktir, profesyonel montaj önerilir")
    if suggestion.category == "motor":
        recommendations.append("Motor parçaları için orijinal parça kullanımı önerilir")
    if suggestion.confidence < 0.5:
        recommendations.append("Daha detaylı açıklama ile daha kesin sonuç alabilirsiniz")
        recommendations.append("Bir uzmanla görüşmeniz önerilir")
    return recommendations
