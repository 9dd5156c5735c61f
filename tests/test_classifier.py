"""Tests for the keyword-based fault interpreter."""

import pytest

from partfinder.catalog import CATEGORY_KEYWORD_SETS, CandidatePart, CategoryKeywordSet
from partfinder.classifier import (
    classify,
    confidence_level,
    density_confidence,
    recommendations_for,
)
from partfinder.models import SuggestedPart


def _category(name, keywords, weight):
    return CategoryKeywordSet(name=name, keywords=tuple(keywords), parts=(CandidatePart(name.upper(), f"{name}-1", weight),))


def test_single_brake_keyword():
    """A lone ``fren`` scores one match out of nine brake keywords."""

    result = classify("fren")

    assert result.category == "fren"
    assert result.id == "part-fren-001"
    assert result.matchedKeywords == 1
    assert result.confidence == pytest.approx(0.9 * min(0.95, (1 / 9) * 0.8 + 0.2))


def test_brake_complaint_scenario():
    """fren, tutmuyor and ses all appear; brake beats engine and suspension."""

    result = classify("fren tutmuyor arka kısımdan ses geliyor")

    assert result.category == "fren"
    assert result.id == "part-fren-001"
    assert result.name == "Fren Balatası Ön"
    assert result.matchedKeywords == 3
    assert result.confidence == pytest.approx(0.9 * ((3 / 9) * 0.8 + 0.2))


def test_unmatched_text_returns_generic_inspection():
    result = classify("merhaba dünya")

    assert result == SuggestedPart(
        id="part-general-001",
        name="Genel Kontrol Gerekli",
        category="general",
        confidence=0.3,
        matchedKeywords=0,
    )


def test_empty_text_does_not_raise():
    assert classify("").category == "general"


def test_keywords_match_inside_longer_words():
    """``far`` is found inside ``farklı``; matching is not tokenized."""

    result = classify("farklı bir durum")

    assert result.category == "elektrik"
    assert result.id == "part-elektrik-001"
    assert result.matchedKeywords == 1


def test_input_is_lowercased():
    result = classify("FREN BALATASI")

    assert result.category == "fren"
    assert result.matchedKeywords == 2


def test_shared_keyword_prefers_highest_weighted_category():
    """titreşim is in brake, engine and suspension; brake's 0.26 beats 0.255 and 0.224."""

    result = classify("titreşim")

    assert result.category == "fren"
    assert result.confidence == pytest.approx(0.9 * ((1 / 9) * 0.8 + 0.2))


def test_exact_tie_keeps_earlier_category():
    first = _category("first", ["x"], 0.5)
    second = _category("second", ["x"], 0.5)

    assert classify("x", [first, second]).category == "first"
    assert classify("x", [second, first]).category == "second"


def test_later_category_wins_on_strict_improvement():
    first = _category("first", ["x"], 0.5)
    second = _category("second", ["x"], 0.6)

    assert classify("x", [first, second]).category == "second"


def test_density_is_capped_before_weighting():
    """Matching every keyword would give 1.0 density; the cap is 0.95."""

    assert density_confidence(1, 1) == pytest.approx(0.95)
    full = _category("full", ["x"], 1.0)

    assert classify("x", [full]).confidence == pytest.approx(0.95)


@pytest.mark.parametrize(
    "text",
    [
        "fren balata disk durmuyor tutmuyor gıcırdıyor ses titreşim pedal",
        "motor çalışmıyor duman yağ soğutma ısınma güç performans",
        "akü şarj ışık far sinyal klakson cam elektrik",
        "amortisör yay salıncak direksiyon sarsıntı çukur",
        "klima soğutmuyor ısıtmıyor hava fan filtre gaz kompresör",
    ],
)
def test_confidence_never_exceeds_top_part_weight(text):
    result = classify(text)
    category = next(c for c in CATEGORY_KEYWORD_SETS if c.name == result.category)

    assert 0 <= result.confidence <= category.top_part.weight
    assert result.confidence <= 0.95


def test_categories_are_evaluated_in_declared_order():
    assert [c.name for c in CATEGORY_KEYWORD_SETS] == ["fren", "motor", "elektrik", "suspansiyon", "klima"]


@pytest.mark.parametrize(
    ("confidence", "label"),
    [(0.95, "Yüksek"), (0.8, "Yüksek"), (0.6, "Orta"), (0.42, "Düşük"), (0.3, "Çok Düşük")],
)
def test_confidence_level(confidence, label):
    assert confidence_level(confidence) == label


def test_recommendations_for_low_confidence_brake_part():
    suggestion = classify("fren tutmuyor arka kısımdan ses geliyor")

    assert recommendations_for(suggestion) == [
        "Fren parçaları güvenlik açısından kritiktir, profesyonel montaj önerilir",
        "Daha detaylı açıklama ile daha kesin sonuç alabilirsiniz",
        "Bir uzmanla görüşmeniz önerilir",
    ]


def test_recommendations_for_confident_engine_part():
    suggestion = SuggestedPart(id="part-motor-037", name="Motor Yağı", category="motor", confidence=0.75)

    assert recommendations_for(suggestion) == [
        "Bu parça tahmini yüksek güvenilirlik seviyesinde",
        "Motor parçaları için orijinal parça kullanımı önerilir",
    ]
