"""Static keyword tables used to map fault descriptions to parts.

Categories are kept in an ordered tuple: the classifier walks them in this
order and an earlier category wins an exact tie.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CandidatePart:
    name: str
    id: str
    weight: float


@dataclass(frozen=True)
class CategoryKeywordSet:
    name: str
    keywords: tuple[str, ...]
    # Strongest part first; only the first entry is ever suggested.
    parts: tuple[CandidatePart, ...]

    @property
    def top_part(self) -> CandidatePart:
        return self.parts[0]


FALLBACK_PART = CandidatePart(name="Genel Kontrol Gerekli", id="part-general-001", weight=0.3)
FALLBACK_CATEGORY = "general"

CATEGORY_KEYWORD_SETS: tuple[CategoryKeywordSet, ...] = (
    CategoryKeywordSet(
        name="fren",
        keywords=("fren", "balata", "disk", "durmuyor", "tutmuyor", "gıcırdıyor", "ses", "titreşim", "pedal"),
        parts=(
            CandidatePart("Fren Balatası Ön", "part-fren-001", 0.9),
            CandidatePart("Fren Balatası Arka", "part-fren-002", 0.85),
            CandidatePart("Fren Diski Ön", "part-fren-003", 0.8),
            CandidatePart("ABS Sensörü", "part-fren-010", 0.7),
        ),
    ),
    CategoryKeywordSet(
        name="motor",
        keywords=(
            "motor",
            "çalışmıyor",
            "titreşim",
            "ses",
            "duman",
            "yağ",
            "soğutma",
            "ısınma",
            "güç",
            "performans",
        ),
        parts=(
            CandidatePart("Motor Yağı", "part-motor-037", 0.8),
            CandidatePart("Hava Filtresi", "part-motor-016", 0.75),
            CandidatePart("Buji", "part-motor-020", 0.7),
            CandidatePart("Yağ Filtresi", "part-motor-017", 0.7),
        ),
    ),
    CategoryKeywordSet(
        name="elektrik",
        keywords=("elektrik", "akü", "şarj", "çalışmıyor", "ışık", "far", "sinyal", "klakson", "cam"),
        parts=(
            CandidatePart("Akü", "part-elektrik-001", 0.9),
            CandidatePart("Alternatör", "part-elektrik-002", 0.8),
            CandidatePart("Far Ampulü", "part-elektrik-010", 0.7),
            CandidatePart("Sigorta Kutusu", "part-elektrik-006", 0.6),
        ),
    ),
    CategoryKeywordSet(
        name="suspansiyon",
        keywords=("amortisör", "yay", "salıncak", "direksiyon", "titreşim", "sarsıntı", "ses", "çukur"),
        parts=(
            CandidatePart("Amortisör Ön Sol", "part-suspansiyon-001", 0.85),
            CandidatePart("Amortisör Ön Sağ", "part-suspansiyon-002", 0.85),
            CandidatePart("Stabilizatör Çubuğu", "part-suspansiyon-023", 0.7),
            CandidatePart("Rotil", "part-suspansiyon-013", 0.65),
        ),
    ),
    CategoryKeywordSet(
        name="klima",
        keywords=("klima", "soğutmuyor", "ısıtmıyor", "hava", "fan", "filtre", "gaz", "kompresör"),
        parts=(
            CandidatePart("Klima Filtresi", "part-klima-004", 0.8),
            CandidatePart("Klima Kompresörü", "part-klima-001", 0.75),
            CandidatePart("Klima Gazı R134a", "part-klima-005", 0.7),
            CandidatePart("Kabin Filtresi", "part-klima-022", 0.65),
        ),
    ),
)
