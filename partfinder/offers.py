"""Synthesized seller offers for a part id.

Price and warranty policies are keyed on substrings of the part id, checked
in a fixed order where the first hit wins. Everything else (which sellers,
price jitter, stock, delivery estimate) is drawn from the random source.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from .models import PriceRange, SellerOffer, SellerProfile
from .randomness import RandomSource, get_rng
from .utils import round_half_up, utc_timestamp

logger = logging.getLogger(__name__)

MIN_OFFERS = 2
MAX_OFFERS = 5
MIN_STOCK = 1
MAX_STOCK = 25
PRICE_VARIATION = 0.4  # total width, i.e. +/-20%
DEFAULT_BASE_PRICE = 100
DEFAULT_WARRANTY = "3 ay garanti"
PAYMENT_METHODS = ("Nakit", "Kredi Kartı", "Havale")

BASE_PRICE_RULES: tuple[tuple[str, int], ...] = (
    ("motor", 800),
    ("fren", 300),
    ("elektrik", 200),
    ("suspansiyon", 400),
    ("klima", 250),
    ("govde", 600),
    ("ic-aksam", 150),
)

WARRANTY_RULES: tuple[tuple[str, str], ...] = (
    ("motor", "2 yıl garanti"),
    ("fren", "1 yıl garanti"),
    ("elektrik", "6 ay garanti"),
    ("suspansiyon", "1 yıl garanti"),
    ("klima", "1 yıl garanti"),
    ("govde", "6 ay garanti"),
)

DELIVERY_TIME_WEIGHTS: tuple[tuple[str, float], ...] = (
    ("1-2 gün", 0.30),
    ("2-3 gün", 0.30),
    ("3-5 gün", 0.25),
    ("1 hafta", 0.10),
    ("Aynı gün", 0.05),
)


def base_price_for(part_id: str) -> int:
    for marker, price in BASE_PRICE_RULES:
        if marker in part_id:
            return price
    return DEFAULT_BASE_PRICE


def warranty_for(part_id: str) -> str:
    for marker, label in WARRANTY_RULES:
        if marker in part_id:
            return label
    return DEFAULT_WARRANTY


def draw_delivery_time(rng: RandomSource | None = None) -> str:
    """Sample a delivery label by walking the cumulative weights."""
    draw = get_rng(rng).random()
    cumulative = 0.0
    for label, weight in DELIVERY_TIME_WEIGHTS:
        cumulative += weight
        if draw <= cumulative:
            return label
    # Rounding can leave the final cumulative sum just under the draw.
    return DELIVERY_TIME_WEIGHTS[0][0]


def synthesize_offers(
    part_id: str,
    seller_pool: Sequence[SellerProfile],
    rng: RandomSource | None = None,
) -> list[SellerOffer]:
    """Pick 2-5 random sellers from the pool and invent a price and stock for each."""
    if not seller_pool:
        return []
    source = get_rng(rng)
    wanted = source.randint(MIN_OFFERS, MAX_OFFERS)
    shuffled = list(seller_pool)
    source.shuffle(shuffled)

    base_price = base_price_for(part_id)
    offers: list[SellerOffer] = []
    for seller in shuffled[: min(wanted, len(shuffled))]:
        variation = (source.random() - 0.5) * PRICE_VARIATION
        offers.append(
            SellerOffer(
                name=seller.name,
                location=seller.location,
                price=round_half_up(base_price * (1 + variation)),
                stock=source.randint(MIN_STOCK, MAX_STOCK),
                rating=seller.rating,
                phone=seller.phone,
                email=seller.email,
            )
        )
    logger.debug("synthesized %s offers for part=%s base_price=%s", len(offers), part_id, base_price)
    return sorted(offers, key=lambda offer: offer.price)


def enrich_and_rank(
    offers: Sequence[SellerOffer],
    part_id: str,
    rng: RandomSource | None = None,
    now: Optional[datetime] = None,
) -> list[SellerOffer]:
    """Attach delivery, warranty and payment details, cheapest first."""
    source = get_rng(rng)
    warranty = warranty_for(part_id)
    timestamp = utc_timestamp(now)
    enriched = [
        offer.model_copy(
            update={
                "deliveryTime": draw_delivery_time(source),
                "warranty": warranty,
                "paymentMethods": list(PAYMENT_METHODS),
                "lastUpdated": timestamp,
            }
        )
        for offer in offers
    ]
    return sorted(enriched, key=lambda offer: offer.price)


def price_range(offers: Sequence[SellerOffer]) -> PriceRange | None:
    if not offers:
        return None
    prices = [offer.price for offer in offers]
    return PriceRange(
        min=min(prices),
        max=max(prices),
        average=round_half_up(sum(prices) / len(prices)),
    )
