"""Loading of the bundled mock vehicles, parts and sellers."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List

from .config import settings
from .models import Part, SellerOffer, SellerProfile, Vehicle

logger = logging.getLogger(__name__)

GLOBAL_SELLERS_KEY = "global_sellers"


@dataclass
class MockData:
    vehicles: List[Vehicle] = field(default_factory=list)
    parts: Dict[str, List[Part]] = field(default_factory=dict)
    seller_pool: List[SellerProfile] = field(default_factory=list)
    # Hand-written offers for specific part ids; others get synthesized ones.
    predefined_offers: Dict[str, List[SellerOffer]] = field(default_factory=dict)

    def find_vehicle(self, vin: str) -> Vehicle | None:
        return next((vehicle for vehicle in self.vehicles if vehicle.vin == vin), None)


def load_json(path: str | Path) -> Any:
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Required data file missing: {file_path}")
    with file_path.open("r", encoding="utf-8") as fh:
        return json.load(fh)


def load_mock_data(vehicles_path: str | Path, parts_path: str | Path, sellers_path: str | Path) -> MockData:
    vehicles = [Vehicle(**item) for item in load_json(vehicles_path)]
    parts = {
        category: [Part(**item) for item in items] for category, items in load_json(parts_path).items()
    }
    raw_sellers: dict = load_json(sellers_path)
    pool = [SellerProfile(**item) for item in raw_sellers.get(GLOBAL_SELLERS_KEY, [])]
    predefined = {
        part_id: [SellerOffer(**item) for item in items]
        for part_id, items in raw_sellers.items()
        if part_id != GLOBAL_SELLERS_KEY
    }
    logger.info(
        "Loaded %s vehicles, %s part categories, %s sellers, %s predefined offer lists",
        len(vehicles),
        len(parts),
        len(pool),
        len(predefined),
    )
    return MockData(vehicles=vehicles, parts=parts, seller_pool=pool, predefined_offers=predefined)


@lru_cache(maxsize=1)
def get_mock_data() -> MockData:
    return load_mock_data(settings.vehicles_path, settings.parts_path, settings.sellers_path)
