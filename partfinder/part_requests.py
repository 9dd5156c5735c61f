"""Pending part requests and their simulated lifecycle.

A request starts as ``pending``. Reading it back advances the status once
enough time has passed: after 30 minutes it becomes ``in_progress`` and a
later read after 60 minutes turns it into ``offers_received``.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from .cache import RequestBackend, create_backend
from .config import settings
from .models import PartRequest
from .randomness import RandomSource, get_rng
from .utils import generate_request_id, parse_timestamp, utc_timestamp

logger = logging.getLogger(__name__)

STATUS_PENDING = "pending"
STATUS_IN_PROGRESS = "in_progress"
STATUS_OFFERS_RECEIVED = "offers_received"

IN_PROGRESS_AFTER_MINUTES = 30
OFFERS_AFTER_MINUTES = 60

RESPONSE_TIMES = {
    "urgent": "2-4 saat",
    "high": "4-8 saat",
    "normal": "8-24 saat",
    "low": "1-3 gün",
}


def estimated_response_time(urgency: Optional[str]) -> str:
    return RESPONSE_TIMES.get(urgency or "normal", RESPONSE_TIMES["normal"])


def notify_sellers(request: PartRequest, rng: RandomSource | None = None) -> int:
    """Pretend to notify sellers about a new request; returns how many were reached."""
    count = get_rng(rng).randint(3, 10)
    logger.info("Notified %s sellers about %s (part=%s)", count, request.requestId, request.partId)
    return count


class RequestStore:
    def __init__(self, backend: RequestBackend | None = None, ttl: int | None = None) -> None:
        self._backend = backend
        self._ttl = ttl if ttl is not None else settings.request_ttl_seconds

    @property
    def backend(self) -> RequestBackend:
        if self._backend is None:
            self._backend = create_backend()
        return self._backend

    def _save(self, request: PartRequest) -> None:
        self.backend.save(request.requestId, request.model_dump(), self._ttl)

    def create(
        self,
        vin: str,
        part_id: str,
        user_email: str,
        description: Optional[str] = None,
        urgency: Optional[str] = None,
        rng: RandomSource | None = None,
        now: Optional[datetime] = None,
    ) -> PartRequest:
        moment = now or datetime.now(timezone.utc)
        request = PartRequest(
            requestId=generate_request_id(rng, int(moment.timestamp() * 1000)),
            vin=vin,
            partId=part_id,
            userEmail=user_email,
            description=description or "",
            urgency=urgency or "normal",
            status=STATUS_PENDING,
            createdAt=utc_timestamp(moment),
            estimatedResponse=estimated_response_time(urgency),
            contactAttempts=0,
        )
        self._save(request)
        logger.info("Created part request %s for part=%s urgency=%s", request.requestId, part_id, request.urgency)
        return request

    def get(
        self,
        request_id: str,
        rng: RandomSource | None = None,
        now: Optional[datetime] = None,
    ) -> PartRequest | None:
        payload = self.backend.load(request_id)
        if payload is None:
            return None
        request = PartRequest(**payload)
        moment = now or datetime.now(timezone.utc)
        elapsed_minutes = (moment - parse_timestamp(request.createdAt)).total_seconds() / 60
        source = get_rng(rng)

        if elapsed_minutes > IN_PROGRESS_AFTER_MINUTES and request.status == STATUS_PENDING:
            request.status = STATUS_IN_PROGRESS
            request.contactAttempts = source.randint(1, 3)
        elif elapsed_minutes > OFFERS_AFTER_MINUTES and request.status == STATUS_IN_PROGRESS:
            request.status = STATUS_OFFERS_RECEIVED
            request.offerCount = source.randint(1, 5)
        else:
            return request

        logger.info("Request %s advanced to %s", request_id, request.status)
        self._save(request)
        return request


    def close(self) -> int:
        """Drop every request this store wrote; called when the service stops."""
        if self._backend is None:
            return 0
        removed = self._backend.clear()
        logger.info("Discarded %s part requests on shutdown", removed)
        return removed


_store: RequestStore | None = None


def get_request_store() -> RequestStore:
    global _store
    if _store is None:
        _store = RequestStore()
    return _store
