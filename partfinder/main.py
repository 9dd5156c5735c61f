"""FastAPI application exposing the spare part finder mock API."""
from __future__ import annotations

import logging
import traceback
from typing import Any, List, Optional

import uvicorn
from fastapi import FastAPI, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import HTTPException, RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .classifier import classify, confidence_level, recommendations_for
from .config import settings
from .data_files import get_mock_data
from .models import InterpretRequest, PartRequestCreate, Vehicle
from .offers import enrich_and_rank, price_range, synthesize_offers
from .part_requests import get_request_store, notify_sellers
from .utils import (
    fold_text,
    is_valid_email,
    is_valid_vin,
    parse_float_prefix,
    parse_int_prefix,
    simulate_delay,
    utc_timestamp,
)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_LEVEL = logging.getLevelName(settings.log_level.upper())

# ``force=True`` replaces uvicorn's default handlers so every logger shares one format.
logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT, force=True)
for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
    logging.getLogger(name).setLevel(LOG_LEVEL)

logger = logging.getLogger(__name__)
logger.info("Logging configured at %s", settings.log_level.upper())

MIN_DESCRIPTION_LENGTH = 5
MIN_SEARCH_LENGTH = 2
INVALID_VIN_MESSAGE = "VIN must be 17 characters long and contain only valid characters"


class ApiError(HTTPException):
    """HTTP error rendered as the ``{"error", "message", ...}`` envelope."""

    def __init__(self, status_code: int, error: str, message: str, **extra: Any) -> None:
        super().__init__(status_code=status_code, detail=message)
        self.error = error
        self.message = message
        self.extra = extra

    def payload(self) -> dict:
        return {"error": self.error, "message": self.message, **self.extra}


def _ok(data: Any, **extra: Any) -> dict:
    return {"success": True, "data": data, **extra, "timestamp": utc_timestamp()}


def _require_valid_vin(vin: Optional[str]) -> None:
    if not is_valid_vin(vin):
        raise ApiError(400, "Invalid VIN format", INVALID_VIN_MESSAGE)


def _require_vehicle(vin: str, **extra: Any) -> Vehicle:
    vehicle = get_mock_data().find_vehicle(vin)
    if vehicle is None:
        raise ApiError(404, "Vehicle not found", f"No vehicle found with VIN: {vin}", **extra)
    return vehicle


app = FastAPI(title=settings.app_name, version=settings.app_version)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    client = request.client.host if request.client else "-"
    logger.info("%s %s - %s", request.method, request.url.path, client)
    return await call_next(request)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if isinstance(exc, ApiError):
        return JSONResponse(status_code=exc.status_code, content=exc.payload())
    if exc.status_code in (404, 405):
        # An unsupported method on a known path counts as an unknown endpoint.
        target = request.url.path + (f"?{request.url.query}" if request.url.query else "")
        if request.url.path.startswith("/api"):
            content = {
                "error": "Endpoint not found",
                "message": f"The endpoint {request.method} {target} does not exist",
                "availableEndpoints": "/api",
            }
        else:
            content = {
                "error": "Route not found",
                "message": f"The route {target} does not exist",
                "suggestion": "Check the API documentation at /api",
            }
    else:
        content = {"error": "HTTP error", "message": str(exc.detail)}
    content["timestamp"] = utc_timestamp()
    status_code = 404 if exc.status_code == 405 else exc.status_code
    return JSONResponse(status_code=status_code, content=content)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if any(error.get("type") == "json_invalid" for error in errors):
        content = {"error": "Invalid JSON", "message": "Request body contains invalid JSON"}
    else:
        content = {
            "error": "Invalid request",
            "message": "Request validation failed",
            "details": jsonable_encoder(errors),
        }
    content["timestamp"] = utc_timestamp()
    return JSONResponse(status_code=400, content=content)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    content = {
        "error": type(exc).__name__,
        "message": str(exc) or "An unexpected error occurred",
        "timestamp": utc_timestamp(),
    }
    if settings.environment == "development":
        content["stack"] = "".join(traceback.format_exception(exc))
    return JSONResponse(status_code=500, content=content)


@app.on_event("startup")
async def startup_event() -> None:
    data = get_mock_data()
    logger.info("%s %s started (%s)", settings.app_name, settings.app_version, settings.environment)
    logger.info("Sample VIN for testing: %s", data.vehicles[0].vin if data.vehicles else "-")
    logger.info("Part categories: %s", ", ".join(data.parts))


@app.on_event("shutdown")
async def shutdown_event() -> None:
    get_request_store().close()


@app.get("/")
async def root() -> dict:
    return {
        "message": f"Welcome to {settings.app_name}",
        "documentation": "/api",
        "health": "/health",
        "version": settings.app_version,
        "timestamp": utc_timestamp(),
    }


@app.get("/health")
async def health() -> dict:
    return {
        "status": "OK",
        "message": f"{settings.app_name} is running",
        "timestamp": utc_timestamp(),
        "version": settings.app_version,
        "environment": settings.environment,
    }


@app.get("/api")
async def api_documentation() -> dict:
    sample_vin = "WDB2020201F685790"
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "Mock API for VIN-based vehicle lookup, spare part suggestion, and B2B inventory responses",
        "endpoints": {
            "vehicles": {
                "GET /api/vehicle/:vin": "Get vehicle details by VIN",
                "GET /api/vehicle": "Get all vehicles (testing)",
                "GET /api/vehicle/search": "Search vehicles by make, model, or year",
            },
            "parts": {
                "GET /api/parts/:vin/:category": "Get part suggestions by VIN and category",
                "POST /api/parts/interpret": "Suggest part from free text description",
                "GET /api/parts/:vin/categories": "Get available categories for a vehicle",
                "GET /api/parts/search": "Search parts across all categories",
            },
            "sellers": {
                "GET /api/sellers/:partId": "Get sellers for a specific part ID",
                "POST /api/sellers/request": "Create a pending request for a part",
                "GET /api/sellers/request/:requestId": "Get request status by request ID",
                "GET /api/sellers": "Get all sellers (admin/testing)",
            },
        },
        "sampleRequests": {
            "vehicleLookup": {"url": f"/api/vehicle/{sample_vin}", "method": "GET"},
            "partsByCategory": {"url": f"/api/parts/{sample_vin}/Fren", "method": "GET"},
            "interpretText": {
                "url": "/api/parts/interpret",
                "method": "POST",
                "body": {"vin": sample_vin, "description": "fren tutmuyor arka kısımdan ses geliyor"},
            },
            "getSellers": {"url": "/api/sellers/part-fren-001", "method": "GET"},
            "createRequest": {
                "url": "/api/sellers/request",
                "method": "POST",
                "body": {
                    "vin": sample_vin,
                    "partId": "part-fren-001",
                    "userEmail": "user@example.com",
                    "description": "Acil ihtiyaç",
                    "urgency": "high",
                },
            },
        },
        "timestamp": utc_timestamp(),
    }


# Vehicles. ``/search`` is registered before ``/{vin}`` so it is not read as a VIN.


@app.get("/api/vehicle")
async def list_vehicles() -> dict:
    await simulate_delay(100, 300)
    vehicles = get_mock_data().vehicles
    return _ok([vehicle.model_dump(exclude_none=True) for vehicle in vehicles], count=len(vehicles))


@app.get("/api/vehicle/search")
async def search_vehicles(
    make: Optional[str] = None,
    model: Optional[str] = None,
    year: Optional[str] = None,
) -> dict:
    await simulate_delay(150, 400)
    vehicles: List[Vehicle] = list(get_mock_data().vehicles)
    if make:
        vehicles = [v for v in vehicles if fold_text(make) in fold_text(v.make)]
    if model:
        vehicles = [v for v in vehicles if fold_text(model) in fold_text(v.model)]
    year_number = parse_int_prefix(year)
    if year and year_number is None:
        logger.debug("Ignoring non-numeric year filter %r", year)
    elif year_number is not None:
        vehicles = [v for v in vehicles if v.year == year_number]
    return _ok(
        [vehicle.model_dump(exclude_none=True) for vehicle in vehicles],
        count=len(vehicles),
        filters={"make": make, "model": model, "year": year},
    )


@app.get("/api/vehicle/{vin}")
async def get_vehicle(vin: str) -> dict:
    await simulate_delay(200, 800)
    _require_valid_vin(vin)
    vehicle = _require_vehicle(vin, suggestion="Please check the VIN and try again")
    return _ok(vehicle.model_dump(exclude_none=True))


# Parts


@app.get("/api/parts/search")
async def search_parts(query: Optional[str] = None, category: Optional[str] = None) -> dict:
    await simulate_delay(200, 500)
    if not query or len(query.strip()) < MIN_SEARCH_LENGTH:
        raise ApiError(400, "Invalid search query", "Search query must be at least 2 characters long")

    parts = get_mock_data().parts
    term = fold_text(query.strip())
    results = []
    for cat in [category] if category else list(parts):
        for part in parts.get(cat, []):
            if term in fold_text(part.name) or term in fold_text(part.id):
                results.append({**part.model_dump(exclude_none=True), "category": cat})
    logger.info("parts search q=%r category=%s hits=%s", query, category or "all", len(results))
    return _ok({"query": query, "category": category or "all", "results": results, "count": len(results)})


@app.post("/api/parts/interpret")
async def interpret_part(payload: Optional[InterpretRequest] = None) -> dict:
    await simulate_delay(300, 1000)
    payload = payload or InterpretRequest()
    if not payload.vin or not payload.description:
        raise ApiError(400, "Missing required fields", "Both VIN and description are required")
    _require_valid_vin(payload.vin)
    if len(payload.description.strip()) < MIN_DESCRIPTION_LENGTH:
        raise ApiError(
            400,
            "Description too short",
            "Please provide a more detailed description (at least 5 characters)",
        )
    vehicle = _require_vehicle(payload.vin)

    suggestion = classify(payload.description)
    logger.info(
        "interpret vin=%s category=%s part=%s confidence=%.2f",
        vehicle.vin,
        suggestion.category,
        suggestion.id,
        suggestion.confidence,
    )
    return _ok(
        {
            "vehicle": vehicle.summary(),
            "suggestedPart": {
                "name": suggestion.name,
                "id": suggestion.id,
                "confidence": round(suggestion.confidence, 2),
            },
            "analysis": {
                "originalDescription": payload.description,
                "processedText": payload.description.lower(),
                "detectedKeywords": suggestion.matchedKeywords,
                "category": suggestion.category,
                "confidenceLevel": confidence_level(suggestion.confidence),
            },
            "recommendations": recommendations_for(suggestion),
        }
    )


@app.get("/api/parts/{vin}/categories")
async def vehicle_categories(vin: str) -> dict:
    await simulate_delay(100, 300)
    _require_valid_vin(vin)
    vehicle = _require_vehicle(vin)
    parts = get_mock_data().parts
    categories = [
        {"name": name, "partCount": len(parts.get(name, [])), "available": name in parts}
        for name in vehicle.categories
    ]
    return _ok({"vehicle": vehicle.summary(), "categories": categories, "totalCategories": len(categories)})


@app.get("/api/parts/{vin}/{category}")
async def parts_by_category(vin: str, category: str) -> dict:
    await simulate_delay(150, 600)
    _require_valid_vin(vin)
    vehicle = _require_vehicle(vin)
    if category not in vehicle.categories:
        raise ApiError(
            404,
            "Category not available",
            f"Category '{category}' is not available for this vehicle",
            availableCategories=vehicle.categories,
        )
    parts = get_mock_data().parts
    category_parts = parts.get(category)
    if category_parts is None:
        raise ApiError(
            404,
            "Category not found",
            f"No parts found for category: {category}",
            availableCategories=list(parts),
        )
    return _ok(
        {
            "vehicle": vehicle.summary(),
            "category": category,
            "parts": [part.model_dump(exclude_none=True) for part in category_parts],
            "count": len(category_parts),
        }
    )


# Sellers


@app.get("/api/sellers")
async def list_sellers(
    location: Optional[str] = None,
    specialty: Optional[str] = None,
    minRating: Optional[str] = Query(None),
) -> dict:
    await simulate_delay(150, 400)
    sellers = list(get_mock_data().seller_pool)
    if location:
        sellers = [s for s in sellers if fold_text(location) in fold_text(s.location)]
    if specialty:
        needle = fold_text(specialty)
        sellers = [s for s in sellers if any(needle in fold_text(spec) for spec in s.specialties)]
    threshold = parse_float_prefix(minRating)
    if minRating and threshold is None:
        logger.debug("Ignoring non-numeric minRating filter %r", minRating)
    elif threshold is not None:
        sellers = [s for s in sellers if s.rating >= threshold]
    sellers.sort(key=lambda seller: seller.rating, reverse=True)
    return _ok(
        {
            "sellers": [seller.model_dump(exclude_none=True) for seller in sellers],
            "count": len(sellers),
            "filters": {"location": location, "specialty": specialty, "minRating": minRating},
        }
    )


@app.post("/api/sellers/request", status_code=201)
async def create_part_request(payload: Optional[PartRequestCreate] = None) -> dict:
    await simulate_delay(300, 800)
    payload = payload or PartRequestCreate()
    if not payload.vin or not payload.partId or not payload.userEmail:
        raise ApiError(400, "Missing required fields", "VIN, partId, and userEmail are required")
    if not is_valid_email(payload.userEmail):
        raise ApiError(400, "Invalid email format", "Please provide a valid email address")

    request = get_request_store().create(
        vin=payload.vin,
        part_id=payload.partId,
        user_email=payload.userEmail,
        description=payload.description,
        urgency=payload.urgency,
    )
    await simulate_delay(100, 300)
    notified = notify_sellers(request)
    return _ok(
        {
            "requestId": request.requestId,
            "status": request.status,
            "estimatedResponse": request.estimatedResponse,
            "message": "Talebiniz başarıyla oluşturuldu. Satıcılar en kısa sürede sizinle iletişime geçecek.",
            "notificationsSent": notified,
        }
    )


@app.get("/api/sellers/request/{request_id}")
async def part_request_status(request_id: str) -> dict:
    await simulate_delay(100, 300)
    request = get_request_store().get(request_id)
    if request is None:
        raise ApiError(404, "Request not found", f"No request found with ID: {request_id}")
    return _ok(request.model_dump(exclude_none=True))


@app.get("/api/sellers/{part_id}")
async def sellers_for_part(part_id: str) -> dict:
    await simulate_delay(200, 700)
    if not part_id.strip():
        raise ApiError(400, "Missing part ID", "Part ID is required")

    data = get_mock_data()
    offers = data.predefined_offers.get(part_id)
    if offers is None and data.seller_pool:
        offers = synthesize_offers(part_id, data.seller_pool)
    if not offers:
        raise ApiError(
            404,
            "No sellers found",
            f"No sellers available for part ID: {part_id}",
            suggestion="Try creating a request for this part",
        )

    ranked = enrich_and_rank(offers, part_id)
    prices = price_range(ranked)
    logger.info("sellers part=%s offers=%s min=%s max=%s", part_id, len(ranked), prices.min, prices.max)
    return _ok(
        {
            "partId": part_id,
            "sellers": [offer.model_dump(exclude_none=True) for offer in ranked],
            "count": len(ranked),
            "priceRange": prices.model_dump(),
        }
    )


def run() -> None:
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
