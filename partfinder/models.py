"""Pydantic models for request/response payloads."""
from __future__ import annotations

from pydantic import BaseModel, Field


class Vehicle(BaseModel):
    vin: str
    make: str
    model: str
    year: int
    engine: str | None = None
    fuelType: str | None = None
    categories: list[str] = Field(default_factory=list)

    def summary(self) -> dict:
        return {"vin": self.vin, "make": self.make, "model": self.model, "year": self.year}


class Part(BaseModel):
    id: str
    name: str
    brand: str | None = None
    oemNumber: str | None = None


class SellerProfile(BaseModel):
    name: str
    location: str
    rating: float
    specialties: list[str] = Field(default_factory=list)
    phone: str | None = None
    email: str | None = None


class SellerOffer(BaseModel):
    name: str
    location: str
    price: int
    stock: int = Field(..., ge=1)
    rating: float
    phone: str | None = None
    email: str | None = None
    deliveryTime: str | None = None
    warranty: str | None = None
    paymentMethods: list[str] | None = None
    lastUpdated: str | None = None


class PriceRange(BaseModel):
    min: int
    max: int
    average: int


class SuggestedPart(BaseModel):
    id: str
    name: str
    category: str
    confidence: float
    matchedKeywords: int = 0


class InterpretRequest(BaseModel):
    vin: str | None = None
    description: str | None = None


class PartRequestCreate(BaseModel):
    vin: str | None = None
    partId: str | None = None
    userEmail: str | None = None
    description: str | None = None
    urgency: str | None = None


class PartRequest(BaseModel):
    requestId: str
    vin: str
    partId: str
    userEmail: str
    description: str = ""
    urgency: str = "normal"
    status: str = "pending"
    createdAt: str
    estimatedResponse: str
    contactAttempts: int = 0
    offerCount: int | None = None
