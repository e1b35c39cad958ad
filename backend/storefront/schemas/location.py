"""Schemas for /admin/stock-locations."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from storefront.schemas.common import ListEnvelope, ORMModel, RequestModel, metadata_field


class StockLocationAddressResponse(ORMModel):
    id: str
    address_1: str
    address_2: Optional[str] = None
    company: Optional[str] = None
    city: Optional[str] = None
    country_code: str
    phone: Optional[str] = None
    province: Optional[str] = None
    postal_code: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = metadata_field()


class StockLocationResponse(ORMModel):
    id: str
    name: str
    address_id: Optional[str] = None
    address: Optional[StockLocationAddressResponse] = None
    metadata: Optional[Dict[str, Any]] = metadata_field()
    created_at: datetime
    updated_at: datetime


class StockLocationEnvelope(BaseModel):
    stock_location: StockLocationResponse


class StockLocationListResponse(ListEnvelope):
    stock_locations: List[StockLocationResponse]


class StockLocationAddressInput(RequestModel):
    address_1: str = Field(min_length=1, description="Stock location address")
    address_2: Optional[str] = None
    company: Optional[str] = None
    city: Optional[str] = None
    country_code: str = Field(min_length=2, max_length=2, description="ISO 3166-1 alpha-2 code")
    phone: Optional[str] = None
    province: Optional[str] = None
    postal_code: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None


class AdminPostStockLocationsReq(RequestModel):
    name: str = Field(min_length=1)
    address: Optional[StockLocationAddressInput] = None
    metadata: Optional[Dict[str, Any]] = None


class AdminPostStockLocationsLocationReq(RequestModel):
    name: Optional[str] = Field(default=None, min_length=1)
    address: Optional[StockLocationAddressInput] = Field(
        default=None,
        description="Replaces the location's address fields",
    )
    metadata: Optional[Dict[str, Any]] = None
