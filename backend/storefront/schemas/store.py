"""Schemas for /admin/store and /admin/currencies."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from storefront.schemas.common import ListEnvelope, ORMModel, RequestModel, metadata_field


class CurrencyResponse(ORMModel):
    code: str = Field(description="3 character ISO code in lower case")
    symbol: str
    symbol_native: str
    name: str


class CurrencyListResponse(ListEnvelope):
    currencies: List[CurrencyResponse]


class StoreResponse(ORMModel):
    id: str
    name: str
    default_currency_code: str
    default_currency: CurrencyResponse
    currencies: List[CurrencyResponse] = Field(default_factory=list)
    swap_link_template: Optional[str] = None
    payment_link_template: Optional[str] = None
    invite_link_template: Optional[str] = None
    default_location_id: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = metadata_field()
    created_at: datetime
    updated_at: datetime


class StoreEnvelope(BaseModel):
    store: StoreResponse


class AdminPostStoreReq(RequestModel):
    """Fields to update on the store; omitted fields are left unchanged."""

    name: Optional[str] = Field(default=None, min_length=1)
    swap_link_template: Optional[str] = None
    payment_link_template: Optional[str] = None
    invite_link_template: Optional[str] = None
    default_currency_code: Optional[str] = Field(default=None, min_length=3, max_length=3)
    currencies: Optional[List[str]] = Field(
        default=None,
        description="Replaces the store currencies; must include the default currency",
    )
    default_location_id: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
