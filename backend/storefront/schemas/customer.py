"""Schemas for storefront customers and customer authentication."""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from storefront.schemas.common import ORMModel, RequestModel, metadata_field


class CustomerResponse(ORMModel):
    id: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    has_account: bool
    metadata: Optional[Dict[str, Any]] = metadata_field()
    created_at: datetime
    updated_at: datetime


class CustomerEnvelope(BaseModel):
    customer: CustomerResponse


class StorePostCustomersReq(RequestModel):
    email: str = Field(min_length=3)
    password: str = Field(min_length=1)
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    phone: Optional[str] = None


class StorePostCustomersCustomerReq(RequestModel):
    first_name: Optional[str] = Field(default=None, min_length=1)
    last_name: Optional[str] = Field(default=None, min_length=1)
    phone: Optional[str] = None
    password: Optional[str] = Field(default=None, min_length=1)
    metadata: Optional[Dict[str, Any]] = None


class StorePostAuthReq(RequestModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class StoreGetAuthEmailRes(BaseModel):
    exists: bool = Field(description="Whether a registered customer uses this email")
