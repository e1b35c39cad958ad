"""
Storefront Backend — Region Schemas
=====================================

What:  Request bodies and response shapes for /admin/regions and /store/regions.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from storefront.schemas.common import ListEnvelope, ORMModel, RequestModel, metadata_field


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class CountryResponse(ORMModel):
    id: int
    iso_2: str = Field(description="2 character ISO code of the country in lower case")
    iso_3: str = Field(description="3 character ISO code of the country in lower case")
    num_code: int = Field(description="Numerical ISO code for the country")
    name: str = Field(description="Normalized (upper case) country name")
    display_name: str = Field(description="Country name used for display")
    region_id: Optional[str] = Field(default=None, description="Region the country belongs to")


class RegionResponse(ORMModel):
    """
    What:  Full representation of a region including its countries.
    Who:   Returned by every region endpoint (single or list item).
    """

    id: str = Field(description="Region id (reg_…)")
    name: str
    currency_code: str = Field(description="3 character ISO currency code used in the region")
    tax_rate: float = Field(description="Tax rate in percent (0–100)")
    tax_code: Optional[str] = None
    includes_tax: bool
    gift_cards_taxable: bool
    automatic_taxes: bool
    countries: List[CountryResponse] = Field(default_factory=list)
    metadata: Optional[Dict[str, Any]] = metadata_field()
    created_at: datetime
    updated_at: datetime


class RegionEnvelope(BaseModel):
    region: RegionResponse


class RegionListResponse(ListEnvelope):
    regions: List[RegionResponse]


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class AdminPostRegionsReq(RequestModel):
    """The details of the region to create."""

    name: str = Field(min_length=1, description="The name of the region")
    currency_code: str = Field(
        min_length=3,
        max_length=3,
        description="3 character ISO currency code; must be one of the store currencies",
    )
    tax_rate: float = Field(default=0, description="Tax rate in percent (0–100)")
    tax_code: Optional[str] = None
    includes_tax: bool = False
    gift_cards_taxable: bool = True
    automatic_taxes: bool = True
    countries: List[str] = Field(
        default_factory=list,
        description="2 character ISO codes of the countries in the region",
    )
    metadata: Optional[Dict[str, Any]] = None


class AdminPostRegionsRegionReq(RequestModel):
    """Fields to update; omitted fields are left unchanged."""

    name: Optional[str] = Field(default=None, min_length=1)
    currency_code: Optional[str] = Field(default=None, min_length=3, max_length=3)
    tax_rate: Optional[float] = None
    tax_code: Optional[str] = None
    includes_tax: Optional[bool] = None
    gift_cards_taxable: Optional[bool] = None
    automatic_taxes: Optional[bool] = None
    countries: Optional[List[str]] = Field(
        default=None,
        description="Replaces the region's countries with this list of ISO codes",
    )
    metadata: Optional[Dict[str, Any]] = None


class AdminPostRegionsRegionCountriesReq(RequestModel):
    """The details of the country to add to the region."""

    country_code: str = Field(
        min_length=1,
        description=(
            "The 2 character ISO code for the Country. See "
            "https://en.wikipedia.org/wiki/ISO_3166-1_alpha-2#Officially_assigned_code_elements"
        ),
    )
