# directory/schemas.py
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from datetime import datetime

class ListingBase(BaseModel):
    id: str = Field(..., max_length=255)
    name: str
    city: str
    region: Optional[str] = None
    street: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    rating: Optional[float] = Field(None, ge=0, le=5)
    review_count: Optional[int] = Field(None, ge=0)
    images: List[str] = Field(default_factory=list)

class ListingCreate(ListingBase):
    slug: Optional[str] = None
    is_active: bool = True

class ListingOut(ListingBase):
    """Read-only snapshot of a stored listing."""
    model_config = ConfigDict(from_attributes=True, frozen=True)

    slug: str
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class ListingsResponse(BaseModel):
    listings: List[ListingOut]

class CountResponse(BaseModel):
    count: int

class CityOut(BaseModel):
    name: str
    count: int
    slug: str

class RegionOut(BaseModel):
    name: str
    count: int
    slug: str

class RegionWithCitiesOut(RegionOut):
    cities: List[CityOut]

class ConflictOut(BaseModel):
    slug: str
    names: List[str]
    kind: str = "region"
    region: Optional[str] = None

class RegionsResponse(BaseModel):
    regions: List[RegionOut]
    conflicts: List[ConflictOut] = Field(default_factory=list)

class RegionsWithCitiesResponse(BaseModel):
    regions: List[RegionWithCitiesOut]
    conflicts: List[ConflictOut] = Field(default_factory=list)

class RegionDetailResponse(BaseModel):
    region: str
    slug: str
    listings: List[ListingOut]
    cities: List[CityOut]
    total: int

class CityDetailResponse(BaseModel):
    region: str
    city: str
    slug: str
    listings: List[ListingOut]
    total: int

class CityPageResponse(BaseModel):
    city: str
    region: Optional[str] = None
    slug: str
    listings: List[ListingOut]
    total: int

class StatsResponse(BaseModel):
    total: int
    regions: int
    cities: int
    unknown_region_count: int
    consistent: bool
