from pydantic import BaseModel, Field, confloat, model_validator
from typing import List, Optional

class Coordinates(BaseModel):
    lat: confloat(ge=-90, le=90)
    long: confloat(ge=-180, le=180)

class ProximityQuery(BaseModel):
    address: Optional[str] = Field(None, description="Free-text address or postal code to geocode.")
    coordinates: Optional[Coordinates] = Field(None, description="Raw coordinates; when present geocoding is skipped.")
    region: Optional[str] = Field(None, description="Two-letter region code used to bias geocoding, e.g. 'ca' or 'us'.")

    @model_validator(mode="after")
    def check_origin_source(self):
        if self.coordinates is None and not (self.address and self.address.strip()):
            raise ValueError("Either address or coordinates must be provided")
        return self

    class Config:
        json_schema_extra = {
            "example": {
                "address": "K1A 0B1",
                "region": "ca"
            }
        }

class AddressOut(BaseModel):
    street_number: Optional[str] = None
    street_name: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = None
    postal: Optional[str] = None

class MembershipContactOut(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None

class ClubOut(BaseModel):
    id: int
    name: str
    lat: float
    lng: float
    distance_m: float
    image_url: Optional[str] = None
    website: Optional[str] = None
    membership_contact: Optional[MembershipContactOut] = None
    address: Optional[AddressOut] = None

class ClosestResponse(BaseModel):
    count: int
    results: List[ClubOut]
