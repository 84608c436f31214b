from pydantic import BaseModel, ConfigDict
from typing import Optional


class RegionSchema(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str = ""
    name: Optional[str] = None


class PostalCodeSchema(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: Optional[str] = None


class ParsedResult(BaseModel):
    """Snapshot of everything decoded from one NIK."""

    model_config = ConfigDict(frozen=True)

    valid: bool = False
    nik: str = ""
    birth_date: Optional[str] = None
    birth_city: Optional[str] = None
    unique_code: str = ""
    gender: Optional[str] = None
    province: RegionSchema = RegionSchema()
    city: RegionSchema = RegionSchema()
    district: RegionSchema = RegionSchema()
    postal_code: PostalCodeSchema = PostalCodeSchema()
