from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


# Records supplied by the dashboard's entity provider. Only the fields that feed
# prompt assembly are modelled; everything else is ignored.
class Brand(BaseModel):
    id: str
    name: str
    industry: str | None = None
    logo_url: str | None = None
    colors: dict[str, Any] | None = None
    voice_profile: dict[str, Any] | None = None
    target_audience: dict[str, Any] | None = None


class Product(BaseModel):
    id: str
    name: str
    description: str | None = None
    price: float | None = None
    images: list[str] = Field(default_factory=list)
    processed_images: dict[str, Any] | None = None


class Talent(BaseModel):
    id: str
    name: str | None = None
    notes: str | None = None
    usage_rights: dict[str, Any] | None = None
    reference_images: list[str] = Field(default_factory=list)
