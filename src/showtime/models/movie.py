"""Typed movie record produced by the pipeline."""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Movie(BaseModel):
    """One catalog movie, ready for display."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., min_length=1)
    price: Decimal = Field(..., ge=0, description="Price in feed currency; 0 means free")
    image_url: str = ""
    purchase_url: Optional[str] = None

    @property
    def is_free(self) -> bool:
        return self.price == 0
