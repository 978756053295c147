"""Product catalog schema."""

from pydantic import BaseModel, Field


class Product(BaseModel):
    """A product returned by the catalog endpoint."""

    id: int = Field(..., ge=1, description="Product identifier")
    name: str = Field(..., description="Product name")
    price: float = Field(..., ge=0.0, description="Unit price, rounded to two decimals")
