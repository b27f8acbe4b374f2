# backend/vcnty/importing/validation.py
from pydantic import BaseModel, ConfigDict, Field

from vcnty.config import settings
from .utils import (
    normalize_status, parse_price, parse_stock, parse_tags, sanitize,
)


class ValidatedItem(BaseModel):
    """One import row in the shape POST /items/batch expects."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    description: str = ""
    short_description: str = Field("", alias="shortDescription")
    sku: str = ""
    price: float = 0.0
    currency: str = "EUR"
    quantity: int = 0
    category: str
    tags: list[str] = Field(default_factory=list)
    status: str = "AVAILABLE"
    images: list[str] = Field(default_factory=list)
    latitude: float | None = None
    longitude: float | None = None

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)


def validate_row(row: dict, index: int, location: dict | None = None):
    """
    Validate + sanitize one normalized row.

    Returns (item, errors). The item is always built with safe defaults so
    callers can inspect it; the row is only importable when errors is empty.
    """
    errors: list[str] = []
    location = location or {}

    price, price_ok = parse_price(row.get("price"))
    if not price_ok:
        errors.append(f"Row {index}: Invalid price format.")

    stock = parse_stock(row.get("stock_qty"))

    image_url = sanitize(row.get("main_image_url"))
    if image_url and not image_url.lower().startswith("https://"):
        errors.append(f"Row {index}: Image URL must be secure (https://).")

    title = sanitize(row.get("title"))
    if not title:
        errors.append(f"Row {index}: Missing Title.")

    category = sanitize(row.get("category"))
    if not category:
        errors.append(f"Row {index}: Missing Category.")

    item = ValidatedItem(
        title=title,
        description=sanitize(row.get("full_description")),
        short_description=sanitize(row.get("short_desc")),
        sku=sanitize(row.get("sku")),
        price=price,
        currency=sanitize(row.get("currency"), default=settings.DEFAULT_CURRENCY),
        quantity=stock,
        category=category,
        tags=parse_tags(row.get("tags")),
        status=normalize_status(row.get("status")),
        images=[image_url] if image_url else [],
        latitude=location.get("latitude"),
        longitude=location.get("longitude"),
    )
    return item, errors
