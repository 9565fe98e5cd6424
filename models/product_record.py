from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Optional, Tuple

CATEGORIES: Tuple[str, ...] = (
    "Jewelry",
    "Pottery",
    "Textiles",
    "Woodwork",
    "Metalwork",
    "Glass Art",
    "Leather Goods",
    "Paintings",
    "Sculptures",
    "Home Decor",
)


def parse_price(raw: Optional[str]) -> Optional[float]:
    """Parse a price typed into a text field.

    Empty, non-numeric and non-finite input all mean "no price" and return None.
    """
    text = (raw or "").strip()
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


@dataclass
class ProductDraft:
    """Unsaved form input for the description workflow."""

    name: str = ""
    category: str = ""
    materials: str = ""
    price: str = ""

    def parsed_price(self) -> Optional[float]:
        return parse_price(self.price)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ProductRecord:
    """In-memory representation of a row in the PRODUCT table.

    Attributes:
        id: Primary key (None for new records).
        name: Product name.
        category: One of `CATEGORIES`.
        materials: Free-text materials, empty when not given.
        price: Numeric price, or None for "contact for pricing".
        generated_description: Marketing copy returned by the model.
        created_at: ISO-8601 time the row was inserted.
    """

    id: Optional[int]
    name: str
    category: str
    materials: str
    price: Optional[float]
    generated_description: str
    created_at: Optional[str] = None
