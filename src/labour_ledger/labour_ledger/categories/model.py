from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Subcategory:
    subcategory_id: int
    category_id: int
    name: str
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Category:
    """Domain entity: a kind of work; wages are booked against a category/subcategory."""

    category_id: int
    name: str
    created_at: Optional[datetime] = None
    subcategories: tuple[Subcategory, ...] = field(default=(), compare=False)
