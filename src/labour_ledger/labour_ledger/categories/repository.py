from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Category, Subcategory


class CategoryRepository(Protocol):
    def list_categories(self) -> Sequence[Category]:
        raise NotImplementedError

    def get_category(self, category_id: int) -> Optional[Category]:
        raise NotImplementedError

    def get_category_by_name(self, name: str) -> Optional[Category]:
        raise NotImplementedError

    def create_category(self, *, name: str) -> int:
        raise NotImplementedError

    def delete_category(self, category_id: int) -> bool:
        """Delete a category; its subcategories go with it."""

        raise NotImplementedError

    def list_subcategories(self, category_id: Optional[int] = None) -> Sequence[Subcategory]:
        raise NotImplementedError

    def get_subcategory(self, subcategory_id: int) -> Optional[Subcategory]:
        raise NotImplementedError

    def get_subcategory_by_name(self, category_id: int, name: str) -> Optional[Subcategory]:
        raise NotImplementedError

    def create_subcategory(self, *, category_id: int, name: str) -> int:
        raise NotImplementedError
