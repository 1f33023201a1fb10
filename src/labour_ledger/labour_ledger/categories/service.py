from __future__ import annotations

from typing import Sequence

from ..common.validators import parse_id, require_id, require_non_empty
from ..core.exceptions import ConstraintViolationError, NotFoundError, ValidationError
from ..core.logging_config import get_logger
from .model import Category
from .repository import CategoryRepository

logger = get_logger("categories")


class CategoryService:
    """Use case: maintain work categories and their subcategories."""

    def __init__(self, categories: CategoryRepository):
        self._categories = categories

    def list_with_subcategories(self) -> Sequence[Category]:
        subs = self._categories.list_subcategories()
        by_category: dict[int, list] = {}
        for s in subs:
            by_category.setdefault(s.category_id, []).append(s)
        return [
            Category(
                category_id=c.category_id,
                name=c.name,
                created_at=c.created_at,
                subcategories=tuple(by_category.get(c.category_id, [])),
            )
            for c in self._categories.list_categories()
        ]

    def create_category(self, *, name: str) -> int:
        name = require_non_empty(name, "name", label="Category name")
        if self._categories.get_category_by_name(name):
            raise ConstraintViolationError("A category with this name already exists")

        category_id = self._categories.create_category(name=name)
        logger.info("category %s created (%s)", category_id, name)
        return category_id

    def create_subcategory(self, *, category_id, name: str) -> int:
        cid = require_id(category_id, "category_id", label="Category")
        name = require_non_empty(name, "name", label="Subcategory name")

        if not self._categories.get_category(cid):
            raise ValidationError("Category not found", {"category_id": "Category not found"})
        if self._categories.get_subcategory_by_name(cid, name):
            raise ConstraintViolationError("This subcategory already exists in the category")

        subcategory_id = self._categories.create_subcategory(category_id=cid, name=name)
        logger.info("subcategory %s created under category %s (%s)", subcategory_id, cid, name)
        return subcategory_id

    def delete_category(self, category_id) -> None:
        """Cascades to subcategories; refused by the store while attendance still references it."""
        cid = parse_id(category_id)
        if not cid or not self._categories.get_category(cid):
            raise NotFoundError("Category not found")
        if not self._categories.delete_category(cid):
            raise NotFoundError("Category not found")
        logger.info("category %s deleted with its subcategories", cid)
