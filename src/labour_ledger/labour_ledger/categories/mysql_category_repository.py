from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Category, Subcategory
from .repository import CategoryRepository


def _to_category(r: dict) -> Category:
    return Category(category_id=int(r["category_id"]), name=r["name"], created_at=r.get("created_at"))


def _to_subcategory(r: dict) -> Subcategory:
    return Subcategory(
        subcategory_id=int(r["subcategory_id"]),
        category_id=int(r["category_id"]),
        name=r["name"],
        created_at=r.get("created_at"),
    )


class MySQLCategoryRepository(CategoryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_categories(self) -> Sequence[Category]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT category_id, name, created_at FROM categories ORDER BY name")
            return [_to_category(r) for r in fetchall(cur)]

    def get_category(self, category_id: int) -> Optional[Category]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT category_id, name, created_at FROM categories WHERE category_id=%s", (int(category_id),))
            r = fetchone(cur)
            return _to_category(r) if r else None

    def get_category_by_name(self, name: str) -> Optional[Category]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT category_id, name, created_at FROM categories WHERE name=%s", (name,))
            r = fetchone(cur)
            return _to_category(r) if r else None

    def create_category(self, *, name: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO categories(name) VALUES(%s)", (name,))
            return int(cur.lastrowid)

    def delete_category(self, category_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM categories WHERE category_id=%s", (int(category_id),))
            return cur.rowcount > 0

    def list_subcategories(self, category_id: Optional[int] = None) -> Sequence[Subcategory]:
        with db_cursor(self._conn_factory) as (_, cur):
            if category_id is None:
                cur.execute("SELECT subcategory_id, category_id, name, created_at FROM subcategories ORDER BY name")
            else:
                cur.execute(
                    """
                    SELECT subcategory_id, category_id, name, created_at
                    FROM subcategories
                    WHERE category_id=%s
                    ORDER BY name
                    """,
                    (int(category_id),),
                )
            return [_to_subcategory(r) for r in fetchall(cur)]

    def get_subcategory(self, subcategory_id: int) -> Optional[Subcategory]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT subcategory_id, category_id, name, created_at FROM subcategories WHERE subcategory_id=%s",
                (int(subcategory_id),),
            )
            r = fetchone(cur)
            return _to_subcategory(r) if r else None

    def get_subcategory_by_name(self, category_id: int, name: str) -> Optional[Subcategory]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT subcategory_id, category_id, name, created_at
                FROM subcategories
                WHERE category_id=%s AND name=%s
                """,
                (int(category_id), name),
            )
            r = fetchone(cur)
            return _to_subcategory(r) if r else None

    def create_subcategory(self, *, category_id: int, name: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO subcategories(category_id, name) VALUES(%s,%s)", (int(category_id), name))
            return int(cur.lastrowid)
