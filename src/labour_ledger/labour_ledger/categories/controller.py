from __future__ import annotations

from flask import Flask

from ..common.http import api_view, fail, is_confirmed, json_body, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/categories", methods=["GET"], endpoint="list_categories")
    @api_view
    def list_categories():
        return ok(container.category_service.list_with_subcategories())

    @app.route("/api/categories", methods=["POST"], endpoint="create_category")
    @api_view
    def create_category():
        payload = json_body()
        category_id = container.category_service.create_category(name=payload.get("name"))
        return ok({"category_id": category_id}, status=201, message="Category added successfully")

    @app.route("/api/categories/<int:category_id>", methods=["DELETE"], endpoint="delete_category")
    @api_view
    def delete_category(category_id: int):
        if not is_confirmed():
            return fail(
                "Deleting a category also deletes all its subcategories.",
                status=409,
                requires_confirmation=True,
            )
        container.category_service.delete_category(category_id)
        return ok(message="Category deleted successfully")

    @app.route("/api/categories/<int:category_id>/subcategories", methods=["POST"], endpoint="create_subcategory")
    @api_view
    def create_subcategory(category_id: int):
        payload = json_body()
        subcategory_id = container.category_service.create_subcategory(
            category_id=category_id,
            name=payload.get("name"),
        )
        return ok({"subcategory_id": subcategory_id}, status=201, message="Subcategory added successfully")
