"""JSON plumbing shared by the feature controllers."""

from __future__ import annotations

import dataclasses
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from functools import wraps

from flask import current_app, jsonify, request

from ..core.exceptions import (
    ConfirmationRequiredError,
    ConstraintViolationError,
    DomainError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from ..core.logging_config import get_logger

logger = get_logger("http")


def to_jsonable(value):
    """Dates as ISO strings, money as 2-decimal strings, dataclasses as dicts."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Decimal):
        return f"{value:.2f}"
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value


def ok(data=None, *, status: int = 200, message: str | None = None):
    body = {"success": True, "data": to_jsonable(data)}
    if message:
        body["message"] = message
    return jsonify(body), status


def fail(message: str, *, status: int, **extra):
    body = {"success": False, "message": message}
    body.update({k: to_jsonable(v) for k, v in extra.items()})
    return jsonify(body), status


def json_body() -> dict:
    """Request payload from JSON or form data; never None."""
    payload = request.get_json(silent=True)
    if isinstance(payload, dict):
        return payload
    return request.form.to_dict()


def is_confirmed(payload: dict | None = None) -> bool:
    raw = request.args.get("confirm")
    if raw is None and payload:
        raw = payload.get("confirm", payload.get("confirmed"))
    return str(raw).strip().lower() in {"1", "true", "yes", "on"}


def api_view(view):
    """Translate domain errors into JSON responses with the matching status code."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except ValidationError as e:
            return fail(str(e), status=400, errors=e.field_errors)
        except NotFoundError as e:
            return fail(str(e), status=404)
        except ConfirmationRequiredError as e:
            return fail(
                str(e),
                status=409,
                requires_confirmation=True,
                current_balance=e.current_balance,
                new_balance=e.new_balance,
            )
        except ConstraintViolationError as e:
            return fail(str(e), status=409)
        except StoreError:
            logger.exception("store failure in %s", request.path)
            return fail("Database error, please try again", status=500)
        except DomainError as e:
            return fail(str(e), status=400)
        except Exception as e:
            logger.exception("unexpected error in %s", request.path)
            if bool(current_app.config.get("DEBUG", False)):
                return fail(f"Internal error: {e}", status=500)
            return fail("Internal error", status=500)

    return wrapper


def filter_args() -> dict:
    return {
        "worker_id": request.args.get("worker_id"),
        "start": request.args.get("start"),
        "end": request.args.get("end"),
    }
