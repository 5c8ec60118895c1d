"""Shared helpers for the JSON controllers."""

from __future__ import annotations

import logging
from datetime import date
from typing import Mapping

from flask import jsonify

from ..core.exceptions import (
    DomainError,
    DuplicateSubmission,
    InvalidTransition,
    MissingReason,
    NotFoundError,
    SelfApproval,
    ValidationError,
)
from .datetime_utils import now_local, parse_iso_date, week_bounds

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (MissingReason, 400),
    (SelfApproval, 403),
    (NotFoundError, 404),
    (DuplicateSubmission, 409),
    (InvalidTransition, 409),
)


def ok(data, status: int = 200):
    return jsonify({"success": True, "data": data}), status


def domain_error(e: DomainError):
    status = next((code for cls, code in _STATUS_BY_ERROR if isinstance(e, cls)), 400)
    return jsonify({"success": False, "error": type(e).__name__, "message": str(e)}), status


def server_error(action: str):
    logger.exception("unexpected error while %s", action)
    return jsonify({"success": False, "error": "InternalError", "message": f"System error while {action}"}), 500


def json_body(request) -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Expected a JSON object body")
    return data


def parse_flag(value) -> bool:
    return str(value or "").strip().lower() in {"1", "true", "yes", "on"}


def period_from(values: Mapping) -> tuple[date, date]:
    """period_start/period_end, else the Monday..Sunday week of ``week_of``, else this week."""

    start = values.get("period_start")
    end = values.get("period_end")
    if start or end:
        if not (start and end):
            raise ValidationError("period_start and period_end must be given together")
        return parse_iso_date(start), parse_iso_date(end)

    week_of = values.get("week_of")
    return week_bounds(parse_iso_date(week_of) if week_of else now_local().date())
