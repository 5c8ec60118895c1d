from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import now_local, parse_iso_date, parse_iso_datetime
from ..common.http import domain_error, json_body, ok, parse_flag, server_error
from ..common.validators import require_enum
from ..container import Container
from ..core.enums import ReportPeriod
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/punches", methods=["POST"], endpoint="record_punch")
    def record_punch():
        try:
            data = json_body(request)
            occurred_at = data.get("occurred_at")
            event = container.punch_service.record_punch(
                employee_id=data.get("employee_id", ""),
                business_id=data.get("business_id", ""),
                punch_type=data.get("type", ""),
                occurred_at=parse_iso_datetime(occurred_at) if occurred_at else None,
                is_manual=parse_flag(data.get("is_manual")),
                notes=data.get("notes"),
                manual_reason=data.get("manual_reason"),
                location_lat=data.get("location_lat"),
                location_lng=data.get("location_lng"),
            )
            return ok(event.to_dict(), 201)
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return server_error("recording punch")

    @app.route("/api/employees/<employee_id>/punches", methods=["GET"], endpoint="employee_punches")
    def employee_punches(employee_id: str):
        try:
            today = now_local().date()
            start = parse_iso_date(request.args["start"]) if request.args.get("start") else today
            end = parse_iso_date(request.args["end"]) if request.args.get("end") else start
            punches = container.punch_service.list_for_employee(employee_id=employee_id, start=start, end=end)
            return ok([p.to_dict() for p in punches])
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return server_error("loading punches")

    @app.route("/api/businesses/<business_id>/punches", methods=["GET"], endpoint="business_punches")
    def business_punches(business_id: str):
        try:
            period = require_enum(ReportPeriod, request.args.get("period", ReportPeriod.CURRENT_WEEK.value), "period")
            punches = container.punch_service.list_for_business(business_id=business_id, period=period)
            # Manager audit view lists newest first.
            return ok([p.to_dict() for p in reversed(punches)])
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return server_error("loading punches")
