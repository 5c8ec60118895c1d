from __future__ import annotations

from flask import Flask, request

from ..common.http import domain_error, json_body, ok, period_from, server_error
from ..common.validators import require_enum
from ..container import Container
from ..core.enums import TimesheetStatus
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    def _status_arg():
        value = request.args.get("status")
        if not value or value == "all":
            return None
        return require_enum(TimesheetStatus, value, "status")

    @app.route("/api/timesheets", methods=["POST"], endpoint="submit_timesheet")
    def submit_timesheet():
        try:
            data = json_body(request)
            period_start, period_end = period_from(data)
            ts = container.timesheet_service.submit_for_period(
                employee_id=data.get("employee_id", ""),
                period_start=period_start,
                period_end=period_end,
            )
            return ok(ts.to_dict(), 201)
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return server_error("submitting timesheet")

    @app.route("/api/timesheets", methods=["GET"], endpoint="list_timesheets")
    def list_timesheets():
        try:
            items = container.timesheet_service.list_timesheets(
                business_id=request.args.get("business_id") or None,
                employee_id=request.args.get("employee_id") or None,
                status=_status_arg(),
            )
            return ok([ts.to_dict() for ts in items])
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return server_error("loading timesheets")

    @app.route("/api/timesheets/<int:timesheet_id>", methods=["GET"], endpoint="get_timesheet")
    def get_timesheet(timesheet_id: int):
        try:
            return ok(container.timesheet_service.get(timesheet_id).to_dict())
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return server_error("loading timesheet")

    @app.route("/api/timesheets/<int:timesheet_id>/approve", methods=["POST"], endpoint="approve_timesheet")
    def approve_timesheet(timesheet_id: int):
        try:
            data = json_body(request)
            ts = container.timesheet_service.approve(
                timesheet_id=timesheet_id,
                approver_id=data.get("approver_id", ""),
            )
            return ok(ts.to_dict())
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return server_error("approving timesheet")

    @app.route("/api/timesheets/<int:timesheet_id>/reject", methods=["POST"], endpoint="reject_timesheet")
    def reject_timesheet(timesheet_id: int):
        try:
            data = json_body(request)
            ts = container.timesheet_service.reject(
                timesheet_id=timesheet_id,
                approver_id=data.get("approver_id", ""),
                reason=data.get("reason", ""),
            )
            return ok(ts.to_dict())
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return server_error("rejecting timesheet")

    @app.route("/api/businesses/<business_id>/timesheets/export.csv", methods=["GET"], endpoint="export_timesheets")
    def export_timesheets(business_id: str):
        try:
            content = container.timesheet_service.export_csv(business_id=business_id, status=_status_arg())
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return server_error("exporting timesheets")

        return app.response_class(
            content.encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename=timesheets_{business_id}.csv"},
        )
