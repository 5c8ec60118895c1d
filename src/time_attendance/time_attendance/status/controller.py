from __future__ import annotations

from flask import Flask, request

from ..common.http import domain_error, ok, parse_flag, server_error
from ..container import Container
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/businesses/<business_id>/currently-working", methods=["GET"], endpoint="currently_working")
    def currently_working(business_id: str):
        try:
            statuses = container.status_monitor.get_currently_working(
                business_id=business_id,
                only_active=parse_flag(request.args.get("only_active")),
            )
            return ok([s.to_dict() for s in statuses])
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return server_error("loading live roster")

    @app.route("/api/employees/<employee_id>/status", methods=["GET"], endpoint="employee_status")
    def employee_status(employee_id: str):
        try:
            return ok(container.status_monitor.get_employee_status(employee_id=employee_id).to_dict())
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return server_error("loading clock status")

    @app.route("/api/businesses/<business_id>/dashboard", methods=["GET"], endpoint="dashboard")
    def dashboard(business_id: str):
        try:
            return ok(container.dashboard_service.get_stats(business_id=business_id).to_dict())
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return server_error("loading dashboard")
