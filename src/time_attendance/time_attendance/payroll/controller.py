from __future__ import annotations

from flask import Flask, request

from ..common.http import domain_error, ok, period_from, server_error
from ..container import Container
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employees/<employee_id>/weekly-summary", methods=["GET"], endpoint="weekly_summary")
    def weekly_summary(employee_id: str):
        try:
            period_start, period_end = period_from(request.args)
            report = container.summary_service.build_report(
                employee_id=employee_id,
                period_start=period_start,
                period_end=period_end,
            )
            return ok(report.to_dict())
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return server_error("computing weekly summary")
