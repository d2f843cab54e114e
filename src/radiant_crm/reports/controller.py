from __future__ import annotations

from datetime import date
from typing import Optional

from flask import Flask, flash, render_template, request, send_file

from ..common.datetime_utils import parse_optional_date
from ..common.guards import make_guards
from ..container import Container
from ..core.constants import ALL_CREATORS
from ..core.enums import AttendanceRangeMode, Role
from .exporters import PDF_MIMETYPE, XLSX_MIMETYPE, to_excel_bytes, to_pdf_bytes
from .model import ATTENDANCE_COLUMNS, CUSTOMER_COLUMNS, customer_row


def _date_arg(name: str) -> Optional[date]:
    try:
        return parse_optional_date(request.args.get(name))
    except ValueError:
        flash(f"Ignoring invalid {name} date", "warning")
        return None


def register(app: Flask, container: Container) -> None:
    _, roles_required = make_guards(container.auth_service.current_user)

    def _customer_rows() -> tuple[list[dict], dict]:
        viewer = container.auth_service.current_user()
        filters = {
            "start": request.args.get("start", ""),
            "end": request.args.get("end", ""),
            "user_id": request.args.get("user_id") or ALL_CREATORS,
        }
        items = container.report_service.customer_report(
            viewer=viewer,
            start=_date_arg("start"),
            end=_date_arg("end"),
            created_by=filters["user_id"],
        )
        return [customer_row(i) for i in items], filters

    def _attendance_rows() -> tuple[list[dict], dict]:
        filters = {"start": request.args.get("start", ""), "end": request.args.get("end", "")}
        rows = container.report_service.attendance_report(start=_date_arg("start"), end=_date_arg("end"))
        return [r.as_row() for r in rows], filters

    @app.route("/report", endpoint="report")
    @roles_required(Role.ADMIN, Role.AGENT)
    def report():
        rows, filters = _customer_rows()
        return render_template(
            "report.html",
            rows=rows,
            columns=CUSTOMER_COLUMNS,
            filters=filters,
            agents=container.user_service.list_agents(),
            active_page="report",
        )

    @app.route("/report/export.xlsx", endpoint="report_xlsx")
    @roles_required(Role.ADMIN, Role.AGENT)
    def report_xlsx():
        rows, _ = _customer_rows()
        output = to_excel_bytes(rows, CUSTOMER_COLUMNS, sheet_name="Customer Report")
        return send_file(output, download_name="CustomerReport.xlsx", as_attachment=True, mimetype=XLSX_MIMETYPE)

    @app.route("/report/export.pdf", endpoint="report_pdf")
    @roles_required(Role.ADMIN, Role.AGENT)
    def report_pdf():
        rows, _ = _customer_rows()
        output = to_pdf_bytes("Customer Data Report", rows, CUSTOMER_COLUMNS)
        return send_file(output, download_name="CustomerReport.pdf", as_attachment=True, mimetype=PDF_MIMETYPE)

    @app.route("/report/print", endpoint="report_print")
    @roles_required(Role.ADMIN, Role.AGENT)
    def report_print():
        rows, _ = _customer_rows()
        return render_template("reports/print.html", title="Customer Data Report", rows=rows, columns=CUSTOMER_COLUMNS)

    @app.route("/attendance-report", endpoint="attendance_report")
    @roles_required(Role.ADMIN)
    def attendance_report():
        rows, filters = _attendance_rows()
        return render_template(
            "attendance_report.html",
            rows=rows,
            columns=ATTENDANCE_COLUMNS,
            filters=filters,
            range_enabled=container.report_service.attendance_range == AttendanceRangeMode.DATE_RANGE,
            empty_message="No attendance data found for agents.",
            active_page="attendance_report",
        )

    @app.route("/attendance-report/export.xlsx", endpoint="attendance_report_xlsx")
    @roles_required(Role.ADMIN)
    def attendance_report_xlsx():
        rows, _ = _attendance_rows()
        output = to_excel_bytes(rows, ATTENDANCE_COLUMNS, sheet_name="Attendance Report")
        return send_file(output, download_name="AttendanceReport.xlsx", as_attachment=True, mimetype=XLSX_MIMETYPE)

    @app.route("/attendance-report/export.pdf", endpoint="attendance_report_pdf")
    @roles_required(Role.ADMIN)
    def attendance_report_pdf():
        rows, _ = _attendance_rows()
        output = to_pdf_bytes("Attendance Report", rows, ATTENDANCE_COLUMNS)
        return send_file(output, download_name="AttendanceReport.pdf", as_attachment=True, mimetype=PDF_MIMETYPE)

    @app.route("/attendance-report/print", endpoint="attendance_report_print")
    @roles_required(Role.ADMIN)
    def attendance_report_print():
        rows, _ = _attendance_rows()
        return render_template("reports/print.html", title="Attendance Report", rows=rows, columns=ATTENDANCE_COLUMNS)
