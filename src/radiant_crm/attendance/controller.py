from __future__ import annotations

import logging
from typing import Optional

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.guards import make_guards
from ..container import Container
from .model import Location

logger = logging.getLogger(__name__)


def _location_from_form() -> Optional[Location]:
    lat = request.form.get("lat", "").strip()
    lon = request.form.get("lon", "").strip()
    if not lat or not lon:
        return None
    try:
        return Location(lat=float(lat), lon=float(lon))
    except ValueError:
        return None


def register(app: Flask, container: Container) -> None:
    login_required, _ = make_guards(container.auth_service.current_user)

    @app.route("/dashboard", endpoint="dashboard")
    @login_required
    def dashboard():
        user = container.auth_service.current_user()
        today = container.attendance_service.today_record(user)
        return render_template(
            "dashboard.html",
            user=user,
            today=today,
            geolocation_timeout_ms=app.config["GEOLOCATION_TIMEOUT_MS"],
            active_page="dashboard",
        )

    @app.route("/attendance/check-in", methods=["POST"], endpoint="check_in")
    @login_required
    def check_in():
        location = _location_from_form()
        try:
            container.attendance_service.check_in(container.auth_service.current_user(), location)
            flash("Successfully checked in!", "success")
            if location is None:
                flash("Location was not available; attendance saved without it.", "warning")
        except Exception:
            logger.exception("Check-in failed")
            flash("System error while checking in", "danger")
        return redirect(url_for("dashboard"))

    @app.route("/attendance/check-out", methods=["POST"], endpoint="check_out")
    @login_required
    def check_out():
        location = _location_from_form()
        try:
            container.attendance_service.check_out(container.auth_service.current_user(), location)
            flash("Successfully checked out!", "success")
            if location is None:
                flash("Location was not available; attendance saved without it.", "warning")
        except Exception:
            logger.exception("Check-out failed")
            flash("System error while checking out", "danger")
        return redirect(url_for("dashboard"))
