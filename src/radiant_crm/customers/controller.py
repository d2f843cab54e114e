from __future__ import annotations

import base64
import logging
from typing import Optional

from flask import Flask, flash, redirect, render_template, request, url_for
from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from ..common.guards import make_guards
from ..container import Container
from ..core.enums import ConnectionType, LeadStatus, Role
from ..core.exceptions import ValidationError
from .model import BillFile

logger = logging.getLogger(__name__)


def bill_file_from_upload(upload: Optional[FileStorage]) -> Optional[BillFile]:
    """Inline an uploaded file as a ``data:`` URL."""

    if upload is None or not upload.filename:
        return None
    payload = upload.read()
    mimetype = upload.mimetype or "application/octet-stream"
    content = f"data:{mimetype};base64,{base64.b64encode(payload).decode('ascii')}"
    return BillFile(name=secure_filename(upload.filename) or "upload", content=content)


def register(app: Flask, container: Container) -> None:
    _, roles_required = make_guards(container.auth_service.current_user)

    @app.route("/create-data", methods=["GET", "POST"], endpoint="create_data")
    @roles_required(Role.ADMIN, Role.AGENT)
    def create_data():
        user = container.auth_service.current_user()
        form = {
            "connectionType": ConnectionType.HOME.value,
            "status": LeadStatus.INTERESTED.value,
        }
        errors: dict[str, str] = {}

        if request.method == "POST":
            form = request.form.to_dict()
            try:
                container.customer_service.create(
                    form,
                    creator=user,
                    bill_file=bill_file_from_upload(request.files.get("billFile")),
                )
                flash("Data saved successfully!", "success")
                return redirect(url_for("dashboard"))
            except ValidationError as e:
                errors = e.errors
                flash(str(e), "danger")
            except Exception:
                logger.exception("Failed to save customer data")
                flash("System error while saving data", "danger")

        return render_template(
            "create_data.html",
            form=form,
            errors=errors,
            user=user,
            connection_types=list(ConnectionType),
            statuses=list(LeadStatus),
            geolocation_timeout_ms=app.config["GEOLOCATION_TIMEOUT_MS"],
            active_page="create_data",
        )
