from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.guards import make_guards
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ValidationError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    _, roles_required = make_guards(container.auth_service.current_user)

    @app.route("/", methods=["GET", "POST"], endpoint="login")
    def login():
        if container.auth_service.current_user() is not None:
            return redirect(url_for("dashboard"))

        if request.method == "POST":
            login_id = request.form.get("userId", "")
            password = request.form.get("password", "")

            try:
                user = container.auth_service.login(login_id, password)
                flash(f"Welcome, {user.staff_name}!", "success")
                return redirect(url_for("dashboard"))
            except AuthenticationError as e:
                flash(str(e), "danger")
            except Exception as e:
                logger.exception("Login failed unexpectedly")
                if bool(app.config.get("DEBUG", False)):
                    flash(f"System error during login: {e}", "danger")
                else:
                    flash("System error during login", "danger")

        return render_template("login.html")

    @app.route("/logout", endpoint="logout")
    def logout():
        container.auth_service.logout()
        flash("You have been logged out.", "info")
        return redirect(url_for("login"))

    @app.route("/user-management", endpoint="user_management")
    @roles_required(Role.ADMIN)
    def user_management():
        users = container.user_service.list_users()
        return render_template("users.html", users=users, active_page="user_management")

    @app.route("/user-management/new", methods=["GET", "POST"], endpoint="create_user")
    @roles_required(Role.ADMIN)
    def create_user():
        form = {"role": Role.AGENT.value}
        errors: dict[str, str] = {}

        if request.method == "POST":
            form = request.form.to_dict()
            try:
                container.user_service.create_user(form)
                flash("User created.", "success")
                return redirect(url_for("user_management"))
            except ValidationError as e:
                errors = e.errors
                flash(str(e), "danger")
            except Exception:
                logger.exception("Failed to create user")
                flash("System error while creating user", "danger")

        return render_template(
            "user_form.html",
            form=form,
            errors=errors,
            editing=False,
            roles=list(Role),
            active_page="user_management",
        )

    @app.route("/user-management/<user_id>/edit", methods=["GET", "POST"], endpoint="edit_user")
    @roles_required(Role.ADMIN)
    def edit_user(user_id: str):
        try:
            user = container.user_service.get_user(user_id)
        except ValidationError as e:
            flash(str(e), "danger")
            return redirect(url_for("user_management"))

        form = user.to_dict()
        errors: dict[str, str] = {}

        if request.method == "POST":
            form = request.form.to_dict()
            try:
                container.user_service.update_user(user_id, form)
                flash("User updated.", "success")
                return redirect(url_for("user_management"))
            except ValidationError as e:
                errors = e.errors
                flash(str(e), "danger")
            except Exception:
                logger.exception("Failed to update user %s", user_id)
                flash("System error while updating user", "danger")

        return render_template(
            "user_form.html",
            form=form,
            errors=errors,
            editing=True,
            user_id=user_id,
            roles=list(Role),
            active_page="user_management",
        )

    @app.route("/user-management/<user_id>/delete", methods=["POST"], endpoint="delete_user")
    @roles_required(Role.ADMIN)
    def delete_user(user_id: str):
        if request.form.get("confirm") != "yes":
            flash("Please confirm that you want to delete this user.", "warning")
            return redirect(url_for("user_management"))

        try:
            container.user_service.delete_user(
                current_role=container.auth_service.current_user().role,
                user_id=user_id,
            )
            flash("User deleted.", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Failed to delete user %s", user_id)
            flash("System error while deleting user", "danger")

        return redirect(url_for("user_management"))
