from __future__ import annotations

from flask import Flask, render_template

from ..common.guards import current_session_user, login_required
from ..core.enums import Role


def register(app: Flask) -> None:
    @app.route("/", endpoint="home")
    def home():
        return render_template("home.html", title="Home", is_logged_in=bool(current_session_user()))

    @app.route("/dashboard", endpoint="dashboard")
    @login_required
    def dashboard():
        user = current_session_user()
        return render_template(
            "dashboard.html",
            title="Dashboard",
            user_email=user.get("email"),
            user_id=user.get("id"),
            user_first_name=user.get("firstName"),
            user_last_name=user.get("lastName"),
            is_admin=user.get("role") == Role.ADMIN.value,
        )
