from __future__ import annotations

import logging

from flask import Flask, jsonify, redirect, render_template, session, url_for

from ..common.guards import admin_required, current_session_user, login_required
from ..common.payload import request_payload
from ..core.constants import SESSION_USER_KEY
from ..core.exceptions import DomainError
from ..container import Container

logger = logging.getLogger(__name__)


def _error(e: DomainError):
    return jsonify({"message": str(e)}), e.status_code


def register(app: Flask, container: Container) -> None:
    @app.route("/register", methods=["GET"], endpoint="register_form")
    def register_form():
        return render_template("register.html", title="Register")

    @app.route("/register", methods=["POST"], endpoint="register")
    def register_user():
        try:
            s_user = container.auth_service.register(request_payload())
            session[SESSION_USER_KEY] = s_user.to_session()
            return jsonify({"message": "Registration successful!"}), 201
        except DomainError as e:
            return _error(e)
        except Exception:
            logger.exception("Error during registration")
            return jsonify({"message": "Server error during registration."}), 500

    @app.route("/login", methods=["GET"], endpoint="login")
    def login_form():
        return render_template("login.html", title="Login")

    @app.route("/login", methods=["POST"], endpoint="login_submit")
    def login():
        data = request_payload()
        try:
            s_user = container.auth_service.authenticate(data.get("email"), data.get("password"))
            session[SESSION_USER_KEY] = s_user.to_session()
            return jsonify({"message": "Login successful!"})
        except DomainError as e:
            return _error(e)
        except Exception:
            logger.exception("Error during login")
            return jsonify({"message": "Server error during login."}), 500

    @app.route("/admin/users", endpoint="admin_users")
    @login_required
    @admin_required
    def admin_users():
        try:
            users = container.user_service.list_public()
        except Exception:
            logger.exception("Error fetching users")
            return jsonify({"message": "Server error while fetching users."}), 500
        return render_template("admin_users.html", title="All Users", users=users)

    def update_user():
        data = request_payload()
        user_id = data.get("id")
        try:
            updated = container.user_service.update_user(user_id, data)
        except DomainError as e:
            return _error(e)
        except Exception:
            logger.exception("Error updating user %s", user_id)
            return jsonify({"message": "Server error while updating user."}), 500

        # Only the role is re-synced into the session snapshot.
        s_user = current_session_user()
        if s_user and s_user.get("id") == updated.user_id:
            session[SESSION_USER_KEY] = {**s_user, "role": updated.role}

        return jsonify({"message": "User updated successfully!", "user": updated.to_dict()}), 200

    update_view = update_user
    if app.config.get("PROTECT_UPDATE_ENDPOINT"):
        update_view = login_required(admin_required(update_user))
    app.add_url_rule("/update", endpoint="update_user", view_func=update_view, methods=["POST"])

    @app.route("/logout", endpoint="logout")
    def logout():
        try:
            container.session_store.destroy(session.sid)
        except Exception:
            logger.exception("Error during logout")
            session.abandon()
            return redirect(url_for("dashboard"))
        session.abandon()
        return redirect(url_for("login"))
