"""Server-side sessions for Flask.

The cookie only carries a signed random session id; the session contents live
in a ``SessionStore``. Sessions are persisted once they hold data, and every
write pushes both the cookie and the stored record expiry forward.
"""
from __future__ import annotations

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from flask import Flask, Request, Response
from flask.json.tag import TaggedJSONSerializer
from flask.sessions import SessionInterface, SessionMixin
from itsdangerous import BadSignature, Signer
from werkzeug.datastructures import CallbackDict

from ..core.constants import DEFAULT_SESSION_COOKIE_MAX_AGE, DEFAULT_SESSION_STORE_TTL
from .repository import SessionStore

logger = logging.getLogger(__name__)


class ServerSideSession(CallbackDict, SessionMixin):
    def __init__(self, initial=None, sid: str = "", new: bool = False):
        def on_update(self):
            self.modified = True

        CallbackDict.__init__(self, initial, on_update)
        self.sid = sid
        self.new = new
        self.modified = False
        self.abandoned = False

    def abandon(self) -> None:
        """Forget the session locally; the response will clear the cookie without touching the store."""
        self.clear()
        self.abandoned = True


class ServerSessionInterface(SessionInterface):
    serializer = TaggedJSONSerializer()
    session_class = ServerSideSession
    salt = "user-portal.session"

    def __init__(self, store: SessionStore, *, store_ttl: int = DEFAULT_SESSION_STORE_TTL):
        self.store = store
        self.store_ttl = int(store_ttl)

    def _signer(self, app: Flask) -> Optional[Signer]:
        if not app.secret_key:
            return None
        return Signer(app.secret_key, salt=self.salt)

    @staticmethod
    def _new_sid() -> str:
        return secrets.token_urlsafe(32)

    def open_session(self, app: Flask, request: Request) -> Optional[ServerSideSession]:
        signer = self._signer(app)
        if signer is None:
            return None

        cookie = request.cookies.get(self.get_cookie_name(app))
        if cookie:
            try:
                sid = signer.unsign(cookie).decode("utf-8")
            except BadSignature:
                logger.warning("Rejected session cookie with bad signature")
                sid = ""
            if sid:
                raw = self.store.get(sid)
                if raw is not None:
                    return self.session_class(self.serializer.loads(raw), sid=sid)

        return self.session_class(sid=self._new_sid(), new=True)

    def _delete_cookie(self, app: Flask, response: Response) -> None:
        response.delete_cookie(
            self.get_cookie_name(app),
            domain=self.get_cookie_domain(app),
            path=self.get_cookie_path(app),
            secure=self.get_cookie_secure(app),
            samesite=self.get_cookie_samesite(app),
            httponly=self.get_cookie_httponly(app),
        )

    def save_session(self, app: Flask, session: ServerSideSession, response: Response) -> None:
        if session.abandoned:
            self._delete_cookie(app, response)
            return

        if not session:
            # emptied during this request
            if session.modified and not session.new:
                self.store.destroy(session.sid)
                self._delete_cookie(app, response)
            return

        if not session.modified:
            return

        # 0 means a browser-session cookie; the store TTL bounds the record instead
        max_age = int(app.config.get("SESSION_COOKIE_MAX_AGE", DEFAULT_SESSION_COOKIE_MAX_AGE) or 0)
        self.store.set(session.sid, self.serializer.dumps(dict(session)), max_age or self.store_ttl)

        signer = self._signer(app)
        response.set_cookie(
            self.get_cookie_name(app),
            signer.sign(session.sid.encode("utf-8")).decode("utf-8"),
            max_age=max_age or None,
            expires=(datetime.now(timezone.utc) + timedelta(seconds=max_age)) if max_age else None,
            httponly=self.get_cookie_httponly(app),
            domain=self.get_cookie_domain(app),
            path=self.get_cookie_path(app),
            secure=self.get_cookie_secure(app),
            samesite=self.get_cookie_samesite(app),
        )
        response.vary.add("Cookie")
