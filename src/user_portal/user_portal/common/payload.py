from __future__ import annotations

from flask import request


def request_payload() -> dict:
    """Body of a JSON or form-encoded request as a plain dict."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()
