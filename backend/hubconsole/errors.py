from __future__ import annotations
from typing import Any, Dict, Optional

from werkzeug.exceptions import Forbidden, HTTPException, Unauthorized


class Unauthenticated(Unauthorized):
    """No valid session; the client should send the user to ``redirect``."""

    def __init__(self, redirect: str, description: Optional[str] = None):
        super().__init__(description=description or 'Authentication required')
        self.redirect = redirect


class AccessDenied(Forbidden):
    def __init__(self, redirect: str, description: Optional[str] = None):
        super().__init__(description=description or 'Missing permission')
        self.redirect = redirect


def error_body(status: int, title: str, detail: Any, redirect: Optional[str] = None) -> Dict[str, Any]:
    err = {'status': status, 'title': title, 'detail': detail}
    if redirect:
        err['redirect'] = redirect
    return {'error': err}


def register_error_handlers(app):
    """Every error leaves as {'error': {status, title, detail[, redirect]}}."""

    @app.errorhandler(Exception)
    def handle_errors(e):  # type: ignore
        if isinstance(e, HTTPException):
            return error_body(e.code, e.name, e.description, getattr(e, 'redirect', None)), e.code
        app.logger.exception('Unhandled %s', type(e).__name__)
        return error_body(500, 'Internal Server Error', 'Unexpected error'), 500
