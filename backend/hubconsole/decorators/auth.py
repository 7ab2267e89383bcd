from functools import wraps
from flask import current_app, request
from hubconsole.errors import AccessDenied, Unauthenticated
from hubconsole.services.guard import GuardState, Guard
from hubconsole.services.policy import current_policy
from hubconsole.services.principal import current_principal
from hubconsole.services.requirements import AUTHENTICATED


def require(requirement=AUTHENTICATED, fallback=None):
    """Run the access guard before the view; 401/403 carry the redirect target."""
    def outer(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            guard = Guard(requirement, fallback or current_app.config['AUTHZ_DEFAULT_FALLBACK'])
            user = current_principal()
            decision = guard.evaluate(current_policy(), user)
            if decision.state is GuardState.UNAUTHENTICATED:
                raise Unauthenticated(decision.redirect)
            if decision.state is GuardState.UNAUTHORIZED:
                current_app.logger.info('Access denied: role=%s login_type=%s path=%s',
                                        user.role, user.login_type, request.path)
                raise AccessDenied(decision.redirect)
            return fn(*args, **kwargs)
        return wrapper
    return outer
