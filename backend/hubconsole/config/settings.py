import os

DEFAULT_LIMIT = 50
MAX_LIMIT = 200


def load_settings():
    """Defaults from the environment (.env is loaded by the app factory)."""
    return {
        'JWT_SECRET_KEY': os.getenv('JWT_SECRET_KEY', 'dev-secret'),
        'DATABASE_URL': os.getenv('DATABASE_URL', 'sqlite:///dev.db'),
        'LOG_LEVEL': os.getenv('LOG_LEVEL', 'INFO'),
        'AUTHZ_DEFAULT_FALLBACK': os.getenv('AUTHZ_DEFAULT_FALLBACK', '/dashboard'),
        'AUTH_DEFAULT_HUB_ID': os.getenv('AUTH_DEFAULT_HUB_ID', 'hub_1'),
        'AUTH_DEFAULT_STORE_ID': os.getenv('AUTH_DEFAULT_STORE_ID', 'store_1'),
        # callable(email, password, login_type) -> bool, supplied by the deployment
        'CREDENTIAL_VERIFIER': None,
    }


def normalize_pagination(limit_raw, offset_raw):
    try:
        limit = int(limit_raw) if limit_raw is not None else DEFAULT_LIMIT
        offset = int(offset_raw) if offset_raw is not None else 0
    except ValueError:
        raise ValueError('limit/offset must be int')
    limit = max(1, min(limit, MAX_LIMIT))
    offset = max(0, offset)
    return limit, offset
