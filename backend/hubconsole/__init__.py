from flask import Flask
from flask_jwt_extended import JWTManager
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool
from sqlalchemy.orm import sessionmaker, scoped_session
from dotenv import load_dotenv
from typing import Optional, Dict, Any

load_dotenv()

db_engine = None
SessionLocal = None
jwt = JWTManager()


def _make_engine(db_url: str):
    if db_url.endswith(':memory:'):
        # one connection so every session sees the same in-memory database
        return create_engine(db_url, future=True, poolclass=StaticPool,
                             connect_args={'check_same_thread': False})
    return create_engine(db_url, future=True)


def create_app(config: Optional[Dict[str, Any]] = None):
    """Build the API: settings from env/.env, then ``config`` overrides on top."""
    global db_engine, SessionLocal
    from .config.settings import load_settings
    from .errors import register_error_handlers
    from .services.policy import EXTENSION_KEY, PolicyEvaluator
    from .services.role_table import build_default_role_table

    app = Flask(__name__)
    app.config.update(load_settings())
    app.config.update(config or {})
    app.logger.setLevel(app.config['LOG_LEVEL'])

    db_engine = _make_engine(app.config['DATABASE_URL'])
    SessionLocal = scoped_session(sessionmaker(bind=db_engine, expire_on_commit=False, autoflush=False))
    jwt.init_app(app)

    # Built once and shared read-only by every request
    table = build_default_role_table()
    app.extensions[EXTENSION_KEY] = PolicyEvaluator(table)
    app.logger.debug('Role table ready: %d roles, %d permissions', len(table), len(table.all_permissions()))

    from .routes.auth import auth_bp
    from .routes.access import access_bp
    from .routes.orders import orders_bp
    from .routes.products import products_bp
    app.register_blueprint(auth_bp, url_prefix='/auth')
    app.register_blueprint(access_bp, url_prefix='/access')
    app.register_blueprint(orders_bp)
    app.register_blueprint(products_bp)
    register_error_handlers(app)

    @app.teardown_appcontext
    def remove_session(exc=None):
        SessionLocal.remove()

    @app.get('/healthz')
    def health():
        return {'status': 'ok'}

    return app


def get_db():
    return SessionLocal()


def init_db():
    """Create tables directly (tests and local dev); deployments run the alembic migrations."""
    from .models.base import Base
    from .models import order, product  # noqa: F401
    Base.metadata.create_all(db_engine)
