import os, sys, pytest
# Ensure backend directory is on path so 'hubconsole' and 'tests' can be imported
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)
from hubconsole import create_app, get_db, init_db
from hubconsole.models.order import Order
from hubconsole.models.product import Product
from hubconsole.services.policy import PolicyEvaluator
from hubconsole.services.role_table import build_default_role_table


def _verify_credentials(email, password, login_type):
    return password == 'pw'


@pytest.fixture(scope='session', autouse=True)
def app_instance():
    app = create_app({
        'DATABASE_URL': 'sqlite+pysqlite:///:memory:',
        'JWT_SECRET_KEY': 'test-secret-key-with-enough-length-for-hs256',
        'CREDENTIAL_VERIFIER': _verify_credentials,
    })
    # After app and blueprints are registered, ensure all tables exist
    with app.app_context():
        init_db()
    yield app

@pytest.fixture()
def client(app_instance):
    return app_instance.test_client()

@pytest.fixture(scope='session')
def role_table():
    return build_default_role_table()

@pytest.fixture(scope='session')
def policy(role_table):
    return PolicyEvaluator(role_table)

@pytest.fixture()
def clean_db(app_instance):
    session = get_db()
    session.query(Order).delete()
    session.query(Product).delete()
    session.commit()
    yield session
    session.rollback()
