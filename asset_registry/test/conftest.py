"""
Pytest configuration and fixtures for the asset registry tests

Every test gets a fresh app on an in-memory SQLite database, built the same
way app.py builds the real one.
"""
import pytest
from asset_registry import create_app
from asset_registry import db as _db
from asset_registry.build import build_database, get_components
from asset_registry.buisness.core.user_context import UserContext

ADMIN = 'admin'
PASSWORD = 'admin123456789'


@pytest.fixture(scope='function')
def app():
    """Create Flask application for testing"""
    app = create_app({
        'TESTING': True,
        'SECRET_KEY': 'test-secret-key',
        'SQLALCHEMY_DATABASE_URI': 'sqlite://',
        'WTF_CSRF_ENABLED': False,
        'RATELIMIT_ENABLED': False,
        'SESSION_COOKIE_SECURE': False,
        'ADMIN_USERNAME': ADMIN,
        'ADMIN_PASSWORD': PASSWORD,
        'REQUIRE_PENDING_OWNER_ACCEPT': False,
    })
    build_database(app)

    with app.app_context():
        yield app
        _db.session.remove()


@pytest.fixture(scope='function')
def components(app):
    return get_components(app)


@pytest.fixture(scope='function')
def authority(components):
    return components.authority


@pytest.fixture(scope='function')
def ledger(components):
    return components.ledger


@pytest.fixture(scope='function')
def maintenance(components):
    return components.maintenance


@pytest.fixture(scope='function')
def work_orders(components):
    return components.work_orders


@pytest.fixture(scope='function')
def notifications(components):
    """Collect every notification published during the test"""
    received = []
    unsubscribe = components.bus.subscribe(received.append)
    yield received
    unsubscribe()


@pytest.fixture(scope='function')
def manager(authority):
    """Principal holding the AssetManager role"""
    authority.grant_asset_manager_role('manager', ADMIN)
    return 'manager'


@pytest.fixture(scope='function')
def staff(authority):
    """Principal holding the MaintenanceStaff role"""
    authority.grant_maintenance_staff_role('staff', ADMIN)
    return 'staff'


@pytest.fixture(scope='function')
def asset_id(ledger, manager):
    """A registered asset owned by alice"""
    return ledger.register_asset('alice', 'Forklift FL-200', 'Requires safety inspection', manager)


@pytest.fixture(scope='function')
def client(app):
    """Create Flask test client"""
    return app.test_client()


@pytest.fixture(scope='function')
def accounts(app, manager, staff):
    """Login accounts for the manager, the staff member and a principal with no roles"""
    for username in (manager, staff, 'outsider'):
        UserContext.create(username, PASSWORD)
    return {'admin': ADMIN, 'manager': manager, 'staff': staff, 'outsider': 'outsider'}


def login_user(client, username=ADMIN, password=PASSWORD):
    """Helper function to login a user"""
    return client.post('/login', json={'username': username, 'password': password})


@pytest.fixture(scope='function')
def login(client):
    """Log the test client in as the given principal"""
    def _login(username=ADMIN, password=PASSWORD):
        response = login_user(client, username, password)
        assert response.status_code == 200, f"Login failed for {username}: {response.get_json()}"
        return client
    return _login
