"""
Pytest configuration and shared fixtures for the admin navigation tests.
"""
import pytest

from admin_navigation import create_app, get_option_store
from admin_navigation.services.assets import AssetLoader
from admin_navigation.services.compatibility import StaticProbe
from admin_navigation.services.feature_gate import FeatureGate
from admin_navigation.services.option_store import MemoryOptionStore


@pytest.fixture(scope='function')
def app(tmp_path):
    """Create and configure a new app instance for each test."""
    app = create_app(
        {
            'TESTING': True,
            'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
            'OPTIONS_FILE': str(tmp_path / 'options.json'),
            'SECRET_KEY': 'test-secret-key',
        },
        config_name='testing',
    )
    yield app


@pytest.fixture
def client(app):
    """A test client for the app."""
    return app.test_client()


@pytest.fixture
def runner(app):
    """A test runner for the app's Click commands."""
    return app.test_cli_runner()


@pytest.fixture
def options(app):
    """The app's option store, inside an app context."""
    with app.app_context():
        yield get_option_store(app)


@pytest.fixture
def memory_options():
    return MemoryOptionStore()


@pytest.fixture
def gate(memory_options):
    return FeatureGate(memory_options, StaticProbe(True))


@pytest.fixture
def loader():
    return AssetLoader('/static/dist', '1.2.3')
