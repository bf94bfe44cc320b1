import sys
import os
import pytest

# ensure repository root is on sys.path so `caltodo` package can be imported
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

# Ensure tests have a DATABASE_URL so importing app.config doesn't raise
os.environ.setdefault('DATABASE_URL', 'sqlite:///:memory:')
from caltodo.app import create_app


# Independent class (not a Config subclass) so Final attributes are not redeclared.
class TestConfig:
    __test__ = False

    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SECRET_KEY = "test-secret-key-that-is-long-enough-123"
    GOOGLE_CLIENT_ID = "client-123.apps.googleusercontent.com"
    GOOGLE_REDIRECT_URI = ""
    CLIENT_BUILD_DIR = ""
    CLIENT_DEV_SERVER_URL = ""
    MIGRATIONS_DIR = ""
    RATELIMIT_STORAGE_URI = "memory://"


@pytest.fixture
def build_dir(tmp_path):
    root = tmp_path / "public"
    (root / "assets").mkdir(parents=True)
    (root / "index.html").write_text("<!doctype html><div id=\"root\">caltodo</div>")
    (root / "assets" / "app.js").write_text("console.log('caltodo')")
    return root


@pytest.fixture
def production(monkeypatch):
    monkeypatch.setenv("FLASK_ENV", "production")


@pytest.fixture
def development(monkeypatch):
    monkeypatch.setenv("FLASK_ENV", "development")


@pytest.fixture
def context(development):
    return create_app(TestConfig)


@pytest.fixture
def app(context):
    return context.app


@pytest.fixture
def client(app):
    return app.test_client()
