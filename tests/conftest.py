import os
import tempfile

import pytest

# Configure before the app module reads the environment
_TMP_DIR = tempfile.mkdtemp(prefix="yourcode-tests-")
os.environ['DATABASE_URL'] = 'sqlite:///' + os.path.join(_TMP_DIR, 'test.db')
os.environ['JWT_SECRET'] = 'test-secret-key'
os.environ['UPLOAD_FOLDER'] = os.path.join(_TMP_DIR, 'uploads')
os.environ.pop('REDIS_HOST', None)

from app import app as flask_app  # noqa: E402
from middleware.auth import issue_token  # noqa: E402
from models import db, User  # noqa: E402
from utils.accounts import register_user  # noqa: E402
from utils.content import create_post  # noqa: E402


@pytest.fixture
def app():
    flask_app.config['TESTING'] = True
    with flask_app.app_context():
        db.drop_all()
        db.create_all()
        yield flask_app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    def _make_user(username, email=None, password='secret-password'):
        user = register_user(username, email or f"{username}@example.com", password)
        return user.id
    return _make_user


@pytest.fixture
def make_post(app):
    def _make_post(owner_id, title='Snippet', image_ref='/uploads/snippet.png', **kwargs):
        return create_post(owner_id, title, image_ref, **kwargs)
    return _make_post


@pytest.fixture
def auth_headers(app):
    def _auth_headers(user_id):
        user = db.session.get(User, user_id)
        return {'Authorization': f"Bearer {issue_token(user)}"}
    return _auth_headers
