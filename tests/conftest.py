import pytest

from krishi import create_app
from krishi.config import TestingConfig
from krishi.models import db, User

PASSWORD = 'password123'

TEST_USERS = {
    'farmer': {'email': 'farmer@krishi.in', 'name': 'Test Farmer', 'role': 'farmer', 'location': 'Ludhiana, Punjab'},
    'other_farmer': {'email': 'farmer2@krishi.in', 'name': 'Other Farmer', 'role': 'farmer'},
    'expert': {'email': 'expert@krishi.in', 'name': 'Test Expert', 'role': 'expert'},
    'other_expert': {'email': 'expert2@krishi.in', 'name': 'Other Expert', 'role': 'expert'},
    'vendor': {'email': 'vendor@krishi.in', 'name': 'Test Vendor', 'role': 'vendor'},
    'other_vendor': {'email': 'vendor2@krishi.in', 'name': 'Other Vendor', 'role': 'vendor'},
}


@pytest.fixture
def backend():
    """Storage backend under test; parametrize ``backend`` to run against both."""
    return 'sql'


@pytest.fixture
def app(tmp_path, backend, monkeypatch):
    monkeypatch.delenv('WEATHER_API_KEY', raising=False)

    class TestConfig(TestingConfig):
        STORAGE_BACKEND = backend
        LOCAL_STORE_DIR = tmp_path / 'store'
        UPLOAD_FOLDER = tmp_path / 'uploads'
        QUESTION_IMAGES_FOLDER = tmp_path / 'uploads' / 'questions'
        WEATHER_API_KEY = None

    app = create_app(TestConfig)
    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def users(app):
    """Create one account per test role and return their ids keyed by role."""
    ids = {}
    with app.app_context():
        for key, data in TEST_USERS.items():
            user = User(**data)
            user.set_password(PASSWORD)
            db.session.add(user)
            db.session.flush()
            ids[key] = user.id
        db.session.commit()
    return ids


def login(client, key, password=PASSWORD):
    return client.post('/auth/login', data={
        'email': TEST_USERS[key]['email'],
        'password': password,
    })


@pytest.fixture
def login_as(client, users):
    def _login(key):
        response = login(client, key)
        assert response.status_code == 302
        return client
    return _login


def get_user(key):
    """Fetch a test user; call inside an app context."""
    return User.query.filter_by(email=TEST_USERS[key]['email']).first()
