import os

os.environ.setdefault('DATABASE_URL', 'sqlite://')
os.environ.setdefault('APP_ENV', 'test')
os.environ['BCRYPT_ROUNDS'] = '4'
os.environ['JWT_SECRET_KEY'] = 'test-secret'

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from backend.auth.dependencies import get_auth_service  # noqa: E402
from backend.database import Database  # noqa: E402
from backend.main import create_app  # noqa: E402
from backend.stores.sessions import SessionStore  # noqa: E402
from backend.stores.users import UserStore  # noqa: E402


@pytest.fixture
def database():
    database = Database('sqlite://')
    database.create_all()
    try:
        yield database
    finally:
        database.dispose()


@pytest.fixture
def db(database):
    session = database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def auth_service(db):
    return get_auth_service(db)


@pytest.fixture
def user_store(db):
    return UserStore(db)


@pytest.fixture
def session_store(db):
    return SessionStore(db)


@pytest.fixture
def client(database):
    with TestClient(create_app(database)) as test_client:
        yield test_client


@pytest.fixture
def login_as(client):
    """Register a user through the API and return its access-token header."""

    def _login_as(email: str, name: str = 'Ana', role: str = 'teacher', password: str = 'pw123') -> dict:
        client.post(
            '/auth/register',
            json={
                'name': name,
                'email': email,
                'password': password,
                'password_confirmation': password,
                'role': role,
            },
        )
        response = client.post('/auth/login', json={'email': email, 'password': password})
        return {'accessToken': response.json()['access_token']}

    return _login_as
