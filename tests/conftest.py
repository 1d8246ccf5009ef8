import pytest

from tinyapp import create_app
from tinyapp.store import Store


@pytest.fixture
def app():
    return create_app({
        "TESTING": True,
        "SECRET_KEY": "test-secret",
        "DATABASE_URL": "sqlite://",
        "BCRYPT_ROUNDS": 4,
        "SEED_DEMO_DATA": False,
        "RESET_STATS_ON_EDIT": False,
    })


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def store():
    return Store.from_url("sqlite://")


def register(client, email="alice@example.com", password="hunter2"):
    return client.post("/register", data={"email": email, "password": password})


def user_id_of(client):
    with client.session_transaction() as sess:
        return sess.get("user_id")
