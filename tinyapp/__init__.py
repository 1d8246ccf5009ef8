"""TinyApp: a small multi-user URL shortener with visit analytics."""
import logging
import secrets
from datetime import datetime

from flask import Flask
from jinja2 import DictLoader

from . import config
from .auth import hash_password
from .store import Store
from .templates import TEMPLATES

logger = logging.getLogger(__name__)

DEMO_EMAIL = "user@example.com"
DEMO_PASSWORD = "swordfish"
DEMO_LINKS = {
    "b2xVn2": "http://www.lighthouselabs.ca",
    "9sm5xK": "http://www.google.com",
}


def seed_demo_data(store: Store, rounds: int = 10) -> None:
    user = store.find_user_by_email(DEMO_EMAIL) or store.add_user(DEMO_EMAIL, hash_password(DEMO_PASSWORD, rounds))
    now = datetime.utcnow()
    for code, url in DEMO_LINKS.items():
        if store.get(code) is None:
            store.create(code, url, user.id, now)
    logger.info(f"Seeded demo user {DEMO_EMAIL} with {len(DEMO_LINKS)} links")


def create_app(overrides=None) -> Flask:
    app = Flask(__name__)
    app.config.update(config.defaults())
    if overrides:
        app.config.update(overrides)
    if not app.config["SECRET_KEY"]:
        app.config["SECRET_KEY"] = secrets.token_hex(32)
        logger.warning("SECRET_KEY not set; sessions will not survive a restart")

    store = Store.from_url(app.config["DATABASE_URL"])
    app.extensions["tinyapp.store"] = store
    if app.config["SEED_DEMO_DATA"]:
        seed_demo_data(store, app.config["BCRYPT_ROUNDS"])

    app.jinja_loader = DictLoader(TEMPLATES)

    from .views import bp
    app.register_blueprint(bp)
    return app
