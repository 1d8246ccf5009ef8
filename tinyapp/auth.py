import logging
import re
from typing import Optional

import bcrypt
from flask import session

from .errors import Forbidden, ValidationError
from .models import User

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^.+@.+\..+")
SESSION_KEY = "user_id"


def hash_password(plaintext: str, rounds: int = 10) -> str:
    return bcrypt.hashpw(plaintext.encode(), bcrypt.gensalt(rounds)).decode()


def check_password(plaintext: str, hashed: str) -> bool:
    return bool(hashed) and bcrypt.checkpw(plaintext.encode(), hashed.encode())


def register(store, email: str, password: str, rounds: int = 10) -> User:
    email = (email or "").strip()
    password = password or ""
    if not email or not password or not EMAIL_PATTERN.match(email):
        raise ValidationError("Please enter a valid email and a password.")
    return store.add_user(email, hash_password(password, rounds))


def authenticate(store, email: str, password: str) -> User:
    email = (email or "").strip()
    user = store.find_user_by_email(email)
    if user is None:
        logger.warning(f"Login attempt for unknown email <{email}>")
        raise Forbidden("No user with that email.")
    if not check_password(password or "", user.password_hash):
        logger.warning(f"Wrong password for user {user.id}")
        raise Forbidden("Wrong password.")
    logger.info(f"User {user.id} logged in")
    return user


def login_user(user: User) -> None:
    session[SESSION_KEY] = user.id


def logout_user() -> None:
    session.pop(SESSION_KEY, None)


def current_user(store) -> Optional[User]:
    """The acting user, or None for anonymous and stale sessions."""
    return store.get_user(session.get(SESSION_KEY))


def current_user_id(store) -> Optional[str]:
    user = current_user(store)
    return user.id if user else None
