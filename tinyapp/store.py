import logging
import re
import threading
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from sqlalchemy import create_engine, delete, select
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from .errors import NotFound, ValidationError
from .ids import CODE_PATTERN, generate_id
from .models import Base, RetiredCode, ShortLink, User, Visitor

logger = logging.getLogger(__name__)

SCHEME_PATTERN = re.compile(r"^\w+://")


def normalize_url(u: str) -> str:
    u = (u or "").strip()
    if not u:
        return ""
    return u if SCHEME_PATTERN.match(u) else "http://" + u


def make_engine(database_url: str):
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        # an in-memory database exists only inside its one connection
        return create_engine(
            database_url,
            future=True,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(database_url, future=True, pool_pre_ping=True)


class Store:
    """Links, users and visitor records behind one lock.

    Every operation takes the lock, reads included: on an in-memory
    database all sessions share one connection, and closing any session
    rolls back whatever another one has flushed but not yet committed.
    Allocation holds it from the collision check until the commit.
    """

    def __init__(self, engine):
        self.engine = engine
        self._lock = threading.RLock()
        Base.metadata.create_all(engine)

    @classmethod
    def from_url(cls, database_url: str) -> "Store":
        return cls(make_engine(database_url))

    def session(self) -> Session:
        return Session(self.engine, expire_on_commit=False)

    # ids

    def _id_taken(self, s: Session, candidate: str) -> bool:
        return any(s.get(model, candidate) is not None for model in (ShortLink, User, Visitor, RetiredCode))

    def _reserve_id(self, s: Session) -> str:
        return generate_id(lambda candidate: self._id_taken(s, candidate))

    def generate(self) -> str:
        with self._lock, self.session() as s:
            return self._reserve_id(s)

    # links

    def create(self, code: str, destination: str, owner_id: Optional[str], now: Optional[datetime] = None) -> ShortLink:
        with self._lock, self.session() as s:
            link = self._put_link(s, code, destination, owner_id, now)
            s.commit()
        logger.info(f"Created short link {code} -> {link.destination_url}")
        return link

    def shorten(self, destination: str, owner_id: Optional[str], now: Optional[datetime] = None) -> ShortLink:
        with self._lock, self.session() as s:
            code = self._reserve_id(s)
            link = self._put_link(s, code, destination, owner_id, now)
            s.commit()
        logger.info(f"Created short link {code} -> {link.destination_url}")
        return link

    def _put_link(self, s: Session, code, destination, owner_id, now) -> ShortLink:
        if not isinstance(code, str) or not CODE_PATTERN.fullmatch(code):
            raise ValidationError(f"Short codes are six letters or digits, got {code!r}.")
        link = s.get(ShortLink, code)
        if link is not None:
            s.execute(delete(Visitor).where(Visitor.code == code))
            s.delete(link)
            s.flush()
        link = ShortLink(
            code=code,
            destination_url=normalize_url(destination),
            owner_id=owner_id,
            created_at=now or datetime.utcnow(),
            total_views=0,
            unique_views=0,
        )
        s.add(link)
        return link

    def update(self, code: str, destination: str, now: Optional[datetime] = None, reset_stats: bool = False) -> ShortLink:
        with self._lock, self.session() as s:
            link = s.get(ShortLink, code)
            if link is None:
                raise NotFound(f"Short link {code} does not exist.")
            link.destination_url = normalize_url(destination)
            link.created_at = now or datetime.utcnow()
            if reset_stats:
                link.total_views = 0
                link.unique_views = 0
                s.execute(delete(Visitor).where(Visitor.code == code))
            s.commit()
        logger.info(f"Updated short link {code} -> {link.destination_url}")
        return link

    def delete(self, code: str) -> None:
        with self._lock, self.session() as s:
            link = s.get(ShortLink, code)
            if link is None:
                return
            s.execute(delete(Visitor).where(Visitor.code == code))
            s.delete(link)
            s.merge(RetiredCode(code=code))
            s.commit()
        logger.info(f"Deleted short link {code}")

    def get(self, code: str) -> Optional[ShortLink]:
        with self._lock, self.session() as s:
            return s.get(ShortLink, code)

    def list_for_owner(self, owner_id: Optional[str]) -> Dict[str, ShortLink]:
        with self._lock, self.session() as s:
            rows = s.execute(
                select(ShortLink).where(ShortLink.owner_id == owner_id).order_by(ShortLink.created_at)
            ).scalars().all()
        return {link.code: link for link in rows}

    def all_links(self) -> Dict[str, ShortLink]:
        with self._lock, self.session() as s:
            rows = s.execute(select(ShortLink).order_by(ShortLink.created_at)).scalars().all()
        return {link.code: link for link in rows}

    # visits

    def record_visit(self, code: str, visited, now: Optional[datetime] = None) -> Tuple[ShortLink, bool]:
        """Count one redirect of `code` for the session whose visited set is `visited`.

        Returns the link and whether this was the session's first visit.
        `visited` gains `code` only once the counters are committed.
        """
        now = now or datetime.utcnow()
        if not CODE_PATTERN.fullmatch(code or ""):
            raise NotFound(f"Short link {code} does not exist.")
        with self._lock, self.session() as s:
            link = s.get(ShortLink, code)
            if link is None:
                raise NotFound(f"Short link {code} does not exist.")
            link.total_views += 1
            first_visit = code not in visited
            if first_visit:
                link.unique_views += 1
                s.add(Visitor(id=self._reserve_id(s), code=code, visited_at=now))
            s.commit()
        if first_visit:
            visited.add(code)
        return link, first_visit

    def visitors_for(self, code: str) -> List[Visitor]:
        with self._lock, self.session() as s:
            return s.execute(
                select(Visitor).where(Visitor.code == code).order_by(Visitor.visited_at)
            ).scalars().all()

    # users

    def add_user(self, email: str, password_hash: str) -> User:
        with self._lock, self.session() as s:
            if s.execute(select(User).where(User.email == email)).scalar_one_or_none():
                raise ValidationError("A user with that email already exists.")
            user = User(id=self._reserve_id(s), email=email, password_hash=password_hash)
            s.add(user)
            s.commit()
        logger.info(f"Registered user {user.id} <{email}>")
        return user

    def get_user(self, user_id: Optional[str]) -> Optional[User]:
        if not user_id:
            return None
        with self._lock, self.session() as s:
            return s.get(User, user_id)

    def find_user_by_email(self, email: str) -> Optional[User]:
        with self._lock, self.session() as s:
            return s.execute(select(User).where(User.email == email)).scalar_one_or_none()
