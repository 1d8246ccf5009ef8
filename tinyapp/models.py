from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class User(Base):
    __tablename__ = "users"
    id = Column(String(6), primary_key=True)
    email = Column(String(320), nullable=False, unique=True)
    password_hash = Column(String(128), nullable=False)


class ShortLink(Base):
    __tablename__ = "links"
    code = Column(String(6), primary_key=True)
    destination_url = Column(String(2048), nullable=False)
    owner_id = Column(String(6), ForeignKey("users.id"), nullable=True, index=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    total_views = Column(Integer, nullable=False, default=0)
    unique_views = Column(Integer, nullable=False, default=0)

    def to_dict(self) -> dict:
        return {
            "url": self.destination_url,
            "owner_id": self.owner_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "total_views": self.total_views,
            "unique_views": self.unique_views,
        }


class Visitor(Base):
    """One distinct-visitor event: the first visit of a session to a link."""

    __tablename__ = "visitors"
    id = Column(String(6), primary_key=True)
    code = Column(String(6), ForeignKey("links.code"), nullable=False, index=True)
    visited_at = Column(DateTime, nullable=False, default=datetime.utcnow)


class RetiredCode(Base):
    """A deleted link's code, kept so the generator never hands it out again."""

    __tablename__ = "retired_codes"
    code = Column(String(6), primary_key=True)
