"""
HakooLab Database Models
========================
SQLAlchemy models for favorites and calculation history.
"""

from datetime import datetime
import json

from sqlalchemy import create_engine, Boolean, Column, String, DateTime, Text, Integer
from sqlalchemy.orm import sessionmaker, declarative_base

from .core.config import get_settings

# Database setup
DATABASE_URL = get_settings().database_url


def make_engine(url: str):
    """Engine for `url`; SQLite connections may be shared across threads."""
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args)


engine = make_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


class FavoriteRecord(Base):
    """
    One bookmarked calculator.
    The key is the calculator id, `added_at` is epoch milliseconds.
    """
    __tablename__ = "favorites"

    key = Column(String(100), primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    route = Column(String(300), nullable=False)
    group = Column(String(50), nullable=True)
    added_at = Column(Integer, nullable=False, index=True)

    def to_dict(self) -> dict:
        """Convert to dictionary for API response."""
        return {
            "key": self.key,
            "title": self.title,
            "route": self.route,
            "group": self.group,
            "added_at": self.added_at,
        }


class CalculationRun(Base):
    """
    Stores successful calculator runs.
    Inputs and outputs are kept as JSON so any calculator fits one table.
    """
    __tablename__ = "calculation_runs"

    id = Column(String(50), primary_key=True, index=True)
    calculator_id = Column(String(100), nullable=False, index=True)
    calculator_name = Column(String(200), default="")
    category = Column(String(50), nullable=False, index=True)

    # Payload (stored as JSON)
    inputs_json = Column(Text, default="{}")
    outputs_json = Column(Text, default="{}")
    display_json = Column(Text, default="{}")
    tags_json = Column(Text, default="[]")

    favorite = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    duration_ms = Column(Integer, default=0)

    def set_payload(self, inputs: dict, outputs: dict, display: dict):
        """Store inputs, outputs and display strings as JSON."""
        self.inputs_json = json.dumps(inputs, default=str)
        self.outputs_json = json.dumps(outputs, default=str)
        self.display_json = json.dumps(display)

    def set_tags(self, tags):
        self.tags_json = json.dumps(list(tags or []))

    def to_dict(self) -> dict:
        """Convert to dictionary for API response."""
        return {
            "id": self.id,
            "calculator_id": self.calculator_id,
            "calculator_name": self.calculator_name,
            "category": self.category,
            "inputs": json.loads(self.inputs_json) if self.inputs_json else {},
            "outputs": json.loads(self.outputs_json) if self.outputs_json else {},
            "display": json.loads(self.display_json) if self.display_json else {},
            "tags": json.loads(self.tags_json) if self.tags_json else [],
            "favorite": bool(self.favorite),
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "duration_ms": self.duration_ms,
        }


def init_db(bind=None):
    """Initialize the database tables."""
    Base.metadata.create_all(bind=bind or engine)


def get_db():
    """Dependency for FastAPI - yields database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
