import uuid
import datetime

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import DATABASE_URL, DEFAULT_TONE

Base = declarative_base()


def _uuid() -> str:
    return str(uuid.uuid4())


def _now() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(String, primary_key=True, default=_uuid)
    user_id = Column(String, unique=True, index=True, nullable=False)
    full_name = Column(String)
    email = Column(String)
    phone = Column(String)
    location = Column(String)
    linkedin = Column(String)
    github = Column(String)
    personal_summary = Column(Text)
    tone = Column(String, default=DEFAULT_TONE)
    created_at = Column(DateTime, default=_now)
    updated_at = Column(DateTime, default=_now, onupdate=_now)


class _OwnedRow:
    """Columns shared by every child collection, keyed by the owning profile."""

    # insertion order; created_at alone can tie
    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String, unique=True, index=True, nullable=False, default=_uuid)
    created_at = Column(DateTime, default=_now)


class SkillRow(_OwnedRow, Base):
    __tablename__ = "skills"

    user_id = Column(String, ForeignKey("profiles.user_id"), index=True, nullable=False)
    skill_name = Column(String, nullable=False)
    category = Column(String)
    proficiency_level = Column(Integer)


class WorkExperienceRow(_OwnedRow, Base):
    __tablename__ = "work_experience"

    user_id = Column(String, ForeignKey("profiles.user_id"), index=True, nullable=False)
    job_title = Column(String, nullable=False)
    company = Column(String, nullable=False)
    start_date = Column(String, nullable=False)
    end_date = Column(String)
    location = Column(String)
    responsibilities = Column(JSON)
    updated_at = Column(DateTime, default=_now, onupdate=_now)


class EducationRow(_OwnedRow, Base):
    __tablename__ = "education"

    user_id = Column(String, ForeignKey("profiles.user_id"), index=True, nullable=False)
    degree = Column(String, nullable=False)
    institution = Column(String, nullable=False)
    start_year = Column(String)
    end_year = Column(String)
    description = Column(Text)


class CertificationRow(_OwnedRow, Base):
    __tablename__ = "certifications"

    user_id = Column(String, ForeignKey("profiles.user_id"), index=True, nullable=False)
    certification_name = Column(String, nullable=False)
    issuing_organization = Column(String)
    issue_date = Column(String)
    expiry_date = Column(String)
    credential_url = Column(String)


class LanguageRow(_OwnedRow, Base):
    __tablename__ = "languages"

    user_id = Column(String, ForeignKey("profiles.user_id"), index=True, nullable=False)
    language_name = Column(String, nullable=False)
    proficiency_level = Column(String)


def make_engine(url: str = DATABASE_URL):
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            # one shared connection, otherwise each session sees an empty database
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)
    return create_engine(url)


def make_sessionmaker(engine):
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, expire_on_commit=False)
