from __future__ import annotations

import logging
from dataclasses import fields
from typing import Any, Dict, Optional, Type

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from .db import (
    CertificationRow,
    EducationRow,
    LanguageRow,
    Profile,
    SkillRow,
    WorkExperienceRow,
)
from .errors import ProfileNotFound, RecordNotFound, StoreError
from .model import (
    Certification,
    EducationRecord,
    LanguageSkill,
    ProfileSnapshot,
    Skill,
    WorkExperience,
)

logger = logging.getLogger("uvicorn.error")

# url name -> (table, record type, snapshot attribute)
COLLECTIONS: Dict[str, tuple] = {
    "skills": (SkillRow, Skill, "skills"),
    "work-experience": (WorkExperienceRow, WorkExperience, "work_experience"),
    "education": (EducationRow, EducationRecord, "education"),
    "certifications": (CertificationRow, Certification, "certifications"),
    "languages": (LanguageRow, LanguageSkill, "languages"),
}

PROFILE_FIELDS = (
    "full_name", "email", "phone", "location",
    "linkedin", "github", "personal_summary", "tone",
)


def _to_record(row: Any, record_type: Type) -> Any:
    values = {f.name: getattr(row, f.name) for f in fields(record_type)}
    if "responsibilities" in values and values["responsibilities"] is None:
        values["responsibilities"] = []
    return record_type(**values)


class ProfileStore:
    """Row-level CRUD over the profile table and its child collections."""

    def __init__(self, sessions):
        self._sessions = sessions

    def get_snapshot(self, user_id: str) -> Optional[ProfileSnapshot]:
        try:
            with self._sessions() as session:
                profile = session.execute(
                    select(Profile).where(Profile.user_id == user_id)
                ).scalar_one_or_none()
                if profile is None:
                    return None
                snapshot = ProfileSnapshot(**{f: getattr(profile, f) for f in PROFILE_FIELDS})
                for table, record_type, attr in COLLECTIONS.values():
                    rows = session.execute(
                        select(table).where(table.user_id == user_id).order_by(table.seq)
                    ).scalars()
                    setattr(snapshot, attr, [_to_record(r, record_type) for r in rows])
                return snapshot
        except SQLAlchemyError as e:
            logger.exception("get_snapshot() failed")
            raise StoreError(f"Could not load profile: {e}") from e

    def upsert_profile(self, user_id: str, values: Dict[str, Any]) -> ProfileSnapshot:
        """Create the user's profile row on first save and overwrite it afterwards."""
        try:
            with self._sessions() as session, session.begin():
                profile = session.execute(
                    select(Profile).where(Profile.user_id == user_id)
                ).scalar_one_or_none()
                if profile is None:
                    profile = Profile(user_id=user_id)
                    session.add(profile)
                for name in PROFILE_FIELDS:
                    if name in values:
                        setattr(profile, name, values[name])
        except SQLAlchemyError as e:
            logger.exception("upsert_profile() failed")
            raise StoreError(f"Could not save profile: {e}") from e
        logger.info("Profile saved for %s", user_id)
        return self.get_snapshot(user_id)

    def add_record(self, user_id: str, collection: str, record: Any) -> Any:
        table, record_type, _ = COLLECTIONS[collection]
        values = {f.name: getattr(record, f.name) for f in fields(record_type) if f.name != "id"}
        try:
            with self._sessions() as session, session.begin():
                exists = session.execute(
                    select(Profile.id).where(Profile.user_id == user_id)
                ).first()
                if exists is None:
                    raise ProfileNotFound(user_id)
                row = table(user_id=user_id, **values)
                session.add(row)
                session.flush()
                added = _to_record(row, record_type)
        except SQLAlchemyError as e:
            logger.exception("add_record(%s) failed", collection)
            raise StoreError(f"Could not add {collection} record: {e}") from e
        logger.info("Added %s record %s for %s", collection, added.id, user_id)
        return added

    def delete_record(self, user_id: str, collection: str, record_id: str) -> None:
        table, _, _ = COLLECTIONS[collection]
        try:
            with self._sessions() as session, session.begin():
                row = session.execute(
                    select(table).where(table.id == record_id, table.user_id == user_id)
                ).scalar_one_or_none()
                if row is None:
                    raise RecordNotFound(collection, record_id)
                session.delete(row)
        except SQLAlchemyError as e:
            logger.exception("delete_record(%s) failed", collection)
            raise StoreError(f"Could not delete {collection} record: {e}") from e
        logger.info("Deleted %s record %s for %s", collection, record_id, user_id)
