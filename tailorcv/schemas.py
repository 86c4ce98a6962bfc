from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .config import DEFAULT_TONE
from .model import (
    Certification,
    EducationRecord,
    LanguageSkill,
    ProfileSnapshot,
    Skill,
    WorkExperience,
)


# -------------------------------------------------
# Profile editor forms
# -------------------------------------------------

class ProfileForm(BaseModel):
    full_name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    phone: Optional[str] = None
    location: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None
    personal_summary: Optional[str] = None
    tone: str = DEFAULT_TONE


class SkillForm(BaseModel):
    skill_name: str = Field(..., min_length=1)
    category: Optional[str] = "General"
    proficiency_level: Optional[int] = None

    def to_record(self) -> Skill:
        return Skill(**self.model_dump())


class WorkExperienceForm(BaseModel):
    job_title: str = Field(..., min_length=1)
    company: str = Field(..., min_length=1)
    start_date: str = Field(..., min_length=1)
    end_date: Optional[str] = "Present"
    location: Optional[str] = None
    responsibilities: List[str] = []

    def to_record(self) -> WorkExperience:
        return WorkExperience(**self.model_dump())


class EducationForm(BaseModel):
    degree: str = Field(..., min_length=1)
    institution: str = Field(..., min_length=1)
    start_year: Optional[str] = None
    end_year: Optional[str] = None
    description: Optional[str] = None

    def to_record(self) -> EducationRecord:
        return EducationRecord(**self.model_dump())


class CertificationForm(BaseModel):
    certification_name: str = Field(..., min_length=1)
    issuing_organization: Optional[str] = None
    issue_date: Optional[str] = None
    expiry_date: Optional[str] = None
    credential_url: Optional[str] = None

    def to_record(self) -> Certification:
        return Certification(**self.model_dump())


class LanguageForm(BaseModel):
    language_name: str = Field(..., min_length=1)
    proficiency_level: Optional[str] = None

    def to_record(self) -> LanguageSkill:
        return LanguageSkill(**self.model_dump())


# -------------------------------------------------
# Generation
# -------------------------------------------------

class ProfileIn(BaseModel):
    """Profile snapshot as sent by a client; every field is optional."""

    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None
    personal_summary: Optional[str] = None
    tone: Optional[str] = None
    skills: List[SkillForm] = []
    work_experience: List[WorkExperienceForm] = []
    education: List[EducationForm] = []
    certifications: List[CertificationForm] = []
    languages: List[LanguageForm] = []

    @field_validator("skills", mode="before")
    @classmethod
    def _skill_names(cls, v):
        # a bare list of names is accepted as well as full skill records
        if isinstance(v, list):
            return [{"skill_name": s} if isinstance(s, str) else s for s in v]
        return v

    def to_snapshot(self) -> ProfileSnapshot:
        return ProfileSnapshot(
            full_name=self.full_name,
            email=self.email,
            phone=self.phone,
            location=self.location,
            linkedin=self.linkedin,
            github=self.github,
            personal_summary=self.personal_summary,
            tone=self.tone,
            skills=[s.to_record() for s in self.skills],
            work_experience=[x.to_record() for x in self.work_experience],
            education=[e.to_record() for e in self.education],
            certifications=[c.to_record() for c in self.certifications],
            languages=[l.to_record() for l in self.languages],
        )


class GenerateIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    profile: Optional[ProfileIn] = None
    job_description: Optional[str] = Field(None, alias="jobDescription")


class JobDescriptionIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    job_description: Optional[str] = Field(None, alias="jobDescription")


class GenerateOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    cv: str
    cover_letter: str = Field(..., alias="coverLetter")


class DownloadIn(BaseModel):
    kind: Literal["cv", "coverLetter"]
    content: str
