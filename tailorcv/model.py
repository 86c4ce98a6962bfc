from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional

from .config import DEFAULT_TONE

# -------- Data models --------
@dataclass
class Skill:
    skill_name: str
    category: Optional[str] = "General"
    proficiency_level: Optional[int] = None
    id: Optional[str] = None

@dataclass
class WorkExperience:
    job_title: str
    company: str
    start_date: str
    end_date: Optional[str] = "Present"
    location: Optional[str] = None
    responsibilities: List[str] = field(default_factory=list)
    id: Optional[str] = None

@dataclass
class EducationRecord:
    degree: str
    institution: str
    start_year: Optional[str] = None
    end_year: Optional[str] = None
    description: Optional[str] = None
    id: Optional[str] = None

@dataclass
class Certification:
    certification_name: str
    issuing_organization: Optional[str] = None
    issue_date: Optional[str] = None
    expiry_date: Optional[str] = None
    credential_url: Optional[str] = None
    id: Optional[str] = None

@dataclass
class LanguageSkill:
    language_name: str
    proficiency_level: Optional[str] = None
    id: Optional[str] = None

@dataclass
class ProfileSnapshot:
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None
    personal_summary: Optional[str] = None
    tone: Optional[str] = None
    skills: List[Skill] = field(default_factory=list)
    work_experience: List[WorkExperience] = field(default_factory=list)
    education: List[EducationRecord] = field(default_factory=list)
    certifications: List[Certification] = field(default_factory=list)
    languages: List[LanguageSkill] = field(default_factory=list)

    def is_empty(self) -> bool:
        scalars = (
            self.full_name, self.email, self.phone, self.location,
            self.linkedin, self.github, self.personal_summary, self.tone,
        )
        children = (
            self.skills, self.work_experience, self.education,
            self.certifications, self.languages,
        )
        return not any(s and s.strip() for s in scalars) and not any(children)


# -------- Flattening --------
def _plain(record: Any) -> Dict[str, Any]:
    data = asdict(record)
    data.pop("id", None)
    return data

def summarize_profile(snapshot: ProfileSnapshot) -> Dict[str, Any]:
    """Reduce a snapshot to the plain summary object sent to the model."""
    return {
        "name": snapshot.full_name,
        "email": snapshot.email,
        "phone": snapshot.phone,
        "location": snapshot.location,
        "linkedin": snapshot.linkedin,
        "github": snapshot.github,
        "summary": snapshot.personal_summary,
        "skills": [s.skill_name for s in snapshot.skills],
        "experience": [_plain(x) for x in snapshot.work_experience],
        "education": [_plain(e) for e in snapshot.education],
        "certifications": [_plain(c) for c in snapshot.certifications],
        "languages": [_plain(l) for l in snapshot.languages],
        "tone": snapshot.tone or DEFAULT_TONE,
    }
