from __future__ import annotations

from fastapi import Depends, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from .config import CORS_ORIGINS
from .db import make_engine, make_sessionmaker
from .errors import ProfileNotFound, RecordNotFound, StoreError
from .export import as_text_file
from .generator import GenerationResult, generate_documents, openai_client
from .model import ProfileSnapshot
from .schemas import (
    CertificationForm,
    DownloadIn,
    EducationForm,
    GenerateIn,
    GenerateOut,
    JobDescriptionIn,
    LanguageForm,
    ProfileForm,
    SkillForm,
    WorkExperienceForm,
)
from .store import COLLECTIONS, ProfileStore

# -------------------------------------------------
# Setup
# -------------------------------------------------

app = FastAPI(title="TailorCV API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
)

_sessions = None


def get_store() -> ProfileStore:
    global _sessions
    if _sessions is None:
        _sessions = make_sessionmaker(make_engine())
    return ProfileStore(_sessions)


def get_llm_client():
    """Client factory; the client is built only after the request validates."""
    return openai_client


# -------------------------------------------------
# Errors
# -------------------------------------------------

def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    first = exc.errors()[0] if exc.errors() else {}
    where = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    msg = first.get("msg", "Invalid request")
    return _error(400, f"{where}: {msg}" if where else msg)


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    if isinstance(exc, (ProfileNotFound, RecordNotFound)):
        return _error(404, str(exc))
    return _error(500, str(exc))


def _respond(result: GenerationResult):
    if not result.ok:
        return _error(400 if result.error_kind == "validation" else 502, result.error)
    return GenerateOut(cv=result.cv, cover_letter=result.cover_letter)


# -------------------------------------------------
# Routes
# -------------------------------------------------

@app.get("/")
def index():
    return {"ok": True, "routes": ["/healthz", "/generate-cv", "/profiles/{user_id}", "/documents/download", "/docs"]}


@app.get("/healthz")
async def healthz():
    return {"ok": True}


@app.post("/generate-cv", response_model=GenerateOut)
def generate_cv(data: GenerateIn, make_client=Depends(get_llm_client)):
    """
    Generate a tailored CV and cover letter from a profile snapshot.

    Returns both documents or a single {"error": ...} payload.
    """
    snapshot = data.profile.to_snapshot() if data.profile else None
    return _respond(generate_documents(snapshot, data.job_description, make_client))


# -------- Profile editor --------

@app.get("/profiles/{user_id}", response_model=None)
def read_profile(user_id: str, store: ProfileStore = Depends(get_store)) -> ProfileSnapshot:
    snapshot = store.get_snapshot(user_id)
    if snapshot is None:
        raise ProfileNotFound(user_id)
    return snapshot


@app.put("/profiles/{user_id}", response_model=None)
def save_profile(user_id: str, form: ProfileForm, store: ProfileStore = Depends(get_store)) -> ProfileSnapshot:
    return store.upsert_profile(user_id, form.model_dump())


@app.post("/profiles/{user_id}/skills", status_code=201, response_model=None)
def add_skill(user_id: str, form: SkillForm, store: ProfileStore = Depends(get_store)):
    return store.add_record(user_id, "skills", form.to_record())


@app.post("/profiles/{user_id}/work-experience", status_code=201, response_model=None)
def add_work_experience(user_id: str, form: WorkExperienceForm, store: ProfileStore = Depends(get_store)):
    return store.add_record(user_id, "work-experience", form.to_record())


@app.post("/profiles/{user_id}/education", status_code=201, response_model=None)
def add_education(user_id: str, form: EducationForm, store: ProfileStore = Depends(get_store)):
    return store.add_record(user_id, "education", form.to_record())


@app.post("/profiles/{user_id}/certifications", status_code=201, response_model=None)
def add_certification(user_id: str, form: CertificationForm, store: ProfileStore = Depends(get_store)):
    return store.add_record(user_id, "certifications", form.to_record())


@app.post("/profiles/{user_id}/languages", status_code=201, response_model=None)
def add_language(user_id: str, form: LanguageForm, store: ProfileStore = Depends(get_store)):
    return store.add_record(user_id, "languages", form.to_record())


@app.delete("/profiles/{user_id}/{collection}/{record_id}", status_code=204)
def delete_record(user_id: str, collection: str, record_id: str, store: ProfileStore = Depends(get_store)):
    if collection not in COLLECTIONS:
        return _error(404, f"Unknown collection: {collection}")
    store.delete_record(user_id, collection, record_id)
    return Response(status_code=204)


# -------- Dashboard --------

@app.post("/profiles/{user_id}/generate", response_model=GenerateOut)
def generate_for_user(
    user_id: str,
    data: JobDescriptionIn,
    store: ProfileStore = Depends(get_store),
    make_client=Depends(get_llm_client),
):
    snapshot = store.get_snapshot(user_id)
    return _respond(generate_documents(snapshot, data.job_description, make_client))


@app.post("/documents/download")
def download(data: DownloadIn):
    filename, body = as_text_file(data.kind, data.content)
    return PlainTextResponse(
        body,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
