from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from . import config
from .errors import GenerationError, UpstreamError, ValidationError
from .model import ProfileSnapshot, summarize_profile
from .prompt_templates import (
    CV_INSTRUCTION,
    CV_SYSTEM_PROMPT,
    COVER_LETTER_INSTRUCTION,
    COVER_LETTER_SYSTEM_PROMPT,
    USER_PROMPT,
)

logger = logging.getLogger("uvicorn.error")

Messages = List[Dict[str, str]]

COVER_LETTER_MAX_WORDS = 350


@dataclass
class GenerationResult:
    """Either both documents or a single error, never a partial payload."""

    cv: Optional[str] = None
    cover_letter: Optional[str] = None
    error: Optional[str] = None
    error_kind: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, exc: GenerationError) -> "GenerationResult":
        return cls(error=str(exc), error_kind=exc.kind)


# -------- Prompt construction --------
def _user_message(snapshot: ProfileSnapshot, job_description: str, instruction: str) -> str:
    profile_json = json.dumps(summarize_profile(snapshot), indent=2, ensure_ascii=False)
    return USER_PROMPT.render(profile_json=profile_json, jd=job_description, instruction=instruction)


def build_cv_messages(snapshot: ProfileSnapshot, job_description: str) -> Messages:
    return [
        {"role": "system", "content": CV_SYSTEM_PROMPT},
        {"role": "user", "content": _user_message(snapshot, job_description, CV_INSTRUCTION)},
    ]


def build_cover_letter_messages(snapshot: ProfileSnapshot, job_description: str) -> Messages:
    tone = summarize_profile(snapshot)["tone"]
    system = COVER_LETTER_SYSTEM_PROMPT.render(max_words=COVER_LETTER_MAX_WORDS, tone=tone)
    return [
        {"role": "system", "content": system},
        {"role": "user", "content": _user_message(snapshot, job_description, COVER_LETTER_INSTRUCTION)},
    ]


# -------- Upstream --------
def openai_client():
    """Build an OpenAI client from the environment; custom base URLs are honoured."""
    if not config.OPENAI_API_KEY:
        raise UpstreamError("OPENAI_API_KEY is not configured")
    from openai import OpenAI

    if config.OPENAI_BASE_URL:
        return OpenAI(api_key=config.OPENAI_API_KEY, base_url=config.OPENAI_BASE_URL)
    return OpenAI(api_key=config.OPENAI_API_KEY)


def call_chat(client: Any, messages: Messages, *, max_tokens: int) -> str:
    """Single chat-completion request. Returns the first choice's text."""
    try:
        resp = client.chat.completions.create(
            model=config.OPENAI_MODEL,
            messages=messages,
            temperature=config.LLM_TEMPERATURE,
            max_tokens=max_tokens,
        )
    except Exception as e:
        raise UpstreamError(f"Text generation request failed: {type(e).__name__}: {e}") from e

    try:
        text = resp.choices[0].message.content
    except (AttributeError, IndexError, TypeError) as e:
        raise UpstreamError("Malformed response from text generation API") from e
    if text is not None and not isinstance(text, str):
        raise UpstreamError("Malformed response from text generation API")
    if not text or not text.strip():
        raise UpstreamError("Text generation API returned an empty response")
    return text.strip()


# -------- Orchestration --------
def _validate(snapshot: Optional[ProfileSnapshot], job_description: Optional[str]) -> None:
    if snapshot is None or snapshot.is_empty() or not (job_description or "").strip():
        raise ValidationError("Profile and job description are required")


def generate_documents(
    snapshot: Optional[ProfileSnapshot],
    job_description: Optional[str],
    make_client: Callable[[], Any],
) -> GenerationResult:
    """
    Generate a tailored CV and cover letter.

    The client is only built once the inputs are valid. The two requests are
    issued one after the other. If the CV request fails the cover letter is
    never requested; if the cover letter fails the CV is dropped.
    """
    try:
        _validate(snapshot, job_description)
        client = make_client()
        logger.info("Generating CV and cover letter for: %s", snapshot.full_name)

        cv = call_chat(
            client,
            build_cv_messages(snapshot, job_description),
            max_tokens=config.CV_MAX_TOKENS,
        )
        cover_letter = call_chat(
            client,
            build_cover_letter_messages(snapshot, job_description),
            max_tokens=config.COVER_LETTER_MAX_TOKENS,
        )
    except ValidationError as e:
        logger.info("generate rejected: %s", e)
        return GenerationResult.failure(e)
    except GenerationError as e:
        logger.exception("generate failed")
        return GenerationResult.failure(e)

    logger.info("Successfully generated CV and cover letter")
    return GenerationResult(cv=cv, cover_letter=cover_letter)
