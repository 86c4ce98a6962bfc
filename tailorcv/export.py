import re

FILENAMES = {
    "cv": "tailored-cv.txt",
    "coverLetter": "cover-letter.txt",
}

_TRAILING_WS = re.compile(r"[ \t]+$", re.M)


def as_text_file(kind: str, content: str):
    """Return (filename, body) for a generated document saved as plain text."""
    body = _TRAILING_WS.sub("", content or "").strip() + "\n"
    return FILENAMES[kind], body
