import os
from dotenv import load_dotenv

load_dotenv()

# OpenAI
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL")

# sampling, shared by both calls
LLM_TEMPERATURE = float(os.getenv("LLM_TEMPERATURE", "0.7"))
CV_MAX_TOKENS = int(os.getenv("CV_MAX_TOKENS", "2000"))
COVER_LETTER_MAX_TOKENS = int(os.getenv("COVER_LETTER_MAX_TOKENS", "1000"))

# storage
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./tailorcv.db")

# comma separated, "*" allows any origin
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

DEFAULT_TONE = os.getenv("DEFAULT_TONE", "Professional and warm")
