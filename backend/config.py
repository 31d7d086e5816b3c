"""
Runtime settings for the audit backend.

Provider credentials may be defined in a .env file in the backend root:

GROQ_API_KEY=gsk_...
OPENAI_API_KEY=sk-...

The app loads environment variables automatically using python-dotenv.
Credentials are read per request (see providers.py), not here.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(dotenv_path=Path(__file__).resolve().parent / ".env")

FETCH_TIMEOUT_SECONDS = 30
MAX_REDIRECTS = 5

MAX_MENU_ITEMS = 15
MAX_CTA_BUTTONS = 10
MAX_PHONE_NUMBERS = 5
MAX_EMAILS = 5
MAX_BODY_TEXT_CHARS = 5000
PROMPT_BODY_SAMPLE_CHARS = 3000

MAX_OUTPUT_TOKENS = 8192
PARSE_EXCERPT_CHARS = 500

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"
CORS_ALLOW_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",")
    if origin.strip()
] or ["*"]
