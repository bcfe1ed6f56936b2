# profile_studio/config.py
"""
Environment-driven settings shared by the backend and the Streamlit frontend.
Values come from the process environment, with a local .env loaded first.
"""

import os

from dotenv import load_dotenv

load_dotenv()

# Apify (scraping)
APIFY_API_TOKEN = os.getenv("APIFY_API_TOKEN")
APIFY_ACTOR_ID = os.getenv("APIFY_ACTOR_ID", "simpleapi/linkedin-profile-scraper")

# Groq speaks the OpenAI chat-completions protocol
GROQ_API_KEY = os.getenv("GROQ_API_KEY")
GROQ_BASE_URL = os.getenv("GROQ_BASE_URL", "https://api.groq.com/openai/v1")
CHAT_MODEL = os.getenv("CHAT_MODEL", "llama-3.1-8b-instant")
ANALYZE_MAX_TOKENS = int(os.getenv("ANALYZE_MAX_TOKENS", "900"))
SECTION_MAX_TOKENS = int(os.getenv("SECTION_MAX_TOKENS", "300"))
CHAT_MAX_TOKENS = int(os.getenv("CHAT_MAX_TOKENS", "600"))

# Frontend -> backend
API_BASE = os.getenv("API_BASE", "http://localhost:8005")
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "120"))

PLACEHOLDER_IMAGE = os.getenv("PLACEHOLDER_IMAGE", "https://via.placeholder.com/150")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
