# config/settings.py

import os
from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

# Generation collaborator
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
GENERATION_TIMEOUT = int(os.getenv("GENERATION_TIMEOUT", "120"))  # seconds
GENERATION_MAX_RETRIES = int(os.getenv("GENERATION_MAX_RETRIES", "3"))
GENERATION_RETRY_DELAY = float(os.getenv("GENERATION_RETRY_DELAY", "0.5"))  # seconds

# Form validation
PROMPT_MIN_LENGTH = 10

# Preview presentation: "isolated" or "blended"
PREVIEW_VARIANT = os.getenv("PREVIEW_VARIANT", "isolated")

# Suggestions
SUGGESTION_LIMIT = 5
SUGGESTION_BLUR_GRACE = float(os.getenv("SUGGESTION_BLUR_GRACE", "0.15"))  # seconds

# Shell
NOTIFICATION_HISTORY = int(os.getenv("NOTIFICATION_HISTORY", "20"))

# Logging / HTTP
LOG_FILE = os.getenv("LOG_FILE", "sitecraft.log")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]
