import os
import re
from dotenv import load_dotenv, find_dotenv

# Load environment variables
_ = load_dotenv(find_dotenv())

# Vision model configuration (style analysis + medium classification)
GROQ_MODEL = os.getenv("GROQ_MODEL", "meta-llama/llama-4-scout-17b-16e-instruct")
GROQ_API_KEY_PREFIX = os.getenv("GROQ_API_KEY_PREFIX", "gsk_")

# Image generation configuration
REPLICATE_API_BASE = os.getenv("REPLICATE_API_BASE", "https://api.replicate.com/v1")
REPLICATE_API_KEY_PREFIX = os.getenv("REPLICATE_API_KEY_PREFIX", "r8_")
REPLICATE_WAIT_SECONDS = int(os.getenv("REPLICATE_WAIT_SECONDS", 60))
REPLICATE_POLL_INTERVAL_SECONDS = float(os.getenv("REPLICATE_POLL_INTERVAL_SECONDS", 2))
GENERATION_TIMEOUT_SECONDS = float(os.getenv("GENERATION_TIMEOUT_SECONDS", 120))
GENERATION_MAX_ATTEMPTS = int(os.getenv("GENERATION_MAX_ATTEMPTS", 3))
GENERATION_BACKOFF_SECONDS = float(os.getenv("GENERATION_BACKOFF_SECONDS", 2))

API_KEY_MIN_LENGTH = 10

# Rate limiting
MAX_CONCURRENT_REQUESTS = int(os.getenv("MAX_CONCURRENT_REQUESTS", 10))

# Two-pass extraction (classify medium before the analysis pass)
ENABLE_MEDIUM_CLASSIFICATION = os.getenv("ENABLE_MEDIUM_CLASSIFICATION", "true").lower() in ("1", "true", "yes")

# Sampling parameters
CLASSIFICATION_MAX_TOKENS = 20
CLASSIFICATION_TEMPERATURE = 0.1
ANALYSIS_MAX_TOKENS = 1500
ANALYSIS_TEMPERATURE = 0.3

# Request limits
MAX_IMAGES = 5
MAX_GUIDANCE_LENGTH = 500

# File upload limits
MAX_FILE_SIZE_MB = 5
ALLOWED_IMAGE_TYPES = ["image/jpeg", "image/png", "image/webp"]

# Object storage (Cloudinary)
CLOUDINARY_CLOUD_NAME = os.getenv("CLOUDINARY_CLOUD_NAME")
CLOUDINARY_API_KEY = os.getenv("CLOUDINARY_API_KEY")
CLOUDINARY_API_SECRET = os.getenv("CLOUDINARY_API_SECRET")
UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", "style-references")

_default_url_pattern = (
    rf"^https://res\.cloudinary\.com/{re.escape(CLOUDINARY_CLOUD_NAME)}/image/upload/"
    if CLOUDINARY_CLOUD_NAME
    else r"^https://res\.cloudinary\.com/[a-z0-9_-]+/image/upload/"
)
ALLOWED_IMAGE_URL_PATTERNS = [
    pattern.strip()
    for pattern in os.getenv("ALLOWED_IMAGE_URL_PATTERNS", _default_url_pattern).split(",")
    if pattern.strip()
]

# HTTP surface
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
