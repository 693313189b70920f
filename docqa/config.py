import os

# Server
PORT = int(os.getenv("PORT", "5000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Uploads (20MB default)
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(20 * 1024 * 1024)))

# CORS; comma-separated list, "*" allows any origin
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
CORS_MAX_AGE = int(os.getenv("CORS_MAX_AGE", "86400"))

# Rate limiting
RATE_LIMIT_ENABLED = os.getenv("RATE_LIMIT_ENABLED", "true").lower() in ("1", "true", "yes")
DEFAULT_RATE_LIMITS = [l.strip() for l in os.getenv("DEFAULT_RATE_LIMITS", "1000/hour,100/minute").split(",") if l.strip()]
UPLOAD_RATE_LIMIT = os.getenv("UPLOAD_RATE_LIMIT", "20/minute")
GENERATION_RATE_LIMIT = os.getenv("GENERATION_RATE_LIMIT", "30/minute")
EVALUATION_RATE_LIMIT = os.getenv("EVALUATION_RATE_LIMIT", "60/minute")

# Question generation bounds
MIN_QUESTIONS = 1
MAX_QUESTIONS = 10
