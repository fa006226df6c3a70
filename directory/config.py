# directory/config.py
"""Environment-driven settings.

Values are read once at import time from the process environment (and a local
`.env` file when present).
"""
import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL")
DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "5"))
DB_MAX_OVERFLOW = int(os.getenv("DB_MAX_OVERFLOW", "10"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

LISTINGS_DEFAULT_LIMIT = int(os.getenv("LISTINGS_DEFAULT_LIMIT", "12"))
# upper bound on rows returned by a single listings query
LISTINGS_MAX_LIMIT = int(os.getenv("LISTINGS_MAX_LIMIT", "100"))

FEATURED_MIN_RATING = float(os.getenv("FEATURED_MIN_RATING", "4.5"))
FEATURED_MIN_REVIEWS = int(os.getenv("FEATURED_MIN_REVIEWS", "10"))
