import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./chattercup.db")

# Firebase Configuration
FIREBASE_PROJECT_ID = os.getenv("FIREBASE_PROJECT_ID")

# Cloudflare R2 Configuration (profile photos)
R2_ACCOUNT_ID = os.getenv("R2_ACCOUNT_ID")
R2_ACCESS_KEY_ID = os.getenv("R2_ACCESS_KEY_ID")
R2_SECRET_ACCESS_KEY = os.getenv("R2_SECRET_ACCESS_KEY")
R2_BUCKET_NAME = os.getenv("R2_BUCKET_NAME", "profile-pictures")
# Public bucket domain, e.g. https://pub-xxxx.r2.dev or a custom CDN host
R2_PUBLIC_BASE_URL = os.getenv("R2_PUBLIC_BASE_URL", "")

# Frontend base URL (CORS, security headers)
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")
ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

# Marketplace rules
SLOT_DAY_START_HOUR = 9  # first bookable slot of the day
SLOT_DAY_END_HOUR = 17  # slots end before this hour
SLOT_INTERVAL_MINUTES = 30
DEFAULT_LISTING_DURATION = 30  # minutes
MAX_PROFILE_PHOTO_BYTES = 2 * 1024 * 1024  # 2MB
