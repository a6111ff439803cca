# config.py
import os

MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017")
DB_NAME = os.getenv("DB_NAME", "devconnector")

# Auth
SECRET_OR_KEY = os.getenv("SECRET_OR_KEY", "change-me-in-production")
JWT_ALGORITHM = "HS256"
TOKEN_EXPIRE_SECONDS = int(os.getenv("TOKEN_EXPIRE_SECONDS", "3600"))

# Gravatar
AVATAR_SIZE = "200"
AVATAR_RATING = "pg"
AVATAR_DEFAULT = "mm"

# Github repo feed
GITHUB_API_URL = "https://api.github.com"
GITHUB_CLIENT_ID = os.getenv("GITHUB_CLIENT_ID", "")
GITHUB_CLIENT_SECRET = os.getenv("GITHUB_CLIENT_SECRET", "")
GITHUB_REPO_COUNT = int(os.getenv("GITHUB_REPO_COUNT", "5"))
GITHUB_REPO_SORT = os.getenv("GITHUB_REPO_SORT", "created")
GITHUB_REPO_DIRECTION = os.getenv("GITHUB_REPO_DIRECTION", "asc")
GITHUB_TIMEOUT_SECONDS = 10.0

# Validation limits
POST_TEXT_MIN, POST_TEXT_MAX = 10, 300
NAME_MIN, NAME_MAX = 2, 30
PASSWORD_MIN, PASSWORD_MAX = 6, 30
HANDLE_MIN, HANDLE_MAX = 2, 40

SOCIAL_PLATFORMS = ("youtube", "twitter", "facebook", "linkedin", "instagram")

# API Configuration
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "5000"))

# Logging
DEBUG_MODE = os.getenv("DEBUG_MODE", "false").lower() == "true"
