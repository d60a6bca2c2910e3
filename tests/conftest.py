"""Test environment: in-memory SQLite and a fixed JWT secret, set before app modules import settings."""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-key-with-at-least-32-bytes"
os.environ["JWT_ALGORITHM"] = "HS256"
os.environ["JWT_EXPIRE_MINUTES"] = "60"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["EMAIL_CASE_SENSITIVE"] = "true"
os.environ["APP_ENV"] = "dev"
