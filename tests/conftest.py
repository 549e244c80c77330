"""Test environment: in-memory SQLite, fast bcrypt and a fixed signing key.

Set before any movie_catalog import so the cached settings pick these values up.
"""

import os
import tempfile

os.environ["APP_ENV"] = "dev"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-that-is-long-enough-for-hs256"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["MOVIE_STORE"] = "database"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="movie-catalog-uploads-")
os.environ.pop("JWT_EXPIRE_MINUTES", None)
