import os
from datetime import timedelta
from dotenv import load_dotenv

# Load .env file
load_dotenv()


def _flag(name, default):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'hard-to-guess-string'
    # Fallback to SQLite for local development if no URL provided
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///farmtrack.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Session identity: JWT in an HTTP-only cookie, bearer header also accepted
    JWT_SECRET_KEY = os.environ.get('JWT_SECRET_KEY') or SECRET_KEY
    JWT_TOKEN_LOCATION = ['cookies', 'headers']
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(days=7)
    JWT_COOKIE_SECURE = _flag('JWT_COOKIE_SECURE', False)
    JWT_COOKIE_SAMESITE = 'Lax'
    JWT_COOKIE_CSRF_PROTECT = _flag('JWT_COOKIE_CSRF_PROTECT', True)

    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*')

    # Status returned when the caller does not own the entity (401 or 403)
    OWNERSHIP_DENIED_STATUS = int(os.environ.get('OWNERSHIP_DENIED_STATUS', 401))

    # Seed a sample farm the first time a user lists their farms
    SEED_NEW_USERS = _flag('SEED_NEW_USERS', True)

    # Groq API key for advisory generation
    GROQ_API_KEY = os.environ.get('GROQ_API_KEY', '')
    GROQ_MODEL = os.environ.get('GROQ_MODEL', 'llama-3.3-70b-versatile')
    GROQ_TIMEOUT_SECONDS = float(os.environ.get('GROQ_TIMEOUT_SECONDS', 30))
    ADVISORY_MAX_TOKENS = int(os.environ.get('ADVISORY_MAX_TOKENS', 500))

    # Rate limiting
    RATELIMIT_ENABLED = _flag('RATELIMIT_ENABLED', True)
    RATELIMIT_STORAGE_URI = os.environ.get('RATELIMIT_STORAGE_URI', 'memory://')
    RATELIMIT_DEFAULT = os.environ.get('RATELIMIT_DEFAULT', '60 per minute')
    RATELIMIT_AUTH = os.environ.get('RATELIMIT_AUTH', '10 per minute')

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = 'test-secret'
    JWT_SECRET_KEY = 'test-jwt-secret-with-enough-length-for-hs256'
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    JWT_COOKIE_CSRF_PROTECT = False
    RATELIMIT_ENABLED = False
    SEED_NEW_USERS = True
    GROQ_API_KEY = 'test-key'
    LOG_LEVEL = 'WARNING'
