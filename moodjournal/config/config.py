import os
from urllib.parse import quote_plus, urlparse

DEFAULT_SQLITE_URL = 'sqlite:///moodjournal.db'


# Database URL configuration function
def get_db_url():
    """Get database URL with encoded password."""
    db_url = os.environ.get('DATABASE_URL')

    if not db_url:
        return DEFAULT_SQLITE_URL

    # SQLAlchemy 1.4+ requires 'postgresql://' instead of 'postgres://'
    if db_url.startswith('postgres://'):
        db_url = db_url.replace('postgres://', 'postgresql://', 1)

    if db_url.startswith('postgresql://'):
        parsed = urlparse(db_url)
        if '@' in parsed.netloc:
            userinfo, host_port = parsed.netloc.rsplit('@', 1)
            if ':' in userinfo:
                username, password = userinfo.split(':', 1)
                encoded_password = quote_plus(password)
                return f"postgresql://{username}:{encoded_password}@{host_port}{parsed.path}"

    return db_url


def _get_float(name: str, default: float) -> float:
    try:
        return float(os.environ.get(name, default))
    except ValueError:
        return default


class Config:
    """Base configuration."""
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev-secret-key-change-in-production')

    # Database settings
    SQLALCHEMY_DATABASE_URI = get_db_url()
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    AUTO_CREATE_TABLES = os.environ.get('AUTO_CREATE_TABLES', 'True').lower() == 'true'

    # Trust X-Forwarded-* headers from one proxy hop
    PROXY_FIX = os.environ.get('PROXY_FIX', 'False').lower() == 'true'

    # CORS settings
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', 'http://localhost:3000,http://127.0.0.1:3000').split(',')

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Affirmation generation
    HUGGINGFACE_API_KEY = os.environ.get('HUGGINGFACE_API_KEY')
    GENERATION_MODEL_NAME = os.environ.get('GENERATION_MODEL_NAME', 'google/gemma-2-2b-it')
    HF_INFERENCE_ENDPOINT = os.environ.get('HF_INFERENCE_ENDPOINT', 'https://router.huggingface.co/models/')
    AFFIRMATION_TIMEOUT = _get_float('AFFIRMATION_TIMEOUT', 10)
    AFFIRMATION_MAX_NEW_TOKENS = int(_get_float('AFFIRMATION_MAX_NEW_TOKENS', 120))
    AFFIRMATION_TEMPERATURE = _get_float('AFFIRMATION_TEMPERATURE', 0.8)


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    DEBUG = True
    # Use in-memory SQLite for testing
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    AUTO_CREATE_TABLES = True
    # Never call the remote model from tests
    HUGGINGFACE_API_KEY = None


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    TESTING = False
    SESSION_COOKIE_SECURE = True
    PROXY_FIX = True
    # Strict CORS in production: only explicitly configured origins
    CORS_ORIGINS = [origin for origin in os.environ.get('CORS_ORIGINS', '').split(',') if origin]


# Configuration dictionary
config_by_name = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}


# Get configuration based on environment
def get_config() -> Config:
    env = os.environ.get('FLASK_ENV', 'default')
    return config_by_name.get(env, config_by_name['default'])
