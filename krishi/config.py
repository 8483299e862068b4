# Application Configuration
import os
from pathlib import Path
from dotenv import load_dotenv

basedir = Path(__file__).parent.parent
DEV_SECRET_KEY = 'dev-secret-key-change-in-production'
load_dotenv(basedir / '.env')


def _env_flag(name, default):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.lower() in ('true', 'on', '1', 'yes')


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or DEV_SECRET_KEY

    # Handle both PostgreSQL (Render) and SQLite (local)
    database_url = os.environ.get('DATABASE_URL')
    if database_url:
        # Render provides postgres:// but SQLAlchemy needs postgresql://
        if database_url.startswith('postgres://'):
            database_url = database_url.replace('postgres://', 'postgresql://', 1)
        SQLALCHEMY_DATABASE_URI = database_url
    else:
        SQLALCHEMY_DATABASE_URI = f'sqlite:///{basedir / "instance" / "krishi.db"}'

    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Storage backend: 'sql' (relational + change feed) or 'local' (JSON files)
    STORAGE_BACKEND = os.environ.get('STORAGE_BACKEND', 'sql')
    LOCAL_STORE_DIR = Path(os.environ.get('LOCAL_STORE_DIR') or basedir / 'instance' / 'local_store')

    # Upload settings
    UPLOAD_FOLDER = basedir / 'krishi' / 'static' / 'uploads'
    QUESTION_IMAGES_FOLDER = UPLOAD_FOLDER / 'questions'
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # 16MB max request size
    MAX_IMAGE_SIZE_MB = 5

    # OpenWeatherMap API
    WEATHER_API_KEY = os.environ.get('WEATHER_API_KEY') or None
    WEATHER_API_URL = 'https://api.openweathermap.org/data/2.5/weather'
    WEATHER_FORECAST_URL = 'https://api.openweathermap.org/data/2.5/forecast'
    DEFAULT_LOCATION = os.environ.get('DEFAULT_LOCATION', 'Punjab, India')

    SEED_DEMO_DATA = _env_flag('SEED_DEMO_DATA', True)

    # Change notifications
    CHANGE_FEED_SIZE = int(os.environ.get('CHANGE_FEED_SIZE', '500'))
    REALTIME_POLL_SECONDS = int(os.environ.get('REALTIME_POLL_SECONDS', '10'))

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    LOG_TO_STDOUT = os.environ.get('LOG_TO_STDOUT')


class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = 'DEBUG'


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    WTF_CSRF_ENABLED = False
    SEED_DEMO_DATA = False
    SECRET_KEY = 'testing-secret-key'


class ProductionConfig(Config):
    REQUIRE_SECRET_KEY = True
    SESSION_COOKIE_SECURE = True
    REMEMBER_COOKIE_SECURE = True
    SESSION_COOKIE_HTTPONLY = True
    REMEMBER_COOKIE_HTTPONLY = True


config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': Config,
}
