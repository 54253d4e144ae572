import os
from datetime import timedelta

from dotenv import load_dotenv

load_dotenv()


class Config:
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-me-in-production')
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY', SECRET_KEY)
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=6)

    # Without a database URL the app falls back to the JSON file store
    DATABASE_URL = os.getenv('DATABASE_URL')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    MOCK_DB_PATH = os.getenv('MOCK_DB_PATH', 'mockdb.json')

    HOST = os.getenv('HOST', '0.0.0.0')
    PORT = int(os.getenv('PORT', '5000'))

    BCRYPT_ROUNDS = int(os.getenv('BCRYPT_ROUNDS', '10'))
    CORS_ORIGINS = os.getenv('CORS_ORIGINS', '*')

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()
    LOG_FORMAT = os.getenv('LOG_FORMAT', 'console')


class TestingConfig(Config):
    TESTING = True
    DATABASE_URL = None
    MOCK_DB_PATH = 'mockdb.test.json'
    BCRYPT_ROUNDS = 4
    LOG_LEVEL = 'WARNING'
