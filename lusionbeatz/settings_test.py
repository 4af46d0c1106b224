"""Test settings for LusionBeatz: in-memory SQLite, fast hashing, locmem mail."""

from .settings import *  # noqa: F401,F403

DEBUG = False

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

EMAIL_BACKEND = 'django.core.mail.backends.locmem.EmailBackend'

# Static files directory is optional in tests
STATICFILES_DIRS = []

LOGGING['loggers']['lusionbeatz']['level'] = 'WARNING'  # noqa: F405
