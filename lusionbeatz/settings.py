"""
==============================================================================
LUSIONBEATZ - DJANGO SETTINGS
==============================================================================
Django settings for LusionBeatz: a marketplace for music samples.

Configuration Overview:
    - Database: MySQL (localhost by default, overridable via environment)
    - Auth: Custom User Model (accounts.CustomUser), session cookies
    - Payments: Manual UPI transfer confirmed by a UTR number
    - Apps: accounts, core, console, reports

Environment variables:
    DJANGO_SECRET_KEY, DJANGO_DEBUG, DJANGO_ALLOWED_HOSTS,
    DB_ENGINE, DB_NAME, DB_USER, DB_PASSWORD, DB_HOST, DB_PORT,
    UPI_ID, UPI_PAYEE_NAME, PLATFORM_COMMISSION_RATE

Author: LusionBeatz Development Team
==============================================================================
"""

from decimal import Decimal
from pathlib import Path
import os

# ==============================================================================
# PATH CONFIGURATION
# ==============================================================================
# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent


# ==============================================================================
# SECURITY SETTINGS
# ==============================================================================
# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.environ.get(
    'DJANGO_SECRET_KEY',
    'django-insecure-lusionbeatz-dev-key-change-in-production'
)

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = os.environ.get('DJANGO_DEBUG', 'True').lower() in ('1', 'true', 'yes')

ALLOWED_HOSTS = os.environ.get(
    'DJANGO_ALLOWED_HOSTS', 'localhost,127.0.0.1,0.0.0.0'
).split(',')


# ==============================================================================
# APPLICATION DEFINITION
# ==============================================================================
INSTALLED_APPS = [
    # Django built-in apps (order matters for admin styling)
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',

    # ==========================================================================
    # LUSIONBEATZ APPS
    # ==========================================================================
    'accounts.apps.AccountsConfig',   # Users, OTP verification, bank details
    'core.apps.CoreConfig',           # Samples, cart, checkout, orders
    'console.apps.ConsoleConfig',     # Admin approval console
    'reports.apps.ReportsConfig',     # PDF receipts and earnings reports
]

# Middleware - runs on every request/response cycle
MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'lusionbeatz.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        # Global templates directory (base.html, shared partials)
        'DIRS': [BASE_DIR / 'templates'],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
                'core.context_processors.cart_summary',
            ],
        },
    },
]

WSGI_APPLICATION = 'lusionbeatz.wsgi.application'


# ==============================================================================
# DATABASE CONFIGURATION
# ==============================================================================
# MySQL by default. Create the database first:
#   CREATE DATABASE lusionbeatz_db CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;
DB_ENGINE = os.environ.get('DB_ENGINE', 'django.db.backends.mysql')

DATABASES = {
    'default': {
        'ENGINE': DB_ENGINE,
        'NAME': os.environ.get('DB_NAME', 'lusionbeatz_db'),
        'USER': os.environ.get('DB_USER', 'root'),
        'PASSWORD': os.environ.get('DB_PASSWORD', ''),
        'HOST': os.environ.get('DB_HOST', 'localhost'),
        'PORT': os.environ.get('DB_PORT', '3306'),
    }
}

if DB_ENGINE == 'django.db.backends.mysql':
    DATABASES['default']['OPTIONS'] = {
        'charset': 'utf8mb4',
        'init_command': "SET sql_mode='STRICT_TRANS_TABLES'",
    }
elif DB_ENGINE == 'django.db.backends.sqlite3':
    # Local development without a MySQL server
    DATABASES['default'] = {
        'ENGINE': DB_ENGINE,
        'NAME': os.environ.get('DB_NAME', str(BASE_DIR / 'db.sqlite3')),
    }


# ==============================================================================
# CUSTOM USER MODEL
# ==============================================================================
# This MUST be set before running the first migration!
AUTH_USER_MODEL = 'accounts.CustomUser'


# ==============================================================================
# PASSWORD VALIDATION
# ==============================================================================
AUTH_PASSWORD_VALIDATORS = [
    {
        'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator',
        'OPTIONS': {
            'min_length': 6,
        }
    },
]


# ==============================================================================
# AUTHENTICATION SETTINGS
# ==============================================================================
LOGIN_URL = 'accounts:login'

LOGIN_REDIRECT_URL = 'accounts:dashboard'

LOGOUT_REDIRECT_URL = 'core:home'


# ==============================================================================
# INTERNATIONALIZATION
# ==============================================================================
LANGUAGE_CODE = 'en-us'

# India Standard Time - all prices are in INR
TIME_ZONE = 'Asia/Kolkata'

USE_I18N = True
USE_TZ = True


# ==============================================================================
# STATIC & MEDIA FILES
# ==============================================================================
STATIC_URL = '/static/'

STATICFILES_DIRS = [
    BASE_DIR / 'static',
]

STATIC_ROOT = BASE_DIR / 'staticfiles'

# Media files are creator uploads (audio previews, cover art)
MEDIA_URL = '/media/'

MEDIA_ROOT = Path(os.environ.get('MEDIA_ROOT', BASE_DIR / 'media'))

# Largest upload accepted by the sample form (50 MB)
MAX_AUDIO_UPLOAD_SIZE = 50 * 1024 * 1024


# ==============================================================================
# MARKETPLACE CONFIGURATION
# ==============================================================================
# Buyers pay this UPI ID manually, then submit the UTR of the transfer
UPI_ID = os.environ.get('UPI_ID', 'prhallad2@ybl')
UPI_PAYEE_NAME = os.environ.get('UPI_PAYEE_NAME', 'LusionBeatz')

# Share of every sale kept by the platform; the rest goes to the creator
PLATFORM_COMMISSION_RATE = Decimal(os.environ.get('PLATFORM_COMMISSION_RATE', '0.20'))

# UTR bounds accepted at checkout
UTR_MIN_LENGTH = 6
UTR_MAX_LENGTH = 20

# Email verification codes
OTP_LENGTH = 6
OTP_EXPIRY_MINUTES = 10

ALLOWED_AUDIO_EXTENSIONS = ['wav', 'mp3']


# ==============================================================================
# DEFAULT PRIMARY KEY FIELD TYPE
# ==============================================================================
DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'


# ==============================================================================
# EMAIL CONFIGURATION
# ==============================================================================
# OTP codes and order confirmations are printed to the terminal in development
EMAIL_BACKEND = os.environ.get(
    'EMAIL_BACKEND', 'django.core.mail.backends.console.EmailBackend'
)
DEFAULT_FROM_EMAIL = os.environ.get('DEFAULT_FROM_EMAIL', 'LusionBeatz <no-reply@lusionbeatz.in>')

# Absolute base used for links inside e-mails
SITE_URL = os.environ.get('SITE_URL', 'http://localhost:8000')


# ==============================================================================
# SESSION CONFIGURATION
# ==============================================================================
# Two weeks; the checkout step is kept in the session as well
SESSION_COOKIE_AGE = 60 * 60 * 24 * 14

SESSION_SAVE_EVERY_REQUEST = True


# ==============================================================================
# LOGGING CONFIGURATION
# ==============================================================================
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{levelname} {asctime} {name} {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': 'INFO',
        },
        'lusionbeatz': {
            'handlers': ['console'],
            'level': os.environ.get('LUSIONBEATZ_LOG_LEVEL', 'DEBUG'),
        },
    },
}
