"""
Django settings for the bartendershub project.

Every value that differs between environments is read from the process
environment. A `.env` file in the project root is loaded first so local
development does not need exported variables.
"""

import os
import sys
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(BASE_DIR / '.env')


def env_bool(name, default=False):
    """Return True when the env var is set to a truthy value."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def env_int(name, default):
    """Parse an integer env var, falling back when unset or malformed."""
    try:
        return int(os.getenv(name, ''))
    except ValueError:
        return default


def env_list(name):
    """Split a comma separated env var into a list of non-empty items."""
    return [item.strip() for item in os.getenv(name, '').split(',') if item.strip()]


TESTING = any(arg == 'test' or 'pytest' in arg for arg in sys.argv)

SECRET_KEY = os.getenv('DJANGO_SECRET_KEY', 'django-insecure-bartendershub-local-development-key')

DEBUG = env_bool('DEBUG', True)

ALLOWED_HOSTS = env_list('ALLOWED_HOSTS') or ['localhost', '127.0.0.1', 'testserver']


INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'corsheaders',
    'rest_framework',
    'cocktails',
]

MIDDLEWARE = [
    'corsheaders.middleware.CorsMiddleware',
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'bartendershub.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'bartendershub.wsgi.application'


# Database

DATABASES = {
    'default': {
        'ENGINE': os.getenv('DATABASE_ENGINE', 'django.db.backends.sqlite3'),
        'NAME': os.getenv('DATABASE_NAME', str(BASE_DIR / 'db.sqlite3')),
        'USER': os.getenv('DATABASE_USER', ''),
        'PASSWORD': os.getenv('DATABASE_PASSWORD', ''),
        'HOST': os.getenv('DATABASE_HOST', ''),
        'PORT': os.getenv('DATABASE_PORT', ''),
    }
}

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

AUTH_USER_MODEL = 'cocktails.User'


# Cache (listing responses and cache metrics)

REDIS_URL = os.getenv('REDIS_URL', '')

if REDIS_URL and not env_bool('DISABLE_REDIS') and not TESTING:
    CACHES = {
        'default': {
            'BACKEND': 'django.core.cache.backends.redis.RedisCache',
            'LOCATION': REDIS_URL,
        }
    }
else:
    CACHES = {
        'default': {
            'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
            'LOCATION': 'bartendershub',
        }
    }

COCKTAIL_LIST_CACHE_SECONDS = env_int('COCKTAIL_LIST_CACHE_SECONDS', 600)


# Passwords

PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.BCryptSHA256PasswordHasher',
    'django.contrib.auth.hashers.PBKDF2PasswordHasher',
]

if TESTING:
    PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

AUTH_PASSWORD_VALIDATORS = [
    {'NAME': 'cocktails.validators.PasswordStrengthValidator'},
]


# Internationalization

LANGUAGE_CODE = 'en-us'

TIME_ZONE = 'UTC'

USE_I18N = True

USE_TZ = True


# Static files

STATIC_URL = 'static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'


# Rate limiting (per client IP)

RATE_LIMIT_ENABLED = env_bool('RATE_LIMIT_ENABLED', not TESTING)
RATE_LIMIT_WINDOW = env_int('RATE_LIMIT_WINDOW', 15)
RATE_LIMITS = {
    'general': f"{env_int('RATE_LIMIT_REQUESTS', 100)}/{RATE_LIMIT_WINDOW}m",
    'auth': f"{env_int('RATE_LIMIT_AUTH_REQUESTS', 5)}/15m",
    'upload': f"{env_int('RATE_LIMIT_UPLOAD_REQUESTS', 10)}/15m",
}


# REST framework

REST_FRAMEWORK = {
    'DEFAULT_AUTHENTICATION_CLASSES': [
        'cocktails.authentication.JWTAuthentication',
    ],
    'DEFAULT_PERMISSION_CLASSES': [
        'rest_framework.permissions.AllowAny',
    ],
    'DEFAULT_RENDERER_CLASSES': [
        'rest_framework.renderers.JSONRenderer',
    ],
    'DEFAULT_PARSER_CLASSES': [
        'rest_framework.parsers.JSONParser',
        'rest_framework.parsers.MultiPartParser',
        'rest_framework.parsers.FormParser',
    ],
    'DEFAULT_THROTTLE_CLASSES': [
        'cocktails.throttling.GeneralRateThrottle',
    ],
    'DEFAULT_THROTTLE_RATES': RATE_LIMITS,
    'EXCEPTION_HANDLER': 'cocktails.exceptions.api_exception_handler',
    'TEST_REQUEST_DEFAULT_FORMAT': 'json',
}


# JWT auth

DEV_JWT_SECRET = 'bartendershub-development-jwt-secret-change-me'
JWT_SECRET = os.getenv('JWT_SECRET', '') or DEV_JWT_SECRET
JWT_EXPIRE_DAYS = env_int('JWT_EXPIRE_DAYS', 7)
USE_HTTP_ONLY_COOKIES = env_bool('USE_HTTP_ONLY_COOKIES')
AUTO_VERIFY_USERS = env_bool('AUTO_VERIFY_USERS')


# Frontend, CORS and realtime origins

FRONTEND_URL = os.getenv('FRONTEND_URL', '').strip()
FRONTEND_URL_PROD = os.getenv('FRONTEND_URL_PROD', '').strip()
DEFAULT_FRONTEND_URL = 'http://localhost:3000'
DEFAULT_PROD_FRONTEND_URL = 'https://bartendershub.onrender.com'

CORS_ALLOWED_ORIGINS = list(dict.fromkeys(
    env_list('CORS_ORIGINS')
    + ([FRONTEND_URL] if FRONTEND_URL else [])
    + ['http://localhost:5173', 'http://localhost:3000']
))
CORS_ALLOWED_ORIGIN_REGEXES = [
    r'^https://([a-z0-9-]+\.)?bartendershub\.com$',
]
CORS_ALLOW_CREDENTIALS = True


# Cloudinary

CLOUDINARY_CLOUD_NAME = os.getenv('CLOUDINARY_CLOUD_NAME', '')
CLOUDINARY_API_KEY = os.getenv('CLOUDINARY_API_KEY', '')
CLOUDINARY_API_SECRET = os.getenv('CLOUDINARY_API_SECRET', '')
MAX_FILE_SIZE = env_int('MAX_FILE_SIZE', 5_000_000)
MAX_AVATAR_SIZE = env_int('MAX_AVATAR_SIZE', 2_000_000)


# Email

EMAIL_SERVICE = os.getenv('EMAIL_SERVICE', 'smtp').strip().lower()
EMAIL_DISABLE = env_bool('EMAIL_DISABLE')
SENDGRID_API_KEY = os.getenv('SENDGRID_API_KEY', '')
EMAIL_BACKEND = 'django.core.mail.backends.smtp.EmailBackend'
EMAIL_HOST = os.getenv('EMAIL_HOST', 'smtp.gmail.com')
EMAIL_PORT = env_int('EMAIL_PORT', 587)
EMAIL_HOST_USER = os.getenv('EMAIL_USER', '')
EMAIL_HOST_PASSWORD = os.getenv('EMAIL_PASSWORD', '')
EMAIL_USE_TLS = EMAIL_PORT == 587
EMAIL_USE_SSL = EMAIL_PORT == 465
EMAIL_TIMEOUT = env_int('EMAIL_TIMEOUT', 10)
EMAIL_FROM = os.getenv('EMAIL_FROM', '') or EMAIL_HOST_USER or 'no-reply@bartendershub.local'
EMAIL_FROM_NAME = os.getenv('EMAIL_FROM_NAME', 'BartendersHub')
DEFAULT_FROM_EMAIL = f'{EMAIL_FROM_NAME} <{EMAIL_FROM}>'


# Admin tooling

PRIMARY_ADMIN_EMAIL = os.getenv('PRIMARY_ADMIN_EMAIL', os.getenv('ADMIN_EMAIL', '')).strip().lower()


# Logging

LOG_LEVEL = os.getenv('LOG_LEVEL', 'WARNING' if TESTING else 'INFO').upper()

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '%(asctime)s %(levelname)s %(name)s: %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': 'WARNING',
    },
    'loggers': {
        'cocktails': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
        'hubclient': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
    },
}
