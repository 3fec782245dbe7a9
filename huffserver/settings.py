from pathlib import Path
from decouple import Csv, config  # make sure python-decouple is installed

# --- Base Directory ---
BASE_DIR = Path(__file__).resolve().parent.parent

# --- Security ---
SECRET_KEY = config("DJANGO_SECRET_KEY", default="django-insecure-huffman-dev-only")
DEBUG = config("DJANGO_DEBUG", default=False, cast=bool)
ALLOWED_HOSTS = config("DJANGO_ALLOWED_HOSTS", default="localhost,127.0.0.1", cast=Csv())

# --- Installed Apps ---
INSTALLED_APPS = [
    "huff",        # huffman codec + API
    "channels",    # Django Channels
]

# --- Middleware ---
MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

# --- URL Configuration ---
ROOT_URLCONF = "huffserver.urls"

# --- ASGI ---
ASGI_APPLICATION = "huffserver.asgi.application"

# --- Database ---
# operation records live in the cache, nothing is persisted
DATABASES = {}

# --- Channels ---
REDIS_URL = config("REDIS_URL", default="")

if REDIS_URL:
    CHANNEL_LAYERS = {
        "default": {
            "BACKEND": "channels_redis.core.RedisChannelLayer",
            "CONFIG": {"hosts": [REDIS_URL]},
        },
    }
else:
    CHANNEL_LAYERS = {
        "default": {"BACKEND": "channels.layers.InMemoryChannelLayer"},
    }

# --- Operation registry ---
HUFF_OPERATION_CACHE = config("HUFF_OPERATION_CACHE", default="default")
HUFF_OPERATION_TTL = config("HUFF_OPERATION_TTL", default=3600, cast=int)

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "huff-operations",
        "OPTIONS": {
            "MAX_ENTRIES": config("HUFF_OPERATION_MAX_ENTRIES", default=1000, cast=int),
        },
    },
}

# --- Uploads ---
HUFF_MAX_UPLOAD_SIZE = config("HUFF_MAX_UPLOAD_SIZE", default=50 * 1024 * 1024, cast=int)

# --- Logging ---
HUFF_LOG_LEVEL = config("HUFF_LOG_LEVEL", default="INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {
            "format": "{asctime} {levelname} {name}: {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "simple",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "WARNING",
    },
    "loggers": {
        "huff": {
            "handlers": ["console"],
            "level": HUFF_LOG_LEVEL,
            "propagate": False,
        },
    },
}

# --- Internationalization ---
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True
