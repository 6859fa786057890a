"""
Django settings for the payroll backend (core project).

Values are read from the environment (and an optional .env file next to
manage.py) through django-environ.
"""
import os
from datetime import timedelta
from pathlib import Path

import environ
from celery.schedules import crontab

BASE_DIR = Path(__file__).resolve().parent.parent

env = environ.Env(
    DEBUG=(bool, False),
    JWT_ACCESS_MINUTES=(int, 60),
    JWT_REFRESH_DAYS=(int, 7),
    ADVANCE_SUGGESTED_RECOVERY_PERCENT=(int, 100),
)

environ.Env.read_env(os.path.join(BASE_DIR, ".env"))

# ========== Core ==========
DEBUG = env("DEBUG")
SECRET_KEY = env("SECRET_KEY", default="django-insecure-payroll-dev-key-change-me")
ALLOWED_HOSTS = env.list("ALLOWED_HOSTS", default=["127.0.0.1", "localhost", "testserver"])

# ========== Database ==========
DATABASES = {
    "default": env.db("DATABASE_URL", default=f"sqlite:///{BASE_DIR / 'db.sqlite3'}"),
}

# -------------------------------------------------
# Applications
# AuthN must stay ahead of the other project apps because it defines AUTH_USER_MODEL
# -------------------------------------------------
INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",

    # Third-party
    "rest_framework",
    "rest_framework_simplejwt",

    # Project apps
    "AuthN",
    "EmployeeManagement",
    "PayrollSystem.apps.PayrollsystemConfig",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "core.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "core.wsgi.application"

# -------------------------------------------------
# Auth
# -------------------------------------------------
AUTH_USER_MODEL = "AuthN.BaseUserModel"

AUTH_PASSWORD_VALIDATORS = [
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator"},
    {"NAME": "django.contrib.auth.password_validation.CommonPasswordValidator"},
]

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": (
        "rest_framework_simplejwt.authentication.JWTAuthentication",
    ),
    "DEFAULT_PERMISSION_CLASSES": (
        "rest_framework.permissions.IsAuthenticated",
    ),
    "DEFAULT_RENDERER_CLASSES": (
        "rest_framework.renderers.JSONRenderer",
    ),
    "EXCEPTION_HANDLER": "core.exception_handler.envelope_exception_handler",
    "COERCE_DECIMAL_TO_STRING": False,
    # ?format=xlsx on the salary report selects the export, not a renderer
    "URL_FORMAT_OVERRIDE": None,
}

SIMPLE_JWT = {
    "ACCESS_TOKEN_LIFETIME": timedelta(minutes=env("JWT_ACCESS_MINUTES")),
    "REFRESH_TOKEN_LIFETIME": timedelta(days=env("JWT_REFRESH_DAYS")),
    "ROTATE_REFRESH_TOKENS": True,
    "AUTH_HEADER_TYPES": ("Bearer",),
}

# -------------------------------------------------
# I18N / TZ
# All payroll dates are stored in UTC
# -------------------------------------------------
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# -------------------------------------------------
# Payroll
# -------------------------------------------------
PAYROLL = {
    "CURRENCY": env("PAYROLL_CURRENCY", default="BDT"),
    "ADVANCE_SUGGESTED_RECOVERY_PERCENT": env("ADVANCE_SUGGESTED_RECOVERY_PERCENT"),
    "ADVANCE_HISTORY_PAGE_SIZE": 10,
    "ADVANCE_HISTORY_MAX_PAGE_SIZE": 100,
}

# -------------------------------------------------
# Celery
# -------------------------------------------------
CELERY_BROKER_URL = env("CELERY_BROKER_URL", default="redis://localhost:6379/0")
CELERY_RESULT_BACKEND = env("CELERY_RESULT_BACKEND", default="redis://localhost:6379/0")
CELERY_TIMEZONE = TIME_ZONE
CELERY_TASK_ALWAYS_EAGER = env.bool("CELERY_TASK_ALWAYS_EAGER", default=False)
CELERY_BEAT_SCHEDULE = {
    "generate-monthly-salaries": {
        "task": "generate_monthly_salaries_task",
        "schedule": crontab(minute=30, hour=0, day_of_month=1),
    },
}

# -------------------------------------------------
# Logging
# -------------------------------------------------
LOG_LEVEL = env("LOG_LEVEL", default="INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{asctime} {levelname} {name} {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "WARNING",
    },
    "loggers": {
        "core": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "AuthN": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "EmployeeManagement": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "PayrollSystem": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
    },
}
