import os

_MODULES = {
    "development": "config.development",
    "dev": "config.development",
    "testing": "config.testing",
    "test": "config.testing",
    "production": "config.production",
    "prod": "config.production",
}


def get_settings_module() -> str:
    """Dotted path of the settings module chosen by APP_ENV (default: development)."""
    return _MODULES.get(os.getenv("APP_ENV", "development").strip().lower(), "config.development")
