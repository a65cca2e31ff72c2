import os

# APP_ENV value -> settings module
_MODULES = {
    "prod": "config.production",
    "production": "config.production",
    "test": "config.testing",
    "testing": "config.testing",
}


def get_settings_module() -> str:
    """Chọn module cấu hình theo biến APP_ENV (mặc định: development)."""
    env = os.getenv("APP_ENV", "development").strip().lower()
    return _MODULES.get(env, "config.development")
