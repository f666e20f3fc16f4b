import os

def get_settings_module() -> str:
    # Read APP_ENV, defaulting to 'development'
    env = os.getenv("APP_ENV", "development").lower()

    # 1. Production
    if env in {"prod", "production"}:
        return "config.production"
    
    # 2. Testing
    if env in {"test", "testing"}:
        return "config.testing"
    
    # 3. Everything else falls back to Development
    return "config.development"
