from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment (.env next to the working directory, if any)
load_dotenv()


class StorefrontSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="STOREFRONT_")

    api_url: str = "http://localhost:5000/api"
    session_secret: str = "breakfast4u-session-secret"  # 🔐 Override in production
    request_timeout: float = 10.0
    list_limit: int = 100
    notice_seconds: float = 3.0
    log_level: str = "INFO"


settings = StorefrontSettings()
