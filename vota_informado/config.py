from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
import os

from services.affinity_engine.engine import DEFAULT_DATASET_PATH

# Load .env file if it exists, for local development
# In production, environment variables should be set directly.
if os.path.exists(".env"):
    from dotenv import load_dotenv
    load_dotenv()

class GeminiSettings(BaseSettings):
    api_key: str = ""
    model: str = "gemini-2.5-flash"
    base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    timeout_seconds: float = Field(default=30.0, gt=0)

    model_config = SettingsConfigDict(env_prefix='GEMINI_')

class AppSettings(BaseSettings):
    dataset_path: str = str(DEFAULT_DATASET_PATH)
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix='VOTA_')
