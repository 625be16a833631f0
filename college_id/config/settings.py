from typing import List, Optional, Union
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Application
    ENVIRONMENT: str = "development"
    NAME: str = "College ID Service"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"
    """Pydantic v2 doesn't support parsing List[str] from a plain comma-separated string by default anymore."""
    ALLOWED_HOSTS: Union[str, List[str]] = (
        "https://6908b474f5c18e306ce912e5--college-id.netlify.app,http://localhost:4200"
    )
    LOG_LEVEL: str = "info"
    LOG_CONFIG_PATH: str = "logging_config.json"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 5000

    # Database
    MONGO_URI: Optional[str] = None
    MONGO_DB_NAME: str = "college_id"
    MONGO_COLLECTION: str = "students"
    MONGO_SERVER_SELECTION_TIMEOUT_MS: int = 5000

    # Institution
    COLLEGE_NAME: str = "BVC COLLEGE OF ENGINEERING"
    COLLEGE_LOCATION: str = "Palacherla, Rajahmundry, East Godavari, Andhra Pradesh"
    UNIQUE_CODE_PREFIX: str = "BVC"

    # Admission
    ADMISSION_MAX_ATTEMPTS: int = 3

    @field_validator("ALLOWED_HOSTS", mode="before")
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> Union[List[str], str]:
        if not v:
            return []
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",")]
        return v

    @field_validator("ADMISSION_MAX_ATTEMPTS")
    def at_least_one_attempt(cls, v: int) -> int:
        if v < 1:
            raise ValueError("ADMISSION_MAX_ATTEMPTS must be at least 1")
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


settings = Settings()
