from functools import lru_cache
from typing import List
import logging

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, frozen=True)

    env: str = "dev"
    jwt_secret: str = "change_me_super_secret_jwt_signing_key"
    jwt_algorithm: str = "HS256"
    database_url: str = "sqlite:///./pizza.db"
    bcrypt_rounds: int = 12
    list_per_page: int = 10
    backend_cors_origins: str = "http://localhost:5173"
    log_level: str = "INFO"

    # Default admin created by init_db in dev/test
    admin_name: str = "Pizza Admin"
    admin_email: str = "a@jwt.com"
    admin_password: str = "admin"

    @property
    def cors_origins(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        return [origin.strip() for origin in self.backend_cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
