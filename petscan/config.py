"""Application configuration loaded from environment variables."""

from typing import Optional

from pydantic_settings import BaseSettings
from pydantic import Field
from functools import lru_cache


class Settings(BaseSettings):
    """Centralised settings — no hardcoded values anywhere else."""

    # Database
    database_url: str = Field("sqlite+aiosqlite:///./petscan.db", env="DATABASE_URL")

    # Upstream product providers
    go_upc_api_key: Optional[str] = Field(None, env="GO_UPC_API_KEY")
    go_upc_base_url: str = Field("https://go-upc.com/api/v1", env="GO_UPC_BASE_URL")
    open_pet_food_facts_base_url: str = Field(
        "https://world.openpetfoodfacts.org", env="OPEN_PET_FOOD_FACTS_BASE_URL"
    )
    open_food_facts_base_url: str = Field(
        "https://world.openfoodfacts.org", env="OPEN_FOOD_FACTS_BASE_URL"
    )
    user_agent: str = Field("petscan/1.0 (+allergy-check)", env="USER_AGENT")
    lookup_timeout_seconds: float = Field(8.0, env="LOOKUP_TIMEOUT_SECONDS")
    lookup_cache_ttl_seconds: int = Field(900, env="LOOKUP_CACHE_TTL_SECONDS")
    lookup_cache_maxsize: int = Field(1_000, env="LOOKUP_CACHE_MAXSIZE")

    # Profile
    default_pet_name: str = Field("My Dog", env="DEFAULT_PET_NAME")
    # Seed list shown before the user has saved anything; JSON list in the env.
    default_allergens: list[str] = Field(
        default_factory=lambda: ["chicken", "wheat"], env="DEFAULT_ALLERGENS"
    )

    # Security
    allowed_origins: str = Field("http://localhost:3000", env="ALLOWED_ORIGINS")

    # App
    app_env: str = Field("development", env="APP_ENV")
    log_level: str = Field("INFO", env="LOG_LEVEL")

    # Derived
    @property
    def allowed_origins_list(self) -> list[str]:
        """Return ALLOWED_ORIGINS as a list."""
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached Settings instance."""
    return Settings()


settings = get_settings()
