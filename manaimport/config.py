from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", populate_by_name=True)

    app_name: str = "ManaImport"
    debug: bool = False

    database_url: str = "postgresql+asyncpg://localhost:5432/mtg"

    # ManaBox CSV export to import; MANABOX_CSV is the older variable name
    csv_file: str = Field(
        default="MTG.csv",
        validation_alias=AliasChoices("CSV_FILE", "MANABOX_CSV"),
    )

    scryfall_collection_url: str = "https://api.scryfall.com/cards/collection"
    user_agent: str = "ManaImport/1.0"
    http_timeout: float = 30.0

    # Scryfall accepts at most 75 identifiers per collection request
    batch_size: int = Field(default=75, ge=1, le=75)

    # Fixed pause after every batch to stay under Scryfall's rate limit
    request_interval_ms: int = Field(default=100, ge=0)

    @property
    def request_interval_seconds(self) -> float:
        return self.request_interval_ms / 1000


settings = Settings()
