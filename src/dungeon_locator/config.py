"""Runtime configuration for the dungeon locator CLI."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from dungeon_locator.models import LabelMode, PlacementConfig


class Settings(BaseSettings):
    """Environment-driven runtime settings."""

    model_config = SettingsConfigDict(env_prefix="DUNGEON_LOCATOR_", env_file=".env", extra="ignore")

    app_name: str = "dungeon-locator"
    log_level: str = "WARNING"
    spawn_frequency: int = Field(default=10, ge=1, description="Dungeon spawn frequency config value.")
    min_radius: int = Field(default=40, ge=0, description="Minimum nearby-point distance in blocks.")
    max_radius: int = Field(default=100, ge=1, description="Maximum nearby-point distance in blocks.")
    search_radius: int = Field(default=5, ge=0, description="Grid cells to search in each direction.")
    label_mode: LabelMode = LabelMode.APPROXIMATE
    classifier_bin: str | None = Field(
        default=None,
        description="Path to a biome tool supporting `biome-at ... --json`; enables exact labels.",
    )
    classifier_command: str = "biome-at"
    minecraft_version: str = "1.12.2"
    seedcracker_log_path: str | None = None

    def placement_config(self) -> PlacementConfig:
        return PlacementConfig(
            frequency=self.spawn_frequency,
            min_radius=self.min_radius,
            max_radius=self.max_radius,
        )


settings = Settings()
