"""Runtime settings for the wayfinding API.

Values come from `CLINICPATH_`-prefixed environment variables or a `.env`
file. Walking speeds feed the travel-time estimate; solver fields pick the
default search strategy for `RouteService`.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CLINICPATH_",
        extra="ignore",
    )

    app_name: str = "ClinicPath Wayfinding API"
    app_version: str = "1.0.0"
    cors_origins: str = "*"
    log_level: str = "INFO"

    # Map units per minute; the floor plans use roughly one unit per metre.
    fast_walking_speed: float = 80.0
    slow_walking_speed: float = 50.0

    solver_strategy: str = "dijkstra"
    solver_heuristic: str = "euclidean"

    map_file: str | None = None
    routes_file: str | None = None


settings = Settings()
