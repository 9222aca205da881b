"""Library configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """termstag settings, overridable through ``TERMSTAG_*`` environment variables."""

    # Sources
    IMAGES_DIR: Path = Path("images")  # Bare filenames resolve below this, relative to the cwd
    FETCH_TIMEOUT: float = 30.0  # Seconds

    # Rendering
    TRANSPARENCY_THRESHOLD: int = 25  # Alpha at or below is treated as transparent
    BACKGROUND_COLOR: tuple[int, int, int] = (0, 0, 0)

    # Playback
    DEFAULT_FRAME_DELAY: int = 0  # Milliseconds

    model_config = {"env_prefix": "TERMSTAG_"}


settings = Settings()
