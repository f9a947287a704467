"""Configuration manager reading the Gemini credential from the environment."""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .settings import get_settings

API_KEY_VARIABLES = ("GEMINI_API_KEY", "API_KEY")


@dataclass
class Config:
    """Runtime configuration."""
    gemini_api_key: str
    model_name: str
    log_level: str = "INFO"
    render_zoom: float = 2.0
    jpeg_quality: int = 80


class ConfigManager:
    """Builds runtime configuration from settings and process environment."""

    def __init__(self, env_file: Optional[Path] = None):
        self.env_file = env_file

    def load_config(self) -> Config:
        """Load configuration; the API key may be empty, see validate_config."""
        if self.env_file is not None:
            load_dotenv(self.env_file)
        else:
            load_dotenv()

        settings = get_settings()

        return Config(
            gemini_api_key=self._read_api_key(),
            model_name=os.getenv("STATEMENTAI_MODEL") or settings.llm_model_name,
            log_level=os.getenv("STATEMENTAI_LOG_LEVEL") or settings.log_level,
            render_zoom=settings.render_zoom,
            jpeg_quality=settings.jpeg_quality
        )

    def validate_config(self, config: Config) -> tuple[bool, str]:
        """Validate configuration values."""
        if not config.gemini_api_key:
            return False, "API key is missing in environment variables (set GEMINI_API_KEY or API_KEY)"

        if not config.model_name:
            return False, "Model name is required"

        if config.render_zoom <= 0:
            return False, "Render zoom must be greater than zero"

        if not 1 <= config.jpeg_quality <= 100:
            return False, "JPEG quality must be between 1 and 100"

        return True, "Configuration is valid"

    @staticmethod
    def _read_api_key() -> str:
        for name in API_KEY_VARIABLES:
            value = os.getenv(name, "").strip()
            if value:
                return value
        return ""
