"""Application settings loader from YAML configuration."""
import yaml
from pathlib import Path
from typing import Optional
from dataclasses import dataclass


@dataclass
class AppSettings:
    """Application-wide settings loaded from config.yaml."""

    # App info
    app_name: str
    app_version: str

    # Logging
    log_level: str
    log_max_file_size_mb: int
    log_backup_count: int

    # LLM
    llm_model_name: str

    # PDF rendering
    render_zoom: float
    jpeg_quality: int

    # Paths
    home_dir: str
    logs_dir: str
    log_file: str

    # HTTP server
    server_host: str
    server_port: int

    @classmethod
    def load(cls, config_path: Path = None) -> "AppSettings":
        """Load settings from YAML file."""
        if config_path is None:
            # Default to config.yaml shipped inside the package
            config_path = Path(__file__).parent.parent / "config.yaml"

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)

        return cls(
            app_name=config["app"]["name"],
            app_version=str(config["app"]["version"]),
            log_level=config["logging"]["level"],
            log_max_file_size_mb=config["logging"]["max_file_size_mb"],
            log_backup_count=config["logging"]["backup_count"],
            llm_model_name=config["llm"]["model_name"],
            render_zoom=float(config["rendering"]["zoom"]),
            jpeg_quality=int(config["rendering"]["jpeg_quality"]),
            home_dir=config["paths"]["home_dir"],
            logs_dir=config["paths"]["logs_dir"],
            log_file=config["paths"]["log_file"],
            server_host=config["server"]["host"],
            server_port=int(config["server"]["port"])
        )


# Global settings instance
_settings: Optional[AppSettings] = None


def get_settings() -> AppSettings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = AppSettings.load()
    return _settings
