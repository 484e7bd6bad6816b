# config/settings.py
"""Configuration management for the catalog export service."""

import os
from dotenv import load_dotenv


class Config:
    """Centralized configuration management."""

    def __init__(self):
        """Initialize configuration by loading environment variables."""
        load_dotenv()
        self._validate_environment()

    @property
    def api_token(self) -> str:
        """Token expected in the X-API-TOKEN header of /api requests."""
        return os.getenv("API_TOKEN")

    @property
    def app_env(self) -> str:
        """Application environment (dev, test, prod)."""
        return os.getenv("APP_ENV", "prod").lower()

    @property
    def is_dev_mode(self) -> bool:
        """True when detailed error causes may be shown to clients."""
        return self.app_env == "dev"

    @property
    def maintenance_mode(self) -> bool:
        """Reject all requests with 503 while enabled."""
        return self._get_bool("MAINTENANCE_MODE", False)

    @property
    def default_currency(self) -> str:
        """Currency code used for products without one."""
        return os.getenv("DEFAULT_CURRENCY", "USD")

    @property
    def base_dir(self) -> str:
        """Base directory path."""
        return os.getcwd()

    @property
    def products_file(self) -> str:
        """JSON fixture the product catalog is loaded from."""
        return os.getenv(
            "PRODUCTS_FILE", os.path.join(self.base_dir, "data", "products.json")
        )

    @property
    def export_dir(self) -> str:
        """Output directory for exports written from the command line."""
        return os.getenv("EXPORT_DIR", os.path.join(self.base_dir, "exported_data"))

    @property
    def export_chunk_size(self) -> int:
        """Records serialized per streamed chunk."""
        return int(os.getenv("EXPORT_CHUNK_SIZE", "500"))

    @property
    def export_include_details(self) -> bool:
        """Append timestamps, active flag, categories and attributes to exports."""
        return self._get_bool("EXPORT_INCLUDE_DETAILS", False)

    @property
    def host(self) -> str:
        """Interface the HTTP server binds to."""
        return os.getenv("HOST", "0.0.0.0")

    @property
    def port(self) -> int:
        """Port the HTTP server listens on."""
        return int(os.getenv("PORT", "8080"))

    @property
    def log_level(self) -> str:
        """Logging level name."""
        return os.getenv("LOG_LEVEL", "INFO").upper()

    @staticmethod
    def _get_bool(name: str, default: bool) -> bool:
        value = os.getenv(name)
        if value is None:
            return default
        return value.strip().lower() in ("1", "true", "yes", "on")

    def _validate_environment(self):
        """Validate required environment variables."""
        required = ["API_TOKEN"]
        missing = [var for var in required if not os.getenv(var)]

        if missing:
            raise RuntimeError(
                f"Missing required environment variables: {', '.join(missing)}"
            )
