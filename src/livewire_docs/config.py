"""Configuration settings for the Livewire docs corpus."""

from pathlib import Path

from pydantic_settings import BaseSettings


def _default_data_dir() -> Path:
    """Get default data directory (~/.livewire-docs/data)."""
    return Path.home() / ".livewire-docs" / "data"


class Settings(BaseSettings):
    """Livewire docs configuration.

    Environment variables:
    - DOCS_BASE_URL: Documentation site (default: https://livewire.laravel.com)
    - DOCS_VERSION: Versioned path segment under /docs/ (default: 3.x)
    - DATA_DIR: Corpus directory (default: ~/.livewire-docs/data)
    - REQUEST_DELAY_MS: Pause after each page fetch during bulk updates
    - REQUEST_TIMEOUT: HTTP timeout in seconds
    - FETCH_RETRIES: Retries for transport errors and 5xx responses
    - DEFAULT_CATEGORY: Category for slugs missing from the category table
    - LOG_LEVEL: loguru level (default: INFO)
    """

    # Source site
    docs_base_url: str = "https://livewire.laravel.com"
    docs_version: str = "3.x"
    user_agent: str = "Livewire-Docs-CLI/1.0 (Documentation Scraper)"

    # Fetching
    request_delay_ms: int = 500  # 0 disables the pause between fetches
    request_timeout: int = 30
    fetch_retries: int = 2

    # Corpus
    data_dir: str = ""  # Default: ~/.livewire-docs/data
    default_category: str = "features"

    # Search
    search_limit: int = 10

    # Logging
    log_level: str = "INFO"

    model_config = {"env_prefix": "", "case_sensitive": False}

    def get_data_dir(self) -> Path:
        """Get corpus directory.

        Uses DATA_DIR if set, otherwise ~/.livewire-docs/data.
        """
        if self.data_dir:
            return Path(self.data_dir).expanduser()
        return _default_data_dir()

    def docs_path(self, slug: str, version: str | None = None) -> str:
        """Versioned documentation path for a slug."""
        return f"/docs/{version or self.docs_version}/{slug}"


settings = Settings()
