"""Pydantic configuration models for tenable-docs-mcp."""

from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator

DEFAULT_BASE_ORIGIN = "https://developer.tenable.com"
DEFAULT_REFERENCE_URL = f"{DEFAULT_BASE_ORIGIN}/reference"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class SeedPage(BaseModel):
    """A documentation page whose links seed the search index."""

    url: str = Field(..., description="Page to fetch and harvest links from")
    category: str = Field(..., description="Category assigned to every link found on the page")

    model_config = {"extra": "forbid"}


class NetworkConfig(BaseModel):
    """Configuration for the HTTP client."""

    timeout: float = Field(30.0, gt=0, description="Total request timeout in seconds")
    user_agent: str = Field(DEFAULT_USER_AGENT, description="User-Agent header")
    max_redirects: int = Field(5, ge=0, description="Maximum redirects to follow")
    max_retries: int = Field(2, ge=0, description="Retry attempts for transient failures")
    retry_base_delay: float = Field(0.5, ge=0, description="Base delay for exponential backoff")
    max_content_size: int = Field(
        10 * 1024 * 1024,
        ge=1024,
        description="Maximum response size in bytes",
    )

    model_config = {"extra": "forbid"}


class IndexConfig(BaseModel):
    """Configuration for the in-memory search index."""

    base_origin: str = Field(DEFAULT_BASE_ORIGIN, description="Origin used to resolve root-relative links")
    permitted_domain: str = Field(
        "developer.tenable.com",
        description="Only links on this host (or its subdomains) are indexed",
    )
    seed_pages: list[SeedPage] = Field(
        default_factory=lambda: [
            SeedPage(url=DEFAULT_REFERENCE_URL, category="API References"),
            SeedPage(url=f"{DEFAULT_BASE_ORIGIN}/recipes", category="Recipes"),
        ],
        description="Pages fetched at startup to build the index",
    )
    max_results: int = Field(10, ge=1, le=100, description="Maximum search results returned")

    model_config = {"extra": "forbid"}


class SearchConfig(BaseModel):
    """Configuration for search query validation."""

    min_query_length: int = Field(2, ge=1, description="Minimum trimmed query length")
    max_query_length: int = Field(200, ge=1, description="Maximum trimmed query length")

    model_config = {"extra": "forbid"}

    @model_validator(mode="after")
    def _check_bounds(self) -> "SearchConfig":
        if self.min_query_length > self.max_query_length:
            raise ValueError("min_query_length must not exceed max_query_length")
        return self


class ReadConfig(BaseModel):
    """Configuration for the page-read tool."""

    allowed_domains: list[str] = Field(
        default_factory=lambda: ["developer.tenable.com", "tenable.com"],
        description="Hosts (and their subdomains) that may be read",
    )
    fallback_url: str = Field(
        DEFAULT_REFERENCE_URL,
        description="Page served instead when the requested page returns 404",
    )
    max_content_length: Optional[int] = Field(
        None,
        ge=1,
        description="Reject pages whose markup exceeds this many characters",
    )
    remove_selectors: Optional[list[str]] = Field(
        None,
        description="CSS selectors to strip (replaces the defaults)",
    )
    keep_selectors: Optional[list[str]] = Field(
        None,
        description="CSS selectors for the main content region (replaces the defaults)",
    )

    model_config = {"extra": "forbid"}


class CacheConfig(BaseModel):
    """Configuration for the page-read result cache."""

    enabled: bool = Field(True, description="Cache converted pages in memory")
    max_size: int = Field(100, ge=1, description="Maximum number of cached pages")
    ttl_seconds: float = Field(24 * 60 * 60, gt=0, description="Seconds before a cached page expires")

    model_config = {"extra": "forbid"}


class ServerConfig(BaseModel):
    """
    Root configuration model for tenable-docs-mcp.

    Example:
        config = ServerConfig(cache=CacheConfig(max_size=50))

    YAML format:
        network:
          timeout: 15
        cache:
          ttl_seconds: 3600
        log_level: DEBUG
    """

    network: NetworkConfig = Field(default_factory=NetworkConfig)
    index: IndexConfig = Field(default_factory=IndexConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    read: ReadConfig = Field(default_factory=ReadConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "INFO",
        description="Logging level",
    )
    log_file: Optional[Path] = Field(None, description="Log file path")

    model_config = {"extra": "forbid"}

    def to_yaml(self) -> str:
        """Serialize config to YAML string."""
        import yaml

        return yaml.dump(self.model_dump(mode="json", exclude_none=True), default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "ServerConfig":
        """Load config from YAML string."""
        import yaml

        data = yaml.safe_load(yaml_str) or {}
        return cls.model_validate(data)

    @classmethod
    def from_yaml_file(cls, path: Path) -> "ServerConfig":
        """Load config from YAML file."""
        return cls.from_yaml(path.read_text())
