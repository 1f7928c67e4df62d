"""Scan configuration.

Every tunable of the pipeline lives on ScanConfig. A config is passed into
scan_repository(); callers override individual values with model_copy() or
build one from the environment with ScanConfig.from_env().
"""

import os

from pydantic import BaseModel, ConfigDict, Field

SCANNABLE_EXTENSIONS: frozenset[str] = frozenset({
    ".ts",
    ".tsx",
    ".js",
    ".jsx",
    ".mjs",
    ".cjs",
    ".sql",
    ".json",
    ".env",
    ".yaml",
    ".yml",
    ".toml",
    ".py",
    ".rb",
    ".go",
    ".php",
    ".vue",
    ".svelte",
    ".graphql",
    ".gql",
    ".prisma",
    ".sh",
    ".bash",
    ".xml",
})

SCANNABLE_FILENAMES: frozenset[str] = frozenset({
    "Dockerfile",
    "docker-compose.yml",
    "docker-compose.yaml",
    ".dockerignore",
    ".gitignore",
    ".npmrc",
    ".yarnrc",
})

GITHUB_API_URL = "https://api.github.com"
DEFAULT_USER_AGENT = "SecureSiteScan-Scanner"


class ScanConfig(BaseModel):
    """Limits, endpoints and file allow-lists for one scan."""

    model_config = ConfigDict(frozen=True)

    max_file_size: int = Field(default=500_000, gt=0, description="Files larger than this are not fetched")
    max_total_files: int = Field(default=200, gt=0, description="Maximum number of files selected")
    max_total_bytes: int = Field(default=5_000_000, gt=0, description="Maximum cumulative declared size selected")
    max_concurrency: int = Field(default=8, gt=0, description="Maximum concurrent content fetches")
    request_timeout: float = Field(default=15.0, gt=0, description="Per-request timeout in seconds")
    scan_timeout: float | None = Field(default=None, description="Overall scan deadline in seconds")
    api_base_url: str = Field(default=GITHUB_API_URL, description="GitHub REST API base URL")
    user_agent: str = Field(default=DEFAULT_USER_AGENT, description="User-Agent sent on every request")
    scannable_extensions: frozenset[str] = Field(default=SCANNABLE_EXTENSIONS)
    scannable_filenames: frozenset[str] = Field(default=SCANNABLE_FILENAMES)

    @classmethod
    def from_env(cls) -> "ScanConfig":
        """Build a config, overriding defaults from SECURESITE_* environment variables."""
        overrides: dict[str, object] = {}
        env_map = {
            "SECURESITE_API_URL": "api_base_url",
            "SECURESITE_USER_AGENT": "user_agent",
            "SECURESITE_MAX_CONCURRENCY": "max_concurrency",
            "SECURESITE_REQUEST_TIMEOUT": "request_timeout",
            "SECURESITE_SCAN_TIMEOUT": "scan_timeout",
        }
        for env_var, field_name in env_map.items():
            value = os.environ.get(env_var)
            if value:
                overrides[field_name] = value
        # pydantic coerces the numeric strings
        return cls(**overrides)
