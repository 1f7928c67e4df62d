"""Errors raised by the scanning pipeline."""

from datetime import datetime


class ScanError(Exception):
    """Base class for scan failures that abort the whole scan."""

    retryable = False


class InvalidRepository(ScanError):
    """The repository reference could not be parsed as a GitHub repository."""

    def __init__(self, repo_url: str):
        self.repo_url = repo_url
        super().__init__(f"Invalid GitHub repository URL: {repo_url!r}")


class RepositoryNotFoundOrPrivate(ScanError):
    """GitHub answered 404 for the repository metadata lookup."""

    def __init__(self, full_name: str):
        self.full_name = full_name
        super().__init__(
            f"Repository {full_name} not found or is private. "
            "Provide a GitHub token with read access to scan private repositories."
        )


class RateLimitExceeded(ScanError):
    """GitHub refused the request because the API rate limit was hit."""

    retryable = True

    def __init__(self, reset_at: datetime | None = None):
        self.reset_at = reset_at
        message = "GitHub API rate limit exceeded."
        if reset_at is not None:
            message += f" Retry after {reset_at.isoformat()}."
        else:
            message += " Try again later or provide a GitHub token."
        super().__init__(message)


class UpstreamError(ScanError):
    """GitHub returned an unexpected status, or could not be reached at all."""

    retryable = True

    def __init__(self, status_code: int | None, detail: str = ""):
        self.status_code = status_code
        if status_code is None:
            message = f"Could not reach GitHub: {detail}" if detail else "Could not reach GitHub"
        else:
            message = f"GitHub API error: {status_code}"
            if detail:
                message += f" ({detail})"
        super().__init__(message)


class CancelledBeforeTree(ScanError):
    """The scan was cancelled or timed out before the file tree was obtained."""

    retryable = True

    def __init__(self, reason: str = "timed out"):
        self.reason = reason
        super().__init__(f"Scan {reason} before the repository tree was fetched")
