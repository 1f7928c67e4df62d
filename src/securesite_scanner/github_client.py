"""Client for the GitHub REST API."""

import logging
from datetime import datetime, timezone
from urllib.parse import quote

import httpx

from .config import ScanConfig
from .errors import RateLimitExceeded, RepositoryNotFoundOrPrivate, UpstreamError
from .models import EntryKind, RepositoryRef, TreeEntry

logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/vnd.github+json"
RAW_MEDIA_TYPE = "application/vnd.github.raw"

# GitHub signals primary and secondary rate limits with either status
RATE_LIMIT_STATUSES = frozenset({403, 429})


def _rate_limit_reset(response: httpx.Response) -> datetime | None:
    """Read the X-RateLimit-Reset header as a UTC datetime, if present."""
    reset = response.headers.get("x-ratelimit-reset")
    if not reset:
        return None
    try:
        return datetime.fromtimestamp(int(reset), tz=timezone.utc)
    except (ValueError, OverflowError):
        return None


class GitHubClient:
    """Async client for the three GitHub endpoints a scan needs.

    Must be used as an async context manager. All requests carry the
    configured User-Agent and, when a token is given, a bearer credential.
    """

    def __init__(
        self,
        token: str | None = None,
        config: ScanConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the GitHub client.

        Args:
            token: Optional GitHub token, required for private repositories.
            config: Scan configuration providing base URL, timeout and User-Agent.
            transport: Optional httpx transport, used by tests to fake GitHub.
        """
        self.config = config or ScanConfig()
        self.token = token
        self.transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "GitHubClient":
        """Enter async context."""
        headers = {
            "Accept": JSON_MEDIA_TYPE,
            "User-Agent": self.config.user_agent,
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        self._client = httpx.AsyncClient(
            base_url=self.config.api_base_url,
            headers=headers,
            timeout=self.config.request_timeout,
            transport=self.transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _get(self, url: str, **kwargs) -> httpx.Response:
        if not self._client:
            raise RuntimeError("GitHubClient must be used as an async context manager")
        try:
            return await self._client.get(url, **kwargs)
        except httpx.TimeoutException as e:
            raise UpstreamError(None, f"request timed out: {e}") from e
        except httpx.TransportError as e:
            raise UpstreamError(None, str(e)) from e

    async def get_default_branch(self, ref: RepositoryRef) -> str:
        """Look up the repository's default branch.

        Raises:
            RepositoryNotFoundOrPrivate: On 404.
            RateLimitExceeded: On 403 or 429.
            UpstreamError: On any other non-success status or network failure.
        """
        logger.info(f"Fetching repository metadata for {ref.full_name}")
        response = await self._get(f"/repos/{ref.owner}/{ref.name}")

        if response.status_code == 404:
            raise RepositoryNotFoundOrPrivate(ref.full_name)
        if response.status_code in RATE_LIMIT_STATUSES:
            raise RateLimitExceeded(_rate_limit_reset(response))
        if not response.is_success:
            raise UpstreamError(response.status_code, "repository lookup failed")

        return response.json().get("default_branch") or "main"

    async def get_tree(self, ref: RepositoryRef, branch: str) -> tuple[list[TreeEntry], bool]:
        """Fetch the recursive file tree of a branch.

        Returns:
            Tuple of (entries in API order, whether GitHub truncated the listing).
            An empty repository yields an empty list.

        Raises:
            RateLimitExceeded: On 403 or 429.
            UpstreamError: On any other non-success status or network failure.
        """
        response = await self._get(
            f"/repos/{ref.owner}/{ref.name}/git/trees/{quote(branch, safe='')}",
            params={"recursive": "1"},
        )

        # 409 is GitHub's answer for a repository without commits
        if response.status_code == 409:
            logger.info(f"Repository {ref.full_name} is empty")
            return [], False
        if response.status_code in RATE_LIMIT_STATUSES:
            raise RateLimitExceeded(_rate_limit_reset(response))
        if not response.is_success:
            raise UpstreamError(response.status_code, "failed to fetch repository tree")

        data = response.json()
        entries: list[TreeEntry] = []
        for item in data.get("tree", []):
            try:
                kind = EntryKind(item.get("type"))
            except ValueError:
                # submodules ("commit") and anything else we cannot read
                continue
            entries.append(
                TreeEntry(
                    path=item.get("path", ""),
                    kind=kind,
                    size=item.get("size"),
                    sha=item.get("sha", ""),
                )
            )

        api_truncated = bool(data.get("truncated", False))
        if api_truncated:
            logger.warning(f"GitHub truncated the tree listing for {ref.full_name}")

        logger.info(f"Tree for {ref.full_name}@{branch} has {len(entries)} entries")
        return entries, api_truncated

    async def get_file_content(self, ref: RepositoryRef, path: str, branch: str) -> bytes | None:
        """Fetch the raw bytes of a file, or None if GitHub did not return it.

        Raises:
            UpstreamError: On network failure.
        """
        response = await self._get(
            f"/repos/{ref.owner}/{ref.name}/contents/{quote(path, safe='/')}",
            params={"ref": branch},
            headers={"Accept": RAW_MEDIA_TYPE},
        )
        if not response.is_success:
            logger.debug(f"Content fetch for {path} returned {response.status_code}")
            return None
        return response.content
