"""Tests for the GitHub REST client."""

from datetime import datetime, timezone

import httpx
import pytest

from securesite_scanner.config import ScanConfig
from securesite_scanner.errors import RateLimitExceeded, RepositoryNotFoundOrPrivate, UpstreamError
from securesite_scanner.github_client import GitHubClient
from securesite_scanner.models import EntryKind, RepositoryRef

REF = RepositoryRef(owner="acme", name="webapp")


def transport_returning(response: httpx.Response, seen: list | None = None) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return response

    return httpx.MockTransport(handler)


class TestRequestHeaders:
    """Test identification and credentials on outgoing requests."""

    async def test_user_agent_and_token(self):
        """Test that User-Agent and bearer token are sent."""
        seen = []
        transport = transport_returning(httpx.Response(200, json={"default_branch": "main"}), seen)
        config = ScanConfig(user_agent="scanner-test/1.0")

        async with GitHubClient(token="ghp_secret", config=config, transport=transport) as client:
            await client.get_default_branch(REF)

        request = seen[0]
        assert request.headers["User-Agent"] == "scanner-test/1.0"
        assert request.headers["Authorization"] == "Bearer ghp_secret"
        assert request.headers["Accept"] == "application/vnd.github+json"
        assert request.url.path == "/repos/acme/webapp"

    async def test_no_token_no_authorization(self):
        """Test anonymous requests carry no Authorization header."""
        seen = []
        transport = transport_returning(httpx.Response(200, json={"default_branch": "main"}), seen)

        async with GitHubClient(transport=transport) as client:
            await client.get_default_branch(REF)

        assert "Authorization" not in seen[0].headers
        assert seen[0].headers["User-Agent"] == "SecureSiteScan-Scanner"

    async def test_requires_context_manager(self):
        """Test that requests outside the context manager fail loudly."""
        client = GitHubClient(transport=transport_returning(httpx.Response(200, json={})))
        with pytest.raises(RuntimeError):
            await client.get_default_branch(REF)


class TestGetDefaultBranch:
    """Test repository metadata lookup and its error mapping."""

    async def test_returns_default_branch(self):
        """Test the default branch is read from metadata."""
        transport = transport_returning(httpx.Response(200, json={"default_branch": "develop"}))
        async with GitHubClient(transport=transport) as client:
            assert await client.get_default_branch(REF) == "develop"

    async def test_falls_back_to_main(self):
        """Test the fallback when metadata has no default branch."""
        transport = transport_returning(httpx.Response(200, json={}))
        async with GitHubClient(transport=transport) as client:
            assert await client.get_default_branch(REF) == "main"

    async def test_not_found(self):
        """Test 404 maps to RepositoryNotFoundOrPrivate."""
        transport = transport_returning(httpx.Response(404, json={"message": "Not Found"}))
        async with GitHubClient(transport=transport) as client:
            with pytest.raises(RepositoryNotFoundOrPrivate) as exc_info:
                await client.get_default_branch(REF)
        assert "acme/webapp" in str(exc_info.value)
        assert exc_info.value.retryable is False

    async def test_rate_limited_with_reset(self):
        """Test 403 maps to RateLimitExceeded carrying the reset time."""
        response = httpx.Response(403, headers={"X-RateLimit-Reset": "1700000000"}, json={})
        async with GitHubClient(transport=transport_returning(response)) as client:
            with pytest.raises(RateLimitExceeded) as exc_info:
                await client.get_default_branch(REF)
        assert exc_info.value.reset_at == datetime.fromtimestamp(1700000000, tz=timezone.utc)
        assert exc_info.value.retryable is True

    async def test_rate_limited_429_without_reset(self):
        """Test 429 without a reset header."""
        async with GitHubClient(transport=transport_returning(httpx.Response(429, json={}))) as client:
            with pytest.raises(RateLimitExceeded) as exc_info:
                await client.get_default_branch(REF)
        assert exc_info.value.reset_at is None

    async def test_server_error(self):
        """Test other statuses map to UpstreamError with the status code."""
        async with GitHubClient(transport=transport_returning(httpx.Response(502, text="bad gateway"))) as client:
            with pytest.raises(UpstreamError) as exc_info:
                await client.get_default_branch(REF)
        assert exc_info.value.status_code == 502

    async def test_network_failure(self):
        """Test transport failures map to UpstreamError without a status."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with GitHubClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(UpstreamError) as exc_info:
                await client.get_default_branch(REF)
        assert exc_info.value.status_code is None


class TestGetTree:
    """Test recursive tree listing."""

    async def test_entries_in_api_order(self):
        """Test blobs and trees are returned in order and other types skipped."""
        seen = []
        payload = {
            "tree": [
                {"path": "src", "type": "tree", "sha": "1"},
                {"path": "src/index.ts", "type": "blob", "size": 120, "sha": "2"},
                {"path": "vendor/lib", "type": "commit", "sha": "3"},
                {"path": "package.json", "type": "blob", "size": 300, "sha": "4"},
            ],
            "truncated": False,
        }
        async with GitHubClient(transport=transport_returning(httpx.Response(200, json=payload), seen)) as client:
            entries, truncated = await client.get_tree(REF, "main")

        assert [e.path for e in entries] == ["src", "src/index.ts", "package.json"]
        assert entries[0].kind == EntryKind.TREE
        assert entries[1].size == 120
        assert truncated is False
        assert seen[0].url.path == "/repos/acme/webapp/git/trees/main"
        assert seen[0].url.params["recursive"] == "1"

    async def test_branch_name_is_escaped(self):
        """Test branch names with slashes stay one path segment."""
        seen = []
        transport = transport_returning(httpx.Response(200, json={"tree": []}), seen)
        async with GitHubClient(transport=transport) as client:
            await client.get_tree(REF, "release/v2")
        assert seen[0].url.raw_path.startswith(b"/repos/acme/webapp/git/trees/release%2Fv2")

    async def test_truncated_listing(self):
        """Test GitHub's truncated flag is passed through."""
        transport = transport_returning(httpx.Response(200, json={"tree": [], "truncated": True}))
        async with GitHubClient(transport=transport) as client:
            _, truncated = await client.get_tree(REF, "main")
        assert truncated is True

    async def test_empty_repository(self):
        """Test 409 (no commits) yields an empty tree, not an error."""
        transport = transport_returning(httpx.Response(409, json={"message": "Git Repository is empty."}))
        async with GitHubClient(transport=transport) as client:
            assert await client.get_tree(REF, "main") == ([], False)

    async def test_rate_limited(self):
        """Test 403 on the tree maps to RateLimitExceeded."""
        async with GitHubClient(transport=transport_returning(httpx.Response(403, json={}))) as client:
            with pytest.raises(RateLimitExceeded):
                await client.get_tree(REF, "main")

    async def test_server_error(self):
        """Test other failures map to UpstreamError."""
        async with GitHubClient(transport=transport_returning(httpx.Response(500, json={}))) as client:
            with pytest.raises(UpstreamError):
                await client.get_tree(REF, "main")


class TestGetFileContent:
    """Test raw content retrieval."""

    async def test_returns_raw_bytes(self):
        """Test content is requested raw at the branch."""
        seen = []
        transport = transport_returning(httpx.Response(200, content=b"export {}\n"), seen)
        async with GitHubClient(transport=transport) as client:
            body = await client.get_file_content(REF, "src/index.ts", "main")

        assert body == b"export {}\n"
        assert seen[0].headers["Accept"] == "application/vnd.github.raw"
        assert seen[0].url.path == "/repos/acme/webapp/contents/src/index.ts"
        assert seen[0].url.params["ref"] == "main"

    async def test_non_success_returns_none(self):
        """Test a failed fetch yields None."""
        async with GitHubClient(transport=transport_returning(httpx.Response(404, json={}))) as client:
            assert await client.get_file_content(REF, "missing.ts", "main") is None
