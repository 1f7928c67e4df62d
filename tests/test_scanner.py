"""End-to-end tests for the scan pipeline against an in-memory GitHub."""

import asyncio
from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from securesite_scanner.config import ScanConfig
from securesite_scanner.errors import (
    CancelledBeforeTree,
    InvalidRepository,
    RateLimitExceeded,
    RepositoryNotFoundOrPrivate,
    UpstreamError,
)
from securesite_scanner.models import FindingCategory, RepositoryRef, Severity
from securesite_scanner.scanner import assemble_result, scan, scan_repository

from test_scorer import finding

REPO_URL = "https://github.com/acme/webapp"

CLEAN_UTILS = "export function add(a: number, b: number): number {\n  return a + b;\n}\n"


class TestScanRepository:
    """Test full scans."""

    async def test_hardcoded_secret(self, fake_github):
        """Test a committed Stripe key is reported and lowers the score."""
        github = fake_github({"src/config.ts": 'const apiKey = "sk_live_abcdef123456"\n'})

        result = await scan_repository(REPO_URL, transport=github.transport)

        assert result.repo_name == "acme/webapp"
        assert result.repo_url == REPO_URL
        assert result.files_scanned == 1
        assert result.truncated is False
        assert len(result.findings) == 1
        secret = result.findings[0]
        assert secret.category == FindingCategory.SECRETS
        assert secret.severity == Severity.CRITICAL
        assert secret.line_number == 1
        assert secret.file_path == "src/config.ts"
        assert "abcdef12" not in secret.code_snippet
        assert result.security_score < 100
        assert result.summary.critical == 1
        assert result.summary.total == 1

    async def test_clean_repository(self, fake_github):
        """Test a repository with nothing to report scores 100."""
        github = fake_github({"src/utils.ts": CLEAN_UTILS, "README.md": "# webapp\n"})

        result = await scan_repository(REPO_URL, transport=github.transport)

        assert result.findings == []
        assert result.security_score == 100
        assert result.files_scanned == 1
        assert "README.md" not in github.content_requests()

    async def test_partial_fetch_failure(self, fake_github):
        """Test one failing file does not fail the scan."""
        github = fake_github({
            "src/a.ts": CLEAN_UTILS,
            "src/b.ts": 500,
            "src/c.ts": CLEAN_UTILS,
        })

        result = await scan_repository(REPO_URL, transport=github.transport)

        assert result.files_scanned == 2
        assert result.truncated is False

    async def test_findings_are_ordered(self, fake_github):
        """Test findings come back most severe first."""
        github = fake_github({
            "Dockerfile": "FROM node:latest\n",
            "src/config.ts": 'const apiKey = "sk_live_abcdef123456"\n',
        })

        result = await scan_repository(REPO_URL, transport=github.transport)

        severities = [f.severity for f in result.findings]
        order = list(Severity)
        assert severities == sorted(severities, key=order.index)
        assert severities[0] == Severity.CRITICAL

    async def test_repeat_scans_match(self, fake_github):
        """Test scanning unchanged content twice gives the same findings."""
        files = {
            "src/config.ts": 'const apiKey = "sk_live_abcdef123456"\n',
            "Dockerfile": "FROM node:latest\nUSER root\n",
        }

        first = await scan_repository(REPO_URL, transport=fake_github(files).transport)
        second = await scan_repository(REPO_URL, transport=fake_github(files).transport)

        assert first.findings == second.findings
        assert first.security_score == second.security_score

    async def test_uses_credential(self, fake_github):
        """Test the token is sent on every request."""
        github = fake_github({"src/utils.ts": CLEAN_UTILS})

        await scan_repository(REPO_URL, "ghp_secret", transport=github.transport)

        assert github.requests
        assert all(r.headers["Authorization"] == "Bearer ghp_secret" for r in github.requests)

    async def test_branch_from_repository_metadata(self, fake_github):
        """Test the tree and contents are read from the default branch."""
        github = fake_github({"src/utils.ts": CLEAN_UTILS}, default_branch="develop")

        await scan_repository(REPO_URL, transport=github.transport)

        assert "/repos/acme/webapp/git/trees/develop" in github.requested_paths()
        content_request = [r for r in github.requests if "/contents/" in r.url.path][0]
        assert content_request.url.params["ref"] == "develop"


class TestScanFailures:
    """Test scans that abort."""

    async def test_invalid_url(self, fake_github):
        """Test non-GitHub URLs fail before any request."""
        github = fake_github({})

        with pytest.raises(InvalidRepository):
            await scan_repository("https://gitlab.com/acme/webapp", transport=github.transport)
        assert github.requests == []

    async def test_repository_not_found(self, fake_github):
        """Test a 404 stops the scan before the tree is requested."""
        github = fake_github({"src/utils.ts": CLEAN_UTILS}, repo_status=404)

        with pytest.raises(RepositoryNotFoundOrPrivate):
            await scan_repository(REPO_URL, transport=github.transport)
        assert github.requested_paths() == ["/repos/acme/webapp"]

    async def test_rate_limited(self, fake_github):
        """Test a 403 on the metadata lookup is a rate limit."""
        github = fake_github(
            {"src/utils.ts": CLEAN_UTILS},
            repo_status=403,
            error_headers={"X-RateLimit-Remaining": "0", "X-RateLimit-Reset": "1700000000"},
        )

        with pytest.raises(RateLimitExceeded) as exc_info:
            await scan_repository(REPO_URL, transport=github.transport)
        assert exc_info.value.reset_at == datetime.fromtimestamp(1700000000, tz=timezone.utc)
        assert github.requested_paths() == ["/repos/acme/webapp"]

    async def test_tree_failure(self, fake_github):
        """Test an upstream error on the tree aborts the scan."""
        github = fake_github({"src/utils.ts": CLEAN_UTILS}, tree_status=502)

        with pytest.raises(UpstreamError):
            await scan_repository(REPO_URL, transport=github.transport)
        assert github.content_requests() == []

    async def test_cancelled_before_tree(self, fake_github):
        """Test a cancelled scan raises before making requests."""
        github = fake_github({"src/utils.ts": CLEAN_UTILS})
        cancel_event = asyncio.Event()
        cancel_event.set()

        with pytest.raises(CancelledBeforeTree) as exc_info:
            await scan_repository(REPO_URL, transport=github.transport, cancel_event=cancel_event)
        assert exc_info.value.reason == "was cancelled"
        assert github.requests == []

    async def test_timeout_before_tree(self):
        """Test a deadline expiring during the metadata lookup."""
        async def slow_handler(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(5)
            return httpx.Response(200, json={"default_branch": "main"})

        with pytest.raises(CancelledBeforeTree) as exc_info:
            await scan_repository(REPO_URL, transport=httpx.MockTransport(slow_handler), timeout=0.05)
        assert exc_info.value.reason == "timed out"


class TestTruncation:
    """Test partial scans are marked truncated."""

    async def test_timeout_during_fetch(self, fake_github):
        """Test a deadline hit while fetching returns a partial result."""
        github = fake_github({"src/a.ts": CLEAN_UTILS, "src/b.ts": CLEAN_UTILS}, content_delay=5)

        result = await scan_repository(REPO_URL, transport=github.transport, timeout=0.2)

        assert result.truncated is True
        assert result.files_scanned == 0
        assert result.security_score == 100

    async def test_github_truncated_tree(self, fake_github):
        """Test GitHub's own truncation flag is carried through."""
        github = fake_github({"src/utils.ts": CLEAN_UTILS}, tree_truncated=True)

        result = await scan_repository(REPO_URL, transport=github.transport)

        assert result.truncated is True
        assert result.files_scanned == 1

    async def test_oversized_file_does_not_hide_others(self, fake_github):
        """Test a huge lockfile listed first neither stops selection nor gets fetched."""
        github = fake_github(
            {
                "package-lock.json": "{}",
                "src/config.ts": 'const apiKey = "sk_live_abcdef123456"\n',
            },
            sizes={"package-lock.json": 6_000_000},
        )

        result = await scan_repository(REPO_URL, transport=github.transport)

        assert result.files_scanned == 1
        assert result.truncated is False
        assert [f.rule_id for f in result.findings] == ["secrets/stripe-secret-key"]
        assert result.security_score < 100
        assert github.content_requests() == ["src/config.ts"]

    async def test_selection_limit(self, fake_github):
        """Test hitting the file cap marks the scan truncated."""
        github = fake_github({"src/a.ts": CLEAN_UTILS, "src/b.ts": CLEAN_UTILS, "src/c.ts": CLEAN_UTILS})
        config = ScanConfig(max_total_files=2)

        result = await scan_repository(REPO_URL, config=config, transport=github.transport)

        assert result.truncated is True
        assert result.files_scanned == 2
        assert len(github.content_requests()) == 2


class TestAssembleResult:
    """Test building the final result."""

    def test_dedupes_sorts_and_scores(self):
        """Test duplicates are dropped before scoring."""
        ref = RepositoryRef(owner="acme", name="webapp")
        low = finding(Severity.LOW, FindingCategory.DOCKER, rule_id="docker/latest-tag")
        critical = finding(Severity.CRITICAL, FindingCategory.SECRETS, rule_id="secrets/aws-access-key")
        scanned_at = datetime(2024, 1, 1, tzinfo=timezone.utc)

        result = assemble_result(ref, REPO_URL, [low, critical, critical], 3, False, scanned_at)

        assert result.findings == [critical, low]
        assert result.security_score == 78
        assert result.scanned_at == scanned_at
        assert result.files_scanned == 3
        assert result.summary.total == 2

    def test_serializes_camel_case(self):
        """Test the JSON shape uses camelCase keys."""
        ref = RepositoryRef(owner="acme", name="webapp")
        result = assemble_result(ref, REPO_URL, [finding()], 1, False)

        data = result.model_dump(by_alias=True, mode="json")
        assert {"repoName", "repoUrl", "scannedAt", "securityScore", "findings", "truncated", "filesScanned", "summary"} <= set(data)
        assert {"ruleId", "filePath", "lineNumber", "codeSnippet", "fixSnippet"} <= set(data["findings"][0])
        assert "byCategory" in data["summary"]


class TestScanSync:
    """Test the synchronous wrapper."""

    def test_runs_async_scan(self):
        """Test scan() drives scan_repository() to completion."""
        ref = RepositoryRef(owner="acme", name="webapp")
        expected = assemble_result(ref, REPO_URL, [], 0, False)

        with patch("securesite_scanner.scanner.scan_repository", AsyncMock(return_value=expected)) as mock_scan:
            result = scan(REPO_URL, "token", timeout=30)

        assert result is expected
        mock_scan.assert_awaited_once_with(REPO_URL, "token", None, timeout=30)
