"""Shared fixtures: an in-memory GitHub API and helpers for building files."""

import asyncio
from typing import Union

import httpx
import pytest

from securesite_scanner.models import ScannableFile

FileBody = Union[str, bytes, int, Exception]


class FakeGitHub:
    """In-memory stand-in for the GitHub REST endpoints a scan calls.

    files maps repository paths to their body: str or bytes for content,
    an int for an error status on the content request, or an exception
    to raise from the transport.
    """

    def __init__(
        self,
        files: dict[str, FileBody] | None = None,
        owner: str = "acme",
        name: str = "webapp",
        default_branch: str = "main",
        repo_status: int = 200,
        tree_status: int = 200,
        tree_truncated: bool = False,
        error_headers: dict[str, str] | None = None,
        content_delay: float = 0.0,
        sizes: dict[str, int] | None = None,
    ):
        self.files = dict(files or {})
        self.owner = owner
        self.name = name
        self.default_branch = default_branch
        self.repo_status = repo_status
        self.tree_status = tree_status
        self.tree_truncated = tree_truncated
        self.error_headers = error_headers or {}
        self.content_delay = content_delay
        self.sizes = sizes or {}
        self.requests: list[httpx.Request] = []

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def base(self) -> str:
        return f"/repos/{self.owner}/{self.name}"

    def requested_paths(self) -> list[str]:
        return [request.url.path for request in self.requests]

    def content_requests(self) -> list[str]:
        prefix = f"{self.base}/contents/"
        return [path[len(prefix):] for path in self.requested_paths() if path.startswith(prefix)]

    def _size(self, path: str, body: FileBody) -> int:
        if path in self.sizes:
            return self.sizes[path]
        if isinstance(body, str):
            return len(body.encode("utf-8"))
        if isinstance(body, bytes):
            return len(body)
        return 10

    def tree(self) -> list[dict]:
        entries = []
        directories = sorted({path.rsplit("/", 1)[0] for path in self.files if "/" in path})
        for directory in directories:
            entries.append({"path": directory, "type": "tree", "sha": "d" * 40})
        for path, body in self.files.items():
            entries.append({"path": path, "type": "blob", "size": self._size(path, body), "sha": "f" * 40})
        return entries

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path == self.base:
            if self.repo_status != 200:
                return httpx.Response(self.repo_status, headers=self.error_headers, json={"message": "error"})
            return httpx.Response(
                200,
                json={"full_name": f"{self.owner}/{self.name}", "default_branch": self.default_branch},
            )

        if path == f"{self.base}/git/trees/{self.default_branch}":
            if self.tree_status != 200:
                return httpx.Response(self.tree_status, headers=self.error_headers, json={"message": "error"})
            return httpx.Response(
                200,
                json={"sha": "a" * 40, "tree": self.tree(), "truncated": self.tree_truncated},
            )

        prefix = f"{self.base}/contents/"
        if path.startswith(prefix):
            if self.content_delay:
                await asyncio.sleep(self.content_delay)
            body = self.files.get(path[len(prefix):])
            if body is None:
                return httpx.Response(404, json={"message": "Not Found"})
            if isinstance(body, Exception):
                raise body
            if isinstance(body, int):
                return httpx.Response(body, json={"message": "error"})
            content = body.encode("utf-8") if isinstance(body, str) else body
            return httpx.Response(200, content=content)

        return httpx.Response(404, json={"message": "Not Found"})


@pytest.fixture
def fake_github():
    """Factory for FakeGitHub instances."""
    return FakeGitHub


def make_file(path: str, content: str) -> ScannableFile:
    return ScannableFile(path=path, content=content)
