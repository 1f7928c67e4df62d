"""Scan orchestration: locate, list, select, fetch, detect, score."""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Awaitable, TypeVar

import httpx

from .config import ScanConfig
from .engine import detect_files
from .errors import CancelledBeforeTree
from .fetcher import fetch_contents
from .github_client import GitHubClient
from .locator import parse_github_url
from .models import Finding, RepositoryRef, ScanResult
from .scorer import build_summary, calculate_score, dedupe_findings, sort_findings
from .selector import select_files

logger = logging.getLogger(__name__)

T = TypeVar("T")


def assemble_result(
    ref: RepositoryRef,
    repo_url: str,
    findings: list[Finding],
    files_scanned: int,
    truncated: bool,
    scanned_at: datetime | None = None,
) -> ScanResult:
    """Build the final ScanResult: deduplicated, ordered, scored and summarized."""
    unique = sort_findings(dedupe_findings(findings))
    return ScanResult(
        repo_name=ref.full_name,
        repo_url=repo_url,
        scanned_at=scanned_at or datetime.now(timezone.utc),
        security_score=calculate_score(unique),
        findings=unique,
        truncated=truncated,
        files_scanned=files_scanned,
        summary=build_summary(unique),
    )


async def _guard(
    step: Awaitable[T],
    deadline: float | None,
    cancel_event: asyncio.Event | None,
) -> T:
    """Await a pre-tree step, aborting it when the deadline passes or the scan is cancelled."""
    if cancel_event is not None and cancel_event.is_set():
        if asyncio.iscoroutine(step):
            step.close()
        raise CancelledBeforeTree("was cancelled")

    loop = asyncio.get_running_loop()
    task = asyncio.ensure_future(step)
    waiting: set[asyncio.Future] = {task}
    cancel_waiter = None
    if cancel_event is not None:
        cancel_waiter = asyncio.create_task(cancel_event.wait())
        waiting.add(cancel_waiter)

    timeout = None if deadline is None else max(0.0, deadline - loop.time())
    try:
        await asyncio.wait(waiting, timeout=timeout, return_when=asyncio.FIRST_COMPLETED)
    finally:
        leftovers = [f for f in waiting if f is not task and not f.done()]
        if not task.done():
            leftovers.append(task)
        for future in leftovers:
            future.cancel()
        await asyncio.gather(*leftovers, return_exceptions=True)

    if task.cancelled():
        if cancel_event is not None and cancel_event.is_set():
            raise CancelledBeforeTree("was cancelled")
        raise CancelledBeforeTree("timed out")
    return task.result()


async def scan_repository(
    repo_url: str,
    credential: str | None = None,
    config: ScanConfig | None = None,
    *,
    timeout: float | None = None,
    cancel_event: asyncio.Event | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ScanResult:
    """Scan a GitHub repository for security issues.

    Args:
        repo_url: GitHub repository URL.
        credential: Optional GitHub token for private repositories and higher rate limits.
        config: Scan configuration; defaults apply when omitted.
        timeout: Overall deadline in seconds, overriding config.scan_timeout.
        cancel_event: Setting this event cancels the scan.
        transport: Optional httpx transport for the GitHub client.

    Returns:
        The scan result. If the deadline or cancellation hits while file
        contents are being fetched, the result covers the files fetched so
        far and is marked truncated.

    Raises:
        InvalidRepository: If repo_url is not a GitHub repository URL.
        RepositoryNotFoundOrPrivate: If GitHub reports the repository missing.
        RateLimitExceeded: If GitHub rate limits the metadata or tree request.
        UpstreamError: If GitHub fails or cannot be reached.
        CancelledBeforeTree: If the deadline or cancellation hits before the tree is known.
    """
    config = config or ScanConfig()
    ref = parse_github_url(repo_url)

    loop = asyncio.get_running_loop()
    if timeout is None:
        timeout = config.scan_timeout
    deadline = loop.time() + timeout if timeout is not None else None

    logger.info(f"Scanning {ref.full_name}")

    async with GitHubClient(token=credential, config=config, transport=transport) as client:
        branch = await _guard(client.get_default_branch(ref), deadline, cancel_event)
        entries, tree_truncated = await _guard(client.get_tree(ref, branch), deadline, cancel_event)

        selection = select_files(entries, config)
        logger.info(f"Selected {len(selection.entries)} of {len(entries)} entries from {ref.full_name}@{branch}")

        outcome = await fetch_contents(
            client,
            ref,
            branch,
            selection.entries,
            config,
            deadline=deadline,
            cancel_event=cancel_event,
        )

    findings = detect_files(outcome.files)
    truncated = tree_truncated or selection.truncated or outcome.abandoned > 0
    result = assemble_result(ref, repo_url, findings, len(outcome.files), truncated)

    logger.info(
        f"Scan of {ref.full_name} finished: {result.files_scanned} files, "
        f"{len(result.findings)} findings, score {result.security_score}"
        + (" (truncated)" if truncated else "")
    )
    return result


def scan(
    repo_url: str,
    credential: str | None = None,
    config: ScanConfig | None = None,
    *,
    timeout: float | None = None,
) -> ScanResult:
    """Synchronous wrapper around scan_repository()."""
    return asyncio.run(scan_repository(repo_url, credential, config, timeout=timeout))
