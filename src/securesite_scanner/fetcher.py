"""Concurrent retrieval of file contents."""

import asyncio
import logging
from typing import NamedTuple

import httpx

from .config import ScanConfig
from .errors import UpstreamError
from .github_client import GitHubClient
from .models import RepositoryRef, ScannableFile, TreeEntry

logger = logging.getLogger(__name__)

BINARY_SNIFF_BYTES = 1024


class FetchOutcome(NamedTuple):
    """Fetched files in selection order and how many fetches were abandoned."""

    files: list[ScannableFile]
    abandoned: int


def decode_content(raw: bytes) -> str | None:
    """Decode a file body as UTF-8 text, or return None for binary data."""
    if b"\x00" in raw[:BINARY_SNIFF_BYTES]:
        return None
    return raw.decode("utf-8", errors="replace")


async def fetch_contents(
    client: GitHubClient,
    ref: RepositoryRef,
    branch: str,
    entries: list[TreeEntry],
    config: ScanConfig | None = None,
    deadline: float | None = None,
    cancel_event: asyncio.Event | None = None,
) -> FetchOutcome:
    """Fetch the contents of the selected entries with bounded concurrency.

    Oversized, failed and binary files are skipped. When the deadline (an
    event loop timestamp) passes or cancel_event is set, outstanding fetches
    are cancelled and counted as abandoned; files fetched so far are kept.

    Args:
        client: An open GitHubClient.
        ref: Repository being scanned.
        branch: Branch the tree was read from.
        entries: Selected tree entries, in selection order.
        config: Scan configuration.
        deadline: Loop time after which remaining fetches are abandoned.
        cancel_event: Event that abandons remaining fetches when set.

    Returns:
        FetchOutcome with the fetched files and the abandoned count.
    """
    config = config or ScanConfig()
    semaphore = asyncio.Semaphore(config.max_concurrency)
    loop = asyncio.get_running_loop()

    async def fetch_one(entry: TreeEntry) -> ScannableFile | None:
        if entry.size is not None and entry.size > config.max_file_size:
            logger.debug(f"Skipping {entry.path}: {entry.size} bytes exceeds per-file limit")
            return None

        async with semaphore:
            try:
                raw = await client.get_file_content(ref, entry.path, branch)
            except (UpstreamError, httpx.HTTPError) as e:
                logger.warning(f"Skipping {entry.path}: {e}")
                return None

        if raw is None:
            return None
        if len(raw) > config.max_file_size:
            logger.debug(f"Skipping {entry.path}: body exceeds per-file limit")
            return None

        content = decode_content(raw)
        if content is None:
            logger.debug(f"Skipping {entry.path}: binary content")
            return None
        return ScannableFile(path=entry.path, content=content)

    tasks = [asyncio.create_task(fetch_one(entry)) for entry in entries]
    if not tasks:
        return FetchOutcome([], 0)

    cancel_waiter = asyncio.create_task(cancel_event.wait()) if cancel_event else None
    pending: set[asyncio.Task] = set(tasks)
    try:
        while pending:
            if cancel_event is not None and cancel_event.is_set():
                break
            timeout = None
            if deadline is not None:
                timeout = deadline - loop.time()
                if timeout <= 0:
                    break

            waiting = pending | {cancel_waiter} if cancel_waiter else pending
            done, _ = await asyncio.wait(waiting, timeout=timeout, return_when=asyncio.FIRST_COMPLETED)
            pending -= done
    finally:
        leftovers = [task for task in pending if not task.done()]
        if cancel_waiter is not None:
            leftovers.append(cancel_waiter)
        for task in leftovers:
            task.cancel()
        await asyncio.gather(*leftovers, return_exceptions=True)

    files: list[ScannableFile] = []
    abandoned = 0
    for entry, task in zip(entries, tasks):
        if task.cancelled():
            abandoned += 1
            continue
        error = task.exception()
        if error is not None:
            logger.warning(f"Skipping {entry.path}: unexpected fetch failure: {error}")
            continue
        result = task.result()
        if result is not None:
            files.append(result)

    if abandoned:
        logger.warning(f"Abandoned {abandoned} pending file fetches")

    return FetchOutcome(files, abandoned)
