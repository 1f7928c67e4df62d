"""Choose which tree entries are worth fetching."""

import logging
import posixpath
import re
from typing import NamedTuple

from .config import ScanConfig
from .models import EntryKind, TreeEntry

logger = logging.getLogger(__name__)

# .env, .env.local, .env.production, ... but not .envrc
ENV_FILE_PATTERN = re.compile(r'^\.env(?:\..+)?$')


class Selection(NamedTuple):
    """Entries chosen for fetching and whether any were left out for budget."""

    entries: list[TreeEntry]
    truncated: bool


def get_extension(filename: str) -> str:
    """Return the lower-cased extension from the last dot, or '' if none."""
    dot = filename.rfind(".")
    if dot == -1:
        return ""
    return filename[dot:].lower()


def should_scan_file(path: str, config: ScanConfig | None = None) -> bool:
    """Check whether a file path qualifies for scanning by name alone."""
    config = config or ScanConfig()
    filename = posixpath.basename(path)
    if not filename:
        return False

    if filename in config.scannable_filenames:
        return True
    if ENV_FILE_PATTERN.match(filename):
        return True
    return get_extension(filename) in config.scannable_extensions


def select_files(entries: list[TreeEntry], config: ScanConfig | None = None) -> Selection:
    """Filter tree entries to scannable blobs within the count and byte budgets.

    Entries are taken in order. Entries larger than max_file_size are never
    fetched, so they are dropped before the budgets apply. The first remaining
    entry that would exceed either budget stops selection and marks the
    selection truncated. A missing declared size counts as zero.
    """
    config = config or ScanConfig()
    selected: list[TreeEntry] = []
    total_bytes = 0

    for entry in entries:
        if entry.kind != EntryKind.BLOB or not should_scan_file(entry.path, config):
            continue

        size = entry.size or 0
        if size > config.max_file_size:
            logger.debug(f"Skipping {entry.path}: {size} bytes exceeds per-file limit")
            continue

        if len(selected) >= config.max_total_files or total_bytes + size > config.max_total_bytes:
            logger.warning(
                f"Selection budget reached after {len(selected)} files ({total_bytes} bytes); "
                "remaining files are skipped"
            )
            return Selection(selected, True)

        selected.append(entry)
        total_bytes += size

    return Selection(selected, False)
