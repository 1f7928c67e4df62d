"""Pattern-based security scanner for GitHub repositories."""

from .config import ScanConfig
from .errors import (
    CancelledBeforeTree,
    InvalidRepository,
    RateLimitExceeded,
    RepositoryNotFoundOrPrivate,
    ScanError,
    UpstreamError,
)
from .models import Finding, FindingCategory, ScanResult, ScanSummary, Severity
from .scanner import assemble_result, scan, scan_repository

__all__ = [
    "ScanConfig",
    "ScanError",
    "InvalidRepository",
    "RepositoryNotFoundOrPrivate",
    "RateLimitExceeded",
    "UpstreamError",
    "CancelledBeforeTree",
    "Finding",
    "FindingCategory",
    "ScanResult",
    "ScanSummary",
    "Severity",
    "assemble_result",
    "scan",
    "scan_repository",
]
