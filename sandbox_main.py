#!/usr/bin/env python3
"""
Sandbox entrypoint for securesite-scanner.
Reads scan parameters from stdin JSON, scans the repository, outputs JSON to stdout.
"""

import asyncio
import json
import logging
import os
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent / "src"))

from securesite_scanner.config import ScanConfig
from securesite_scanner.errors import ScanError
from securesite_scanner.scanner import scan_repository

# stdout carries the JSON result, so logs go to stderr
logging.basicConfig(level=logging.INFO, stream=sys.stderr)
logger = logging.getLogger(__name__)


def main() -> None:
    try:
        input_data = json.load(sys.stdin)
    except json.JSONDecodeError as e:
        print(json.dumps({"error": f"Invalid JSON input: {e}", "error_kind": "InvalidInput"}))
        sys.exit(1)

    repo_url = input_data.get("repo_url") if isinstance(input_data, dict) else None
    if not repo_url:
        print(
            json.dumps(
                {
                    "error": "Missing required input 'repo_url'",
                    "error_kind": "InvalidInput",
                    "example": {"repo_url": "https://github.com/user/repo"},
                }
            )
        )
        sys.exit(1)

    token = input_data.get("github_token") or os.environ.get("GITHUB_TOKEN") or None
    timeout = input_data.get("timeout")

    try:
        result = asyncio.run(scan_repository(repo_url, token, ScanConfig.from_env(), timeout=timeout))
        print(json.dumps(result.model_dump(by_alias=True, mode="json")))
    except ScanError as e:
        print(json.dumps({"error": str(e), "error_kind": type(e).__name__}))
        sys.exit(1)
    except Exception as e:
        logger.error(f"Scan failed: {e}")
        print(json.dumps({"error": str(e), "error_kind": "InternalError"}))
        sys.exit(1)


if __name__ == "__main__":
    main()
