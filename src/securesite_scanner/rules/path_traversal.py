"""Filesystem access with request-controlled paths."""

from ..models import FindingCategory, Severity
from .base import Rule, compile_all, is_code_file

SAFE_PATH_FIX = """// Prevent path traversal:

import path from 'path';

const SAFE_DIR = '/app/uploads';

function safePath(userInput: string): string {
  // Resolve to absolute path
  const resolved = path.resolve(SAFE_DIR, userInput);

  // Ensure it's still within safe directory
  if (!resolved.startsWith(SAFE_DIR)) {
    throw new Error('Invalid path');
  }

  return resolved;
}

// Usage:
const filePath = safePath(req.params.filename);"""

USER_INPUT = r'(?:req\.|params\.|query\.|body\.)'


def _path_rule(rule_id: str, severity: Severity, title: str, description: str, *patterns: str) -> Rule:
    return Rule(
        id=f"path-traversal/{rule_id}",
        category=FindingCategory.PATH_TRAVERSAL,
        severity=severity,
        title=title,
        description=description,
        fix=SAFE_PATH_FIX,
        patterns=compile_all(*patterns),
        applies_to=is_code_file,
        snippet_limit=50,
    )


RULES: tuple[Rule, ...] = (
    _path_rule(
        "read-user-path",
        Severity.CRITICAL,
        "File read with user-controlled path",
        "Reading files using user input can allow path traversal attacks (../).",
        rf'readFile(?:Sync)?\s*\(\s*{USER_INPUT}',
        r'\b(?:open|send_file)\s*\(\s*request\.(?:args|form|values|json)\b',
    ),
    _path_rule(
        "write-user-path",
        Severity.CRITICAL,
        "File write with user-controlled path",
        "Writing files using user input can allow overwriting sensitive files.",
        rf'writeFile(?:Sync)?\s*\(\s*{USER_INPUT}',
    ),
    _path_rule(
        "join-user-path",
        Severity.HIGH,
        "Path.join with user input",
        "path.join does not prevent traversal. Use path.resolve and validate.",
        rf'path\.join\s*\([^)]*{USER_INPUT}',
        r'os\.path\.join\s*\([^)]*request\.(?:args|form|values|json)\b',
    ),
    _path_rule(
        "fs-operation-user-path",
        Severity.HIGH,
        "Filesystem operation with user input",
        "Filesystem operations with user-controlled paths are dangerous.",
        r'fs\.(?:access|stat|mkdir|rmdir|unlink)\s*\([^)]*(?:req\.|params\.)',
    ),
    _path_rule(
        "file-url",
        Severity.MEDIUM,
        "File URL construction",
        "Constructing file:// URLs can lead to local file access.",
        r'new\s+URL\s*\([^)]*,\s*["\'`]file:',
    ),
)
