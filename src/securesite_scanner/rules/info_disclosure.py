"""Responses, headers and errors that reveal internals."""

import re

from ..models import FindingCategory, Severity
from .base import Rule, compile_all, is_code_file

SAFE_ERRORS_FIX = """// Handle errors safely:

try {
  // ... operation
} catch (error) {
  console.error('Operation failed:', error); // Log internally

  // Return generic message to client
  return Response.json(
    { error: 'An error occurred. Please try again.' },
    { status: 500 }
  );
}

// Remove X-Powered-By in next.config.js:
module.exports = {
  poweredByHeader: false,
};"""


def _disclosure_rule(rule_id: str, severity: Severity, title: str, description: str, pattern: str, flags: int = 0) -> Rule:
    return Rule(
        id=f"info-disclosure/{rule_id}",
        category=FindingCategory.INFO_DISCLOSURE,
        severity=severity,
        title=title,
        description=description,
        fix=SAFE_ERRORS_FIX,
        patterns=compile_all(pattern, flags=flags),
        applies_to=is_code_file,
        snippet_limit=60,
    )


RULES: tuple[Rule, ...] = (
    _disclosure_rule(
        "error-details-in-response",
        Severity.MEDIUM,
        "Error details exposed in response",
        "Exposing error messages or stack traces can reveal system internals to attackers.",
        r'catch\s*\([^)]*\)\s*\{[^}]*(?:res\.json|res\.send|Response\.json|return)[^}]*\b(?:error|err|e)\.(?:message|stack)',
    ),
    _disclosure_rule(
        "sensitive-error-log",
        Severity.HIGH,
        "Sensitive data in console output",
        "Logging sensitive data can expose secrets in server logs.",
        r'console\.(?:error|warn)\s*\([^)]*\b(?:password|secret|token|apiKey|api_key|credential)s?\b',
        flags=re.IGNORECASE,
    ),
    _disclosure_rule(
        "x-powered-by",
        Severity.LOW,
        "X-Powered-By header present",
        "This header reveals technology stack information to attackers.",
        r'["\']X-Powered-By["\']\s*[:,]',
    ),
    _disclosure_rule(
        "server-header",
        Severity.LOW,
        "Server header with version",
        "Server headers with version info help attackers identify vulnerabilities.",
        r'["\']?\bServer["\']?\s*[:,]\s*["\'][^"\']*\d+\.\d+[^"\']*["\']',
    ),
    _disclosure_rule(
        "sensitive-error-message",
        Severity.MEDIUM,
        "Sensitive data in error message",
        "Error messages containing sensitive data may be logged or exposed.",
        r'throw\s+new\s+Error\s*\([^)]*\b(?:password|secret|token|key)\b',
        flags=re.IGNORECASE,
    ),
)
