"""Environment variables and sensitive values leaking into logs or responses."""

import re

from ..models import FindingCategory, Severity
from .base import Rule, compile_all, is_js_file

NO_ECHO_FIX = """// Never log or return environment variables

// Bad:
console.log(process.env.API_KEY);
return { key: process.env.SECRET };

// Good:
console.log('API call made'); // Log action, not secrets
return { success: true }; // Return status, not secrets"""


def _env_rule(rule_id: str, severity: Severity, title: str, description: str, pattern: str, flags: int = 0) -> Rule:
    return Rule(
        id=f"env-exposure/{rule_id}",
        category=FindingCategory.ENV_EXPOSURE,
        severity=severity,
        title=title,
        description=description,
        fix=NO_ECHO_FIX,
        patterns=compile_all(pattern, flags=flags),
        applies_to=is_js_file,
        snippet_limit=60,
    )


RULES: tuple[Rule, ...] = (
    _env_rule(
        "env-logged",
        Severity.HIGH,
        "Environment variables logged to console",
        "Logging environment variables can expose secrets in browser console or server logs.",
        r'console\.(?:log|info|debug|warn|error)\s*\([^)]*process\.env',
    ),
    _env_rule(
        "sensitive-logged",
        Severity.HIGH,
        "Sensitive data logged to console",
        "Logging sensitive data can expose secrets in logs.",
        r'console\.(?:log|info|debug)\s*\((?![^)]*process\.env)[^)]*\b(?:apiKey|api_key|secret|password|token|credential)s?\b',
        flags=re.IGNORECASE,
    ),
    _env_rule(
        "env-in-returned-object",
        Severity.CRITICAL,
        "Environment variable in API response",
        "Returning environment variables in API responses can expose server secrets to clients.",
        r'return\s+\{[^}]*process\.env\.[A-Z_]+[^}]*\}',
    ),
    _env_rule(
        "env-in-response",
        Severity.CRITICAL,
        "Environment variable sent in response",
        "Sending environment variables in HTTP responses exposes server configuration.",
        r'(?:res\.(?:json|send)|Response\.json|NextResponse\.json)\s*\([^)]*process\.env',
    ),
)
