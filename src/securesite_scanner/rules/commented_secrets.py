"""Credentials and credential TODOs left in comments."""

import re

from ..models import FindingCategory, Severity
from .base import Rule, compile_all, is_js_file

COMMENT_FIX = """// Never leave credentials in comments!

// Bad:
// password = "mysecretpassword"
// TODO: remove this API key

// Good:
// Remove all credential references from source code
// Use environment variables instead"""

# Comment markers only at line start or after whitespace, so https:// never counts
LINE_COMMENT = r'(?:^|(?<=\s))//[^\n]*?'
HASH_COMMENT = r'(?:^|(?<=\s))#[^\n]*?'


def _comment_rule(rule_id: str, severity: Severity, title: str, description: str, pattern: str, **kwargs) -> Rule:
    return Rule(
        id=f"commented-secrets/{rule_id}",
        category=FindingCategory.COMMENTED_SECRETS,
        severity=severity,
        title=title,
        description=description,
        fix=COMMENT_FIX,
        patterns=compile_all(pattern, flags=re.IGNORECASE | re.MULTILINE),
        snippet_limit=50,
        **kwargs,
    )


RULES: tuple[Rule, ...] = (
    _comment_rule(
        "password-in-comment",
        Severity.HIGH,
        "Password in comment",
        "Credentials in comments are still visible in source control.",
        LINE_COMMENT + r'\b(?:password|passwd|pwd)\s*[:=]\s*\S+',
    ),
    _comment_rule(
        "api-key-in-comment",
        Severity.HIGH,
        "API key in comment",
        "API keys in comments are still visible in source control.",
        LINE_COMMENT + r'\b(?:api[_-]?key|apikey)\s*[:=]\s*\S+',
    ),
    _comment_rule(
        "token-in-comment",
        Severity.HIGH,
        "Secret/token in comment",
        "Secrets in comments are still visible in source control.",
        LINE_COMMENT + r'\b(?:secret|token)\s*[:=]\s*\S+',
    ),
    _comment_rule(
        "credential-in-block-comment",
        Severity.HIGH,
        "Credential in block comment",
        "Credentials in block comments are still visible in source control.",
        r'/\*(?:(?!\*/)[\s\S]){0,2000}?\b(?:password|secret|api[_-]?key)\s*[:=]\s*\S+',
    ),
    _comment_rule(
        "credential-in-hash-comment",
        Severity.HIGH,
        "Credential in hash comment",
        "Credentials in comments are still visible in source control.",
        HASH_COMMENT + r'\b(?:password|secret|api[_-]?key|token)\s*[:=]\s*\S+',
        applies_to=lambda file: not is_js_file(file),
    ),
    _comment_rule(
        "credential-todo",
        Severity.MEDIUM,
        "TODO referencing credentials",
        "TODOs about removing credentials indicate they may still be present.",
        r'\bTODO:?\s*(?:remove|delete|fix)[^\n]*\b(?:password|secret|key|token)',
    ),
    _comment_rule(
        "credential-fixme",
        Severity.MEDIUM,
        "FIXME referencing credentials",
        "FIXME about credentials indicates a security issue needs attention.",
        r'\bFIXME:?[^\n]*\b(?:password|secret|key|token|credential)',
    ),
)
