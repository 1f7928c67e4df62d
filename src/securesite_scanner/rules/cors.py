"""CORS misconfiguration."""

import re

from ..models import FindingCategory, Severity
from .base import Rule, compile_all

CORS_FIX = """// Configure CORS properly:

const corsOptions = {
  origin: ['https://yourdomain.com', 'https://app.yourdomain.com'],
  credentials: true,
  methods: ['GET', 'POST', 'PUT', 'DELETE'],
  allowedHeaders: ['Content-Type', 'Authorization'],
};

// Or validate origin dynamically:
origin: (origin, callback) => {
  const allowed = ['https://yourdomain.com'];
  if (allowed.includes(origin)) callback(null, true);
  else callback(new Error('Not allowed'));
}"""

# Wildcard origin and credentials within one options object
WILDCARD_ORIGIN = r'\borigin\s*[:=]\s*["\']\*["\']'
ALLOW_CREDENTIALS = r'\bcredentials\s*[:=]\s*true'


def _cors_rule(rule_id: str, severity: Severity, title: str, description: str, *patterns: str) -> Rule:
    return Rule(
        id=f"cors/{rule_id}",
        category=FindingCategory.CORS,
        severity=severity,
        title=title,
        description=description,
        fix=CORS_FIX,
        patterns=compile_all(*patterns, flags=re.IGNORECASE),
        snippet_limit=60,
    )


RULES: tuple[Rule, ...] = (
    _cors_rule(
        "wildcard-origin",
        Severity.HIGH,
        "CORS allows all origins",
        "Allowing all origins (*) can expose your API to cross-origin attacks, especially with credentials.",
        r'Access-Control-Allow-Origin["\']?\s*[:=,]\s*["\']\*["\']',
    ),
    _cors_rule(
        "wildcard-with-credentials",
        Severity.CRITICAL,
        "CORS wildcard with credentials",
        "Using * origin with credentials: true is a security misconfiguration.",
        WILDCARD_ORIGIN + r'[^}]{0,300}?' + ALLOW_CREDENTIALS,
        ALLOW_CREDENTIALS + r'[^}]{0,300}?' + WILDCARD_ORIGIN,
    ),
    _cors_rule(
        "wildcard-headers",
        Severity.MEDIUM,
        "CORS allows all headers",
        "Allowing all headers can expose your API to unexpected header-based attacks.",
        r'Access-Control-Allow-Headers["\']?\s*[:=,]\s*["\']\*["\']',
    ),
    _cors_rule(
        "wildcard-methods",
        Severity.MEDIUM,
        "CORS allows all methods",
        "Allowing all HTTP methods may expose dangerous operations.",
        r'Access-Control-Allow-Methods["\']?\s*[:=,]\s*["\']\*["\']',
    ),
)
