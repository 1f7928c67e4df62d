"""Cookies set without protective flags."""

import re

from ..models import FindingCategory, ScannableFile, Severity
from .base import Rule, compile_all, is_code_file

SECURE_COOKIE_FIX = """// Secure cookie configuration:

res.cookie('session', token, {
  httpOnly: true,    // Prevents JavaScript access
  secure: true,      // HTTPS only
  sameSite: 'strict', // Prevents CSRF
  maxAge: 3600000,   // 1 hour expiration
  path: '/',
});

// Or with next-auth / auth.js:
cookies: {
  sessionToken: {
    options: { httpOnly: true, secure: true, sameSite: 'lax' }
  }
}"""


def lacks_http_only(m: re.Match, file: ScannableFile) -> bool:
    return "httponly" not in m.group(0).lower()


def _cookie_rule(rule_id: str, severity: Severity, title: str, description: str, pattern: str, **kwargs) -> Rule:
    return Rule(
        id=f"cookies/{rule_id}",
        category=FindingCategory.COOKIES,
        severity=severity,
        title=title,
        description=description,
        fix=SECURE_COOKIE_FIX,
        patterns=compile_all(pattern, flags=re.IGNORECASE),
        applies_to=is_code_file,
        snippet_limit=60,
        **kwargs,
    )


RULES: tuple[Rule, ...] = (
    _cookie_rule(
        "set-cookie-without-http-only",
        Severity.HIGH,
        "Cookie without httpOnly flag",
        "Cookies without httpOnly can be accessed by JavaScript, making them vulnerable to XSS theft.",
        r'\bsetCookie\s*\([^)]+\)',
        accept=lacks_http_only,
    ),
    _cookie_rule(
        "cookie-options-without-http-only",
        Severity.HIGH,
        "Cookie configuration missing httpOnly",
        "Session cookies should have httpOnly flag to prevent JavaScript access.",
        r'["\']?\bcookie["\']?\s*[:=]\s*\{[^}]*\}',
        accept=lacks_http_only,
    ),
    _cookie_rule(
        "document-cookie",
        Severity.MEDIUM,
        "Client-side cookie manipulation",
        "Setting cookies via document.cookie means they cannot be httpOnly.",
        r'document\.cookie\s*=(?!=)',
    ),
    _cookie_rule(
        "same-site-none",
        Severity.MEDIUM,
        "Cookie with SameSite=None",
        "SameSite=None allows cross-site requests. Ensure this is intentional and the Secure flag is set.",
        r'\bsame_?site\s*[:=]\s*["\']?none\b["\']?',
    ),
)
