"""State-changing requests sent without CSRF protection."""

import re

from ..models import FindingCategory, ScannableFile, Severity
from .base import Rule, compile_all, is_code_file

CSRF_FIX = """// Add CSRF protection:

// Option 1: Use next-auth (has built-in CSRF)
// Option 2: Add CSRF token to forms:
<input type="hidden" name="csrf_token" value={csrfToken} />

// Option 3: Use SameSite cookies:
cookies: {
  sameSite: 'strict',
  httpOnly: true,
}"""


def without_markers(*markers: str):
    """File filter for code files mentioning none of the CSRF markers, case-insensitively."""
    lowered = tuple(marker.lower() for marker in markers)

    def check(file: ScannableFile) -> bool:
        if not is_code_file(file):
            return False
        content = file.content.lower()
        return not any(marker in content for marker in lowered)

    return check


def _csrf_rule(rule_id: str, title: str, description: str, pattern: str, markers, flags: int = 0) -> Rule:
    return Rule(
        id=f"csrf/{rule_id}",
        category=FindingCategory.CSRF,
        severity=Severity.MEDIUM,
        title=title,
        description=description,
        fix=CSRF_FIX,
        patterns=compile_all(pattern, flags=flags),
        applies_to=without_markers(*markers),
        once_per_file=True,
        snippet_limit=50,
    )


RULES: tuple[Rule, ...] = (
    _csrf_rule(
        "form-without-token",
        "Form without CSRF token",
        "POST forms should include CSRF tokens to prevent cross-site request forgery.",
        r'<form[^>]*method=["\']post["\'][^>]*>',
        ("csrf", "_token"),
        flags=re.IGNORECASE,
    ),
    _csrf_rule(
        "fetch-with-credentials",
        "Fetch with credentials but no CSRF",
        "Requests with credentials should include CSRF protection.",
        r'credentials:\s*["\']include["\']',
        ("csrf", "x-csrf"),
    ),
    _csrf_rule(
        "axios-with-credentials",
        "Axios with credentials but no CSRF",
        "Requests with credentials should include CSRF protection.",
        r'withCredentials:\s*true\b',
        ("csrf", "x-csrf"),
    ),
)
