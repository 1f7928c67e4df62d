"""Open redirects driven by request data."""

from ..models import FindingCategory, Severity
from .base import Rule, compile_all, is_code_file

SAFE_REDIRECT_FIX = """// Validate redirect URLs:

const ALLOWED_HOSTS = ['yourdomain.com', 'app.yourdomain.com'];

function safeRedirect(url: string): string {
  try {
    const parsed = new URL(url, 'https://yourdomain.com');
    if (ALLOWED_HOSTS.includes(parsed.host)) {
      return parsed.toString();
    }
  } catch {}
  return '/'; // Default to home
}

// Usage:
redirect(safeRedirect(userInput));"""


def _redirect_rule(rule_id: str, severity: Severity, title: str, description: str, pattern: str) -> Rule:
    return Rule(
        id=f"insecure-redirect/{rule_id}",
        category=FindingCategory.INSECURE_REDIRECT,
        severity=severity,
        title=title,
        description=description,
        fix=SAFE_REDIRECT_FIX,
        patterns=compile_all(pattern),
        applies_to=is_code_file,
        snippet_limit=60,
    )


RULES: tuple[Rule, ...] = (
    _redirect_rule(
        "query-redirect",
        Severity.HIGH,
        "Open redirect vulnerability",
        "Redirecting to user-controlled URLs can lead to phishing attacks.",
        r'\bredirect\s*\(\s*(?:req\.query|searchParams\.get|params|request\.args(?:\.get)?)[.(][^)]+\)',
    ),
    _redirect_rule(
        "body-redirect",
        Severity.HIGH,
        "Redirect from request body",
        "Redirecting to URLs from request body is dangerous without validation.",
        r'\bredirect\s*\(\s*(?:req\.body|body)\.[^)]+\)',
    ),
    _redirect_rule(
        "dynamic-location",
        Severity.MEDIUM,
        "Dynamic client-side redirect",
        "Constructing redirect URLs from variables can lead to open redirects.",
        r'window\.location(?:\.href)?\s*=(?!=)\s*(?:[^;\n]*\+|`[^`]*\$\{)',
    ),
    _redirect_rule(
        "dynamic-router-push",
        Severity.MEDIUM,
        "Dynamic router.push with variables",
        "Using unsanitized input in router.push can lead to open redirects.",
        r'router\.push\s*\(\s*(?:[^)\n]*\+|`[^`]*\$\{)',
    ),
)
