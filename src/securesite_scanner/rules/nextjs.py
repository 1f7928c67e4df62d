"""Next.js data exposure and configuration."""

import re

from ..models import FindingCategory, ScannableFile, Severity
from .base import Rule, compile_all

NEXTJS_FIX = """// Next.js security best practices:

// 1. Never expose secrets via NEXT_PUBLIC_
// Use server-only env vars:
const apiKey = process.env.API_KEY; // Server only

// 2. Filter sensitive data in getServerSideProps:
export async function getServerSideProps() {
  const user = await getUser();
  return {
    props: {
      name: user.name,
      // Don't include: user.password, user.apiKey
    }
  };
}"""

# Public-by-design keys that carry KEY or TOKEN in their name
PUBLIC_KEY_NAMES = re.compile(r'ANON|PUBLISHABLE|SITE_KEY|FIREBASE|MAPBOX|POSTHOG|SENTRY_DSN', re.IGNORECASE)


def is_private_name(m: re.Match, file: ScannableFile) -> bool:
    return not PUBLIC_KEY_NAMES.search(m.group(0))


def _next_rule(rule_id: str, severity: Severity, title: str, description: str, pattern: str, **kwargs) -> Rule:
    flags = kwargs.pop("flags", 0)
    return Rule(
        id=f"nextjs/{rule_id}",
        category=FindingCategory.NEXTJS,
        severity=severity,
        title=title,
        description=description,
        fix=NEXTJS_FIX,
        patterns=compile_all(pattern, flags=flags),
        snippet_limit=60,
        **kwargs,
    )


RULES: tuple[Rule, ...] = (
    _next_rule(
        "server-side-props-secret",
        Severity.CRITICAL,
        "Sensitive data in getServerSideProps",
        "Data returned from getServerSideProps is sent to the client.",
        r'getServerSideProps[^}]*return\s*\{[^}]*props\s*:\s*\{[^}]*\b(?:password|secret|token|apiKey)',
        flags=re.IGNORECASE,
    ),
    _next_rule(
        "static-props-secret",
        Severity.CRITICAL,
        "Sensitive data in getStaticProps",
        "Static props are embedded in the HTML and exposed to clients.",
        r'getStaticProps[^}]*return\s*\{[^}]*props\s*:\s*\{[^}]*\b(?:password|secret|token)',
        flags=re.IGNORECASE,
    ),
    _next_rule(
        "public-env-secret",
        Severity.CRITICAL,
        "Sensitive data in NEXT_PUBLIC_ variable",
        "NEXT_PUBLIC_ variables are inlined into the browser bundle.",
        r'\bNEXT_PUBLIC_[A-Z0-9_]*(?:SECRET|PRIVATE|PASSWORD|SERVICE_ROLE|TOKEN|API_KEY)[A-Z0-9_]*',
        accept=is_private_name,
    ),
    _next_rule(
        "dangerously-allow-browser",
        Severity.HIGH,
        "dangerouslyAllowBrowser enabled",
        "This flag lets a server SDK run in the browser, exposing its credentials.",
        r'\bdangerouslyAllowBrowser\s*:\s*true\b',
    ),
    _next_rule(
        "server-actions-any-origin",
        Severity.HIGH,
        "Server Actions allow all origins",
        "Server actions should restrict allowed origins.",
        r'serverActions\s*:\s*\{[^}]*allowedOrigins\s*:\s*\[\s*["\']\*["\']',
    ),
)
