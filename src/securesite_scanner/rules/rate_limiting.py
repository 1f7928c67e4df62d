"""Authentication endpoints without rate limiting."""

import re

from ..models import FindingCategory, ScannableFile, Severity
from .base import Rule, RuleHit, path_contains

RATE_LIMIT_FIX = """// Add rate limiting to auth endpoints:

import { Ratelimit } from '@upstash/ratelimit';
import { Redis } from '@upstash/redis';

const ratelimit = new Ratelimit({
  redis: Redis.fromEnv(),
  limiter: Ratelimit.slidingWindow(5, '1 m'), // 5 requests per minute
});

export async function POST(req) {
  const ip = req.headers.get('x-forwarded-for') ?? '127.0.0.1';
  const { success } = await ratelimit.limit(ip);

  if (!success) {
    return Response.json({ error: 'Too many requests' }, { status: 429 });
  }
  // ... rest of handler
}"""

AUTH_HANDLER_PATTERNS = (
    re.compile(r'export\s+(?:async\s+)?function\s+POST[^{]*\{[^}]*(?:login|signin|sign-in|auth)', re.IGNORECASE),
    re.compile(r'export\s+(?:async\s+)?function\s+POST[^{]*\{[^}]*(?:register|signup|sign-up)', re.IGNORECASE),
    re.compile(r'export\s+(?:async\s+)?function\s+POST[^{]*\{[^}]*(?:password|reset|forgot)', re.IGNORECASE),
)

RATE_LIMIT_MARKERS = ("ratelimit", "rate-limit", "rate_limit", "upstash", "limiter", "throttle")


def detect_unthrottled_auth(rule: Rule, file: ScannableFile) -> list[RuleHit]:
    """Report the first auth POST handler in a file with no rate limiting in sight."""
    lowered = file.content.lower()
    if any(marker in lowered for marker in RATE_LIMIT_MARKERS):
        return []
    for pattern in AUTH_HANDLER_PATTERNS:
        m = pattern.search(file.content)
        if m:
            return [rule.hit(file, m.start(), m.group(0))]
    return []


RULES: tuple[Rule, ...] = (
    Rule(
        id="rate-limiting/auth-endpoint",
        category=FindingCategory.RATE_LIMITING,
        severity=Severity.MEDIUM,
        title="Auth endpoint without rate limiting",
        description="Authentication endpoints without rate limiting are vulnerable to brute force attacks.",
        fix=RATE_LIMIT_FIX,
        applies_to=path_contains("api", "route"),
        detect=detect_unthrottled_auth,
        snippet_limit=50,
    ),
)
