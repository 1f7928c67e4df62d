"""Missing HTTP security headers in header configuration files."""

import re

from ..models import FindingCategory, ScannableFile, Severity
from .base import Rule, RuleHit

HEADERS_FIX = """// Add to next.config.js:
module.exports = {
  async headers() {
    return [{
      source: '/:path*',
      headers: [
        { key: 'X-Frame-Options', value: 'DENY' },
        { key: 'X-Content-Type-Options', value: 'nosniff' },
        { key: 'Strict-Transport-Security', value: 'max-age=31536000; includeSubDomains' },
        { key: 'Content-Security-Policy', value: "default-src 'self'" },
      ],
    }];
  },
};"""


def is_header_config(file: ScannableFile) -> bool:
    """Next.js config, middleware, or a file dedicated to response headers."""
    path = file.path.lower()
    if "next.config" in path:
        return True
    return ("middleware" in path or "headers" in path) and "headers" in file.content.lower()


def _missing_header_rule(rule_id: str, header: str, title: str, description: str) -> Rule:
    pattern = re.compile(re.escape(header), re.IGNORECASE)

    def detect(rule: Rule, file: ScannableFile) -> list[RuleHit]:
        if pattern.search(file.content):
            return []
        return [rule.hit(file, None, f"Missing: {header}")]

    return Rule(
        id=f"security-headers/{rule_id}",
        category=FindingCategory.SECURITY_HEADERS,
        severity=Severity.MEDIUM,
        title=title,
        description=description,
        fix=HEADERS_FIX,
        applies_to=is_header_config,
        detect=detect,
    )


RULES: tuple[Rule, ...] = (
    _missing_header_rule(
        "missing-csp",
        "Content-Security-Policy",
        "Missing Content-Security-Policy header",
        "CSP helps prevent XSS attacks by controlling which resources can be loaded.",
    ),
    _missing_header_rule(
        "missing-x-frame-options",
        "X-Frame-Options",
        "Missing X-Frame-Options header",
        "Without this header, your site may be vulnerable to clickjacking attacks.",
    ),
    _missing_header_rule(
        "missing-x-content-type-options",
        "X-Content-Type-Options",
        "Missing X-Content-Type-Options header",
        "This header prevents MIME-type sniffing attacks.",
    ),
    _missing_header_rule(
        "missing-hsts",
        "Strict-Transport-Security",
        "Missing HSTS header",
        "HSTS ensures browsers only connect via HTTPS.",
    ),
)
