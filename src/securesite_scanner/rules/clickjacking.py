"""Next.js configuration without frame protection."""

from ..models import FindingCategory, ScannableFile, Severity
from .base import Rule, RuleHit

FRAME_FIX = """// Add to next.config.js:
module.exports = {
  async headers() {
    return [{
      source: '/:path*',
      headers: [
        {
          key: 'X-Frame-Options',
          value: 'DENY'  // or 'SAMEORIGIN'
        },
        {
          key: 'Content-Security-Policy',
          value: "frame-ancestors 'none'"
        }
      ],
    }];
  },
};"""

FRAME_PROTECTION_MARKERS = ("X-Frame-Options", "frame-ancestors", "DENY", "SAMEORIGIN")


def is_next_config(file: ScannableFile) -> bool:
    return "next.config" in file.path


def detect_missing_frame_protection(rule: Rule, file: ScannableFile) -> list[RuleHit]:
    if any(marker in file.content for marker in FRAME_PROTECTION_MARKERS):
        return []
    return [rule.hit(file, None, "Missing frame protection headers")]


RULES: tuple[Rule, ...] = (
    Rule(
        id="clickjacking/missing-frame-protection",
        category=FindingCategory.CLICKJACKING,
        severity=Severity.MEDIUM,
        title="Missing clickjacking protection",
        description="No X-Frame-Options or CSP frame-ancestors header found.",
        fix=FRAME_FIX,
        applies_to=is_next_config,
        detect=detect_missing_frame_protection,
    ),
)
