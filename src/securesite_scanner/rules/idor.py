"""Records looked up by a request-supplied ID with no ownership filter."""

import re

from ..models import FindingCategory, ScannableFile, Severity
from .base import Rule, compile_all, is_code_file, window

OWNERSHIP_FIX = """// Always verify ownership:

// Bad - anyone can access any record:
const post = await prisma.post.findUnique({
  where: { id: params.id }
});

// Good - verify ownership:
const post = await prisma.post.findFirst({
  where: {
    id: params.id,
    userId: session.user.id  // Ownership check!
  }
});

if (!post) {
  return Response.json({ error: 'Not found' }, { status: 404 });
}"""

OWNERSHIP_MARKERS = ("userId", "ownerId", "user_id")
OWNERSHIP_RADIUS = 200


def lacks_ownership_check(m: re.Match, file: ScannableFile) -> bool:
    nearby = window(file.content, m.start(), OWNERSHIP_RADIUS, OWNERSHIP_RADIUS)
    return not any(marker in nearby for marker in OWNERSHIP_MARKERS)


def _idor_rule(rule_id: str, severity: Severity, title: str, description: str, pattern: str) -> Rule:
    return Rule(
        id=f"idor/{rule_id}",
        category=FindingCategory.IDOR,
        severity=severity,
        title=title,
        description=description,
        fix=OWNERSHIP_FIX,
        patterns=compile_all(pattern),
        applies_to=is_code_file,
        accept=lacks_ownership_check,
        snippet_limit=60,
    )


RULES: tuple[Rule, ...] = (
    _idor_rule(
        "find-unique-by-request-id",
        Severity.HIGH,
        "Direct object access without ownership check",
        "Fetching records by ID without verifying the user owns this resource.",
        r'\.findUnique\s*\(\s*\{\s*where\s*:\s*\{\s*id\s*:\s*(?:params|req|searchParams)\b',
    ),
    _idor_rule(
        "find-first-by-request-id",
        Severity.HIGH,
        "findFirst without ownership verification",
        "Fetching records without checking if the current user has access.",
        r'\.findFirst\s*\(\s*\{\s*where\s*:\s*\{\s*id\s*:\s*(?:params|req)\b',
    ),
    _idor_rule(
        "delete-by-request-id",
        Severity.CRITICAL,
        "Delete without ownership check",
        "Deleting records by ID without verifying user ownership.",
        r'\.delete\s*\(\s*\{\s*where\s*:\s*\{\s*id\s*:\s*(?:params|req)\b',
    ),
    _idor_rule(
        "update-by-request-id",
        Severity.HIGH,
        "Update without ownership check",
        "Updating records by ID without verifying user ownership.",
        r'\.update\s*\(\s*\{\s*where\s*:\s*\{\s*id\s*:\s*(?:params|req)\b',
    ),
    _idor_rule(
        "supabase-by-id",
        Severity.MEDIUM,
        "Supabase query by ID without user filter",
        "Querying by ID alone - ensure RLS policies restrict access.",
        r'supabase\s*\.\s*from\s*\([^)]+\)\s*\.\s*(?:select|delete|update)\s*\([^)]*\)\s*\.\s*eq\s*\(\s*["\']id["\']',
    ),
)
