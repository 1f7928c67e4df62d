"""Mutating API handlers with no authentication check."""

import re

from ..models import FindingCategory, ScannableFile, Severity
from .base import Rule, path_contains

SESSION_FIX = """// Add authentication to your API route:

import { getServerSession } from 'next-auth';
import { authOptions } from '@/lib/auth';

export async function POST(req: Request) {
  const session = await getServerSession(authOptions);

  if (!session) {
    return Response.json({ error: 'Unauthorized' }, { status: 401 });
  }

  // ... rest of handler
}"""

AUTH_MARKERS = (
    "getServerSession",
    "getSession",
    "auth()",
    "currentUser",
    "requireAuth",
    "isAuthenticated",
    "verifyToken",
    "jwt.verify",
    "authenticate",
    "Authorization",
    "supabase.auth",
    "clerk",
)

is_api_file = path_contains("api", "route")


def is_unauthenticated_handler(file: ScannableFile) -> bool:
    return is_api_file(file) and not any(marker in file.content for marker in AUTH_MARKERS)


RULES: tuple[Rule, ...] = (
    Rule(
        id="unprotected-api/mutation-without-auth",
        category=FindingCategory.UNPROTECTED_API,
        severity=Severity.HIGH,
        title="API endpoint without authentication",
        description="This API endpoint handles mutations but has no visible authentication check. "
        "Anyone can call this endpoint.",
        fix=SESSION_FIX,
        patterns=(re.compile(r'export\s+(?:async\s+)?function\s+(?:POST|PUT|DELETE|PATCH)\b'),),
        applies_to=is_unauthenticated_handler,
        once_per_file=True,
    ),
)
