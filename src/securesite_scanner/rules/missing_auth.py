"""Route middleware that guards protected paths without checking identity."""

from ..models import FindingCategory, ScannableFile, Severity
from .base import Rule, RuleHit

MIDDLEWARE_FIX = """// Add auth check to middleware:

import { getToken } from 'next-auth/jwt';
import { NextResponse } from 'next/server';

export async function middleware(request) {
  const token = await getToken({ req: request });

  if (!token && request.nextUrl.pathname.startsWith('/dashboard')) {
    return NextResponse.redirect(new URL('/login', request.url));
  }

  return NextResponse.next();
}

export const config = {
  matcher: ['/dashboard/:path*', '/api/:path*']
};"""

PROTECTED_ROUTES = ("/dashboard", "/admin", "/api", "/account", "/settings")
AUTH_MARKERS = ("getToken", "getSession", "auth", "jwt", "cookie")


def is_middleware(file: ScannableFile) -> bool:
    return "middleware" in file.path and file.path.endswith((".ts", ".js"))


def detect_unguarded_middleware(rule: Rule, file: ScannableFile) -> list[RuleHit]:
    content = file.content
    if not any(route in content for route in PROTECTED_ROUTES):
        return []
    if any(marker in content for marker in AUTH_MARKERS):
        return []
    return [rule.hit(file, None, "Protected routes without auth check")]


RULES: tuple[Rule, ...] = (
    Rule(
        id="missing-auth/middleware",
        category=FindingCategory.MISSING_AUTH,
        severity=Severity.HIGH,
        title="Middleware without authentication check",
        description="Middleware handles protected routes but has no visible auth verification.",
        fix=MIDDLEWARE_FIX,
        applies_to=is_middleware,
        detect=detect_unguarded_middleware,
    ),
)
