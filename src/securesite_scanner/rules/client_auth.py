"""Authorization decisions made in browser code."""

from ..models import FindingCategory, ScannableFile, Severity
from .base import Rule, compile_all

SERVER_SIDE_FIX = """// Move this check to:
// 1. A Server Component or API route
// 2. Supabase RLS policy
// 3. Middleware

// Example server-side check:
export async function GET() {
  const session = await getServerSession();
  if (session?.user?.role !== 'admin') {
    return Response.json({ error: 'Unauthorized' }, { status: 403 });
  }
}"""


def is_client_component(file: ScannableFile) -> bool:
    return '"use client"' in file.content or "'use client'" in file.content


def _client_rule(rule_id: str, title: str, description: str, pattern: str) -> Rule:
    return Rule(
        id=f"client-auth/{rule_id}",
        category=FindingCategory.CLIENT_AUTH,
        severity=Severity.HIGH,
        title=title,
        description=description,
        fix=SERVER_SIDE_FIX,
        patterns=compile_all(pattern),
        applies_to=is_client_component,
    )


RULES: tuple[Rule, ...] = (
    _client_rule(
        "inline-supabase-credentials",
        "Supabase client with inline credentials",
        "Supabase client is initialized with inline credentials in client code. Use environment variables instead.",
        r'create(?:Browser)?Client\s*\(\s*["\'][^"\']+["\']\s*,\s*["\'][^"\']+["\']',
    ),
    _client_rule(
        "privileged-role-check",
        "Privileged role check in client code",
        "Role-based access checks in client code can be bypassed. "
        "Enforce authorization on the server or in RLS policies.",
        r'user\.role\s*===?\s*["\'](?:admin|superuser|moderator|owner)["\']',
    ),
    _client_rule(
        "is-admin-check",
        "isAdmin check in client code",
        "The isAdmin check is performed client-side and can be bypassed. Move authorization logic to the server.",
        r'if\s*\(\s*!?\s*user\??\.isAdmin\s*\)',
    ),
    _client_rule(
        "admin-filtering",
        "Client-side admin filtering",
        "Filtering data by admin role in the browser means all data was sent to the client first. "
        "Filter on the server instead.",
        r'\.filter\([^)]*role\s*===?\s*["\']admin["\'][^)]*\)',
    ),
    _client_rule(
        "token-in-local-storage",
        "Auth token from localStorage",
        "Storing auth tokens in localStorage is vulnerable to XSS attacks. Use httpOnly cookies instead.",
        r'localStorage\.getItem\s*\(\s*["\'](?:token|auth|session|user|accessToken|access_token)["\']\s*\)',
    ),
)
