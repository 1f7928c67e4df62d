"""Prisma raw query misuse."""

from ..models import FindingCategory, Severity
from .base import Rule, compile_all, is_js_file

PRISMA_FIX = """// Safe Prisma queries:

// Bad - vulnerable to injection:
await prisma.$queryRawUnsafe(
  `SELECT * FROM users WHERE id = ${userId}`
);

// Good - tagged template parameterizes values:
await prisma.$queryRaw`SELECT * FROM users WHERE id = ${userId}`;

// Or better - use the Prisma client:
await prisma.user.findUnique({ where: { id: userId } });"""


def _prisma_rule(rule_id: str, title: str, description: str, pattern: str) -> Rule:
    return Rule(
        id=f"prisma/{rule_id}",
        category=FindingCategory.PRISMA,
        severity=Severity.CRITICAL,
        title=title,
        description=description,
        fix=PRISMA_FIX,
        patterns=compile_all(pattern),
        applies_to=is_js_file,
        snippet_limit=60,
    )


RULES: tuple[Rule, ...] = (
    _prisma_rule(
        "raw-query-call-interpolation",
        "Prisma raw query built with interpolation",
        "Passing an interpolated string to $queryRaw() or $executeRaw() as a function call skips "
        "parameterization and is vulnerable to SQL injection.",
        r'\$(?:queryRaw|executeRaw)\s*\(\s*`[^`]*\$\{',
    ),
    _prisma_rule(
        "query-raw-unsafe",
        "Using $queryRawUnsafe",
        "$queryRawUnsafe bypasses SQL injection protections. Use $queryRaw with Prisma.sql.",
        r'\$queryRawUnsafe\s*\(',
    ),
    _prisma_rule(
        "execute-raw-unsafe",
        "Using $executeRawUnsafe",
        "$executeRawUnsafe bypasses SQL injection protections.",
        r'\$executeRawUnsafe\s*\(',
    ),
)
