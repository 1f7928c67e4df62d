"""SQL built from interpolated or concatenated input."""

import re

from ..models import FindingCategory, Severity
from .base import Rule, compile_all, is_code_file

PARAMETERIZED_FIX = """// Use parameterized queries instead:

// Bad:
query("SELECT * FROM users WHERE id = " + id)

// Good:
query("SELECT * FROM users WHERE id = $1", [id])

// With Supabase:
supabase.from('users').select('*').eq('id', id)"""

SQL_VERBS = r'(?:SELECT|INSERT|UPDATE|DELETE|DROP)'


def _sql_rule(rule_id: str, title: str, description: str, *patterns: str) -> Rule:
    return Rule(
        id=f"sql-injection/{rule_id}",
        category=FindingCategory.SQL_INJECTION,
        severity=Severity.CRITICAL,
        title=title,
        description=description,
        fix=PARAMETERIZED_FIX,
        patterns=compile_all(*patterns, flags=re.IGNORECASE),
        applies_to=is_code_file,
    )


RULES: tuple[Rule, ...] = (
    _sql_rule(
        "template-literal",
        "SQL Injection via template literal",
        "User input interpolated directly into SQL query. This allows attackers to execute arbitrary SQL.",
        rf'\bquery\s*\(\s*`{SQL_VERBS}[^`]*\$\{{[^}}]+\}}',
    ),
    _sql_rule(
        "string-concatenation",
        "SQL Injection via string concatenation",
        "User input concatenated into SQL query string. Use parameterized queries instead.",
        rf'\bquery\s*\(\s*["\']{SQL_VERBS}[^"\']*["\']\s*\+\s*\w+',
    ),
    _sql_rule(
        "execute-interpolation",
        "SQL Injection in execute statement",
        "User input interpolated directly into SQL execute statement.",
        rf'\bexecute\s*\(\s*`{SQL_VERBS}[^`]*\$\{{[^}}]+\}}',
        rf'\bexecute\s*\(\s*f["\']{SQL_VERBS}[^"\']*\{{[^}}]+\}}',
        rf'\bexecute\s*\(\s*["\']{SQL_VERBS}[^"\']*["\']\s*%\s*\w+',
    ),
    _sql_rule(
        "raw-query",
        "SQL Injection in raw query",
        "User input in raw SQL query. Raw queries bypass ORM protections.",
        rf'\.raw\s*\(\s*`{SQL_VERBS}[^`]*\$\{{[^}}]+\}}',
    ),
    _sql_rule(
        "supabase-rpc-concatenation",
        "Potential SQL Injection in Supabase RPC",
        "String concatenation in RPC call may allow SQL injection.",
        r'supabase\s*\.\s*rpc\s*\([^)]*\+\s*\w+',
    ),
)
