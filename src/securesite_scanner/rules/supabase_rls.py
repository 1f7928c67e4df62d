"""Supabase Row Level Security checks for SQL migrations."""

import re

from ..models import FindingCategory, ScannableFile, Severity
from .base import Rule, RuleHit, compile_all, has_extension

CREATE_TABLE_PATTERN = re.compile(
    r'CREATE\s+TABLE\s+(?:IF\s+NOT\s+EXISTS\s+)?(?:public\.)?["\']?(\w+)["\']?',
    re.IGNORECASE,
)

RLS_FIX_TEMPLATE = """-- Add after your CREATE TABLE statement:
ALTER TABLE {table} ENABLE ROW LEVEL SECURITY;

-- Then add a policy:
CREATE POLICY "Users can only access their own data"
  ON {table}
  FOR ALL
  USING (auth.uid() = user_id);"""


def _rls_enabled(content: str, table: str) -> bool:
    pattern = re.compile(
        rf'ALTER\s+TABLE\s+(?:IF\s+EXISTS\s+)?(?:ONLY\s+)?(?:public\.)?["\']?{re.escape(table)}["\']?'
        r'\s+ENABLE\s+ROW\s+LEVEL\s+SECURITY',
        re.IGNORECASE,
    )
    return bool(pattern.search(content))


def detect_tables_without_rls(rule: Rule, file: ScannableFile) -> list[RuleHit]:
    """Report each created table that is never given ENABLE ROW LEVEL SECURITY in the same file."""
    hits: list[RuleHit] = []
    for m in CREATE_TABLE_PATTERN.finditer(file.content):
        table = m.group(1)
        if _rls_enabled(file.content, table):
            continue
        hit = rule.hit(file, m.start(), m.group(0))
        hits.append(hit._replace(
            title=f"RLS not enabled on table `{table}`",
            fix_snippet=RLS_FIX_TEMPLATE.format(table=table),
        ))
    return hits


is_sql_file = has_extension(".sql")

RULES: tuple[Rule, ...] = (
    Rule(
        id="supabase-rls/table-without-rls",
        category=FindingCategory.SUPABASE_RLS,
        severity=Severity.CRITICAL,
        title="RLS not enabled on table",
        description=(
            "Row Level Security (RLS) must be explicitly enabled on all tables to prevent unauthorized "
            "data access. Without RLS, anyone with the anon key can read/write all data."
        ),
        fix="ALTER TABLE <table> ENABLE ROW LEVEL SECURITY;",
        applies_to=is_sql_file,
        detect=detect_tables_without_rls,
    ),
    Rule(
        id="supabase-rls/permissive-policy",
        category=FindingCategory.SUPABASE_RLS,
        severity=Severity.HIGH,
        title="Over-permissive RLS policy",
        description=(
            "`USING (true)` makes this policy grant access to everyone. "
            "This effectively bypasses Row Level Security."
        ),
        fix="""-- Replace USING (true) with proper auth checks:
USING (auth.uid() = user_id)

-- Or for public read-only data:
USING (true) -- OK for SELECT on public data
WITH CHECK (auth.uid() = user_id) -- But restrict writes""",
        patterns=compile_all(
            r'CREATE\s+POLICY\s+["\']?[^"\'\s]+["\']?[^;]*?USING\s*\(\s*true\s*\)',
            flags=re.IGNORECASE,
        ),
        applies_to=is_sql_file,
        snippet_limit=100,
    ),
)
