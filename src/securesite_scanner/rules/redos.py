"""Regular expressions open to catastrophic backtracking."""

from ..models import FindingCategory, Severity
from .base import Rule, compile_all, is_code_file

REDOS_FIX = r"""// Prevent ReDoS attacks:

// 1. Never use user input directly in RegExp
// Bad:
const regex = new RegExp(userInput);

// Good - escape special chars:
function escapeRegex(str) {
  return str.replace(/[.*+?^${}()|[\]\\]/g, '\\$&');
}
const regex = new RegExp(escapeRegex(userInput));

// 2. Use a safe regex library:
import { RE2 } from 're2';
const safeRegex = new RE2(pattern);

// 3. Set timeouts on regex operations"""


def _redos_rule(rule_id: str, severity: Severity, title: str, description: str, pattern: str) -> Rule:
    return Rule(
        id=f"redos/{rule_id}",
        category=FindingCategory.REDOS,
        severity=severity,
        title=title,
        description=description,
        fix=REDOS_FIX,
        patterns=compile_all(pattern),
        applies_to=is_code_file,
        snippet_limit=50,
    )


RULES: tuple[Rule, ...] = (
    _redos_rule(
        "user-regex",
        Severity.HIGH,
        "Dynamic regex from user input",
        "User-controlled regex patterns can cause ReDoS attacks.",
        r'(?:new\s+RegExp|re\.compile)\s*\(\s*(?:req\.|body\.|params\.|query\.|request\.args)',
    ),
    _redos_rule(
        "nested-quantifier",
        Severity.MEDIUM,
        "Potentially vulnerable regex pattern",
        "Nested quantifiers can cause exponential backtracking (ReDoS).",
        r'\(\.\*\)\+|\(\.\+\)\*|\(\.\+\)\+|\(\[[^\]\n]+\]\+\)\+',
    ),
    _redos_rule(
        "unbounded-group-repetition",
        Severity.MEDIUM,
        "Regex with unbounded repetition",
        "Unbounded repetition of groups can cause ReDoS.",
        r'\(\.[*+]\)\{\d+,\}',
    ),
)
