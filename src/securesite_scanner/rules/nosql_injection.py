"""MongoDB-style operator injection."""

from ..models import FindingCategory, Severity
from .base import Rule, compile_all, is_code_file

NOSQL_FIX = """// Prevent NoSQL injection:

// 1. Sanitize input - remove $ operators
function sanitize(obj) {
  for (const key in obj) {
    if (key.startsWith('$')) delete obj[key];
  }
  return obj;
}

// 2. Use explicit field matching
const user = await User.findOne({
  email: String(req.body.email), // Cast to string
  password: String(req.body.password)
});

// 3. Use a validation library
import { z } from 'zod';
const schema = z.object({ email: z.string().email() });"""

USER_INPUT = r'(?:req\.|body\.|params\.|query\.)'


def _nosql_rule(rule_id: str, severity: Severity, title: str, description: str, pattern: str) -> Rule:
    return Rule(
        id=f"nosql-injection/{rule_id}",
        category=FindingCategory.NOSQL_INJECTION,
        severity=severity,
        title=title,
        description=description,
        fix=NOSQL_FIX,
        patterns=compile_all(pattern),
        applies_to=is_code_file,
        snippet_limit=60,
    )


RULES: tuple[Rule, ...] = (
    _nosql_rule(
        "where-operator",
        Severity.CRITICAL,
        "MongoDB $where with user input",
        "$where operator with user input allows arbitrary JavaScript execution.",
        r'["\']?\$where["\']?\s*:\s*' + USER_INPUT,
    ),
    _nosql_rule(
        "regex-operator",
        Severity.HIGH,
        "MongoDB $regex with user input",
        "User-controlled regex can cause ReDoS attacks.",
        r'["\']?\$regex["\']?\s*:\s*' + USER_INPUT,
    ),
    _nosql_rule(
        "query-operator",
        Severity.HIGH,
        "MongoDB query operator with user input",
        "Query operators with unsanitized user input can bypass authentication.",
        r'\.find(?:One)?\s*\(\s*\{[^}]*\$(?:ne|gt|lt|gte|lte|in|nin)["\']?\s*:\s*(?:req\.|body\.)',
    ),
    _nosql_rule(
        "find-one-user-object",
        Severity.HIGH,
        "MongoDB findOne with direct user input",
        "Passing user input directly to findOne can lead to NoSQL injection.",
        r'\.findOne\s*\(\s*(?:req\.body|req\.query|body|params)\s*\)',
    ),
    _nosql_rule(
        "aggregate-user-input",
        Severity.MEDIUM,
        "MongoDB aggregation with user input",
        "User input in aggregation pipeline can be dangerous.",
        r'\.aggregate\s*\(\s*\[\s*\{[^}]*(?:req\.|body\.)',
    ),
    _nosql_rule(
        "parsed-user-query",
        Severity.HIGH,
        "JSON.parse on user input for query",
        "Parsing user JSON for database queries can inject operators.",
        r'JSON\.parse\s*\([^)]*(?:req\.|body\.|query\.)',
    ),
)
