"""Whole request bodies written into models."""

from ..models import FindingCategory, Severity
from .base import Rule, compile_all, is_code_file

PICK_FIELDS_FIX = """// Prevent mass assignment:

// Bad - allows setting any field:
await User.create(req.body);

// Good - explicitly pick allowed fields:
const { name, email } = req.body;
await User.create({ name, email });

// Or use a validation schema:
import { z } from 'zod';
const schema = z.object({
  name: z.string(),
  email: z.string().email(),
  // isAdmin is NOT included - can't be mass assigned
});
const data = schema.parse(req.body);"""


def _assignment_rule(rule_id: str, severity: Severity, title: str, description: str, pattern: str) -> Rule:
    return Rule(
        id=f"mass-assignment/{rule_id}",
        category=FindingCategory.MASS_ASSIGNMENT,
        severity=severity,
        title=title,
        description=description,
        fix=PICK_FIELDS_FIX,
        patterns=compile_all(pattern),
        applies_to=is_code_file,
    )


RULES: tuple[Rule, ...] = (
    _assignment_rule(
        "create-with-body",
        Severity.HIGH,
        "ORM create with full request body",
        "Passing the entire request body to create() allows mass assignment attacks.",
        r'\.create\s*\(\s*(?:\{\s*data\s*:\s*)?req\.body\s*\}?\s*\)',
    ),
    _assignment_rule(
        "update-with-body",
        Severity.HIGH,
        "ORM update with full request body",
        "Passing the entire request body to update() allows mass assignment.",
        r'\.update\s*\([^,()]*,\s*req\.body\s*\)',
    ),
    _assignment_rule(
        "object-assign-body",
        Severity.HIGH,
        "Object.assign with request body",
        "Assigning all request properties can override protected fields.",
        r'Object\.assign\s*\(\s*\w+\s*,\s*req\.body\s*\)',
    ),
    _assignment_rule(
        "spread-body",
        Severity.MEDIUM,
        "Spreading request body into object",
        "Spreading request body can include unexpected fields like isAdmin.",
        r'\{\s*\.\.\.req\.body\s*\}',
    ),
    _assignment_rule(
        "find-by-id-and-update-body",
        Severity.HIGH,
        "MongoDB findByIdAndUpdate with body",
        "Passing full request body to MongoDB update allows field injection.",
        r'findByIdAndUpdate\s*\([^,]+,\s*req\.body\b',
    ),
)
