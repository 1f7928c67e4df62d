"""Request data used in handlers that never validate it."""

import re

from ..models import FindingCategory, ScannableFile, Severity
from .base import Rule, path_contains

ZOD_FIX = """// Validate input with Zod:

import { z } from 'zod';

const schema = z.object({
  email: z.string().email(),
  name: z.string().min(1).max(100),
  age: z.number().int().positive().optional(),
});

export async function POST(req: Request) {
  const body = await req.json();
  const result = schema.safeParse(body);

  if (!result.success) {
    return Response.json(
      { error: 'Invalid input', details: result.error.issues },
      { status: 400 }
    );
  }

  const { email, name, age } = result.data;
  // Now safely use validated data
}"""


is_handler_file = path_contains("api", "route", "action")


def lacks_markers(*markers: str):
    """File filter for handler files that contain none of the validation markers."""

    def check(file: ScannableFile) -> bool:
        return is_handler_file(file) and not any(marker in file.content for marker in markers)

    return check


def _validation_rule(rule_id: str, severity: Severity, title: str, description: str, pattern: str, markers) -> Rule:
    return Rule(
        id=f"input-validation/{rule_id}",
        category=FindingCategory.INPUT_VALIDATION,
        severity=severity,
        title=title,
        description=description,
        fix=ZOD_FIX,
        patterns=(re.compile(pattern),),
        applies_to=lacks_markers(*markers),
        once_per_file=True,
    )


RULES: tuple[Rule, ...] = (
    _validation_rule(
        "unvalidated-body",
        Severity.MEDIUM,
        "Request body used without validation",
        "Using request body data without validation can lead to injection attacks.",
        r'\b(?:req\.body|body)\.[a-zA-Z]+',
        ("zod", "yup", "joi", "validate"),
    ),
    _validation_rule(
        "unvalidated-json",
        Severity.MEDIUM,
        "JSON body parsed without validation",
        "A parsed JSON body should be validated against a schema.",
        r'await\s+(?:request|req)\.json\s*\(\)',
        ("zod", "yup", "schema", "validate"),
    ),
    _validation_rule(
        "unvalidated-query",
        Severity.LOW,
        "Query params used without validation",
        "Query parameters should be validated and sanitized before use.",
        r'searchParams\.get\s*\([^)]+\)',
        ("parseInt", "validate", "schema"),
    ),
)
