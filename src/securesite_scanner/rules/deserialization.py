"""Deserializers that can run code or trust unvalidated input."""

from ..models import FindingCategory, Severity
from .base import Rule, compile_all, is_code_file

SAFE_PARSE_FIX = """// Safe deserialization:

// 1. Always validate after parsing:
import { z } from 'zod';

const schema = z.object({
  name: z.string(),
  age: z.number(),
});

const data = schema.parse(JSON.parse(input));

// 2. Use safe YAML loading:
import yaml from 'js-yaml';
const data = yaml.load(input, { schema: yaml.SAFE_SCHEMA });

# Python: yaml.safe_load(data), json instead of pickle"""


def _deserialization_rule(rule_id: str, severity: Severity, title: str, description: str, pattern: str) -> Rule:
    return Rule(
        id=f"deserialization/{rule_id}",
        category=FindingCategory.UNSAFE_DESERIALIZATION,
        severity=severity,
        title=title,
        description=description,
        fix=SAFE_PARSE_FIX,
        patterns=compile_all(pattern),
        applies_to=is_code_file,
    )


RULES: tuple[Rule, ...] = (
    _deserialization_rule(
        "json-parse-untrusted",
        Severity.MEDIUM,
        "JSON.parse on untrusted input",
        "Parsing JSON from user input without validation can be dangerous.",
        r'JSON\.parse\s*\(\s*(?:req\.|body\b|localStorage|sessionStorage)',
    ),
    _deserialization_rule(
        "eval-json",
        Severity.CRITICAL,
        "eval() used for JSON parsing",
        "Never use eval() for parsing. Use JSON.parse() instead.",
        r'\beval\s*\(\s*JSON\b',
    ),
    _deserialization_rule(
        "unsafe-serialization-library",
        Severity.HIGH,
        "Potentially unsafe serialization library",
        "Some serialization libraries can execute code during deserialization.",
        r'serialize-javascript|node-serialize|js-yaml\.load\b',
    ),
    _deserialization_rule(
        "yaml-load-untrusted",
        Severity.CRITICAL,
        "YAML parsing of user input",
        "YAML.load can execute arbitrary code. Use YAML.safeLoad instead.",
        r'\byaml\.load\s*\(\s*(?:req\.|body\b|params\b|request\.)',
    ),
    _deserialization_rule(
        "code-executing-deserializer",
        Severity.CRITICAL,
        "Unsafe deserialization function",
        "These functions can execute arbitrary code during deserialization.",
        r'\b(?:pickle|cPickle|marshal|dill)\.loads?\s*\(|\bunserialize\s*\(',
    ),
)
