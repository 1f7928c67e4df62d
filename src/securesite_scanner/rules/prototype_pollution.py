"""Prototype pollution through user-controlled object keys."""

import re

from ..models import FindingCategory, ScannableFile, Severity
from .base import Rule, compile_all, is_js_file

PROTOTYPE_FIX = """// Prevent prototype pollution:

// 1. Validate keys before assignment
const FORBIDDEN_KEYS = ['__proto__', 'constructor', 'prototype'];
if (FORBIDDEN_KEYS.includes(key)) throw new Error('Invalid key');

// 2. Use Object.create(null) for dictionaries
const safeObj = Object.create(null);

// 3. Freeze prototypes in critical code
Object.freeze(Object.prototype);

// 4. Use a validation library
import { z } from 'zod';
const schema = z.record(z.string(), z.unknown());"""

DEEP_MERGE_PATTERN = re.compile(r'\b(?:merge|defaultsDeep|mergeWith|set)\s*\(')


def uses_deep_merge(m: re.Match, file: ScannableFile) -> bool:
    return bool(DEEP_MERGE_PATTERN.search(file.content))


def _pollution_rule(rule_id: str, severity: Severity, title: str, description: str, pattern: str, **kwargs) -> Rule:
    return Rule(
        id=f"prototype-pollution/{rule_id}",
        category=FindingCategory.PROTOTYPE_POLLUTION,
        severity=severity,
        title=title,
        description=description,
        fix=PROTOTYPE_FIX,
        patterns=compile_all(pattern),
        applies_to=is_js_file,
        **kwargs,
    )


RULES: tuple[Rule, ...] = (
    _pollution_rule(
        "object-assign-user-input",
        Severity.HIGH,
        "Object.assign with user input",
        "Object.assign with user input can lead to prototype pollution attacks.",
        r'Object\.assign\s*\(\s*\{\s*\}\s*,\s*(?:req\.|body|params|query)',
    ),
    _pollution_rule(
        "spread-user-input",
        Severity.MEDIUM,
        "Spread operator with user input",
        "Spreading user input directly can allow prototype pollution.",
        r'\.\.\.\s*(?:req\.body|req\.query|body|params|query)\b',
    ),
    _pollution_rule(
        "dynamic-property-assignment",
        Severity.MEDIUM,
        "Dynamic property assignment",
        "Assigning to dynamic properties can pollute object prototypes.",
        r'\[(?:key|prop|name)\]\s*=(?!=)\s*(?:value|val|v)\b',
    ),
    _pollution_rule(
        "lodash-deep-merge",
        Severity.MEDIUM,
        "Potentially vulnerable lodash usage",
        "Some lodash functions like merge and defaultsDeep are vulnerable to prototype pollution.",
        r'(?:require\s*\(\s*|from\s+)["\'](?:lodash|underscore)(?:/merge|\.merge)?["\']',
        accept=uses_deep_merge,
        once_per_file=True,
    ),
)
