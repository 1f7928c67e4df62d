"""Cross-site scripting sinks."""

import re

from ..models import FindingCategory, Severity
from .base import Rule, compile_all, is_code_file

SANITIZE_FIX = """// Sanitize user input before rendering:

// Option 1: Use a sanitization library
import DOMPurify from 'dompurify';
const clean = DOMPurify.sanitize(userInput);

// Option 2: Use textContent instead of innerHTML
element.textContent = userInput;

// Option 3: In React, avoid dangerouslySetInnerHTML
// Just render text normally - React escapes by default
<div>{userInput}</div>"""


def _xss_rule(rule_id: str, severity: Severity, title: str, description: str, pattern: str, flags: int = 0) -> Rule:
    return Rule(
        id=f"xss/{rule_id}",
        category=FindingCategory.XSS,
        severity=severity,
        title=title,
        description=description,
        fix=SANITIZE_FIX,
        patterns=compile_all(pattern, flags=flags),
        applies_to=is_code_file,
        snippet_limit=60,
    )


RULES: tuple[Rule, ...] = (
    _xss_rule(
        "dangerously-set-inner-html",
        Severity.HIGH,
        "dangerouslySetInnerHTML usage",
        "Using dangerouslySetInnerHTML can lead to XSS attacks if the HTML is from user input.",
        r'dangerouslySetInnerHTML\s*=\s*\{\s*\{\s*__html\s*:',
    ),
    _xss_rule(
        "inner-html-assignment",
        Severity.HIGH,
        "Direct innerHTML assignment",
        "Setting innerHTML directly can lead to XSS if the content includes user input.",
        r'\.innerHTML\s*=(?!=)\s*[^;\n]+',
    ),
    _xss_rule(
        "outer-html-assignment",
        Severity.HIGH,
        "Direct outerHTML assignment",
        "Setting outerHTML directly can lead to XSS if the content includes user input.",
        r'\.outerHTML\s*=(?!=)\s*[^;\n]+',
    ),
    _xss_rule(
        "document-write",
        Severity.MEDIUM,
        "document.write usage",
        "document.write can be exploited for XSS attacks. Use DOM manipulation methods instead.",
        r'document\.write(?:ln)?\s*\(',
    ),
    _xss_rule(
        "eval",
        Severity.CRITICAL,
        "eval() usage detected",
        "eval() executes arbitrary code and is a major security risk. Never use with user input.",
        r'(?<![\w.$])eval\s*\([^)]*\)',
    ),
    _xss_rule(
        "function-constructor",
        Severity.HIGH,
        "new Function() constructor",
        "Function constructor is similar to eval() and can execute arbitrary code.",
        r'\bnew\s+Function\s*\([^)]*\)',
    ),
    _xss_rule(
        "script-interpolation",
        Severity.CRITICAL,
        "Template literal with script tag",
        "Interpolating variables into script tags can lead to XSS.",
        r'\$\{[^}]+\}.*<script',
        flags=re.IGNORECASE,
    ),
    _xss_rule(
        "javascript-url",
        Severity.HIGH,
        "JavaScript URL in href",
        "javascript: URLs can execute arbitrary JavaScript code.",
        r'href\s*=\s*["\']?\s*javascript:',
        flags=re.IGNORECASE,
    ),
    _xss_rule(
        "event-handler-interpolation",
        Severity.HIGH,
        "Event handler with interpolation",
        "Interpolating user input into event handlers can lead to XSS.",
        r'\bon\w+\s*=\s*["\']\s*\$\{',
    ),
)
