"""Debug and development settings left enabled outside development config."""

import re

from ..models import FindingCategory, ScannableFile, Severity
from .base import Rule, compile_all, filename, is_not_test_file

DEBUG_FIX = """// Control debug settings via environment:

const DEBUG = process.env.DEBUG === 'true';
const isProduction = process.env.NODE_ENV === 'production';

// Use conditional logging:
if (!isProduction) {
  console.log('Debug info');
}

// Or use a proper logger:
import pino from 'pino';
const logger = pino({ level: process.env.LOG_LEVEL || 'info' });"""

DEV_CONFIG_PATTERN = re.compile(r'(?:^|[./_-])(?:dev|development|local)(?:[./_-]|$)', re.IGNORECASE)


def is_production_config(file: ScannableFile) -> bool:
    """False for development, local and test configuration files."""
    if not is_not_test_file(file):
        return False
    return not DEV_CONFIG_PATTERN.search(filename(file)) and "development" not in file.path.lower()


def _debug_rule(rule_id: str, severity: Severity, title: str, description: str, pattern: str, flags: int = 0) -> Rule:
    return Rule(
        id=f"debug-mode/{rule_id}",
        category=FindingCategory.DEBUG_MODE,
        severity=severity,
        title=title,
        description=description,
        fix=DEBUG_FIX,
        patterns=compile_all(pattern, flags=flags),
        applies_to=is_production_config,
    )


RULES: tuple[Rule, ...] = (
    _debug_rule(
        "debug-enabled",
        Severity.HIGH,
        "Debug mode enabled",
        "Debug mode should be disabled in production to prevent information disclosure.",
        r'\bDEBUG\s*[:=]\s*["\']?(?:true|1)\b["\']?',
        flags=re.IGNORECASE,
    ),
    _debug_rule(
        "node-env-development",
        Severity.MEDIUM,
        "NODE_ENV set to development",
        "Development mode committed to source code. Use environment configuration.",
        r'\bNODE_ENV\s*[:=]\s*["\']?development\b',
    ),
    _debug_rule(
        "debugger-statement",
        Severity.HIGH,
        "Debugger statement",
        "Debugger statements should never be committed to production code.",
        r'(?m)^\s*debugger\s*;',
    ),
    _debug_rule(
        "verbose-logging",
        Severity.MEDIUM,
        "Verbose logging enabled",
        "Verbose logging can expose sensitive data. Disable in production.",
        r'\bVERBOSE\s*[:=]\s*["\']?true\b["\']?',
        flags=re.IGNORECASE,
    ),
    _debug_rule(
        "devtools-enabled",
        Severity.MEDIUM,
        "DevTools enabled",
        "Developer tools should be disabled in production builds.",
        r'\bdevTools\s*[:=]\s*true\b',
    ),
)
