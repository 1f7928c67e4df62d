"""Non-cryptographic randomness used for security-sensitive values."""

import re

from ..models import FindingCategory, Severity
from .base import Rule, compile_all, is_code_file

CRYPTO_RANDOM_FIX = """// Use cryptographically secure randomness:

import crypto from 'crypto';

// For random bytes:
const token = crypto.randomBytes(32).toString('hex');

// For UUIDs:
const id = crypto.randomUUID();

// In browser:
const array = new Uint8Array(32);
crypto.getRandomValues(array);

# Python:
import secrets
token = secrets.token_hex(32)"""

SENSITIVE = r'(?:token|secret|key|password|session|uuid|auth|otp|nonce)'


def _random_rule(rule_id: str, severity: Severity, title: str, description: str, *patterns: str, flags: int = 0) -> Rule:
    return Rule(
        id=f"randomness/{rule_id}",
        category=FindingCategory.INSECURE_RANDOMNESS,
        severity=severity,
        title=title,
        description=description,
        fix=CRYPTO_RANDOM_FIX,
        patterns=compile_all(*patterns, flags=flags),
        applies_to=is_code_file,
        snippet_limit=50,
    )


RULES: tuple[Rule, ...] = (
    _random_rule(
        "math-random-sensitive",
        Severity.HIGH,
        "Math.random() for security-sensitive value",
        "Math.random() is not cryptographically secure. Use crypto.randomBytes().",
        rf'Math\.random\s*\(\s*\)[^\n]*{SENSITIVE}',
        rf'{SENSITIVE}[^\n]*Math\.random\s*\(\s*\)',
        flags=re.IGNORECASE,
    ),
    _random_rule(
        "python-random-sensitive",
        Severity.HIGH,
        "random module used for security-sensitive value",
        "Python's random module is predictable. Use the secrets module.",
        rf'{SENSITIVE}\w*\s*=[^\n]*\brandom\.(?:random|randint|choice|choices|getrandbits)\s*\(',
        flags=re.IGNORECASE,
    ),
    _random_rule(
        "math-random-id",
        Severity.MEDIUM,
        "Weak random ID generation",
        "This pattern creates predictable IDs. Use crypto.randomUUID() instead.",
        r'Math\.random\s*\(\s*\)\.toString\s*\(\s*36\s*\)',
    ),
    _random_rule(
        "timestamp-token",
        Severity.HIGH,
        "Timestamp-based token generation",
        "Using timestamps for tokens is predictable. Use crypto.randomBytes().",
        r'Date\.now\s*\(\s*\)[^\n]*(?:token|secret|key|session)',
        flags=re.IGNORECASE,
    ),
)
