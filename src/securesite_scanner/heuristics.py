"""Severity heuristics for secret-like matches.

Pure functions used by rules to tell real credentials from placeholders
and to rank a match by how credential-like it looks.
"""

import math
import re
from collections import Counter

from .models import Severity

# Substrings that mark a value as a placeholder rather than a real credential
PLACEHOLDER_INDICATORS: frozenset[str] = frozenset({
    "example",
    "placeholder",
    "xxxx",
    "your_",
    "your-",
    "yourkey",
    "<your",
    "changeme",
    "change_me",
    "change-me",
    "replace_me",
    "replaceme",
    "redacted",
    "insert_",
    "${",
    "{{",
    "****",
})

# Words that mark a placeholder only when not embedded in a longer alphanumeric run
PLACEHOLDER_WORD_PATTERN = re.compile(r'(?<![a-z0-9])(?:dummy|fake|sample|todo)(?![a-z])')

# Prefixes issued by known providers; a match carrying one is a confirmed credential type
PROVIDER_PREFIXES: tuple[str, ...] = (
    "sk_live_",
    "rk_live_",
    "sk-ant-",
    "sk-proj-",
    "AKIA",
    "ASIA",
    "ghp_",
    "gho_",
    "ghu_",
    "ghs_",
    "ghr_",
    "github_pat_",
    "glpat-",
    "xoxb-",
    "xoxp-",
    "xoxa-",
    "AIza",
    "SG.",
    "re_",
    "-----BEGIN",
)

# Keys that only work against a provider's sandbox
TEST_KEY_PREFIXES: tuple[str, ...] = ("sk_test_", "rk_test_", "pk_test_")

QUOTED_VALUE_PATTERN = re.compile(r'["\'`]([^"\'`]*)["\'`]')

HIGH_ENTROPY_THRESHOLD = 3.5
MIN_ENTROPY_LENGTH = 16


def mask_secret(secret: str) -> str:
    """Mask a secret, keeping the first 8 and last 4 characters."""
    if len(secret) <= 12:
        return "*" * len(secret)
    return f"{secret[:8]}{'*' * min(len(secret) - 12, 20)}{secret[-4:]}"


def extract_value(matched_text: str) -> str:
    """Return the quoted value in an assignment-style match, or the whole match."""
    quoted = QUOTED_VALUE_PATTERN.findall(matched_text)
    if quoted:
        return quoted[-1]
    return matched_text


def is_placeholder(value: str) -> bool:
    """Check whether a value looks like a documentation placeholder."""
    lowered = value.lower()
    if any(indicator in lowered for indicator in PLACEHOLDER_INDICATORS):
        return True
    if PLACEHOLDER_WORD_PATTERN.search(lowered):
        return True
    # one repeated character, e.g. "aaaaaaaaaaaa" or "000000000000"
    stripped = re.sub(r'[^a-z0-9]', '', lowered)
    return len(stripped) >= 8 and len(set(stripped)) == 1


def shannon_entropy(value: str) -> float:
    """Shannon entropy of a string in bits per character."""
    if not value:
        return 0.0
    counts = Counter(value)
    length = len(value)
    return -sum((n / length) * math.log2(n / length) for n in counts.values())


def has_provider_prefix(value: str) -> bool:
    return value.startswith(PROVIDER_PREFIXES)


def adjust_secret_severity(default: Severity, matched_text: str) -> Severity | None:
    """Adjust a secret finding's severity from the matched text.

    Returns None when the value is clearly a placeholder and the match should
    be suppressed. Sandbox keys drop to MEDIUM. Values carrying a known
    provider prefix keep the rule's severity. Generic values keep it only when
    they look random enough; low-entropy values drop to MEDIUM.
    """
    value = extract_value(matched_text)
    if is_placeholder(value):
        return None
    if any(value.startswith(prefix) for prefix in TEST_KEY_PREFIXES):
        return Severity.MEDIUM
    if has_provider_prefix(value):
        return default
    if len(value) >= MIN_ENTROPY_LENGTH and shannon_entropy(value) >= HIGH_ENTROPY_THRESHOLD:
        return default
    if default in (Severity.CRITICAL, Severity.HIGH):
        return Severity.MEDIUM
    return default
