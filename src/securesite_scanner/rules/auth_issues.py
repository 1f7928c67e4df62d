"""Weak authentication and credential handling."""

import re

from ..heuristics import adjust_secret_severity, mask_secret
from ..models import FindingCategory, ScannableFile, Severity
from .base import Rule, compile_all, is_code_file

SECURE_AUTH_FIX = """// Secure authentication practices:

// 1. Use environment variables for secrets
const secret = process.env.JWT_SECRET;

// 2. Always set token expiration
jwt.sign(payload, secret, { expiresIn: '1h' });

// 3. Hash passwords with bcrypt
import bcrypt from 'bcrypt';
const hash = await bcrypt.hash(password, 12);
const valid = await bcrypt.compare(input, hash);"""


def lacks_expiry(m: re.Match, file: ScannableFile) -> bool:
    return "expiresIn" not in m.group(0) and "expiresIn" not in m.string[m.end():m.end() + 200].split(";")[0]


def _auth_rule(rule_id: str, severity: Severity, title: str, description: str, pattern: str, **kwargs) -> Rule:
    flags = kwargs.pop("flags", 0)
    return Rule(
        id=f"auth-issues/{rule_id}",
        category=FindingCategory.AUTH_ISSUES,
        severity=severity,
        title=title,
        description=description,
        fix=SECURE_AUTH_FIX,
        patterns=compile_all(pattern, flags=flags),
        applies_to=is_code_file,
        snippet_limit=60,
        **kwargs,
    )


RULES: tuple[Rule, ...] = (
    _auth_rule(
        "hardcoded-jwt-secret",
        Severity.CRITICAL,
        "Hardcoded JWT secret",
        "JWT secret is hardcoded in source code. Move to environment variables.",
        r'jwt\.sign\s*\([^)]*?,\s*["\'][a-zA-Z0-9_\-!@#$%^&*]{10,}["\']',
        adjust=adjust_secret_severity,
        snippet=mask_secret,
    ),
    _auth_rule(
        "jwt-without-expiry",
        Severity.MEDIUM,
        "JWT without expiration",
        "JWT tokens should have an expiration time to limit exposure if compromised.",
        r'jwt\.sign\s*\([^)]*\)',
        accept=lacks_expiry,
    ),
    _auth_rule(
        "hardcoded-password",
        Severity.CRITICAL,
        "Hardcoded password",
        "Password is hardcoded in source code. Use environment variables or secure vaults.",
        r'\bpassword\s*[:=]\s*["\'][^"\'\n]{4,}["\']',
        flags=re.IGNORECASE,
        adjust=adjust_secret_severity,
        snippet=mask_secret,
    ),
    _auth_rule(
        "plaintext-password-comparison",
        Severity.CRITICAL,
        "Plain text password comparison",
        "Comparing passwords directly suggests they may be stored in plain text. Use bcrypt or argon2.",
        r'\b(?:password|passwd)\s*===?\s*(?:req\.|request\.|body\.)',
    ),
    _auth_rule(
        "weak-hash",
        Severity.HIGH,
        "Weak hashing algorithm",
        "MD5 and SHA1 are cryptographically weak. Use bcrypt, argon2, or scrypt for passwords.",
        r'createHash\s*\(\s*["\'](?:md5|sha1)["\']\s*\)|hashlib\.(?:md5|sha1)\s*\(',
    ),
    _auth_rule(
        "weak-jwt-algorithm",
        Severity.HIGH,
        "Weak JWT algorithm",
        'HS256 is vulnerable to brute force with weak secrets. Consider RS256. Never use "none".',
        r'\balgorithms?\s*[:=]\s*\[?\s*["\'](?:HS256|none)["\']',
    ),
    _auth_rule(
        "tls-verification-disabled",
        Severity.HIGH,
        "SSL/TLS verification disabled",
        "Disabling certificate verification allows man-in-the-middle attacks.",
        r'\b(?:verify\s*[:=]\s*(?:false|False)\b|rejectUnauthorized\s*[:=]\s*false\b|NODE_TLS_REJECT_UNAUTHORIZED\s*=\s*["\']?0)',
    ),
)
