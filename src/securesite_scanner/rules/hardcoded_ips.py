"""Loopback and private network addresses baked into code."""

from ..models import FindingCategory, Severity
from .base import Rule, compile_all, is_not_test_file

ENV_URL_FIX = """// Use environment variables for URLs:

const API_URL = process.env.API_URL || 'http://localhost:3000';

// In .env.local (development):
API_URL=http://localhost:3000

// In production environment:
API_URL=https://api.yourapp.com"""

QUOTE = r'["\'`]'


def _ip_rule(rule_id: str, severity: Severity, title: str, description: str, pattern: str) -> Rule:
    return Rule(
        id=f"hardcoded-ips/{rule_id}",
        category=FindingCategory.HARDCODED_IPS,
        severity=severity,
        title=title,
        description=description,
        fix=ENV_URL_FIX,
        patterns=compile_all(pattern),
        applies_to=is_not_test_file,
        snippet_limit=50,
    )


RULES: tuple[Rule, ...] = (
    _ip_rule(
        "localhost-url",
        Severity.MEDIUM,
        "Hardcoded localhost URL",
        "Localhost URLs in production code will fail in deployed environments.",
        rf'{QUOTE}https?://localhost[:\d]*[^"\'`]*{QUOTE}',
    ),
    _ip_rule(
        "loopback-url",
        Severity.MEDIUM,
        "Hardcoded 127.0.0.1 URL",
        "Loopback IP addresses should be replaced with environment variables.",
        rf'{QUOTE}https?://127\.0\.0\.1[:\d]*[^"\'`]*{QUOTE}',
    ),
    _ip_rule(
        "private-ip-192",
        Severity.HIGH,
        "Hardcoded private IP (192.168.x.x)",
        "Private network IPs will not work in production. Use environment variables.",
        rf'{QUOTE}https?://192\.168\.\d{{1,3}}\.\d{{1,3}}[^"\'`]*{QUOTE}',
    ),
    _ip_rule(
        "private-ip-10",
        Severity.HIGH,
        "Hardcoded private IP (10.x.x.x)",
        "Private network IPs will not work in production. Use environment variables.",
        rf'{QUOTE}https?://10\.\d{{1,3}}\.\d{{1,3}}\.\d{{1,3}}[^"\'`]*{QUOTE}',
    ),
    _ip_rule(
        "private-ip-172",
        Severity.HIGH,
        "Hardcoded private IP (172.16-31.x.x)",
        "Private network IPs will not work in production. Use environment variables.",
        rf'{QUOTE}https?://172\.(?:1[6-9]|2\d|3[01])\.\d{{1,3}}\.\d{{1,3}}[^"\'`]*{QUOTE}',
    ),
    _ip_rule(
        "bind-all-interfaces",
        Severity.LOW,
        "Binding to 0.0.0.0",
        "Binding to all interfaces may expose the service unintentionally.",
        r'(?<![\d.])0\.0\.0\.0(?![\d./])',
    ),
)
