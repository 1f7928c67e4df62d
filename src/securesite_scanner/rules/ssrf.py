"""Server-side requests to user-controlled URLs."""

import re

from ..models import FindingCategory, Severity
from .base import Rule, compile_all, is_code_file

SSRF_FIX = """// Prevent SSRF:

// 1. Use an allowlist of permitted domains
const ALLOWED_HOSTS = ['api.example.com', 'cdn.example.com'];

function validateUrl(urlString: string): boolean {
  try {
    const url = new URL(urlString);
    // Block internal/private IPs
    if (url.hostname === 'localhost' ||
        url.hostname === '127.0.0.1' ||
        url.hostname.startsWith('192.168.') ||
        url.hostname.startsWith('10.')) {
      return false;
    }
    return ALLOWED_HOSTS.includes(url.hostname);
  } catch {
    return false;
  }
}

// 2. Never fetch user-provided URLs directly
if (!validateUrl(userUrl)) {
  throw new Error('URL not allowed');
}"""


def _ssrf_rule(rule_id: str, severity: Severity, title: str, description: str, pattern: str, flags: int = 0) -> Rule:
    return Rule(
        id=f"ssrf/{rule_id}",
        category=FindingCategory.SSRF,
        severity=severity,
        title=title,
        description=description,
        fix=SSRF_FIX,
        patterns=compile_all(pattern, flags=flags),
        applies_to=is_code_file,
        snippet_limit=60,
    )


RULES: tuple[Rule, ...] = (
    _ssrf_rule(
        "fetch-user-url",
        Severity.HIGH,
        "Fetch with user-controlled URL",
        "Fetching user-provided URLs can allow SSRF attacks against internal services.",
        r'\bfetch\s*\(\s*(?:req\.|body\.|params\.|query\.)[^)]+\)',
    ),
    _ssrf_rule(
        "http-client-user-url",
        Severity.HIGH,
        "HTTP client request with user-controlled URL",
        "Making HTTP requests to user-provided URLs can allow SSRF attacks.",
        r'\b(?:axios|requests|httpx)\.(?:get|post|put|delete|request)\s*\(\s*(?:req\.|body\.|params\.|request\.args)[^)]+\)',
    ),
    _ssrf_rule(
        "fetch-interpolated-url",
        Severity.MEDIUM,
        "Fetch with interpolated URL variable",
        "URL interpolation in fetch calls can be exploited for SSRF.",
        r'\bfetch\s*\(\s*`\$\{[^}]*(?:url|uri|host|endpoint|target)[^}]*\}[^`]*`',
        flags=re.IGNORECASE,
    ),
    _ssrf_rule(
        "url-from-user-input",
        Severity.MEDIUM,
        "URL construction from user input",
        "Constructing URLs from user input without validation can lead to SSRF.",
        r'\bnew\s+URL\s*\(\s*(?:req\.|body\.|params\.)',
    ),
    _ssrf_rule(
        "node-http-user-options",
        Severity.HIGH,
        "HTTP request with user-controlled options",
        "Node.js http module with user input can be exploited for SSRF.",
        r'\bhttps?\.(?:get|request)\s*\(\s*(?:req\.|body\.)',
    ),
)
