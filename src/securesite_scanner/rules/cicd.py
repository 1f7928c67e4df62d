"""CI/CD pipeline misconfiguration."""

import re

from ..heuristics import adjust_secret_severity, mask_secret
from ..models import FindingCategory, ScannableFile, Severity
from .base import Rule, RuleHit, compile_all, path_contains

CICD_FIX = """# CI/CD Security best practices:

# 1. Use secrets, never hardcode
env:
  API_KEY: ${{ secrets.API_KEY }}

# 2. Limit permissions
permissions:
  contents: read
  pull-requests: write

# 3. Pin action versions
uses: actions/checkout@v4.1.1

# 4. Mask sensitive output
echo "::add-mask::$SECRET\""""

MASK_FIX = """# Mask secrets in GitHub Actions:
echo "::add-mask::$SECRET"

# Or use environment variables without printing:
env:
  MY_SECRET: ${{ secrets.MY_SECRET }}"""

is_ci_file = path_contains(".github/workflows", ".github/actions", "gitlab-ci", "azure-pipelines", "jenkinsfile", ".circleci")

ECHO_SECRET_PATTERN = re.compile(r'(?:echo|print|printf)\b[^\n]*\$\{\{\s*secrets\.')


def detect_echoed_secrets(rule: Rule, file: ScannableFile) -> list[RuleHit]:
    m = ECHO_SECRET_PATTERN.search(file.content)
    if not m:
        return []
    return [rule.hit(file, m.start(), m.group(0))]


def _ci_rule(rule_id: str, severity: Severity, title: str, description: str, pattern: str, **kwargs) -> Rule:
    return Rule(
        id=f"cicd/{rule_id}",
        category=FindingCategory.CICD,
        severity=severity,
        title=title,
        description=description,
        fix=CICD_FIX,
        patterns=compile_all(pattern),
        applies_to=is_ci_file,
        snippet_limit=50,
        **kwargs,
    )


RULES: tuple[Rule, ...] = (
    Rule(
        id="cicd/secrets-echoed",
        category=FindingCategory.CICD,
        severity=Severity.HIGH,
        title="Secrets potentially exposed in logs",
        description="Secrets may be printed to CI logs. Use masking.",
        fix=MASK_FIX,
        applies_to=is_ci_file,
        detect=detect_echoed_secrets,
        snippet_limit=50,
    ),
    _ci_rule(
        "curl-pipe-shell",
        Severity.HIGH,
        "Piping curl to shell",
        "Executing downloaded scripts is risky. Verify integrity first.",
        r'\b(?:curl|wget)\s+[^|\n]*\|\s*(?:sudo\s+)?(?:bash|sh)\b',
    ),
    _ci_rule(
        "pull-request-target",
        Severity.HIGH,
        "Using pull_request_target trigger",
        "pull_request_target runs with write access. Be careful with untrusted code.",
        r'\bpull_request_target\b',
    ),
    _ci_rule(
        "write-permissions",
        Severity.MEDIUM,
        "Workflow has write permissions",
        "Limit permissions to what's needed. Use read-only when possible.",
        r'permissions:\s*(?:\n\s*[\w-]+:\s*\w+)*?\n\s*contents:\s*write\b|permissions:\s*write-all\b',
    ),
    _ci_rule(
        "hardcoded-password",
        Severity.CRITICAL,
        "Hardcoded password in CI config",
        "Use repository secrets instead of hardcoded credentials.",
        r'\bpassword\s*[:=]\s*["\'][^$"\'\n]+["\']',
        adjust=adjust_secret_severity,
        snippet=mask_secret,
    ),
)
