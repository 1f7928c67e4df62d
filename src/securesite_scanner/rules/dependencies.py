"""Risky dependency declarations in package.json."""

from ..models import FindingCategory, ScannableFile, Severity
from .base import Rule, compile_all, filename

AUDIT_FIX = """# Check for vulnerabilities:
npm audit

# Fix automatically:
npm audit fix

# Or update packages:
npm update <package-name>"""

PIN_FIX = """// Pin dependencies to a version range:
"dependencies": {
  "express": "^4.19.2"
}

# And commit your lockfile (package-lock.json, pnpm-lock.yaml, yarn.lock)"""


def is_package_manifest(file: ScannableFile) -> bool:
    return filename(file) == "package.json"


def _dependency_rule(rule_id: str, severity: Severity, title: str, description: str, pattern: str, fix: str = AUDIT_FIX) -> Rule:
    return Rule(
        id=f"dependencies/{rule_id}",
        category=FindingCategory.VULNERABLE_DEPENDENCIES,
        severity=severity,
        title=title,
        description=description,
        fix=fix,
        patterns=compile_all(pattern),
        applies_to=is_package_manifest,
    )


def _outdated(package: str, severity: Severity, description: str, version_prefix: str) -> Rule:
    return _dependency_rule(
        f"outdated-{package}",
        severity,
        f"Outdated {package} version",
        description,
        rf'"{package}"\s*:\s*"[<^~=v]?{version_prefix}\.',
    )


RULES: tuple[Rule, ...] = (
    _outdated("lodash", Severity.HIGH, "Lodash versions < 4.17.21 have prototype pollution vulnerabilities.", "[0-3]"),
    _outdated("axios", Severity.MEDIUM, "Old axios versions have security vulnerabilities. Update to latest.", r"0\.(?:[0-9]|1[0-8])"),
    _outdated("jsonwebtoken", Severity.HIGH, "jsonwebtoken < 8.x has known vulnerabilities.", "[0-7]"),
    _outdated("express", Severity.HIGH, "Express < 4.x has known security issues.", "[0-3]"),
    _outdated("node-fetch", Severity.MEDIUM, "node-fetch < 2.x has security vulnerabilities.", "[0-1]"),
    _outdated("minimist", Severity.HIGH, "minimist < 1.2.6 has prototype pollution vulnerability.", "0"),
    _dependency_rule(
        "moment",
        Severity.LOW,
        "Moment.js usage detected",
        "Moment.js is deprecated. Consider using date-fns or dayjs.",
        r'"moment"\s*:\s*"',
    ),
    _dependency_rule(
        "request",
        Severity.LOW,
        "Deprecated request package",
        "The request package is deprecated. Use axios or node-fetch.",
        r'"request"\s*:\s*"',
    ),
    _dependency_rule(
        "unpinned-version",
        Severity.MEDIUM,
        "Unpinned dependency version",
        "A dependency declared as \"*\" or \"latest\" installs whatever is newest, "
        "including a compromised release.",
        r'"[@\w./-]+"\s*:\s*"(?:\*|latest)"',
        fix=PIN_FIX,
    ),
)
