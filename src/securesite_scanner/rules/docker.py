"""Container image and compose misconfiguration."""

import re

from ..heuristics import adjust_secret_severity, mask_secret
from ..models import FindingCategory, ScannableFile, Severity
from .base import Rule, compile_all, filename

DOCKER_FIX = """# Docker security best practices:

# 1. Use specific versions
FROM node:20.10-alpine

# 2. Run as non-root user
RUN addgroup -S app && adduser -S app -G app
USER app

# 3. Use multi-stage builds
FROM node:20 AS builder
RUN npm run build

FROM node:20-alpine
COPY --from=builder /app/dist ./dist

# 4. Use Docker secrets
services:
  app:
    secrets:
      - db_password"""


def is_docker_file(file: ScannableFile) -> bool:
    name = filename(file).lower()
    return "docker" in name or name.endswith((".yml", ".yaml"))


def _docker_rule(rule_id: str, severity: Severity, title: str, description: str, pattern: str, **kwargs) -> Rule:
    flags = kwargs.pop("flags", 0)
    return Rule(
        id=f"docker/{rule_id}",
        category=FindingCategory.DOCKER,
        severity=severity,
        title=title,
        description=description,
        fix=DOCKER_FIX,
        patterns=compile_all(pattern, flags=flags),
        applies_to=is_docker_file,
        **kwargs,
    )


RULES: tuple[Rule, ...] = (
    _docker_rule(
        "latest-tag",
        Severity.MEDIUM,
        "Using :latest tag",
        "Pin specific versions for reproducible and secure builds.",
        r'^[ \t]*(?:FROM|image:)\s+["\']?\S+:latest\b',
        flags=re.IGNORECASE | re.MULTILINE,
    ),
    _docker_rule(
        "root-user",
        Severity.HIGH,
        "Container running as root",
        "Containers should run as non-root users for security.",
        r'^[ \t]*(?:USER\s+root\b|user:\s*["\']?root\b)',
        flags=re.IGNORECASE | re.MULTILINE,
    ),
    _docker_rule(
        "privileged",
        Severity.CRITICAL,
        "Privileged container",
        "Privileged mode gives full host access. Avoid if possible.",
        r'--privileged\b|\bprivileged:\s*true\b',
    ),
    _docker_rule(
        "all-capabilities",
        Severity.HIGH,
        "All capabilities added",
        "Adding all capabilities is dangerous. Add only what's needed.",
        r'cap_add:\s*\n\s*-\s*["\']?ALL\b',
        flags=re.IGNORECASE,
    ),
    _docker_rule(
        "host-network",
        Severity.MEDIUM,
        "Container using host network",
        "Host network mode reduces container isolation.",
        r'network_mode:\s*["\']?host\b["\']?',
        flags=re.IGNORECASE,
    ),
    _docker_rule(
        "hardcoded-secret",
        Severity.CRITICAL,
        "Hardcoded secrets in Docker config",
        "Use Docker secrets or environment variables for sensitive data.",
        r'\b[\w-]*(?:secret|password|passwd|api_key|token)[\w-]*\s*[:=]\s*["\'][^"\'\n$]+["\']',
        flags=re.IGNORECASE,
        adjust=adjust_secret_severity,
        snippet=mask_secret,
    ),
    _docker_rule(
        "copy-env-file",
        Severity.CRITICAL,
        "Copying .env file into image",
        ".env files should not be copied into Docker images.",
        r'(?:COPY|ADD)\s+(?:--\S+\s+)*\.env\b',
    ),
)
