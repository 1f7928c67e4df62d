"""Hardcoded credential detection.

Each provider gets its own rule so a key is reported once, under the most
specific name. Lines that reference public env prefixes or process.env are
not credentials and are ignored, as are .example/.sample files.
"""

import re

from ..heuristics import adjust_secret_severity, mask_secret
from ..models import FindingCategory, ScannableFile, Severity
from .base import Rule, line_at, path_excludes

SAFE_LINE_PATTERN = re.compile(r'NEXT_PUBLIC_|VITE_PUBLIC_|process\.env\.', re.IGNORECASE)

applies_to_non_example = path_excludes(".example", ".sample")


def not_on_safe_line(m: re.Match, file: ScannableFile) -> bool:
    return not SAFE_LINE_PATTERN.search(line_at(file.content, m.start()))


def _secret_rule(
    rule_id: str,
    name: str,
    severity: Severity,
    pattern: str,
    fix: str,
    flags: int = 0,
    adjust=adjust_secret_severity,
) -> Rule:
    return Rule(
        id=f"secrets/{rule_id}",
        category=FindingCategory.SECRETS,
        severity=severity,
        title=f"Exposed {name}",
        description=(
            f"A {name} was found in your source code. Secrets committed to version control "
            "can be extracted by anyone with access to the repository."
        ),
        fix=fix,
        patterns=(re.compile(pattern, flags),),
        applies_to=applies_to_non_example,
        accept=not_on_safe_line,
        adjust=adjust,
        snippet=mask_secret,
    )


RULES: tuple[Rule, ...] = (
    _secret_rule(
        "stripe-secret-key",
        "Stripe Secret Key",
        Severity.CRITICAL,
        r'\b[sr]k_(?:live|test)_[0-9a-zA-Z]{10,}',
        "Move to .env.local as STRIPE_SECRET_KEY and access via process.env on the server only. "
        "Rotate the key in the Stripe dashboard.",
    ),
    _secret_rule(
        "supabase-service-jwt",
        "Supabase Service Role Key",
        Severity.CRITICAL,
        r'eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9\.[a-zA-Z0-9_-]+\.[a-zA-Z0-9_-]+',
        "NEVER expose JWT tokens in client code. Use environment variables.",
    ),
    _secret_rule(
        "supabase-service-role-reference",
        "Supabase Service Role Reference",
        Severity.HIGH,
        r'["\']service_role["\']\s*[,:]',
        "Ensure the service_role key is only used in secure server-side contexts.",
        adjust=None,
    ),
    _secret_rule(
        "anthropic-api-key",
        "Anthropic API Key",
        Severity.CRITICAL,
        r'sk-ant-[a-zA-Z0-9_-]{40,}',
        "Move to .env.local as ANTHROPIC_API_KEY.",
    ),
    _secret_rule(
        "openai-api-key",
        "OpenAI API Key",
        Severity.CRITICAL,
        r'\bsk-(?:proj-)?[a-zA-Z0-9]{32,}',
        "Move to .env.local as OPENAI_API_KEY and access via process.env on the server only.",
    ),
    _secret_rule(
        "generic-api-key",
        "Generic API Key",
        Severity.HIGH,
        r'["\']api[_-]?key["\']\s*[:=]\s*["\'][a-zA-Z0-9]{20,}["\']',
        "Move API keys to environment variables and access via process.env.",
        flags=re.IGNORECASE,
    ),
    _secret_rule(
        "aws-access-key",
        "AWS Access Key",
        Severity.CRITICAL,
        r'\b(?:AKIA|ASIA)[0-9A-Z]{16}\b',
        "Move to .env.local as AWS_ACCESS_KEY_ID. Never commit AWS credentials.",
    ),
    _secret_rule(
        "aws-secret-key",
        "AWS Secret Key",
        Severity.CRITICAL,
        r'["\']?aws_secret_access_key["\']?\s*[:=]\s*["\'][A-Za-z0-9/+=]{40}["\']',
        "Move to .env.local as AWS_SECRET_ACCESS_KEY. Never commit AWS credentials.",
        flags=re.IGNORECASE,
    ),
    _secret_rule(
        "private-key-block",
        "Private Key Block",
        Severity.CRITICAL,
        r'-----BEGIN\s+(?:RSA\s+|EC\s+|OPENSSH\s+|DSA\s+)?PRIVATE\s+KEY-----',
        "Never commit private keys. Store securely and reference via environment variables.",
        adjust=None,
    ),
    _secret_rule(
        "google-api-key",
        "Google API Key",
        Severity.HIGH,
        r'AIza[0-9A-Za-z\-_]{35}',
        "Move to .env.local as GOOGLE_API_KEY. Restrict the key in Google Cloud Console.",
    ),
    _secret_rule(
        "github-token",
        "GitHub Token",
        Severity.CRITICAL,
        r'\b(?:gh[pousr]_[A-Za-z0-9_]{36,}|github_pat_[A-Za-z0-9_]{22,})',
        "Move to .env.local as GITHUB_TOKEN. Rotate this token immediately.",
    ),
    _secret_rule(
        "slack-token",
        "Slack Token",
        Severity.CRITICAL,
        r'xox[baprs]-[0-9]{10,13}-[0-9]{10,13}[a-zA-Z0-9-]*',
        "Move to .env.local as SLACK_TOKEN. Rotate this token immediately.",
    ),
    _secret_rule(
        "discord-token",
        "Discord Token",
        Severity.CRITICAL,
        r'\b[MN][A-Za-z\d]{23,}\.[\w-]{6}\.[\w-]{27}',
        "Move to .env.local. Rotate this token immediately in the Discord Developer Portal.",
    ),
    _secret_rule(
        "twilio-api-key",
        "Twilio API Key",
        Severity.HIGH,
        r'\bSK[a-f0-9]{32}\b',
        "Move to .env.local as TWILIO_API_KEY.",
    ),
    _secret_rule(
        "sendgrid-api-key",
        "SendGrid API Key",
        Severity.CRITICAL,
        r'SG\.[a-zA-Z0-9_-]{22}\.[a-zA-Z0-9_-]{43}',
        "Move to .env.local as SENDGRID_API_KEY.",
    ),
    _secret_rule(
        "mailgun-api-key",
        "Mailgun API Key",
        Severity.HIGH,
        r'\bkey-[a-zA-Z0-9]{32}\b',
        "Move to .env.local as MAILGUN_API_KEY.",
    ),
    _secret_rule(
        "resend-api-key",
        "Resend API Key",
        Severity.HIGH,
        r'\bre_[a-zA-Z0-9]{20,}',
        "Move to .env.local as RESEND_API_KEY.",
    ),
    _secret_rule(
        "database-url",
        "Database Connection String",
        Severity.CRITICAL,
        r'(?:mongodb(?:\+srv)?|postgres(?:ql)?|mysql|redis)://[^\s"\':@/]+:[^\s"\'@]+@[^\s"\']+',
        "Move database connection strings to .env.local as DATABASE_URL.",
        flags=re.IGNORECASE,
    ),
    _secret_rule(
        "secret-variable",
        "Hardcoded Secret Variable",
        Severity.HIGH,
        r'\b(?:secret|password|passwd|apiSecret|api_secret|authToken|auth_token|client_secret|clientSecret)'
        r'\s*[:=]\s*["\'][a-zA-Z0-9!@#$%^&*()_+\-=\[\]{}|;:,.<>?/~`]{8,}["\']',
        "Move secrets to environment variables and access via process.env.",
        flags=re.IGNORECASE,
    ),
    _secret_rule(
        "supabase-inline-config",
        "Supabase URL with Key",
        Severity.MEDIUM,
        r'supabaseUrl\s*[:=]\s*["\'][^"\']+["\'][\s\S]{0,300}?supabaseKey\s*[:=]\s*["\'][^"\']+["\']',
        "Use environment variables: NEXT_PUBLIC_SUPABASE_URL and NEXT_PUBLIC_SUPABASE_ANON_KEY.",
    ),
    _secret_rule(
        "firebase-api-key",
        "Firebase Config with Keys",
        Severity.HIGH,
        r'\bapiKey\s*:\s*["\'][A-Za-z0-9_-]{30,}["\']',
        "Move Firebase config to environment variables.",
    ),
)
