"""Pydantic models for the repository security scanner."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Severity(str, Enum):
    """Severity levels for findings, most severe first."""

    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class FindingCategory(str, Enum):
    """Rule families a finding can belong to."""

    SECRETS = "Secrets"
    SUPABASE_RLS = "Supabase RLS"
    CLIENT_AUTH = "Client Auth"
    SQL_INJECTION = "SQL Injection"
    XSS = "XSS"
    ENV_EXPOSURE = "Env Exposure"
    AUTH_ISSUES = "Auth Issues"
    CORS = "CORS"
    SECURITY_HEADERS = "Security Headers"
    COOKIES = "Cookies"
    FILE_UPLOAD = "File Upload"
    RATE_LIMITING = "Rate Limiting"
    INFO_DISCLOSURE = "Info Disclosure"
    INSECURE_REDIRECT = "Insecure Redirect"
    INPUT_VALIDATION = "Input Validation"
    PROTOTYPE_POLLUTION = "Prototype Pollution"
    SSRF = "SSRF"
    HARDCODED_IPS = "Hardcoded IPs"
    DEBUG_MODE = "Debug Mode"
    COMMENTED_SECRETS = "Commented Secrets"
    NOSQL_INJECTION = "NoSQL Injection"
    GRAPHQL = "GraphQL"
    WEBSOCKET = "WebSocket"
    NEXTJS = "Next.js"
    PRISMA = "Prisma"
    REDOS = "ReDoS"
    MASS_ASSIGNMENT = "Mass Assignment"
    DOCKER = "Docker"
    CICD = "CI/CD"
    UNPROTECTED_API = "Unprotected API"
    CSRF = "CSRF"
    IDOR = "IDOR"
    PATH_TRAVERSAL = "Path Traversal"
    COMMAND_INJECTION = "Command Injection"
    VULNERABLE_DEPENDENCIES = "Vulnerable Dependencies"
    SOURCE_MAPS = "Source Maps"
    INSECURE_RANDOMNESS = "Insecure Randomness"
    MISSING_AUTH = "Missing Auth"
    UNSAFE_DESERIALIZATION = "Unsafe Deserialization"
    CLICKJACKING = "Clickjacking"


class EntryKind(str, Enum):
    """Git tree entry kinds."""

    BLOB = "blob"
    TREE = "tree"


class RepositoryRef(BaseModel):
    """Identity of a GitHub repository."""

    model_config = ConfigDict(frozen=True)

    owner: str = Field(description="Repository owner (user or organization)")
    name: str = Field(description="Repository name without a .git suffix")

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


class TreeEntry(BaseModel):
    """One entry of a recursive git tree listing."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(description="Path relative to the repository root")
    kind: EntryKind = Field(description="blob for files, tree for directories")
    size: Optional[int] = Field(default=None, description="Declared size in bytes (blobs only)")
    sha: str = Field(default="", description="Git object id")


class ScannableFile(BaseModel):
    """A fetched file held in memory for detection."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(description="Path relative to the repository root")
    content: str = Field(description="Decoded text content")


class Finding(BaseModel):
    """A single detected security issue."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: str = Field(description="Identifier unique within one scan")
    rule_id: str = Field(description="Identifier of the rule that produced the finding")
    file_path: str = Field(description="File path where the issue was found")
    line_number: Optional[int] = Field(default=None, description="1-based line, absent for file-level findings")
    severity: Severity = Field(description="Severity level")
    category: FindingCategory = Field(description="Rule family")
    title: str = Field(description="Short title")
    description: str = Field(description="What is wrong and why it matters")
    code_snippet: str = Field(default="", description="Offending code, truncated and masked")
    fix_snippet: str = Field(default="", description="Suggested remediation")


class ScanSummary(BaseModel):
    """Summary counts by severity and category."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    critical: int = Field(default=0, description="Number of critical issues")
    high: int = Field(default=0, description="Number of high issues")
    medium: int = Field(default=0, description="Number of medium issues")
    low: int = Field(default=0, description="Number of low issues")
    total: int = Field(default=0, description="Total number of issues")
    by_category: dict[str, int] = Field(default_factory=dict, description="Issue count per category")


class ScanResult(BaseModel):
    """Complete result of scanning one repository."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    repo_name: str = Field(description="owner/name of the scanned repository")
    repo_url: str = Field(description="Repository URL as supplied by the caller")
    scanned_at: datetime = Field(description="UTC time the scan completed")
    security_score: int = Field(ge=0, le=100, description="Security score from 0 to 100")
    findings: list[Finding] = Field(default_factory=list, description="All findings, most severe first")
    truncated: bool = Field(default=False, description="Whether the scan covered only part of the repository")
    files_scanned: int = Field(default=0, description="Number of files whose content was analyzed")
    summary: ScanSummary = Field(default_factory=ScanSummary, description="Counts by severity and category")
