"""File upload handling without validation."""

import re

from ..models import FindingCategory, ScannableFile, Severity
from .base import Rule, compile_all, is_code_file

SECURE_UPLOAD_FIX = """// Secure file upload configuration:

const upload = multer({
  storage: multer.diskStorage({
    destination: './uploads', // Not in public!
    filename: (req, file, cb) => {
      const uniqueName = crypto.randomUUID() + path.extname(file.originalname);
      cb(null, uniqueName);
    }
  }),
  fileFilter: (req, file, cb) => {
    const allowed = ['image/jpeg', 'image/png', 'application/pdf'];
    cb(null, allowed.includes(file.mimetype));
  },
  limits: { fileSize: 5 * 1024 * 1024 } // 5MB
});"""


def lacks_validation(m: re.Match, file: ScannableFile) -> bool:
    text = m.group(0)
    return "fileFilter" not in text and "limits" not in text


def _upload_rule(rule_id: str, severity: Severity, title: str, description: str, pattern: str, **kwargs) -> Rule:
    return Rule(
        id=f"file-upload/{rule_id}",
        category=FindingCategory.FILE_UPLOAD,
        severity=severity,
        title=title,
        description=description,
        fix=SECURE_UPLOAD_FIX,
        patterns=compile_all(pattern),
        applies_to=is_code_file,
        snippet_limit=60,
        **kwargs,
    )


RULES: tuple[Rule, ...] = (
    _upload_rule(
        "multer-without-validation",
        Severity.HIGH,
        "Multer without file validation",
        "File uploads without type validation can allow malicious file uploads.",
        r'\bmulter\s*\(\s*\{[^}]*\}\s*\)',
        accept=lacks_validation,
    ),
    _upload_rule(
        "upload-endpoint",
        Severity.MEDIUM,
        "File upload endpoint detected",
        "Ensure file uploads validate file type, size, and scan for malware.",
        r'\bupload\.(?:single|array|fields)\s*\(',
    ),
    _upload_rule(
        "write-request-body",
        Severity.HIGH,
        "Direct file write from request",
        "Writing request data directly to files without validation is dangerous.",
        r'\bwriteFile(?:Sync)?\s*\([^,]+,\s*(?:req\.body|body|file)\b',
    ),
    _upload_rule(
        "public-destination",
        Severity.MEDIUM,
        "Uploads stored in public directory",
        "Storing uploads in public directories may expose sensitive files.",
        r'\bdestination\s*[:=]\s*["\'](?:\./)?public',
    ),
    _upload_rule(
        "original-filename",
        Severity.MEDIUM,
        "Using original filename",
        "Using original filenames can lead to path traversal or file overwrites.",
        r'\bfilename\s*[:=]\s*(?:req\.|file\.original)',
    ),
)
