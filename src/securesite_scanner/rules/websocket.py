"""WebSocket transport and origin checks."""

import re

from ..models import FindingCategory, ScannableFile, Severity
from .base import Rule, RuleHit, compile_all, is_code_file

SECURE_WS_FIX = """// Secure WebSocket configuration:

import { WebSocketServer } from 'ws';

const wss = new WebSocketServer({
  server,
  verifyClient: ({ origin, req }, callback) => {
    const allowed = ['https://yourdomain.com'];
    if (allowed.includes(origin)) {
      callback(true);
    } else {
      callback(false, 403, 'Forbidden');
    }
  }
});

// Always use wss:// in production
const ws = new WebSocket('wss://api.example.com/ws');"""


def is_ws_server(file: ScannableFile) -> bool:
    return "WebSocketServer" in file.content or "ws.Server" in file.content


def detect_missing_origin_check(rule: Rule, file: ScannableFile) -> list[RuleHit]:
    if "verifyClient" in file.content or "origin" in file.content:
        return []
    return [rule.hit(file, None, "No verifyClient or origin check found")]


def _ws_rule(rule_id: str, title: str, description: str, pattern: str, flags: int = 0) -> Rule:
    return Rule(
        id=f"websocket/{rule_id}",
        category=FindingCategory.WEBSOCKET,
        severity=Severity.HIGH,
        title=title,
        description=description,
        fix=SECURE_WS_FIX,
        patterns=compile_all(pattern, flags=flags),
        applies_to=is_code_file,
        snippet_limit=50,
    )


RULES: tuple[Rule, ...] = (
    Rule(
        id="websocket/missing-origin-check",
        category=FindingCategory.WEBSOCKET,
        severity=Severity.MEDIUM,
        title="WebSocket server possibly without origin validation",
        description="WebSocket connections should validate the origin header to prevent cross-site attacks.",
        fix=SECURE_WS_FIX,
        applies_to=is_ws_server,
        detect=detect_missing_origin_check,
    ),
    _ws_rule(
        "unencrypted-ws",
        "Unencrypted WebSocket (ws://)",
        "Use wss:// for encrypted WebSocket connections.",
        r'new\s+WebSocket\s*\(\s*["\'`]ws://(?!localhost|127\.0\.0\.1)',
    ),
    _ws_rule(
        "verify-client-disabled",
        "WebSocket client verification disabled",
        "Client verification should be enabled to prevent unauthorized connections.",
        r'\bverifyClient\s*:\s*false\b',
    ),
    _ws_rule(
        "sensitive-payload",
        "Sensitive data sent via WebSocket",
        "Avoid sending sensitive data over WebSocket without encryption.",
        r'\bws\.send\s*\(\s*JSON\.stringify\s*\([^)]*\b(?:password|secret|token)',
        flags=re.IGNORECASE,
    ),
)
