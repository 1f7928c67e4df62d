"""Shell commands built from request data."""

from ..models import FindingCategory, Severity
from .base import Rule, compile_all, is_code_file

SPAWN_FIX = """// Prevent command injection:

// Bad - user input in command:
exec(`echo ${userInput}`);

// Good - use spawn with arguments array:
import { spawn } from 'child_process';

const child = spawn('echo', [userInput]); // Arguments are escaped

// Better - avoid shell entirely if possible:
// Use native Node.js APIs instead of shell commands
import fs from 'fs';
fs.copyFileSync(src, dest); // Instead of exec('cp ...')"""

USER_INPUT = r'(?:req\.|params\.|query\.|body\.)'


def _command_rule(rule_id: str, severity: Severity, title: str, description: str, *patterns: str) -> Rule:
    return Rule(
        id=f"command-injection/{rule_id}",
        category=FindingCategory.COMMAND_INJECTION,
        severity=severity,
        title=title,
        description=description,
        fix=SPAWN_FIX,
        patterns=compile_all(*patterns),
        applies_to=is_code_file,
        snippet_limit=50,
    )


RULES: tuple[Rule, ...] = (
    _command_rule(
        "exec-user-input",
        Severity.CRITICAL,
        "Command execution with user input",
        "Executing shell commands with user input allows command injection.",
        rf'\bexec\s*\(\s*(?:{USER_INPUT}|`[^`]*\$\{{)',
    ),
    _command_rule(
        "exec-sync-user-input",
        Severity.CRITICAL,
        "Synchronous command execution with user input",
        "Executing shell commands with user input allows command injection.",
        rf'\bexecSync\s*\(\s*(?:{USER_INPUT}|`[^`]*\$\{{)',
    ),
    _command_rule(
        "spawn-user-input",
        Severity.CRITICAL,
        "Process spawn with user input",
        "Spawning processes with user-controlled arguments is dangerous.",
        rf'\bspawn\s*\(\s*{USER_INPUT}',
    ),
    _command_rule(
        "python-shell",
        Severity.CRITICAL,
        "Shell command built from a formatted string",
        "Formatting values into a shell command allows command injection.",
        r'\bos\.system\s*\(\s*(?:f["\']|[^)\n]*%\s*\(?\w|[^)\n]*\.format\()',
        r'\bsubprocess\.\w+\s*\(\s*f["\'][^\n]*shell\s*=\s*True',
    ),
    _command_rule(
        "child-process-import",
        Severity.LOW,
        "Child process module imported",
        "Review all uses of child_process for command injection vulnerabilities.",
        r'\bchild_process\b',
    ),
    _command_rule(
        "shelljs",
        Severity.MEDIUM,
        "ShellJS usage detected",
        "ShellJS executes commands. Ensure no user input reaches these calls.",
        r'\bshelljs\b|\bshell\.exec\b',
    ),
    _command_rule(
        "dangerous-command",
        Severity.HIGH,
        "Dangerous shell command",
        "Executing dangerous shell commands. Ensure input is strictly validated.",
        r'\bexec\s*\(\s*["\'`](?:rm|mv|cp|chmod|chown|curl|wget|bash|sh)\s',
    ),
)
