"""Run detection rules over fetched files and turn hits into findings."""

import hashlib
import logging
from typing import Iterable, Sequence

from .models import Finding, ScannableFile
from .rules import ALL_RULES, Rule, RuleHit

logger = logging.getLogger(__name__)


def make_finding_id(rule_id: str, file_path: str, line_number: int | None, offset: int | None) -> str:
    """Content-derived finding ID, stable across repeated scans of the same content."""
    key = f"{rule_id}|{file_path}|{line_number if line_number is not None else ''}|{offset if offset is not None else ''}"
    return hashlib.sha1(key.encode("utf-8")).hexdigest()[:12]


def _to_finding(rule: Rule, file: ScannableFile, hit: RuleHit) -> Finding:
    return Finding(
        id=make_finding_id(rule.id, file.path, hit.line_number, hit.offset),
        rule_id=rule.id,
        file_path=file.path,
        line_number=hit.line_number,
        severity=hit.severity,
        category=rule.category,
        title=hit.title,
        description=hit.description,
        code_snippet=hit.code_snippet,
        fix_snippet=hit.fix_snippet,
    )


def detect_file(file: ScannableFile, rules: Sequence[Rule] = ALL_RULES) -> list[Finding]:
    """Run every rule against one file.

    A rule that raises is logged and skipped for this file; the remaining
    rules still run. A rule reports at most one finding per line.

    Args:
        file: Fetched file to analyze
        rules: Rules to apply, the full registry by default

    Returns:
        Findings in rule order, then match order
    """
    findings: list[Finding] = []
    seen: set[tuple[str, int]] = set()

    for rule in rules:
        try:
            hits = rule.match(file)
        except Exception as e:
            logger.warning(f"Rule {rule.id} failed on {file.path}: {e}")
            continue

        for hit in hits:
            position = hit.line_number if hit.line_number is not None else (hit.offset or 0)
            key = (rule.id, position)
            if key in seen:
                continue
            seen.add(key)
            findings.append(_to_finding(rule, file, hit))

    if findings:
        logger.debug(f"{file.path}: {len(findings)} findings")
    return findings


def detect_files(files: Iterable[ScannableFile], rules: Sequence[Rule] = ALL_RULES) -> list[Finding]:
    """Run detection over each file independently and concatenate the findings."""
    findings: list[Finding] = []
    for file in files:
        findings.extend(detect_file(file, rules))
    return findings
