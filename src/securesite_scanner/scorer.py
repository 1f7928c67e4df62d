"""Security score and finding aggregation."""

from collections import defaultdict
from typing import Iterable

from .models import Finding, FindingCategory, ScanSummary, Severity

# Points deducted per finding
SEVERITY_PENALTIES = {
    Severity.CRITICAL: 20,
    Severity.HIGH: 12,
    Severity.MEDIUM: 6,
    Severity.LOW: 2,
}

# Most any single category can take off the score
CATEGORY_PENALTY_CAP = 40

MAX_SCORE = 100

SEVERITY_ORDER = {
    Severity.CRITICAL: 0,
    Severity.HIGH: 1,
    Severity.MEDIUM: 2,
    Severity.LOW: 3,
}


def calculate_score(findings: Iterable[Finding]) -> int:
    """Compute the 0-100 security score.

    Each finding deducts its severity penalty. Deductions are summed per
    category and each category total is capped, so one noisy rule family
    cannot zero the score on its own. The result does not depend on
    finding order, and adding a finding never raises the score.
    """
    per_category: dict[FindingCategory, int] = defaultdict(int)
    for finding in findings:
        per_category[finding.category] += SEVERITY_PENALTIES[finding.severity]

    penalty = sum(min(CATEGORY_PENALTY_CAP, total) for total in per_category.values())
    return max(0, min(MAX_SCORE, MAX_SCORE - penalty))


def count_by_severity(findings: Iterable[Finding]) -> dict[Severity, int]:
    counts = {severity: 0 for severity in Severity}
    for finding in findings:
        counts[finding.severity] += 1
    return counts


def sort_findings(findings: Iterable[Finding]) -> list[Finding]:
    """Most severe first, then by file, line and rule."""
    return sorted(
        findings,
        key=lambda f: (
            SEVERITY_ORDER[f.severity],
            f.file_path,
            f.line_number if f.line_number is not None else 0,
            f.rule_id,
        ),
    )


def group_by_severity(findings: Iterable[Finding]) -> dict[Severity, list[Finding]]:
    """Findings bucketed by severity, every severity present, most severe first."""
    groups: dict[Severity, list[Finding]] = {severity: [] for severity in Severity}
    for finding in sort_findings(findings):
        groups[finding.severity].append(finding)
    return groups


def group_by_category(findings: Iterable[Finding]) -> dict[FindingCategory, list[Finding]]:
    """Findings bucketed by category; each bucket sorted most severe first."""
    groups: dict[FindingCategory, list[Finding]] = {}
    for finding in sort_findings(findings):
        groups.setdefault(finding.category, []).append(finding)
    return groups


def dedupe_findings(findings: Iterable[Finding]) -> list[Finding]:
    """Drop repeated rule/file/line findings and make every ID unique.

    A finding whose ID collides with an earlier, different finding gets a
    numeric suffix.
    """
    result: list[Finding] = []
    seen_locations: set[tuple[str, str, int | None]] = set()
    used_ids: set[str] = set()

    for finding in findings:
        location = (finding.rule_id, finding.file_path, finding.line_number)
        if location in seen_locations:
            continue
        seen_locations.add(location)

        finding_id = finding.id
        suffix = 1
        while finding_id in used_ids:
            finding_id = f"{finding.id}-{suffix}"
            suffix += 1
        used_ids.add(finding_id)

        if finding_id != finding.id:
            finding = finding.model_copy(update={"id": finding_id})
        result.append(finding)

    return result


def build_summary(findings: list[Finding]) -> ScanSummary:
    counts = count_by_severity(findings)
    by_category: dict[str, int] = {}
    for finding in findings:
        by_category[finding.category.value] = by_category.get(finding.category.value, 0) + 1

    return ScanSummary(
        critical=counts[Severity.CRITICAL],
        high=counts[Severity.HIGH],
        medium=counts[Severity.MEDIUM],
        low=counts[Severity.LOW],
        total=len(findings),
        by_category=by_category,
    )
