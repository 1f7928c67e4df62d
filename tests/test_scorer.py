"""Tests for scoring and aggregation."""

import itertools

from securesite_scanner.models import Finding, FindingCategory, Severity
from securesite_scanner.scorer import (
    CATEGORY_PENALTY_CAP,
    build_summary,
    calculate_score,
    count_by_severity,
    dedupe_findings,
    group_by_category,
    group_by_severity,
    sort_findings,
)


def finding(
    severity: Severity = Severity.HIGH,
    category: FindingCategory = FindingCategory.XSS,
    file_path: str = "src/app.ts",
    line_number: int | None = 1,
    rule_id: str = "xss/eval",
    finding_id: str | None = None,
) -> Finding:
    return Finding(
        id=finding_id or f"{rule_id}:{file_path}:{line_number}",
        rule_id=rule_id,
        file_path=file_path,
        line_number=line_number,
        severity=severity,
        category=category,
        title="Title",
        description="Description",
    )


class TestCalculateScore:
    """Test the security score."""

    def test_no_findings(self):
        """Test a clean scan scores 100."""
        assert calculate_score([]) == 100

    def test_single_critical(self):
        """Test one critical finding."""
        assert calculate_score([finding(Severity.CRITICAL, FindingCategory.SECRETS)]) == 80

    def test_severity_penalties(self):
        """Test each severity deducts its own amount."""
        findings = [
            finding(Severity.CRITICAL, FindingCategory.SECRETS),
            finding(Severity.HIGH, FindingCategory.XSS),
            finding(Severity.MEDIUM, FindingCategory.CORS),
            finding(Severity.LOW, FindingCategory.DOCKER),
        ]
        assert calculate_score(findings) == 100 - 20 - 12 - 6 - 2

    def test_category_cap(self):
        """Test one category cannot take off more than the cap."""
        findings = [finding(Severity.CRITICAL, FindingCategory.SECRETS, line_number=n) for n in range(1, 11)]
        assert calculate_score(findings) == 100 - CATEGORY_PENALTY_CAP

    def test_floor_at_zero(self):
        """Test the score never goes negative."""
        categories = list(FindingCategory)[:5]
        findings = [
            finding(Severity.CRITICAL, category, line_number=n)
            for category in categories
            for n in range(1, 4)
        ]
        assert calculate_score(findings) == 0

    def test_monotonic(self):
        """Test adding a finding never raises the score."""
        findings: list[Finding] = []
        previous = calculate_score(findings)
        for n, severity in enumerate(itertools.islice(itertools.cycle(Severity), 30)):
            findings.append(finding(severity, list(FindingCategory)[n % 4], line_number=n))
            score = calculate_score(findings)
            assert score <= previous
            previous = score

    def test_order_independent(self):
        """Test the score ignores finding order."""
        findings = [
            finding(Severity.CRITICAL, FindingCategory.SECRETS),
            finding(Severity.LOW, FindingCategory.DOCKER),
            finding(Severity.MEDIUM, FindingCategory.SECRETS, line_number=2),
        ]
        scores = {calculate_score(list(order)) for order in itertools.permutations(findings)}
        assert scores == {100 - 26 - 2}


class TestOrdering:
    """Test sorting and grouping."""

    def test_sort_most_severe_first(self):
        """Test severity, then path, then line."""
        low = finding(Severity.LOW, file_path="a.ts")
        critical_b = finding(Severity.CRITICAL, file_path="b.ts")
        critical_a2 = finding(Severity.CRITICAL, file_path="a.ts", line_number=2)
        critical_a1 = finding(Severity.CRITICAL, file_path="a.ts", line_number=1)

        ordered = sort_findings([low, critical_b, critical_a2, critical_a1])
        assert ordered == [critical_a1, critical_a2, critical_b, low]

    def test_group_by_severity_has_every_bucket(self):
        """Test empty severities are still present."""
        groups = group_by_severity([finding(Severity.HIGH)])
        assert list(groups) == [Severity.CRITICAL, Severity.HIGH, Severity.MEDIUM, Severity.LOW]
        assert len(groups[Severity.HIGH]) == 1
        assert groups[Severity.LOW] == []

    def test_group_by_category(self):
        """Test only categories with findings appear."""
        groups = group_by_category([
            finding(category=FindingCategory.CORS),
            finding(category=FindingCategory.CORS, line_number=2),
            finding(category=FindingCategory.XSS),
        ])
        assert {category: len(items) for category, items in groups.items()} == {
            FindingCategory.CORS: 2,
            FindingCategory.XSS: 1,
        }

    def test_count_by_severity(self):
        """Test counts cover every severity."""
        counts = count_by_severity([finding(Severity.LOW), finding(Severity.LOW, line_number=2)])
        assert counts == {Severity.CRITICAL: 0, Severity.HIGH: 0, Severity.MEDIUM: 0, Severity.LOW: 2}


class TestDedupe:
    """Test deduplication and id uniqueness."""

    def test_drops_repeated_location(self):
        """Test the same rule on the same file and line is reported once."""
        first = finding(finding_id="one")
        repeat = finding(finding_id="two")
        assert dedupe_findings([first, repeat]) == [first]

    def test_colliding_ids_get_suffix(self):
        """Test distinct findings sharing an id are renamed."""
        a = finding(line_number=1, finding_id="abc")
        b = finding(line_number=2, finding_id="abc")
        c = finding(line_number=3, finding_id="abc")

        ids = [f.id for f in dedupe_findings([a, b, c])]
        assert ids == ["abc", "abc-1", "abc-2"]


class TestBuildSummary:
    """Test summary counts."""

    def test_counts(self):
        """Test severity and category counts add up."""
        findings = [
            finding(Severity.CRITICAL, FindingCategory.SECRETS),
            finding(Severity.HIGH, FindingCategory.SECRETS, line_number=2),
            finding(Severity.LOW, FindingCategory.DOCKER),
        ]
        summary = build_summary(findings)

        assert (summary.critical, summary.high, summary.medium, summary.low) == (1, 1, 0, 1)
        assert summary.total == 3
        assert summary.by_category == {
            FindingCategory.SECRETS.value: 2,
            FindingCategory.DOCKER.value: 1,
        }

    def test_empty(self):
        """Test an empty scan."""
        summary = build_summary([])
        assert summary.total == 0
        assert summary.by_category == {}
