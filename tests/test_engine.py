"""Tests for the detection engine."""

import re

from securesite_scanner.engine import detect_file, detect_files, make_finding_id
from securesite_scanner.models import FindingCategory, Severity
from securesite_scanner.rules import Rule

from conftest import make_file


def pattern_rule(*patterns: str, **kwargs) -> Rule:
    return Rule(
        id=kwargs.pop("id", "test/pattern"),
        category=kwargs.pop("category", FindingCategory.XSS),
        severity=kwargs.pop("severity", Severity.HIGH),
        title="Test rule",
        description="Matches test patterns.",
        fix="Remove it.",
        patterns=tuple(re.compile(p) for p in patterns),
        **kwargs,
    )


def exploding_detect(rule, file):
    raise ValueError("boom")


class TestDetectFile:
    """Test running rules over one file."""

    def test_one_finding_per_rule_and_line(self):
        """Test overlapping patterns on the same line report once."""
        rule = pattern_rule(r"danger", r"danger\w+")
        findings = detect_file(make_file("src/a.ts", "dangerZone();\nsafe();\ndanger();\n"), [rule])

        assert [f.line_number for f in findings] == [1, 3]

    def test_failing_rule_is_isolated(self):
        """Test a rule that raises does not stop the others."""
        broken = Rule(
            id="test/broken",
            category=FindingCategory.XSS,
            severity=Severity.LOW,
            title="Broken",
            description="Always fails.",
            fix="",
            detect=exploding_detect,
        )
        working = pattern_rule(r"danger")

        findings = detect_file(make_file("src/a.ts", "danger();\n"), [broken, working])

        assert [f.rule_id for f in findings] == ["test/pattern"]

    def test_finding_fields(self):
        """Test findings carry the rule's category, title and fix."""
        rule = pattern_rule(r"danger")
        finding = detect_file(make_file("src/a.ts", "x = 1;\ndanger();\n"), [rule])[0]

        assert finding.file_path == "src/a.ts"
        assert finding.line_number == 2
        assert finding.title == "Test rule"
        assert finding.fix_snippet == "Remove it."
        assert finding.code_snippet == "danger"

    def test_applies_to_filters_files(self):
        """Test rules skip files their filter rejects."""
        rule = pattern_rule(r"danger", applies_to=lambda file: file.path.endswith(".py"))
        assert detect_file(make_file("src/a.ts", "danger"), [rule]) == []
        assert len(detect_file(make_file("src/a.py", "danger"), [rule])) == 1

    def test_clean_file(self):
        """Test an ordinary helper module produces no findings."""
        content = "export function add(a: number, b: number): number {\n  return a + b;\n}\n"
        assert detect_file(make_file("src/utils.ts", content)) == []


class TestFindingIds:
    """Test finding identifiers."""

    def test_deterministic(self):
        """Test the same content yields the same ids."""
        file = make_file("src/config.ts", 'const apiKey = "sk_live_abcdef123456"')
        first = [f.id for f in detect_file(file)]
        second = [f.id for f in detect_file(file)]
        assert first == second

    def test_distinct_by_location(self):
        """Test different paths or lines yield different ids."""
        a = make_finding_id("secrets/stripe-secret-key", "a.ts", 1, 10)
        b = make_finding_id("secrets/stripe-secret-key", "b.ts", 1, 10)
        c = make_finding_id("secrets/stripe-secret-key", "a.ts", 2, 30)
        assert len({a, b, c}) == 3

    def test_file_level_findings(self):
        """Test findings without a line still get an id."""
        finding_id = make_finding_id("security-headers/missing-csp", "next.config.js", None, None)
        assert len(finding_id) == 12


class TestDetectFiles:
    """Test running rules over several files."""

    def test_files_are_independent(self):
        """Test each file is analyzed on its own and results are concatenated."""
        rule = pattern_rule(r"danger")
        files = [
            make_file("a.ts", "danger"),
            make_file("b.ts", "fine"),
            make_file("c.ts", "danger"),
        ]
        findings = detect_files(files, [rule])
        assert [f.file_path for f in findings] == ["a.ts", "c.ts"]
