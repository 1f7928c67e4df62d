"""Rule descriptors and the shared pattern-matching loop."""

import posixpath
import re
from typing import Callable, NamedTuple

from ..models import FindingCategory, ScannableFile, Severity

DEFAULT_SNIPPET_LIMIT = 80


class RuleHit(NamedTuple):
    """One location where a rule fired, before it becomes a Finding."""

    offset: int | None
    line_number: int | None
    severity: Severity
    title: str
    description: str
    code_snippet: str
    fix_snippet: str


class Rule(NamedTuple):
    """A detection rule with a fixed category and default severity.

    A rule reports every match of its patterns, subject to the optional
    hooks:
        applies_to: file filter; the rule is skipped when it returns False.
        accept: per-match filter; the match is dropped when it returns False.
        adjust: maps (default severity, matched text) to the reported
            severity, or None to suppress the match.
        snippet: formats the matched text for display.
        detect: replaces pattern matching entirely, for rules that report
            something missing rather than something present.
    """

    id: str
    category: FindingCategory
    severity: Severity
    title: str
    description: str
    fix: str
    patterns: tuple[re.Pattern, ...] = ()
    applies_to: Callable[[ScannableFile], bool] | None = None
    accept: Callable[[re.Match, ScannableFile], bool] | None = None
    adjust: Callable[[Severity, str], Severity | None] | None = None
    snippet: Callable[[str], str] | None = None
    detect: Callable[["Rule", ScannableFile], list[RuleHit]] | None = None
    once_per_file: bool = False
    snippet_limit: int = DEFAULT_SNIPPET_LIMIT

    def match(self, file: ScannableFile) -> list[RuleHit]:
        """Run the rule against one file."""
        if self.applies_to is not None and not self.applies_to(file):
            return []
        if self.detect is not None:
            return self.detect(self, file)

        hits: list[RuleHit] = []
        for pattern in self.patterns:
            for m in pattern.finditer(file.content):
                if self.accept is not None and not self.accept(m, file):
                    continue
                severity = self.severity
                if self.adjust is not None:
                    severity = self.adjust(self.severity, m.group(0))
                    if severity is None:
                        continue
                hits.append(self.hit(file, m.start(), m.group(0), severity=severity))
                if self.once_per_file:
                    return hits
        return hits

    def hit(
        self,
        file: ScannableFile,
        offset: int | None,
        matched_text: str,
        severity: Severity | None = None,
    ) -> RuleHit:
        """Build a hit at an offset, with the rule's texts and formatted snippet."""
        text = self.snippet(matched_text) if self.snippet else matched_text.strip()
        return RuleHit(
            offset=offset,
            line_number=line_number(file.content, offset) if offset is not None else None,
            severity=severity or self.severity,
            title=self.title,
            description=self.description,
            code_snippet=truncate(text, self.snippet_limit),
            fix_snippet=self.fix,
        )


def line_number(content: str, offset: int) -> int:
    """1-based line number of a character offset."""
    return content.count("\n", 0, offset) + 1


def line_at(content: str, offset: int) -> str:
    """The full line containing a character offset."""
    start = content.rfind("\n", 0, offset) + 1
    end = content.find("\n", offset)
    return content[start:] if end == -1 else content[start:end]


def truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


def compile_all(*patterns: str, flags: int = 0) -> tuple[re.Pattern, ...]:
    return tuple(re.compile(p, flags) for p in patterns)


# File filters shared across rule modules

def filename(file: ScannableFile) -> str:
    return posixpath.basename(file.path)


def path_contains(*needles: str) -> Callable[[ScannableFile], bool]:
    """File filter matching paths containing any needle, case-insensitively."""
    lowered = tuple(n.lower() for n in needles)

    def check(file: ScannableFile) -> bool:
        path = file.path.lower()
        return any(n in path for n in lowered)

    return check


def path_excludes(*needles: str) -> Callable[[ScannableFile], bool]:
    """File filter rejecting paths containing any needle, case-insensitively."""
    contains = path_contains(*needles)
    return lambda file: not contains(file)


def has_extension(*extensions: str) -> Callable[[ScannableFile], bool]:
    lowered = tuple(e.lower() for e in extensions)
    return lambda file: file.path.lower().endswith(lowered)


TEST_PATH_MARKERS = ("test", "spec", "__mocks__", "fixture", ".example", ".sample")

is_not_test_file = path_excludes(*TEST_PATH_MARKERS)

CODE_EXTENSIONS = (".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs", ".py", ".rb", ".go", ".php", ".vue", ".svelte")

is_code_file = has_extension(*CODE_EXTENSIONS)

JS_EXTENSIONS = (".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs", ".vue", ".svelte")

is_js_file = has_extension(*JS_EXTENSIONS)


def all_of(*checks: Callable[[ScannableFile], bool]) -> Callable[[ScannableFile], bool]:
    return lambda file: all(check(file) for check in checks)


def window(content: str, offset: int, before: int, after: int) -> str:
    """Text surrounding an offset, clamped to the content."""
    return content[max(0, offset - before):offset + after]
