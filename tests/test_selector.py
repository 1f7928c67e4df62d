"""Tests for file selection and budgets."""

import pytest

from securesite_scanner.config import ScanConfig
from securesite_scanner.models import EntryKind, TreeEntry
from securesite_scanner.selector import get_extension, select_files, should_scan_file


def blob(path: str, size: int | None = 100) -> TreeEntry:
    return TreeEntry(path=path, kind=EntryKind.BLOB, size=size)


class TestShouldScanFile:
    """Test name-based qualification."""

    @pytest.mark.parametrize(
        "path",
        [
            "src/app/page.tsx",
            "lib/db.PY",
            "supabase/migrations/001_init.sql",
            "Dockerfile",
            "deploy/docker-compose.yml",
            ".npmrc",
            ".env",
            ".env.local",
            "apps/web/.env.production",
            "schema.prisma",
            "scripts/deploy.sh",
        ],
    )
    def test_qualifies(self, path):
        """Test allow-listed extensions, special filenames and env files."""
        assert should_scan_file(path)

    @pytest.mark.parametrize(
        "path",
        [
            "README.md",
            "public/logo.png",
            "Makefile",
            ".envrc",
            "src/",
            "dockerfile.txt",
        ],
    )
    def test_does_not_qualify(self, path):
        """Test names outside the allow-list."""
        assert not should_scan_file(path)

    def test_get_extension(self):
        """Test extension is taken from the last dot and lower-cased."""
        assert get_extension("archive.tar.GZ") == ".gz"
        assert get_extension("Makefile") == ""

    def test_custom_extensions(self):
        """Test that the allow-list comes from the config."""
        config = ScanConfig(scannable_extensions=frozenset({".md"}))
        assert should_scan_file("README.md", config)
        assert not should_scan_file("index.ts", config)


class TestSelectFiles:
    """Test filtering and budget enforcement."""

    def test_skips_trees_and_unscannable(self):
        """Test that only scannable blobs are selected, in order."""
        entries = [
            TreeEntry(path="src", kind=EntryKind.TREE),
            blob("src/index.ts"),
            blob("docs/guide.md"),
            blob("package.json"),
        ]
        selection = select_files(entries)
        assert [e.path for e in selection.entries] == ["src/index.ts", "package.json"]
        assert selection.truncated is False

    def test_file_count_budget(self):
        """Test that exceeding max_total_files truncates."""
        entries = [blob(f"src/file{i}.ts") for i in range(5)]
        selection = select_files(entries, ScanConfig(max_total_files=3))
        assert len(selection.entries) == 3
        assert selection.truncated is True

    def test_exact_file_count_is_not_truncated(self):
        """Test that hitting the budget exactly does not truncate."""
        entries = [blob(f"src/file{i}.ts") for i in range(3)]
        selection = select_files(entries, ScanConfig(max_total_files=3))
        assert len(selection.entries) == 3
        assert selection.truncated is False

    def test_byte_budget(self):
        """Test that the first entry breaking the byte budget stops selection."""
        entries = [blob("a.ts", 400), blob("b.ts", 400), blob("c.ts", 300)]
        selection = select_files(entries, ScanConfig(max_total_bytes=1100))
        assert [e.path for e in selection.entries] == ["a.ts", "b.ts", "c.ts"]
        assert selection.truncated is False

        selection = select_files(entries, ScanConfig(max_total_bytes=1000))
        assert [e.path for e in selection.entries] == ["a.ts", "b.ts"]
        assert selection.truncated is True

    def test_missing_size_counts_as_zero(self):
        """Test entries without a declared size."""
        entries = [blob("a.ts", None), blob("b.ts", None)]
        selection = select_files(entries, ScanConfig(max_total_bytes=1))
        assert len(selection.entries) == 2
        assert selection.truncated is False

    def test_budget_invariant(self):
        """Test that selection never exceeds either budget."""
        entries = [blob(f"src/f{i}.js", 70 + i) for i in range(50)]
        config = ScanConfig(max_total_files=20, max_total_bytes=1500)
        selection = select_files(entries, config)
        assert len(selection.entries) <= config.max_total_files
        assert sum(e.size or 0 for e in selection.entries) <= config.max_total_bytes
        assert selection.truncated is True

    def test_oversized_entry_is_dropped_before_budgets(self):
        """Test a file over the per-file limit uses neither budget."""
        entries = [blob("package-lock.json", 6_000_000), blob("src/app.ts", 100), blob("src/db.ts", 100)]
        selection = select_files(entries)
        assert [e.path for e in selection.entries] == ["src/app.ts", "src/db.ts"]
        assert selection.truncated is False

    def test_oversized_entries_do_not_use_file_slots(self):
        """Test oversized files do not count toward max_total_files."""
        config = ScanConfig(max_file_size=1000, max_total_files=2)
        entries = [blob("big1.json", 5000), blob("big2.json", 5000), blob("a.ts", 100), blob("b.ts", 100)]
        selection = select_files(entries, config)
        assert [e.path for e in selection.entries] == ["a.ts", "b.ts"]
        assert selection.truncated is False
