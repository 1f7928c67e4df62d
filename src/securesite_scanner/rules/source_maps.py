"""Source maps shipped to production."""

from ..models import FindingCategory, Severity
from .base import Rule, compile_all, path_contains

SOURCE_MAP_FIX = """// Disable source maps in production:

// next.config.js:
module.exports = {
  productionBrowserSourceMaps: false,
};

// webpack.config.js:
module.exports = {
  devtool: process.env.NODE_ENV === 'production' ? false : 'source-map',
};"""

is_bundler_config = path_contains("next.config", "webpack", "vite.config")


def _source_map_rule(rule_id: str, title: str, description: str, pattern: str) -> Rule:
    return Rule(
        id=f"source-maps/{rule_id}",
        category=FindingCategory.SOURCE_MAPS,
        severity=Severity.MEDIUM,
        title=title,
        description=description,
        fix=SOURCE_MAP_FIX,
        patterns=compile_all(pattern),
        applies_to=is_bundler_config,
    )


RULES: tuple[Rule, ...] = (
    _source_map_rule(
        "production-source-map",
        "Source maps enabled in production",
        "Source maps expose your original source code to anyone.",
        r'\bproductionSourceMap\s*:\s*true\b',
    ),
    _source_map_rule(
        "webpack-devtool",
        "Full source maps in webpack config",
        "Full source maps should not be used in production.",
        r'\bdevtool\s*:\s*["\']source-map["\']',
    ),
    _source_map_rule(
        "sourcemap-enabled",
        "Source maps enabled",
        "Source maps can expose sensitive code and logic.",
        r'\bsourcemap\s*:\s*true\b',
    ),
    _source_map_rule(
        "next-browser-source-maps",
        "Next.js browser source maps in production",
        "Browser source maps expose your code. Set to false for production.",
        r'\bproductionBrowserSourceMaps\s*:\s*true\b',
    ),
)
