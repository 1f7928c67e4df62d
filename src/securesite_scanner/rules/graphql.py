"""GraphQL server exposure and abuse limits."""

import re

from ..models import FindingCategory, ScannableFile, Severity
from .base import Rule, RuleHit, compile_all

SECURE_GRAPHQL_FIX = """// Secure GraphQL configuration:

const server = new ApolloServer({
  typeDefs,
  resolvers,
  introspection: process.env.NODE_ENV !== 'production',
  playground: process.env.NODE_ENV !== 'production',
  validationRules: [depthLimit(10)],
});"""

DEPTH_LIMIT_FIX = """// Add query depth limiting:

import depthLimit from 'graphql-depth-limit';
import { createComplexityLimitRule } from 'graphql-validation-complexity';

const server = new ApolloServer({
  typeDefs,
  resolvers,
  validationRules: [
    depthLimit(10), // Max depth of 10
    createComplexityLimitRule(1000), // Max complexity
  ],
});"""

SERVER_MARKERS = ("ApolloServer", "createSchema", "createYoga", "graphqlHTTP", "GraphQLModule")
DEPTH_MARKERS = ("depthLimit", "queryComplexity", "maxDepth", "createComplexityLimitRule", "costAnalysis")


def is_graphql_server(file: ScannableFile) -> bool:
    return any(marker in file.content for marker in SERVER_MARKERS)


def detect_missing_depth_limit(rule: Rule, file: ScannableFile) -> list[RuleHit]:
    if any(marker in file.content for marker in DEPTH_MARKERS):
        return []
    return [rule.hit(file, None, "No depth limiting configured")]


def _graphql_rule(rule_id: str, title: str, description: str, pattern: str, flags: int = 0) -> Rule:
    return Rule(
        id=f"graphql/{rule_id}",
        category=FindingCategory.GRAPHQL,
        severity=Severity.MEDIUM,
        title=title,
        description=description,
        fix=SECURE_GRAPHQL_FIX,
        patterns=compile_all(pattern, flags=flags),
    )


RULES: tuple[Rule, ...] = (
    Rule(
        id="graphql/missing-depth-limit",
        category=FindingCategory.GRAPHQL,
        severity=Severity.HIGH,
        title="Missing GraphQL query depth limiting",
        description="Without depth limits, deeply nested queries can cause DoS attacks.",
        fix=DEPTH_LIMIT_FIX,
        applies_to=is_graphql_server,
        detect=detect_missing_depth_limit,
    ),
    _graphql_rule(
        "introspection-enabled",
        "GraphQL introspection enabled",
        "Introspection should be disabled in production to hide schema details.",
        r'\bintrospection\s*:\s*true\b',
    ),
    _graphql_rule(
        "playground-enabled",
        "GraphQL Playground enabled",
        "GraphQL Playground should be disabled in production.",
        r'\bplayground\s*:\s*true\b',
    ),
    _graphql_rule(
        "graphiql-enabled",
        "GraphiQL enabled",
        "GraphiQL IDE should be disabled in production.",
        r'\bgraphiql\s*:\s*true\b',
        flags=re.IGNORECASE,
    ),
    _graphql_rule(
        "unguarded-mutations",
        "Mutations possibly without auth directives",
        "GraphQL mutations should be protected with authentication.",
        r'type\s+Mutation\s*\{(?![^}]*@(?:auth|authenticated|requireAuth|hasRole))[^}]*\b(?:delete|remove|update|create)[^}]*\}',
        flags=re.IGNORECASE,
    ),
)
