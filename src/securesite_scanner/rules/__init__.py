"""Detection rules, one module per vulnerability family."""

from . import (
    auth_issues,
    cicd,
    clickjacking,
    client_auth,
    command_injection,
    commented_secrets,
    cookies,
    cors,
    csrf,
    debug_mode,
    dependencies,
    deserialization,
    docker,
    env_exposure,
    file_upload,
    graphql,
    hardcoded_ips,
    idor,
    info_disclosure,
    input_validation,
    mass_assignment,
    missing_auth,
    nextjs,
    nosql_injection,
    path_traversal,
    prisma,
    prototype_pollution,
    randomness,
    rate_limiting,
    redirects,
    redos,
    secrets,
    security_headers,
    source_maps,
    sql_injection,
    ssrf,
    supabase_rls,
    unprotected_api,
    websocket,
    xss,
)
from .base import Rule, RuleHit

ALL_RULES: tuple[Rule, ...] = (
    *supabase_rls.RULES,
    *secrets.RULES,
    *client_auth.RULES,
    *sql_injection.RULES,
    *xss.RULES,
    *env_exposure.RULES,
    *auth_issues.RULES,
    *cors.RULES,
    *security_headers.RULES,
    *cookies.RULES,
    *file_upload.RULES,
    *rate_limiting.RULES,
    *info_disclosure.RULES,
    *redirects.RULES,
    *input_validation.RULES,
    *prototype_pollution.RULES,
    *ssrf.RULES,
    *hardcoded_ips.RULES,
    *debug_mode.RULES,
    *commented_secrets.RULES,
    *nosql_injection.RULES,
    *graphql.RULES,
    *websocket.RULES,
    *nextjs.RULES,
    *prisma.RULES,
    *redos.RULES,
    *mass_assignment.RULES,
    *docker.RULES,
    *cicd.RULES,
    *unprotected_api.RULES,
    *csrf.RULES,
    *idor.RULES,
    *path_traversal.RULES,
    *command_injection.RULES,
    *dependencies.RULES,
    *source_maps.RULES,
    *randomness.RULES,
    *missing_auth.RULES,
    *deserialization.RULES,
    *clickjacking.RULES,
)

__all__ = ["ALL_RULES", "Rule", "RuleHit"]
