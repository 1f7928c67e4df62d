"""Parse GitHub repository references."""

import re

from .errors import InvalidRepository
from .models import RepositoryRef

# https://github.com/owner/repo[/anything][?query][#fragment]
HTTPS_URL_PATTERN = re.compile(
    r'^(?:https?://)?(?:www\.)?github\.com/([^/?#\s]+)/([^/?#\s]+)(?:[/?#].*)?$',
    re.IGNORECASE,
)

# git@github.com:owner/repo.git and github.com:owner/repo
SSH_URL_PATTERN = re.compile(
    r'^(?:[\w.-]+@)?github\.com:([^/?#\s]+)/([^/?#\s]+?)/?$',
    re.IGNORECASE,
)


def parse_github_url(repo_url: str) -> RepositoryRef:
    """Extract owner and repository name from a GitHub URL.

    Args:
        repo_url: An https URL or SSH-like reference to a GitHub repository.

    Returns:
        The repository reference, with any trailing .git removed.

    Raises:
        InvalidRepository: If the reference is not a GitHub repository URL.
    """
    if not isinstance(repo_url, str):
        raise InvalidRepository(str(repo_url))

    candidate = repo_url.strip()
    match = HTTPS_URL_PATTERN.match(candidate) or SSH_URL_PATTERN.match(candidate)
    if not match:
        raise InvalidRepository(repo_url)

    owner, name = match.group(1), match.group(2)
    if name.lower().endswith(".git"):
        name = name[:-4]
    if not owner or not name:
        raise InvalidRepository(repo_url)

    return RepositoryRef(owner=owner, name=name)
