"""Classifies submission links by where they are hosted."""

import re
from typing import Optional, Tuple

GITHUB_PAGES = 'github-pages'
GITHUB_REPO = 'github-repo'
GOOGLE_DRIVE = 'google-drive'
UNKNOWN = 'unknown'

_GITHUB_REPO_RE = re.compile(r'github\.com/([^/]+)/([^/]+)')
_DRIVE_ID_RES = (
    re.compile(r'/d/([A-Za-z0-9_-]+)'),
    re.compile(r'[?&]id=([A-Za-z0-9_-]+)'),
)

def detect_link_type(url: str) -> str:
    """Returns one of the link type constants for a submission URL.

    Pages is tested first since `user.github.io` links never contain a
    `github.com/owner/repo` path.
    """
    if 'github.io' in url:
        return GITHUB_PAGES
    if _GITHUB_REPO_RE.search(url):
        return GITHUB_REPO
    if 'drive.google.com' in url:
        return GOOGLE_DRIVE
    return UNKNOWN

def parse_github_repo(url: str) -> Optional[Tuple[str, str]]:
    """Extracts (owner, repo) from a GitHub URL, or None if it has neither."""
    match = _GITHUB_REPO_RE.search(url)
    if not match:
        return None
    owner, repo = match.group(1), match.group(2)
    # Strip query strings, fragments and clone suffixes left on the repo segment
    repo = re.split(r'[?#]', repo)[0]
    if repo.endswith('.git'):
        repo = repo[:-4]
    if not owner or not repo:
        return None
    return owner, repo

def extract_drive_file_id(url: str) -> Optional[str]:
    """Extracts the file ID from the usual Drive share URL shapes."""
    for pattern in _DRIVE_ID_RES:
        match = pattern.search(url)
        if match:
            return match.group(1)
    return None
