from __future__ import annotations

import logging
import re
from pathlib import Path
from urllib.parse import urlparse

from git import GitCommandError, InvalidGitRepositoryError, NoSuchPathError, Repo

from s2i_skills.errors import CheckoutError, CloneError

logger = logging.getLogger(__name__)

ALLOWED_SCHEMES = {"git", "http", "https", "ssh", "file"}
# user@host:path
SCP_LIKE_RE = re.compile(r"^[A-Za-z0-9._-]+@[A-Za-z0-9.-]+:.+$")


def _command_detail(exc: GitCommandError) -> str:
    stderr = (exc.stderr or "").strip()
    return stderr or str(exc)


class GitSourceControl:
    def is_clone_spec(self, source: str) -> bool:
        source = source.strip()
        if not source:
            return False
        if SCP_LIKE_RE.match(source):
            return True
        parsed = urlparse(source)
        return parsed.scheme.lower() in ALLOWED_SCHEMES

    def clone(self, source: str, dest: Path) -> None:
        logger.debug("Cloning %s into %s", source, dest)
        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise CloneError(source, f"unable to create '{dest.parent}': {exc}") from exc
        try:
            Repo.clone_from(source, dest)
        except GitCommandError as exc:
            raise CloneError(source, _command_detail(exc)) from exc

    def checkout(self, repo_dir: Path, ref: str) -> None:
        logger.debug("Checking out %s in %s", ref, repo_dir)
        try:
            repo = Repo(repo_dir)
        except (InvalidGitRepositoryError, NoSuchPathError) as exc:
            raise CheckoutError(ref, f"'{repo_dir}' is not a valid git repository") from exc
        try:
            repo.git.checkout(ref)
        except GitCommandError as exc:
            raise CheckoutError(ref, _command_detail(exc)) from exc
