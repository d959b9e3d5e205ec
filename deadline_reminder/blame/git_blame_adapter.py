import re
import subprocess
from datetime import datetime, timezone
from pathlib import Path

from deadline_reminder.blame.base import BaseAttributionLookup
from deadline_reminder.blame.exceptions import AttributionLookupError
from deadline_reminder.scanner.models import Attribution

_COMMIT_LINE = re.compile(r"^[0-9a-f]{40}\b")
UNCOMMITTED_HASH = "0" * 40


def parse_porcelain(output: str) -> Attribution | None:
    """Build an Attribution from ``git blame --porcelain`` output."""
    author = ""
    email = ""
    commit_hash = ""
    authored_at: datetime | None = None
    for line in output.splitlines():
        if line.startswith("author "):
            author = line[len("author ") :]
        elif line.startswith("author-mail "):
            email = line[len("author-mail ") :].strip("<>")
        elif line.startswith("author-time "):
            seconds = int(line[len("author-time ") :])
            authored_at = datetime.fromtimestamp(seconds, tz=timezone.utc)
        elif not commit_hash and _COMMIT_LINE.match(line):
            commit_hash = line.split(" ", 1)[0]
    if not author:
        return None
    return Attribution(
        author_name=author,
        author_email=email,
        commit_hash=commit_hash,
        authored_at=authored_at,
    )


class GitBlameAdapter(BaseAttributionLookup):
    """Attributes lines with ``git blame --porcelain``."""

    def __init__(
        self,
        repo_root: Path | None = None,
        git_executable: str = "git",
        timeout_seconds: int = 30,
    ) -> None:
        self._repo_root = repo_root
        self._git = git_executable
        self._timeout = timeout_seconds

    def lookup(self, path: str, line_number: int) -> Attribution | None:
        cmd = [
            self._git,
            "blame",
            "-L",
            f"{line_number},{line_number}",
            "--porcelain",
            "--",
            path,
        ]
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                cwd=self._repo_root,
                timeout=self._timeout,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired) as exc:
            raise AttributionLookupError(
                f"git blame failed for {path}:{line_number}: {exc}"
            ) from exc
        if result.returncode != 0:
            raise AttributionLookupError(
                f"git blame failed for {path}:{line_number}: {result.stderr.strip()}"
            )
        try:
            attribution = parse_porcelain(result.stdout)
        except (ValueError, OverflowError) as exc:
            raise AttributionLookupError(
                f"git blame output for {path}:{line_number} could not be parsed: {exc}"
            ) from exc
        if attribution is not None and attribution.commit_hash == UNCOMMITTED_HASH:
            # Line exists only in the working tree.
            return None
        return attribution
