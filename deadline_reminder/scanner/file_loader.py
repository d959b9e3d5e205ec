from pathlib import Path

from deadline_reminder.scanner.exceptions import SourceReadError

DEFAULT_EXTENSIONS = (".dart",)
SKIPPED_DIRECTORIES = frozenset({"node_modules", "build", ".dart_tool"})


class SourceFileFinder:
    """Recursively collects source files below a root directory.

    Hidden directories and common build/dependency directories are skipped.
    """

    def __init__(self, extensions: tuple[str, ...] = DEFAULT_EXTENSIONS) -> None:
        self._extensions = extensions

    def find(self, root: Path) -> list[Path]:
        if root.is_file():
            return [root] if self._accepts(root) else []
        found: list[Path] = []
        self._walk(root, found)
        return found

    def _walk(self, directory: Path, found: list[Path]) -> None:
        for entry in sorted(directory.iterdir()):
            if entry.is_dir():
                if entry.name.startswith(".") or entry.name in SKIPPED_DIRECTORIES:
                    continue
                self._walk(entry, found)
            elif entry.is_file() and self._accepts(entry):
                found.append(entry)

    def _accepts(self, path: Path) -> bool:
        return path.name.endswith(self._extensions)


class SourceLoader:
    """Reads source text from disk."""

    def load(self, path: Path) -> str:
        """Read a UTF-8 source file.

        Raises:
            SourceReadError: if the file is missing, unreadable or not UTF-8.
        """
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise SourceReadError(f"Failed to read file: {exc}") from exc
