"""Template file resolution across an ordered list of directories.

Lookup rules per directory, first match wins across directories:
- layouts: ``<dir>/<layouts_dir>/<name><ext>`` then ``<dir>/<name><ext>``
- components: ``<dir>/<components_dir>/<name><ext>`` then ``<dir>/<name><ext>``
- templates: ``<dir>/<name><ext>``
"""
from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path, PurePosixPath
from typing import Iterable, List, Optional, Sequence

from modx.core.exceptions import TemplateDirectoryError, TemplateNotFoundError
from modx.core.utils.io import ensure_directory, read_text

logger = logging.getLogger(__name__)

# Every raw "{" is rewritten to this token on load so source text can never
# open an execution-backend tag. The executor renders it back as "{".
BRACE_TOKEN = "{{ __lb }}"


def protect_braces(text: str) -> str:
    return text.replace("{", BRACE_TOKEN)


def restore_braces(text: str) -> str:
    return text.replace(BRACE_TOKEN, "{")


class TemplateKind(str, Enum):
    TEMPLATE = "template"
    LAYOUT = "layout"
    COMPONENT = "component"


class TemplateLocator:
    """Resolve template names to files.

    Example:
        locator = TemplateLocator([Path("templates"), Path("vendor/templates")])
        path = locator.resolve("card", TemplateKind.COMPONENT)
        source = locator.load("card", TemplateKind.COMPONENT)
    """

    def __init__(
        self,
        paths: Iterable[Path],
        *,
        extension: str = ".modx",
        layouts_dir: str = "layouts",
        components_dir: str = "components",
    ) -> None:
        self._paths: List[Path] = [Path(p) for p in paths]
        self.extension = extension
        self.layouts_dir = layouts_dir
        self.components_dir = components_dir

    @classmethod
    def from_paths(
        cls,
        paths: Sequence[str | Path],
        *,
        root: Optional[Path] = None,
        create: bool = False,
        **options: str,
    ) -> "TemplateLocator":
        """Build a locator from raw directory strings.

        Relative entries resolve against ``root`` (default: working directory).
        Missing directories raise TemplateDirectoryError unless ``create``.
        """
        locator = cls([], **options)
        for entry in paths:
            locator.add_path(Path(root or Path.cwd()) / entry, create=create)
        return locator

    @property
    def paths(self) -> List[Path]:
        return list(self._paths)

    def add_path(self, path: Path, *, create: bool = False) -> None:
        """Append a search directory.

        Raises:
            TemplateDirectoryError: when the directory is missing and not created
        """
        p = Path(path)
        try:
            ensure_directory(p, create=create)
        except (FileNotFoundError, NotADirectoryError) as exc:
            raise TemplateDirectoryError(
                f"Template directory not found: {p}",
                context={"path": str(p)},
            ) from exc
        if p not in self._paths:
            self._paths.append(p)

    def _candidates(self, directory: Path, rel: str, kind: TemplateKind) -> List[Path]:
        filename = f"{rel}{self.extension}"
        if kind is TemplateKind.LAYOUT:
            return [directory / self.layouts_dir / filename, directory / filename]
        if kind is TemplateKind.COMPONENT:
            return [directory / self.components_dir / filename, directory / filename]
        return [directory / filename]

    def resolve(self, name: str, kind: TemplateKind = TemplateKind.TEMPLATE) -> Path:
        """Return the first file matching ``name`` for ``kind``.

        Raises:
            TemplateNotFoundError: listing every searched directory
        """
        rel = PurePosixPath(name.strip())
        unsafe = rel.is_absolute() or ".." in rel.parts or not rel.parts
        if not unsafe:
            for directory in self._paths:
                for candidate in self._candidates(directory, rel.as_posix(), kind):
                    if candidate.is_file():
                        logger.debug("Resolved %s '%s' to %s", kind.value, name, candidate)
                        return candidate
        raise TemplateNotFoundError(name, kind.value, self._paths)

    def load(self, name: str, kind: TemplateKind = TemplateKind.TEMPLATE) -> tuple[Path, str]:
        """Resolve and read a template, returning ``(path, protected source)``."""
        path = self.resolve(name, kind)
        return path, protect_braces(read_text(path))


__all__ = [
    "BRACE_TOKEN",
    "TemplateKind",
    "TemplateLocator",
    "protect_braces",
    "restore_braces",
]
