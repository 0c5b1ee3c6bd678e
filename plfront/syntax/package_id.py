"""Package identifiers of the form path[@version]."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass


class PackageIDError(ValueError):
    """Raised when a package id is malformed."""


def is_valid_identifier(name: str) -> bool:
    """Whether name is a letter or underscore followed by letters, digits or underscores."""
    if not name:
        return False
    first, rest = name[0], name[1:]
    if not (first.isalpha() or first == "_"):
        return False
    return all(ch.isalpha() or ch.isdigit() or ch == "_" for ch in rest)


def _base(path: str) -> str:
    if not path:
        return "."
    stripped = path.rstrip("/")
    if not stripped:
        return "/"
    return stripped.rsplit("/", 1)[-1]


def _clean(path: str) -> str:
    cleaned = posixpath.normpath(path) if path else "."
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


@dataclass(frozen=True)
class PackageID:
    """A package path with an optional version."""

    path: str
    version: str = ""

    def __str__(self) -> str:
        if self.version:
            return f"{self.path}@{self.version}"
        return self.path

    def name(self) -> str:
        return _base(self.path)

    def validate(self) -> None:
        """Raise PackageIDError if the id is not well formed."""
        text = str(self)
        cleaned = _clean(text)
        if cleaned.startswith(("/", ".", "@")):
            raise PackageIDError(f"invalid pacakge id: {cleaned}")
        if cleaned != text:
            raise PackageIDError(f"invalid package id, path is not clean: {text}")
        pkg_name = self.name()
        if not is_valid_identifier(pkg_name) or pkg_name == "_":
            raise PackageIDError(
                f"invalid package name ({pkg_name}), "
                "package name must be a valid identifier"
            )


def parse_package_id(text: str) -> PackageID:
    path, _, version = text.partition("@")
    return PackageID(path, version)