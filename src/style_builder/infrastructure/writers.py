"""Filesystem artifact writer."""

from __future__ import annotations

from hashlib import sha256
from pathlib import Path

from style_builder.application.results import OutputArtifact
from style_builder.errors import WriteError
from style_builder.types import ArtifactRole


def digest_bytes(data: bytes) -> str:
    """Compute SHA-256 digest for byte payload."""
    return sha256(data).hexdigest()


class FileArtifactWriter:
    """Write UTF-8 artifacts, creating the parent directory when absent."""

    def write(self, path: Path, text: str, role: ArtifactRole) -> OutputArtifact:
        """Write ``text`` to ``path``, replacing any previous file.

        Text is encoded as UTF-8 with ``\\n`` line endings on every platform,
        so identical CSS always yields identical bytes.

        Raises
        ------
        WriteError
            If the directory or file cannot be written.
        """
        data = text.encode("utf-8")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as exc:
            raise WriteError(f"Cannot write {role} artifact: {exc}", path=path) from exc
        return OutputArtifact(
            path=path,
            role=role,
            size_bytes=len(data),
            sha256=digest_bytes(data),
        )
