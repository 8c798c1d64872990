"""Manifest result type.

A Manifest pairs a relative file path with the serialized resource
content; the caller decides whether to print or write it.
"""

from dataclasses import dataclass
from pathlib import Path

from icecream import ic

from deploy_secret.exceptions import ManifestWriteError


@dataclass(frozen=True, slots=True)
class Manifest:
    """A generated manifest.

    Attributes:
        path: File path of the manifest, relative to a base directory.
        content: The YAML document, starting with a ``---`` separator.

    """

    path: str
    content: str

    def write_file(self, base_path: str | Path = ".") -> Path:
        """Write the manifest below base_path, creating parent directories.

        Args:
            base_path: Directory the manifest path is resolved against.

        Returns:
            The absolute path of the written file.

        Raises:
            ManifestWriteError: If the directory or file cannot be written.

        """
        output_path = (Path(base_path) / self.path).absolute()
        ic(output_path)

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(self.content)
        except OSError as err:
            raise ManifestWriteError(f"Cannot write to output path '{output_path}': {err.strerror}") from err

        return output_path
