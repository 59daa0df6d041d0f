"""
Reading what the verifier needs from a file on disk:
the type its name declares and its leading bytes.
"""

from pathlib import Path, PurePath


class MissingExtension(ValueError):
    """The file name carries no extension to derive a declared type from."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__("File has no extension")


def declared_type_from_name(name: str | PurePath) -> str:
    """
    Upper-cased last extension of `name` ("photo.jpeg" -> "JPEG",
    "backup.tar.gz" -> "GZ"). Dot-files such as ".bashrc" have none.
    """
    suffix = PurePath(name).suffix
    if len(suffix) <= 1:
        raise MissingExtension(str(name))
    return suffix[1:].upper()


def read_header(path: str | Path, length: int) -> bytes:
    """Read at most `length` bytes from the start of the file."""
    with open(path, "rb") as f:
        return f.read(max(length, 0))
