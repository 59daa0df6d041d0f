"""Shared fixtures: a small signature index and sample files."""

from pathlib import Path

import pytest

from sigil.core.signature_index import SignatureIndex, SignatureRecord

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00\x00\x00\rIHDR"
PDF_BYTES = b"%PDF-1.4\n%\xe2\xe3\xcf\xd3\n"
JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF"


@pytest.fixture
def signature_index() -> SignatureIndex:
    return SignatureIndex.build([
        SignatureRecord("PNG", 0, b"\x89PNG\r\n\x1a\n"),
        SignatureRecord("PDF", 0, b"%PDF-"),
        SignatureRecord("JPG", 0, b"\xff\xd8\xff"),
        SignatureRecord("JPEG", 0, b"\xff\xd8\xff"),
        SignatureRecord("WAV", 8, b"WAVE"),
    ])


@pytest.fixture
def sample_dir(tmp_path: Path) -> Path:
    """
    tmp_path/
        good.png        PNG content
        fake.pdf        PNG content (mislabeled)
        notes.txt       plain text (unknown)
        photo.jpeg      JPEG content
        nested/inner.png  JPEG content (mislabeled, only found recursively)
    """
    (tmp_path / "good.png").write_bytes(PNG_BYTES)
    (tmp_path / "fake.pdf").write_bytes(PNG_BYTES)
    (tmp_path / "notes.txt").write_bytes(b"just some text")
    (tmp_path / "photo.jpeg").write_bytes(JPEG_BYTES)
    nested = tmp_path / "nested"
    nested.mkdir()
    (nested / "inner.png").write_bytes(JPEG_BYTES)
    return tmp_path
