"""Tests for loading the JSON signature database."""

import json
from pathlib import Path

import pytest

from sigil.core.config import DEFAULT_SIGNATURES_FILE
from sigil.core.signature_index import InvalidSignature, Matched, SignatureIndex, SignatureRecord
from sigil.repositories.signature_repository import JsonSignatureRepository, parse_signatures
from sigil.repositories.signature_repository_interface import SignatureSourceError


def _write(tmp_path: Path, payload) -> Path:
    path = tmp_path / "signatures.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_get_all_returns_records(tmp_path: Path) -> None:
    path = _write(tmp_path, [
        {"type": "PNG", "offset": 0, "signature": [137, 80, 78, 71]},
        {"type": "WAV", "offset": 8, "signature": [87, 65, 86, 69]},
    ])
    repository = JsonSignatureRepository(path)
    assert repository.source == str(path)
    assert repository.get_all() == [
        SignatureRecord("PNG", 0, b"\x89PNG"),
        SignatureRecord("WAV", 8, b"WAVE"),
    ]


def test_missing_file_raises_source_error(tmp_path: Path) -> None:
    with pytest.raises(SignatureSourceError):
        JsonSignatureRepository(tmp_path / "nope.json").get_all()


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        '{"type": "PNG", "offset": 0, "signature": [1]}',
        '[{"type": "PNG", "offset": 0}]',
        '[{"type": "PNG", "offset": 0, "signature": [256]}]',
        '[{"type": "PNG", "offset": 0, "signature": [-1]}]',
    ],
)
def test_malformed_content_raises_source_error(content: str) -> None:
    with pytest.raises(SignatureSourceError):
        parse_signatures(content)


def test_structural_problems_surface_when_building_index(tmp_path: Path) -> None:
    path = _write(tmp_path, [{"type": "EMPTY", "offset": 0, "signature": []}])
    records = JsonSignatureRepository(path).get_all()
    with pytest.raises(InvalidSignature):
        SignatureIndex.build(records)


def test_bundled_database_builds_and_detects_common_types() -> None:
    index = SignatureIndex.build(JsonSignatureRepository(DEFAULT_SIGNATURES_FILE).get_all())
    assert len(index) > 20
    assert index.required_header_length == 262

    png = index.lookup(bytes([137, 80, 78, 71, 13, 10, 26, 10]) + b"\x00" * 8)
    assert isinstance(png, Matched) and png.type_label == "PNG"

    mp4 = index.lookup(b"\x00\x00\x00\x18ftypisom\x00\x00\x02\x00")
    assert isinstance(mp4, Matched) and mp4.type_label == "MP4"

    docx = index.lookup(b"PK\x03\x04\x14\x00\x06\x00")
    assert isinstance(docx, Matched) and "DOCX" in docx.labels and "ZIP" in docx.labels
