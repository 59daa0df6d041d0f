"""Unit tests for declared-vs-detected classification."""

from sigil.core.signature_index import NO_MATCH, Matched, SignatureIndex, SignatureRecord
from sigil.core.verifier import Classification, Verdict, Verifier, classify

PNG_MATCH = Matched("PNG", 8, offset=0, labels=("PNG",))


def test_classify_confirmed_same_case() -> None:
    result = classify("PNG", PNG_MATCH)
    assert result == Classification(
        Verdict.CONFIRMED, "PNG", detected_type="PNG", matched_length=8
    )


def test_classify_confirmed_is_case_insensitive() -> None:
    assert classify("png", PNG_MATCH).verdict == Verdict.CONFIRMED


def test_classify_mismatch_reports_detected_type() -> None:
    result = classify("JPG", PNG_MATCH)
    assert result.verdict == Verdict.MISMATCH
    assert result.detected_type == "PNG"
    assert result.declared_type == "JPG"


def test_classify_unknown_when_nothing_matched() -> None:
    result = classify("TXT", NO_MATCH)
    assert result.verdict == Verdict.UNKNOWN
    assert result.detected_type is None
    assert result.matched_length == 0


def test_classify_accepts_any_label_of_shared_signature() -> None:
    zip_family = Matched("DOCX", 4, offset=0, labels=("DOCX", "JAR", "ZIP"))
    confirmed = classify("zip", zip_family)
    assert confirmed.verdict == Verdict.CONFIRMED
    assert confirmed.detected_type == "ZIP"

    mismatch = classify("PDF", zip_family)
    assert mismatch.verdict == Verdict.MISMATCH
    assert mismatch.detected_type == "DOCX"


def test_classify_without_labels_falls_back_to_type_label() -> None:
    assert classify("Png", Matched("PNG", 8)).verdict == Verdict.CONFIRMED


def test_verifier_runs_lookup_then_classify() -> None:
    index = SignatureIndex.build([
        SignatureRecord("PDF", 0, b"%PDF-"),
        SignatureRecord("PNG", 0, b"\x89PNG\r\n\x1a\n"),
    ])
    verifier = Verifier(index)
    assert verifier.verify("PDF", b"%PDF-1.7\n").verdict == Verdict.CONFIRMED
    assert verifier.verify("JPG", b"\x89PNG\r\n\x1a\n").detected_type == "PNG"
    assert verifier.verify("TXT", b"hello").verdict == Verdict.UNKNOWN
    assert verifier.verify("PDF", b"%PD").verdict == Verdict.UNKNOWN
