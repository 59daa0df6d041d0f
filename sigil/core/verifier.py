"""
Compare a file's declared type with the type its header reveals.
"""

from dataclasses import dataclass
from enum import Enum

from sigil.core.signature_index import Matched, MatchResult, SignatureIndex


class Verdict(str, Enum):
    CONFIRMED = "confirmed"
    MISMATCH = "mismatch"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Classification:
    verdict: Verdict
    declared_type: str
    detected_type: str | None = None
    matched_length: int = 0


def classify(declared_type: str, match: MatchResult) -> Classification:
    """
    Confirmed when the detected label equals the declared type
    (case-insensitive), Mismatch when it differs, Unknown when nothing
    matched. Every label sharing the winning signature counts as detected.
    """
    if not isinstance(match, Matched):
        return Classification(Verdict.UNKNOWN, declared_type)

    declared = declared_type.strip().casefold()
    for label in match.labels or (match.type_label,):
        if label.casefold() == declared:
            return Classification(
                Verdict.CONFIRMED,
                declared_type,
                detected_type=label,
                matched_length=match.matched_length,
            )
    return Classification(
        Verdict.MISMATCH,
        declared_type,
        detected_type=match.type_label,
        matched_length=match.matched_length,
    )


class Verifier:
    """Runs an index lookup and classifies the result against the declared type."""

    def __init__(self, index: SignatureIndex) -> None:
        self.index = index

    def verify(self, declared_type: str, header: bytes) -> Classification:
        return classify(declared_type, self.index.lookup(header))
