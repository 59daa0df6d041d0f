"""
Signature index for magic-number detection.

Signatures are grouped by the offset they start at. Each offset owns its
own prefix tree, so patterns sharing an offset and a leading byte run share
nodes, while signature families at different offsets never interfere.

The index is built once and only read afterwards; lookups are pure and
can run concurrently without locking.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Union

logger = logging.getLogger(__name__)

DEFAULT_MAX_SPAN = 64 * 1024
IN_MEMORY_SOURCE = "<in-memory>"


@dataclass(frozen=True)
class SignatureRecord:
    """One known signature: `pattern` expected at `offset` for `type_label`."""

    type_label: str
    offset: int
    pattern: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.pattern, bytes):
            object.__setattr__(self, "pattern", bytes(self.pattern))

    @property
    def span(self) -> int:
        return self.offset + len(self.pattern)


class InvalidSignature(ValueError):
    """A signature record failed structural validation while building the index."""

    def __init__(self, record: SignatureRecord, reason: str) -> None:
        self.record = record
        self.reason = reason
        super().__init__(
            f"Invalid signature '{record.type_label}' at offset "
            f"{record.offset}: {reason}"
        )


@dataclass(frozen=True)
class NoMatch:
    """No stored signature matched the header."""


@dataclass(frozen=True)
class Matched:
    type_label: str
    matched_length: int
    offset: int = 0
    # Every label sharing the winning (offset, pattern), sorted
    labels: tuple[str, ...] = ()


MatchResult = Union[Matched, NoMatch]

NO_MATCH = NoMatch()


@dataclass
class _TrieNode:
    children: dict[int, "_TrieNode"] = field(default_factory=dict)
    labels: list[str] = field(default_factory=list)


class SignatureIndex:
    """
    Offset-keyed prefix trees over signature patterns.

    Use `SignatureIndex.build(records)` to construct one; the instance is
    read-only once built.
    """

    def __init__(
        self,
        max_span: int = DEFAULT_MAX_SPAN,
        source: str = IN_MEMORY_SOURCE,
    ) -> None:
        self.max_span = max_span
        # Where the records came from, e.g. the signature file path
        self.source = source
        self.required_header_length = 0
        self._roots: dict[int, _TrieNode] = {}
        self._offsets: tuple[int, ...] = ()
        self._records: list[SignatureRecord] = []

    @classmethod
    def build(
        cls,
        records: Iterable[SignatureRecord],
        max_span: int = DEFAULT_MAX_SPAN,
        source: str = IN_MEMORY_SOURCE,
    ) -> "SignatureIndex":
        """
        Build an index from signature records.

        Raises InvalidSignature on the first record with an empty pattern,
        a negative offset, a blank label, or a span above `max_span`.
        Duplicate (offset, pattern) pairs keep all of their labels.
        """
        index = cls(max_span=max_span, source=source)
        for record in records:
            index._validate(record)
            index._insert(record)
        index._offsets = tuple(sorted(index._roots))
        logger.debug(
            "Signature index built: %d records, %d offsets, header length %d",
            len(index._records),
            len(index._offsets),
            index.required_header_length,
        )
        return index

    def _validate(self, record: SignatureRecord) -> None:
        if not record.type_label or not record.type_label.strip():
            raise InvalidSignature(record, "type label is empty")
        if record.offset < 0:
            raise InvalidSignature(record, "offset is negative")
        if len(record.pattern) == 0:
            raise InvalidSignature(record, "pattern is empty")
        if record.span > self.max_span:
            raise InvalidSignature(
                record,
                f"span {record.span} exceeds the maximum of {self.max_span} bytes",
            )

    def _insert(self, record: SignatureRecord) -> None:
        node = self._roots.setdefault(record.offset, _TrieNode())
        for byte in record.pattern:
            node = node.children.setdefault(byte, _TrieNode())
        if record.type_label not in node.labels:
            node.labels.append(record.type_label)
            node.labels.sort()
        self._records.append(record)
        self.required_header_length = max(self.required_header_length, record.span)

    @property
    def records(self) -> tuple[SignatureRecord, ...]:
        return tuple(self._records)

    @property
    def offsets(self) -> tuple[int, ...]:
        return self._offsets

    @property
    def type_labels(self) -> list[str]:
        return sorted({record.type_label for record in self._records})

    def __len__(self) -> int:
        return len(self._records)

    def lookup(self, header: bytes) -> MatchResult:
        """
        Return the most specific signature matching `header`.

        The winner accounts for the most bytes (offset + pattern length).
        Equal lengths at different offsets go to the smallest offset; labels
        sharing one terminal are reported in lexicographic order. A header
        shorter than `required_header_length` is fine: patterns it cannot
        contain simply do not match.
        """
        best: Matched | None = None
        for offset in self._offsets:
            if offset >= len(header):
                break
            terminal, depth = self._walk(self._roots[offset], header, offset)
            if terminal is None:
                continue
            matched_length = offset + depth
            # Offsets ascend, so strict > keeps the smallest offset on ties
            if best is None or matched_length > best.matched_length:
                best = Matched(
                    type_label=terminal.labels[0],
                    matched_length=matched_length,
                    offset=offset,
                    labels=tuple(terminal.labels),
                )
        return best if best is not None else NO_MATCH

    @staticmethod
    def _walk(
        root: _TrieNode,
        header: bytes,
        offset: int,
    ) -> tuple[_TrieNode | None, int]:
        """Deepest terminal reachable from `root` along header[offset:]."""
        node = root
        terminal: _TrieNode | None = None
        terminal_depth = 0
        for depth, byte in enumerate(header[offset:], start=1):
            node = node.children.get(byte)
            if node is None:
                break
            if node.labels:
                terminal, terminal_depth = node, depth
        return terminal, terminal_depth
