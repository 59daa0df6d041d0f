import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from sigil.core.signature_index import SignatureRecord
from sigil.repositories.signature_repository_interface import (
    ISignatureRepository,
    SignatureSourceError,
)
from sigil.schemas.signature import SignatureEntry

logger = logging.getLogger(__name__)

_entries_adapter = TypeAdapter(list[SignatureEntry])


class JsonSignatureRepository(ISignatureRepository):
    """
    Signatures stored as a JSON array of
    {"type": str, "offset": int, "signature": [0-255, ...]} objects.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    @property
    def source(self) -> str:
        return str(self.path)

    def get_all(self) -> list[SignatureRecord]:
        try:
            content = self.path.read_bytes()
        except OSError as e:
            raise SignatureSourceError(
                f"Cannot read signature file '{self.path}': {e}"
            ) from e
        records = parse_signatures(content, source=self.source)
        logger.info("Loaded %d signatures from %s", len(records), self.path)
        return records


def parse_signatures(content: str | bytes, source: str = "<string>") -> list[SignatureRecord]:
    """Validate a JSON signature document and convert it to records."""
    try:
        entries = _entries_adapter.validate_json(content)
    except ValidationError as e:
        raise SignatureSourceError(
            f"Malformed signature data in {source}: {e}"
        ) from e
    return [entry.to_record() for entry in entries]
