from abc import abstractmethod

from sigil.core.signature_index import SignatureRecord
from sigil.repositories.base_repository import BaseRepository


class SignatureSourceError(Exception):
    """The signature database could not be read or parsed."""


class ISignatureRepository(BaseRepository[SignatureRecord]):

    @property
    @abstractmethod
    def source(self) -> str:
        """Human-readable description of where signatures come from."""
        raise NotImplementedError
