from functools import lru_cache

from fastapi import Depends

from sigil.core.config import settings
from sigil.core.signature_index import SignatureIndex
from sigil.repositories.signature_repository import JsonSignatureRepository
from sigil.repositories.signature_repository_interface import ISignatureRepository
from sigil.services.verification_service import VerificationService


def get_signature_repository() -> ISignatureRepository:
    return JsonSignatureRepository(settings.SIGNATURES_FILE)


@lru_cache
def get_signature_index() -> SignatureIndex:
    """Built on first use, then shared by every request."""
    repository = get_signature_repository()
    return SignatureIndex.build(
        repository.get_all(),
        max_span=settings.MAX_SIGNATURE_SPAN,
        source=repository.source,
    )


def get_verification_service(
    index: SignatureIndex = Depends(get_signature_index),
) -> VerificationService:
    return VerificationService(index, max_workers=settings.MAX_WORKERS)
