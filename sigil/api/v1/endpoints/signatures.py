from fastapi import APIRouter, Depends

from sigil.core.dependencies import get_signature_index
from sigil.core.signature_index import SignatureIndex
from sigil.schemas.signature import SignatureIndexInfo

router = APIRouter()


@router.get(
    "/",
    response_model=SignatureIndexInfo,
    summary="Describe the loaded signature index",
)
async def describe_signatures(
    index: SignatureIndex = Depends(get_signature_index),
) -> SignatureIndexInfo:
    return SignatureIndexInfo(
        source=index.source,
        total=len(index),
        required_header_length=index.required_header_length,
        offsets=list(index.offsets),
        types=index.type_labels,
    )
