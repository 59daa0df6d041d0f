from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from sigil.core.signature_index import SignatureRecord

Byte = Annotated[int, Field(ge=0, le=255)]


class SignatureEntry(BaseModel):
    """One entry of the JSON signature database."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    type: str
    # Structural checks (negative offset, empty signature) happen when the
    # index is built, so they surface as InvalidSignature.
    offset: int
    signature: list[Byte]

    def to_record(self) -> SignatureRecord:
        return SignatureRecord(
            type_label=self.type,
            offset=self.offset,
            pattern=bytes(self.signature),
        )


class SignatureIndexInfo(BaseModel):
    source: str
    total: int = Field(ge=0)
    required_header_length: int = Field(ge=0)
    offsets: list[int]
    types: list[str]
