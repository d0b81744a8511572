"""Recording models: captured packets and the sessions that own them."""

from __future__ import annotations

import base64

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_serializer,
    field_validator,
)

FORMAT_VERSION = 1

# Timestamps and delays are unsigned 64-bit on the wire
MAX_MILLIS = 2**64 - 1


class Packet(BaseModel):
    """One captured message, stamped relative to the start of its recording."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    delay_millis: int = Field(
        ge=0, le=MAX_MILLIS, description="Elapsed ms from recording start to receipt"
    )
    payload: bytes = Field(description="Raw message bytes, opaque to the engine")

    @field_validator("payload", mode="before")
    @classmethod
    def _decode_payload(cls, value: object, info: ValidationInfo) -> object:
        # Only persisted JSON documents carry payloads as base64 text
        if info.mode == "json" and isinstance(value, str):
            return base64.b64decode(value, validate=True)
        return value

    @field_serializer("payload", when_used="json")
    def _encode_payload(self, payload: bytes) -> str:
        return base64.b64encode(payload).decode("ascii")


class Recording(BaseModel):
    """A completed or loaded session.

    Packet order is replay order. It is preserved exactly through
    save/load and is never re-sorted by ``delay_millis``.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    format_version: int = FORMAT_VERSION
    start_time_epoch_millis: int = Field(
        ge=0, le=MAX_MILLIS, description="Wall-clock start, used for naming and provenance only"
    )
    duration_millis: int = Field(0, ge=0, le=MAX_MILLIS)
    packets: tuple[Packet, ...]

    @property
    def packet_count(self) -> int:
        return len(self.packets)

    @property
    def is_empty(self) -> bool:
        return not self.packets
