"""Summary lookup: locate messages inside a loaded recording."""

from __future__ import annotations

from collections.abc import Callable

from sessionreel.models.recording import Packet, Recording

PayloadPredicate = Callable[[bytes], bool]


def find_first_packet(recording: Recording, predicate: PayloadPredicate) -> Packet | None:
    """Return the first packet whose payload satisfies the predicate.

    Scans the recording once in capture order. The recording is never
    consumed, so lookups are independent of playback progress.

    Args:
        recording: Recording to scan
        predicate: Test applied to each payload

    Returns:
        Matching Packet, or None if nothing matches
    """
    for packet in recording.packets:
        if predicate(packet.payload):
            return packet
    return None


def find_first(recording: Recording, predicate: PayloadPredicate) -> bytes | None:
    """Return the first payload satisfying the predicate, or None if not found."""
    packet = find_first_packet(recording, predicate)
    return packet.payload if packet is not None else None


def find_all(recording: Recording, predicate: PayloadPredicate) -> list[Packet]:
    """Return every packet whose payload satisfies the predicate, in order."""
    return [packet for packet in recording.packets if predicate(packet.payload)]
