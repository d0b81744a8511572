"""SessionReel CLI: thin Typer wrapper over library calls."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from sessionreel import __version__

app = typer.Typer(
    name="sessionreel",
    help="Record live message sessions and replay them with their original timing.",
    no_args_is_help=True,
)
console = Console()

_PREVIEW_BYTES = 16


def _settings(config_path: Path | None, storage_dir: Path | None) -> "SessionReelConfig":
    from sessionreel.config import load_config
    from sessionreel.errors import ConfigError
    from sessionreel.utils.logging import configure_logging

    try:
        config = load_config(config_path)
    except ConfigError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)

    if storage_dir is not None:
        config = config.model_copy(update={"storage_dir": storage_dir})
    if config_path is not None:
        configure_logging(config.log_level)
    return config


def _load(config: "SessionReelConfig", identifier: str) -> "Recording":
    from sessionreel.errors import MalformedRecordingError, RecordingIOError
    from sessionreel.storage.store import RecordingStore

    store = RecordingStore(config.storage_dir)
    try:
        return store.load(identifier)
    except ValueError as e:
        # MalformedRecordingError is a ValueError, and so is a bad identifier
        label = "Malformed recording" if isinstance(e, MalformedRecordingError) else "Error"
        console.print(f"[red]{label}:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except RecordingIOError:
        console.print(f"[red]Recording {escape(identifier)} not found or unreadable[/red]")
        raise typer.Exit(1)


def _preview(payload: bytes) -> str:
    head = payload[:_PREVIEW_BYTES].hex(" ")
    return f"{head} …" if len(payload) > _PREVIEW_BYTES else head


def _parse_needle(contains: str | None, hex_bytes: str | None) -> bytes:
    if (contains is None) == (hex_bytes is None):
        console.print("[red]Give exactly one of --contains or --hex[/red]")
        raise typer.Exit(1)
    if contains is not None:
        return contains.encode("utf-8")
    try:
        return bytes.fromhex(hex_bytes)
    except ValueError:
        console.print(f"[red]Invalid hex string:[/red] {escape(hex_bytes)}")
        raise typer.Exit(1)


@app.command()
def version() -> None:
    """Show SessionReel version."""
    console.print(f"sessionreel {__version__}")


@app.command("list")
def list_recordings(
    storage_dir: Optional[Path] = typer.Option(
        None, "--dir", "-d", help="Recording storage directory"
    ),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config YAML"),
) -> None:
    """List stored recordings, oldest first."""
    from sessionreel.storage.store import RecordingStore
    from sessionreel.utils.timestamps import from_epoch_millis

    config = _settings(config_path, storage_dir)
    store = RecordingStore(config.storage_dir)
    identifiers = store.list_recordings()

    console.print(f"\n[bold]Recordings ({len(identifiers)}):[/bold]\n")
    for identifier in identifiers:
        started = int(identifier.rsplit("-", 1)[-1])
        console.print(
            f"  [cyan]{identifier}[/cyan]  "
            f"[dim]{from_epoch_millis(started).isoformat(timespec='seconds')}[/dim]"
        )


@app.command()
def inspect(
    identifier: str = typer.Argument(..., help="Recording identifier"),
    packets: int = typer.Option(0, "--packets", "-p", help="Show the first N packets"),
    storage_dir: Optional[Path] = typer.Option(
        None, "--dir", "-d", help="Recording storage directory"
    ),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config YAML"),
) -> None:
    """Show a summary of a stored recording."""
    from sessionreel.utils.hashing import fingerprint_recording
    from sessionreel.utils.timestamps import from_epoch_millis

    config = _settings(config_path, storage_dir)
    recording = _load(config, identifier)

    started = from_epoch_millis(recording.start_time_epoch_millis)
    console.print(f"\n[bold]Recording: {identifier}[/bold]")
    console.print(f"  Started: {started.isoformat(timespec='milliseconds')}")
    console.print(f"  Duration: {recording.duration_millis} ms")
    console.print(f"  Packets: {recording.packet_count}")
    console.print(f"  Bytes: {sum(len(p.payload) for p in recording.packets)}")
    console.print(f"  Fingerprint: {fingerprint_recording(recording)}")

    if packets > 0:
        console.print()
        for index, packet in enumerate(recording.packets[:packets]):
            console.print(
                f"  [cyan]#{index}[/cyan] +{packet.delay_millis} ms  "
                f"[dim]{len(packet.payload)} B[/dim]  {_preview(packet.payload)}"
            )


@app.command()
def find(
    identifier: str = typer.Argument(..., help="Recording identifier"),
    contains: Optional[str] = typer.Option(None, "--contains", help="Match payloads containing this text"),
    hex_bytes: Optional[str] = typer.Option(None, "--hex", help="Match payloads containing these bytes"),
    all_matches: bool = typer.Option(False, "--all", help="Show every match, not just the first"),
    storage_dir: Optional[Path] = typer.Option(
        None, "--dir", "-d", help="Recording storage directory"
    ),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config YAML"),
) -> None:
    """Find messages in a recording by payload content."""
    from sessionreel.playback.lookup import find_all, find_first_packet

    needle = _parse_needle(contains, hex_bytes)
    config = _settings(config_path, storage_dir)
    recording = _load(config, identifier)

    def predicate(payload: bytes) -> bool:
        return needle in payload

    if all_matches:
        matches = find_all(recording, predicate)
    else:
        first = find_first_packet(recording, predicate)
        matches = [first] if first is not None else []

    if not matches:
        console.print("[yellow]No matching packet found[/yellow]")
        raise typer.Exit(1)

    for packet in matches:
        console.print(
            f"  [green]+{packet.delay_millis} ms[/green]  "
            f"[dim]{len(packet.payload)} B[/dim]  {_preview(packet.payload)}"
        )


@app.command()
def replay(
    identifier: str = typer.Argument(..., help="Recording identifier"),
    speed: float = typer.Option(1.0, "--speed", help="Playback speed multiplier"),
    max_gap: Optional[int] = typer.Option(
        None, "--max-gap", help="Skip ahead whenever the next packet is further away than this (ms)"
    ),
    interval: float = typer.Option(0.005, "--interval", help="Seconds between scheduler ticks"),
    storage_dir: Optional[Path] = typer.Option(
        None, "--dir", "-d", help="Recording storage directory"
    ),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config YAML"),
) -> None:
    """Replay a recording to the terminal with its original timing."""
    from sessionreel.models.enums import BoundaryKind
    from sessionreel.session.engine import SessionEngine
    from sessionreel.storage.store import RecordingStore

    if speed <= 0:
        console.print("[red]--speed must be positive[/red]")
        raise typer.Exit(1)

    config = _settings(config_path, storage_dir)
    recording = _load(config, identifier)

    def deliver(payload: bytes) -> None:
        console.print(
            f"  [green]+{engine.playback_elapsed_millis} ms[/green]  "
            f"[dim]{len(payload)} B[/dim]  {_preview(payload)}"
        )

    def scaled_clock() -> int:
        return int(time.monotonic_ns() * speed) // 1_000_000

    engine = SessionEngine(
        RecordingStore(config.storage_dir),
        classifier=lambda _payload: BoundaryKind.NONE,
        sink=deliver,
        clock=scaled_clock,
    )
    engine.start_playback_recording(recording)
    console.print(f"\n[bold]Replaying {identifier}[/bold] ({recording.packet_count} packets)\n")

    delivered = 0
    try:
        while not engine.is_playback_exhausted:
            upcoming = engine.scheduler.peek()
            if max_gap is not None and upcoming is not None:
                wait = (
                    upcoming.delay_millis
                    - engine.scheduler.offset_millis
                    - engine.playback_elapsed_millis
                )
                if wait > max_gap:
                    engine.skip_ahead()
            delivered += engine.pump()
            if not engine.is_playback_exhausted:
                time.sleep(interval)
    finally:
        engine.stop_playback()

    console.print(f"\n[green]Replayed {delivered} packets[/green]")


@app.command()
def validate(
    recording_file: Path = typer.Argument(..., help="Path to a recording JSON document"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config YAML"),
) -> None:
    """Validate a recording document."""
    from sessionreel.errors import SessionReelError
    from sessionreel.storage.store import RecordingStore

    _settings(config_path, None)
    try:
        recording = RecordingStore(recording_file.parent).load_path(recording_file)
    except SessionReelError as e:
        console.print(f"[red]Validation failed:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    console.print(f"[green]Valid recording:[/green] {recording.packet_count} packets")
    console.print(f"  Duration: {recording.duration_millis} ms")


if __name__ == "__main__":
    app()
