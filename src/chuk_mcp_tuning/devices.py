"""
MIDI devices - port enumeration, an input opener and an output sink, via mido.

mido needs a port backend (python-rtmidi by default) for anything here.
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any

import mido
from mido import Message

from chuk_mcp_tuning.errors import PortNotFoundError

logger = logging.getLogger(__name__)


def list_input_ports() -> list[str]:
    return sorted(mido.get_input_names())


def list_output_ports() -> list[str]:
    return sorted(mido.get_output_names())


def list_ports() -> dict[str, list[str]]:
    """All port names, sorted, keyed by direction."""
    return {"inputs": list_input_ports(), "outputs": list_output_ports()}


def get_output_port_name(name: str) -> str:
    """
    Confirm an output port exists.

    Raises:
        PortNotFoundError: No port with exactly this name; lists the available ones
    """
    names = mido.get_output_names()
    if name not in names:
        raise PortNotFoundError(name, list(names))
    return name


def get_input_port_name(name: str) -> str:
    """
    Confirm an input port exists.

    Raises:
        PortNotFoundError: No port with exactly this name; lists the available ones
    """
    names = mido.get_input_names()
    if name not in names:
        raise PortNotFoundError(name, list(names), direction="input")
    return name


def open_input(port_name: str) -> Any:
    """Open a named input port. Iterating the port blocks until each message arrives."""
    name = get_input_port_name(port_name)
    logger.debug(f"Opening MIDI input {name}")
    return mido.open_input(name)


class MidiOutputSink:
    """
    Send-only connection to a named output port.

    Usage:
        with MidiOutputSink("Synth") as sink:
            sink.send(message)
    """

    def __init__(self, port_name: str) -> None:
        self.port_name = get_output_port_name(port_name)
        self._port: Any = None

    def open(self) -> MidiOutputSink:
        if self._port is None:
            logger.debug(f"Opening MIDI output {self.port_name}")
            self._port = mido.open_output(self.port_name)
        return self

    def close(self) -> None:
        if self._port is not None:
            self._port.close()
            self._port = None

    def send(self, message: Message) -> None:
        """Fire and forget: no acknowledgement is awaited."""
        if self._port is None:
            raise RuntimeError(f"MIDI output {self.port_name} is not open")
        self._port.send(message)

    def __enter__(self) -> MidiOutputSink:
        return self.open()

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
