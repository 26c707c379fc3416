#!/usr/bin/env python3
"""
tuning-tool - command-line front end.

Subcommands:
- decode-bulk-dump: print the contents of a Bulk Dump Reply .syx file
- dump-tuning-table: print the per-key frequencies of a scale
- send-tuning: send Note Change messages to a port, a .syx file or stdout
- save-bulk-dump: write a scale as a Bulk Dump Reply .syx file
- list-ports: list MIDI input and output ports
- monitor-port: hex-dump messages arriving on a MIDI input port

Keys in --reference take a number ("69") or a note name ("A4").
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

import yaml

from chuk_mcp_tuning.config import TuningSettings, load_settings
from chuk_mcp_tuning.constants import SuccessMessages
from chuk_mcp_tuning.core.midi_note import MidiNote
from chuk_mcp_tuning.core.pitch import Frequency
from chuk_mcp_tuning.core.u7 import ChunkSize
from chuk_mcp_tuning.devices import MidiOutputSink, list_ports, open_input
from chuk_mcp_tuning.errors import TuningError
from chuk_mcp_tuning.formats.hex_dump import to_hex_dump
from chuk_mcp_tuning.formats.syx import read_syx_bytes, write_syx_file
from chuk_mcp_tuning.mapping.keyboard_mapping import KeyboardMapping
from chuk_mcp_tuning.models.tuning_table import DecodedBulkDump, TuningTable
from chuk_mcp_tuning.pipeline import (
    KeyboardMappingSource,
    load_scale,
    make_bulk_dump_reply,
    make_note_changes,
    make_tuning_table,
)
from chuk_mcp_tuning.sysex.bulk_dump_reply import BulkDumpReply

logger = logging.getLogger(__name__)

FORMATS = ("brief", "detailed", "json", "yaml")


def _u7(text: str) -> int:
    """argparse type for 7-bit values; accepts decimal or 0x-prefixed hex."""
    value = int(text, 0)
    if not 0 <= value <= 127:
        raise argparse.ArgumentTypeError(f"must be 0-127, got {value}")
    return value


def _key(text: str) -> int:
    """argparse type for keys: a note number ("69") or a note name ("A4", "c#4")."""
    try:
        return int(MidiNote.parse(text).note_number)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid key {text!r}") from e


def _reference(text: str) -> KeyboardMapping:
    """argparse type for ZERO_KEY,REFERENCE_KEY,FREQUENCY, e.g. "C4,A4,440"."""
    parts = text.split(",")
    if len(parts) != 3:
        raise argparse.ArgumentTypeError(f"expected ZERO_KEY,REFERENCE_KEY,FREQUENCY, got {text!r}")
    try:
        hz = float(parts[2])
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid reference frequency {parts[2]!r}") from e
    if not hz > 0.0:
        raise argparse.ArgumentTypeError(f"reference frequency must be positive, got {hz}")
    return KeyboardMapping.full_linear(_key(parts[0]), _key(parts[1]), Frequency(hz))


def _add_mapping_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("scl_path", type=Path, help="Path to .scl file")
    parser.add_argument("kbm_path", type=Path, nargs="?", help="Path to .kbm file")
    parser.add_argument(
        "-r",
        "--reference",
        type=_reference,
        metavar="ZERO,REF,HZ",
        help="Linear mapping with these zero key, reference key and frequency (e.g. C4,A4,440)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tuning-tool",
        description="Convert Scala tunings to MIDI Tuning Standard messages",
    )
    parser.add_argument("--config", type=Path, help="YAML settings file")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    commands = parser.add_subparsers(dest="command", required=True)

    decode = commands.add_parser("decode-bulk-dump", help="Decode a Bulk Dump Reply .syx file")
    decode.add_argument("syx_path", type=Path, help="Path to .syx file")
    decode.add_argument(
        "-f", "--format", choices=("text", "json", "yaml"), default="text", help="Output format"
    )

    dump = commands.add_parser("dump-tuning-table", help="Print the frequency of every key")
    _add_mapping_arguments(dump)
    dump.add_argument("-o", "--output", type=Path, help="Write to a new file instead of stdout")
    dump.add_argument("-f", "--format", choices=FORMATS, default="brief", help="Output format")

    send = commands.add_parser("send-tuning", help="Send Note Change messages")
    _add_mapping_arguments(send)
    target = send.add_mutually_exclusive_group()
    target.add_argument("-o", "--output", dest="output_port", help="MIDI output port name")
    target.add_argument("-f", "--file", dest="syx_path", type=Path, help="Write a new .syx file")
    send.add_argument("-d", "--device-id", type=_u7, help="SysEx device id")
    send.add_argument("-p", "--preset", type=_u7, help="Tuning program")
    send.add_argument("-c", "--chunk-size", type=_u7, help="Note changes per message")

    bulk = commands.add_parser("save-bulk-dump", help="Write a Bulk Dump Reply .syx file")
    _add_mapping_arguments(bulk)
    bulk.add_argument("-f", "--file", dest="syx_path", type=Path, required=True, help="New .syx file")
    bulk.add_argument("-n", "--name", help="Preset name (16 ASCII characters max)")
    bulk.add_argument("-d", "--device-id", type=_u7, help="SysEx device id")
    bulk.add_argument("-p", "--preset", type=_u7, help="Tuning program")

    commands.add_parser("list-ports", help="List MIDI input and output ports")

    monitor = commands.add_parser("monitor-port", help="Hex-dump messages arriving on a MIDI input")
    monitor.add_argument("port", help="MIDI input port name")
    monitor.add_argument(
        "-f", "--file", dest="syx_path", type=Path, help="Save the first Bulk Dump Reply to a new file"
    )
    monitor.add_argument("-n", "--count", type=int, help="Stop after this many messages")

    return parser


def decode_bulk_dump(syx_path: Path, fmt: str, out: TextIO) -> None:
    reply = BulkDumpReply.parse(read_syx_bytes(syx_path))
    decoded = DecodedBulkDump.from_reply(reply)

    if fmt == "json":
        out.write(json.dumps(decoded.model_dump(), indent=2) + "\n")
    elif fmt == "yaml":
        yaml.safe_dump(decoded.model_dump(), out, sort_keys=False)
    else:
        out.write(f"Name: {decoded.name}\n")
        out.write(f"Device ID: {decoded.device_id}\n")
        out.write(f"Preset: {decoded.preset}\n")
        for key in decoded.keys:
            out.write(f"{key.key:>3}: {key.frequency} Hz\n")


def _write_table(out: TextIO, fmt: str, table: TuningTable, lines: list[str]) -> None:
    if fmt == "brief":
        for entry in table.entries:
            out.write(f"{entry.frequency}\n")
    elif fmt == "detailed":
        out.write(f"# Scale file: {table.scale_file}\n")
        out.write(f"# {table.keyboard_mapping}\n")
        for line in lines:
            out.write(f"{line}\n")
    elif fmt == "json":
        out.write(json.dumps(table.model_dump(), indent=2) + "\n")
    else:
        yaml.safe_dump(table.model_dump(), out, sort_keys=False)


def dump_tuning_table(
    scl_path: Path, source: KeyboardMappingSource, output: Path | None, fmt: str, out: TextIO
) -> None:
    scl_file = load_scale(scl_path)
    keyboard_mapping = source.make_keyboard_mapping()
    mappings, table = make_tuning_table(
        scl_file, keyboard_mapping, scale_path=scl_path, source=source
    )
    lines = [str(m) for m in mappings]

    if output is None:
        _write_table(out, fmt, table, lines)
        return

    # Never overwrite
    with open(output, "x") as f:
        _write_table(f, fmt, table, lines)


def send_tuning(
    scl_path: Path,
    source: KeyboardMappingSource,
    settings: TuningSettings,
    output_port: str | None,
    syx_path: Path | None,
    out: TextIO,
) -> None:
    scale = load_scale(scl_path).scale
    keyboard_mapping = source.make_keyboard_mapping()
    out.write(f"Start MIDI note: {keyboard_mapping.start_key} (0x{keyboard_mapping.start_key:02x})\n")
    out.write(f"End MIDI note: {keyboard_mapping.end_key} (0x{keyboard_mapping.end_key:02x})\n")
    out.write(
        f"Base MIDI note: {keyboard_mapping.reference_key} (0x{keyboard_mapping.reference_key:02x})\n"
    )
    out.write(f"Base frequency: {keyboard_mapping.reference_frequency} Hz\n")

    messages, frequencies = make_note_changes(
        scale,
        keyboard_mapping,
        device_id=settings.device_id,
        preset=settings.preset,
        chunk_size=ChunkSize(settings.chunk_size),
    )

    if output_port is not None:
        with MidiOutputSink(output_port) as sink:
            for message in messages:
                out.write(to_hex_dump(message.to_bytes(), settings.hex_columns) + "\n")
                sink.send(message.to_message())
        logger.info(SuccessMessages.NOTE_CHANGES_SENT.format(count=len(messages), port=output_port))
    elif syx_path is not None:
        write_syx_file(syx_path, [m.to_message() for m in messages])
        logger.info(SuccessMessages.NOTE_CHANGES_WRITTEN.format(count=len(messages), path=syx_path))
    else:
        for i, (message, frequency) in enumerate(zip(messages, frequencies, strict=False)):
            hex_dump = to_hex_dump(message.to_bytes(), settings.hex_columns)
            out.write(f"(MIDI message {i}): {hex_dump} ({frequency.hz:.1f} Hz)\n")


def save_bulk_dump(
    scl_path: Path, source: KeyboardMappingSource, settings: TuningSettings, syx_path: Path
) -> None:
    scale = load_scale(scl_path).scale
    keyboard_mapping = source.make_keyboard_mapping()
    reply = make_bulk_dump_reply(
        scale,
        keyboard_mapping,
        device_id=settings.device_id,
        preset=settings.preset,
        name=settings.preset_name,
    )
    write_syx_file(syx_path, [reply.to_message()])
    logger.info(SuccessMessages.BULK_DUMP_WRITTEN.format(name=reply.name, path=syx_path))


def print_ports(out: TextIO) -> None:
    ports = list_ports()
    for direction, label in (("inputs", "input"), ("outputs", "output")):
        names = ports[direction]
        if not names:
            out.write(f"(You have no MIDI {label} ports)\n")
            continue
        out.write(f"MIDI {direction}:\n")
        for name in names:
            out.write(f"  {name}\n")


def monitor_port(
    port_name: str,
    settings: TuningSettings,
    syx_path: Path | None,
    count: int | None,
    out: TextIO,
) -> None:
    """
    Print every incoming message as hex until interrupted.

    With syx_path, the first message that decodes as a Bulk Dump Reply is
    also written there, ready for decode-bulk-dump.
    """
    received = 0
    with open_input(port_name) as port:
        logger.info(SuccessMessages.MONITORING.format(port=port_name))
        try:
            for message in port:
                data = bytes(message.bytes())
                out.write(to_hex_dump(data, settings.hex_columns) + "\n")
                received += 1

                if syx_path is not None and message.type == "sysex":
                    try:
                        reply = BulkDumpReply.parse(data)
                    except TuningError as e:
                        logger.debug(f"Not a bulk dump: {e}")
                    else:
                        write_syx_file(syx_path, [reply.to_message()])
                        logger.info(
                            SuccessMessages.BULK_DUMP_WRITTEN.format(name=reply.name, path=syx_path)
                        )
                        syx_path = None

                if count is not None and received >= count:
                    break
        except KeyboardInterrupt:
            logger.debug("Monitoring interrupted")
    logger.info(SuccessMessages.MONITOR_STOPPED.format(count=received))


def run(args: argparse.Namespace, out: TextIO) -> None:
    """Dispatch a parsed command line."""
    settings = load_settings(args.config)

    if args.command == "decode-bulk-dump":
        decode_bulk_dump(args.syx_path, args.format, out)
    elif args.command == "dump-tuning-table":
        source = KeyboardMappingSource(args.kbm_path, args.reference)
        dump_tuning_table(args.scl_path, source, args.output, args.format, out)
    elif args.command == "send-tuning":
        settings = settings.merged(
            device_id=args.device_id, preset=args.preset, chunk_size=args.chunk_size
        )
        output_port = args.output_port
        if output_port is None and args.syx_path is None:
            output_port = settings.output_port
        source = KeyboardMappingSource(args.kbm_path, args.reference)
        send_tuning(args.scl_path, source, settings, output_port, args.syx_path, out)
    elif args.command == "save-bulk-dump":
        settings = settings.merged(device_id=args.device_id, preset=args.preset, preset_name=args.name)
        source = KeyboardMappingSource(args.kbm_path, args.reference)
        save_bulk_dump(args.scl_path, source, settings, args.syx_path)
    elif args.command == "list-ports":
        print_ports(out)
    elif args.command == "monitor-port":
        monitor_port(args.port, settings, args.syx_path, args.count, out)


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point. Returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        run(args, sys.stdout)
    except (ValueError, OSError) as e:
        logger.error(str(e))
        logger.debug("Command failed", exc_info=True)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
