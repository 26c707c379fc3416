"""
The 128 MIDI notes in 12-tone equal temperament.

Computed once at import: name (C-1 .. G9), whether the key is natural, and
the concert-pitch frequency 440 * 2^((n - 69) / 12).
"""

from __future__ import annotations

from dataclasses import dataclass

from chuk_mcp_tuning.constants import A4_FREQUENCY, A4_NOTE_NUMBER, KEY_COUNT, SEMITONES_PER_OCTAVE
from chuk_mcp_tuning.core.pitch import Frequency
from chuk_mcp_tuning.core.u7 import NoteNumber

# A blank marks a sharp of the previous letter
_NOTE_LINE = "C D EF G A B"


@dataclass(frozen=True)
class MidiNote:
    """A named MIDI note with its equal-tempered frequency."""

    note_number: NoteNumber
    name: str
    is_natural: bool
    frequency: Frequency

    @staticmethod
    def get(note_number: int) -> MidiNote:
        return ALL_MIDI_NOTES[int(note_number)]

    @staticmethod
    def parse(text: str) -> MidiNote:
        """Parse a note number ("69") or a name ("A4", "c#4")."""
        text = text.strip()
        if text.isdigit():
            return ALL_MIDI_NOTES[int(NoteNumber(int(text)))]

        name = text.upper()
        for note in ALL_MIDI_NOTES:
            if note.name == name:
                return note

        raise ValueError(f"Invalid MIDI note {text}")

    def __str__(self) -> str:
        return f"{int(self.note_number)} ({self.frequency.hz} Hz)"


def _make_note(note_number: int) -> MidiNote:
    octave = note_number // SEMITONES_PER_OCTAVE - 1
    index = note_number % SEMITONES_PER_OCTAVE
    letter = _NOTE_LINE[index]
    if letter == " ":
        name = f"{_NOTE_LINE[index - 1]}#{octave}"
        is_natural = False
    else:
        name = f"{letter}{octave}"
        is_natural = True

    exponent = (note_number - A4_NOTE_NUMBER) / SEMITONES_PER_OCTAVE
    return MidiNote(
        note_number=NoteNumber(note_number),
        name=name,
        is_natural=is_natural,
        frequency=Frequency(A4_FREQUENCY * 2.0**exponent),
    )


ALL_MIDI_NOTES: tuple[MidiNote, ...] = tuple(_make_note(n) for n in range(KEY_COUNT))
