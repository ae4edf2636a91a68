"""Note mapping for Kontrol S-series keyboards."""

from collections.abc import Callable

MIDI_NOTE_COUNT = 128


class KeyLedMapper:
    """
    Bidirectional mapping between MIDI notes and key LED indices.

    Key LED 0 is always the lowest physical key. Which MIDI note that key
    plays depends on the octave buttons, so the mapping shifts with the
    first note reported by the keyboard:

    - to_local_index(): MIDI note -> key index (0 - num_keys-1)
    - to_absolute_note(): key index -> MIDI note

    The first note is read through `first_note_provider` on every call,
    so the mapping follows transposes without being told about them.
    """

    def __init__(self, num_keys: int, first_note_provider: Callable[[], int]):
        """
        Initialize key mapper.

        Args:
            num_keys: Number of keys of the model (25, 49, 61 or 88)
            first_note_provider: Returns the MIDI note on the lowest key
        """
        self.num_keys = num_keys
        self._first_note = first_note_provider

    @property
    def first_note(self) -> int:
        return self._first_note()

    def to_local_index(self, note: int) -> int | None:
        """
        Convert MIDI note to key index.

        Returns:
            Key index or None if the note is outside the keyboard range

        Example:
            first note 36, note 40 -> index 4
        """
        index = note - self._first_note()
        if not 0 <= index < self.num_keys:
            return None
        return index

    def to_absolute_note(self, index: int) -> int | None:
        """
        Convert key index to MIDI note.

        Returns:
            MIDI note or None if the index is invalid or the note would
            be above 127
        """
        if not 0 <= index < self.num_keys:
            return None
        note = self._first_note() + index
        if not 0 <= note < MIDI_NOTE_COUNT:
            return None
        return note

    def note_range(self) -> tuple[int, int]:
        """Lowest and highest MIDI note currently on the keyboard."""
        first = self._first_note()
        return (first, first + self.num_keys - 1)
