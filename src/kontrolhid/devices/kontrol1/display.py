"""Display buffer of the Kontrol S-series character display."""

import numpy as np

from . import glyphs
from .reports import (
    NUM_DISPLAY_COLUMNS,
    NUM_TEXT_ROWS,
    REPORT_ID_OUTPUT_DISPLAY,
    SIZE_DISPLAY,
    display_header,
    pad,
)

NUM_BAR_COLUMNS = 9
NUM_BAR_SEGMENTS = 9
BLOCK_WIDTH = 8

SEGMENT_FULL = 3
SEGMENT_BORDER = 68
PAN_CENTER = 4

# Dash codes of a partially filled segment; the hardware swaps 1 and 2
DASH_CODES = (0, 2, 1, 3)

DOT_NONE = 0x00
DOT_ROW_0 = 0xFD
DOT_ROW_1 = 0xFE
DOT_BOTH = 0xFF


def dot_sentinel(row_0: bool, row_1: bool) -> int:
    """Combine the dot flags of both text rows of one column into one byte."""
    if row_0 and row_1:
        return DOT_BOTH
    if row_0:
        return DOT_ROW_0
    if row_1:
        return DOT_ROW_1
    return DOT_NONE


def is_block_end(column: int) -> bool:
    """The last column of an 8 column block has no dot; its slot carries a bar segment."""
    return column % BLOCK_WIDTH == BLOCK_WIDTH - 1


class DisplayBuffer:
    """
    In-memory image of the display.

    Holds two text rows of 72 character cells, a dot flag per cell and
    nine bar graph columns with nine segments each. Rendering produces
    the three 0xE0 packets: packet row 0 with bars and dots, packet rows
    1 and 2 with the glyphs of text rows 0 and 1.

    Setters ignore out-of-range positions instead of raising, so callers
    can pass text of any length.

    Not thread safe; the owner guards it with its display lock.
    """

    def __init__(self):
        self._glyphs = np.zeros((NUM_TEXT_ROWS, NUM_DISPLAY_COLUMNS, 2), dtype=np.uint8)
        self._dots = np.zeros((NUM_TEXT_ROWS, NUM_DISPLAY_COLUMNS), dtype=bool)
        self._bars = np.zeros((NUM_BAR_COLUMNS, NUM_BAR_SEGMENTS), dtype=np.uint8)

    # =================================================================
    # Text
    # =================================================================

    def set_character(self, row: int, column: int, character: str) -> None:
        """Set the character of one cell (row 0-1, column 0-71)."""
        if not self._in_range(row, column):
            return
        self._glyphs[row, column] = glyphs.encode(character)

    def set_dot(self, row: int, column: int, flag: bool) -> None:
        """Show or hide the dot after one cell (row 0-1, column 0-71)."""
        if not self._in_range(row, column):
            return
        self._dots[row, column] = flag

    def get_dot(self, row: int, column: int) -> bool:
        if not self._in_range(row, column):
            return False
        return bool(self._dots[row, column])

    def get_glyph(self, row: int, column: int) -> tuple[int, int]:
        if not self._in_range(row, column):
            return glyphs.BLANK
        first, second = self._glyphs[row, column]
        return (int(first), int(second))

    def set_text(self, row: int, text: str, column: int = 0, width: int | None = None) -> None:
        """
        Write text into a row starting at `column`.

        A '.' does not take a cell of its own; it switches on the dot of
        the preceding character. Columns at the end of an 8 column block
        cannot show a dot, so a character landing there that is followed
        by a '.' moves one column to the right and a space fills its
        place. Text past column 71 (or past `width` cells) is cut off.

        Every written cell gets its dot flag set or cleared, so rewriting
        a region also removes stale dots.

        Args:
            row: Text row (0-1)
            text: Text to write
            column: First column (0-71)
            width: Number of cells to write; shorter text is padded with spaces
        """
        if not self._in_range(row, column):
            return

        limit = NUM_DISPLAY_COLUMNS - column
        if width is not None:
            limit = min(limit, width)

        cells = self._layout(text, column)
        if width is not None and len(cells) < limit:
            cells.extend([" ", False] for _ in range(limit - len(cells)))

        for offset, (character, dot) in enumerate(cells[:limit]):
            self._glyphs[row, column + offset] = glyphs.encode(character)
            self._dots[row, column + offset] = dot

    def set_cell(self, row: int, block: int, text: str) -> None:
        """Write text into one of the nine 8 column blocks of a row, padded with spaces."""
        if not 0 <= block < NUM_BAR_COLUMNS:
            return
        self.set_text(row, text, column=block * BLOCK_WIDTH, width=BLOCK_WIDTH)

    def clear_row(self, row: int) -> None:
        if not 0 <= row < NUM_TEXT_ROWS:
            return
        self._glyphs[row] = 0
        self._dots[row] = False

    @staticmethod
    def _layout(text: str, column: int) -> list[list]:
        """Split text into [character, dot] cells applying the block end rule."""
        cells: list[list] = []
        for character in text:
            if character != ".":
                cells.append([character, False])
                continue

            if not cells or cells[-1][1]:
                # Nothing to attach to: the dot gets a blank cell
                cells.append([" ", False])

            if is_block_end(column + len(cells) - 1):
                cells.insert(len(cells) - 1, [" ", False])
            cells[-1][1] = True
        return cells

    # =================================================================
    # Bars
    # =================================================================

    def set_bar(self, column: int, has_border: bool, value: int, max_value: int) -> None:
        """
        Fill a bar graph column proportionally to value / max_value.

        The column has 9 segments with 4 steps each. Full segments show
        3, the first partial segment a dash code.

        Args:
            column: Bar column (0-8)
            has_border: Draw the border around the bar
            value: Current value (0 - max_value)
            max_value: Value of a completely filled bar
        """
        if not 0 <= column < NUM_BAR_COLUMNS or max_value <= 0:
            return

        steps = value * 36 // max_value
        full = steps // 4
        segments = np.zeros(NUM_BAR_SEGMENTS, dtype=np.int32)
        segments[: max(0, min(full, NUM_BAR_SEGMENTS))] = SEGMENT_FULL
        if 0 <= full < NUM_BAR_SEGMENTS:
            segments[full] = DASH_CODES[steps % 4]

        self._store_bar(column, segments, has_border)

    def set_pan_bar(self, column: int, has_border: bool, value: int, max_value: int) -> None:
        """
        Draw a centered bar growing left or right of the middle value.

        The center segment is always lit. The distance from the middle
        fills up to four segments on one side; an odd step count adds a
        half segment (2) at the tip.
        """
        if not 0 <= column < NUM_BAR_COLUMNS or max_value <= 0:
            return

        segments = np.zeros(NUM_BAR_SEGMENTS, dtype=np.int32)
        segments[PAN_CENTER] = SEGMENT_FULL

        middle = max_value // 2
        if value != middle:
            position = abs(value - middle)
            steps = 16 * position // max_value
            half = steps // 2
            rest = steps % 2

            if value < middle:
                segments[max(0, PAN_CENTER - half) : PAN_CENTER + 1] = SEGMENT_FULL
                tip = PAN_CENTER - half - 1
                if rest and tip >= 0:
                    segments[tip] = 2
            else:
                segments[PAN_CENTER + 1 : PAN_CENTER + 2 + half] = SEGMENT_FULL
                tip = PAN_CENTER + 1 + half + 1
                if rest and tip < NUM_BAR_SEGMENTS:
                    segments[tip] = 2

        self._store_bar(column, segments, has_border)

    def get_bar(self, column: int) -> tuple[int, ...]:
        if not 0 <= column < NUM_BAR_COLUMNS:
            return (0,) * NUM_BAR_SEGMENTS
        return tuple(int(segment) for segment in self._bars[column])

    def clear_bars(self) -> None:
        self._bars[:] = 0

    def _store_bar(self, column: int, segments: np.ndarray, has_border: bool) -> None:
        if has_border:
            segments = segments + SEGMENT_BORDER
        self._bars[column] = segments

    # =================================================================
    # Rendering
    # =================================================================

    def clear(self) -> None:
        """Blank all text, dots and bars."""
        self._glyphs[:] = 0
        self._dots[:] = False
        self._bars[:] = 0

    def render(self, packet_row: int) -> bytes:
        """
        Render one display packet (without the report id).

        Args:
            packet_row: 0 for bars and dots, 1 and 2 for text rows 0 and 1

        Returns:
            248 bytes: header followed by the zero padded row data
        """
        if packet_row == 0:
            body = self._render_bars_and_dots()
        elif packet_row in (1, 2):
            body = self._glyphs[packet_row - 1].tobytes()
        else:
            raise ValueError(f"Invalid display packet row: {packet_row}")
        return pad(display_header(packet_row) + body, SIZE_DISPLAY)

    def render_all(self) -> list[tuple[int, bytes]]:
        """Render all three packets as (report id, payload) pairs."""
        return [(REPORT_ID_OUTPUT_DISPLAY, self.render(row)) for row in range(3)]

    def _render_bars_and_dots(self) -> bytes:
        data = bytearray()
        for column in range(NUM_DISPLAY_COLUMNS):
            block, segment = divmod(column, BLOCK_WIDTH)
            data.append(int(self._bars[block, segment]))
            if is_block_end(column):
                data.append(int(self._bars[block, BLOCK_WIDTH]))
            else:
                data.append(dot_sentinel(bool(self._dots[0, column]), bool(self._dots[1, column])))
        return bytes(data)

    @staticmethod
    def _in_range(row: int, column: int) -> bool:
        return 0 <= row < NUM_TEXT_ROWS and 0 <= column < NUM_DISPLAY_COLUMNS
