"""
Segment bitmaps of the Kontrol S-series character display.

Every character cell of the two text rows is a 16-segment element. The
display controller takes two bytes per cell; each bit switches one
segment. The tables below cover letters (upper and lower case render
differently where the segment layout allows it), digits and the few
symbols the display can draw. Everything else renders blank.
"""

BLANK = (0x00, 0x00)

UPPER_CHARACTERS: tuple[tuple[int, int], ...] = (
    (207, 24),   # A
    (63, 82),    # B
    (243, 0),    # C
    (63, 66),    # D
    (243, 24),   # E
    (195, 24),   # F
    (251, 16),   # G
    (204, 24),   # H
    (51, 66),    # I
    (31, 0),     # J
    (192, 140),  # K
    (240, 0),    # L
    (204, 5),    # M
    (204, 129),  # N
    (255, 0),    # O
    (199, 24),   # P
    (255, 128),  # Q
    (199, 152),  # R
    (187, 24),   # S
    (3, 66),     # T
    (252, 0),    # U
    (192, 36),   # V
    (204, 160),  # W
    (0, 165),    # X
    (0, 69),     # Y
    (51, 36),    # Z
)

# Letters without a distinct lower case shape reuse the upper case bitmap
LOWER_CHARACTERS: tuple[tuple[int, int], ...] = (
    (207, 24),   # a
    (248, 24),   # b
    (112, 24),   # c
    (124, 24),   # d
    (243, 24),   # e
    (193, 8),    # f
    (251, 16),   # g
    (200, 24),   # h
    (0, 64),     # i
    (31, 0),     # j
    (192, 140),  # k
    (0, 66),     # l
    (72, 88),    # m
    (64, 72),    # n
    (120, 24),   # o
    (199, 24),   # p
    (255, 128),  # q
    (199, 152),  # r
    (187, 24),   # s
    (224, 8),    # t
    (120, 0),    # u
    (64, 32),    # v
    (120, 64),   # w
    (0, 165),    # x
    (0, 69),     # y
    (51, 36),    # z
)

NUMBERS: tuple[tuple[int, int], ...] = (
    (255, 0),    # 0
    (12, 0),     # 1
    (119, 24),   # 2
    (63, 24),    # 3
    (140, 24),   # 4
    (187, 24),   # 5
    (251, 24),   # 6
    (15, 0),     # 7
    (255, 24),   # 8
    (191, 24),   # 9
)

SYMBOLS: dict[str, tuple[int, int]] = {
    "-": (0, 24),
    "+": (0, 90),
    "%": (153, 126),
    ">": (0, 33),
    "'": (128, 0),
    "/": (0, 36),
    "\\": (0, 129),
}


def encode(character: str) -> tuple[int, int]:
    """
    Get the two segment bytes of a character.

    Args:
        character: A single character; anything the display cannot draw
                   (including the empty string) renders blank.

    Returns:
        Tuple of (first byte, second byte)
    """
    if len(character) != 1:
        return BLANK

    c = ord(character)
    if 65 <= c <= 90:
        return UPPER_CHARACTERS[c - 65]
    if 97 <= c <= 122:
        return LOWER_CHARACTERS[c - 97]
    if 48 <= c <= 57:
        return NUMBERS[c - 48]
    return SYMBOLS.get(character, BLANK)
