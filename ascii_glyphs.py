"""
Block-digit glyphs and the frame renderer for the ASCII timer.
Everything here is pure: same input, same lines out, no terminal I/O.
"""

from colorama import Fore, Style

GLYPH_HEIGHT = 5

# 5-row block digits, each row the same width within a glyph
DIGITS = {
    '0': [
        "█████",
        "█   █",
        "█   █",
        "█   █",
        "█████"
    ],
    '1': [
        "  █  ",
        " ██  ",
        "  █  ",
        "  █  ",
        "█████"
    ],
    '2': [
        "█████",
        "    █",
        "█████",
        "█    ",
        "█████"
    ],
    '3': [
        "█████",
        "    █",
        "█████",
        "    █",
        "█████"
    ],
    '4': [
        "█   █",
        "█   █",
        "█████",
        "    █",
        "    █"
    ],
    '5': [
        "█████",
        "█    ",
        "█████",
        "    █",
        "█████"
    ],
    '6': [
        "█████",
        "█    ",
        "█████",
        "█   █",
        "█████"
    ],
    '7': [
        "█████",
        "    █",
        "   █ ",
        "  █  ",
        " █   "
    ],
    '8': [
        "█████",
        "█   █",
        "█████",
        "█   █",
        "█████"
    ],
    '9': [
        "█████",
        "█   █",
        "█████",
        "    █",
        "█████"
    ],
    ':': [
        " ",
        "█",
        " ",
        "█",
        " "
    ]
}

PAUSED_BANNER = [
    "█████  █████  █   █  █████  █████  ████ ",
    "█   █  █   █  █   █  █      █      █   █",
    "█████  █████  █   █  █████  █████  █   █",
    "█      █   █  █   █      █  █      █   █",
    "█      █   █  █████  █████  █████  ████ ",
]


def glyph(char):
    """Return the block rows for one timestamp character ('0'-'9' or ':')"""
    return list(DIGITS[char])


def format_timestamp(hours, minutes, seconds):
    """Format as HH:MM:SS; hours are zero-padded, never truncated"""
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def render_time_display(hours, minutes, seconds):
    """Render the timestamp as GLYPH_HEIGHT rows of block characters.

    Glyphs are separated by a single space column, so every row has the
    same width for a given timestamp.
    """
    glyphs = [glyph(char) for char in format_timestamp(hours, minutes, seconds)]
    return [" ".join(rows[i] for rows in glyphs) for i in range(GLYPH_HEIGHT)]


def render(hours, minutes, seconds):
    """Render the timestamp banner as one multi-line string"""
    return "\n".join(render_time_display(hours, minutes, seconds))


def center_text(lines, width):
    """Center the ASCII art in the terminal"""
    centered_lines = []
    for line in lines:
        padding = (width - len(line)) // 2
        centered_lines.append(" " * padding + line)
    return centered_lines


def center_frame(lines, width, height):
    """Center a block of lines both horizontally and vertically"""
    vertical_padding = max(0, (height - len(lines)) // 2)
    return [""] * vertical_padding + center_text(lines, width)


def compose_frame(hours, minutes, seconds, paused=False, use_colors=False, size=None):
    """Build the lines of one display frame.

    When paused, the PAUSED banner goes below the digits after one blank
    row. ``size`` is an optional (columns, rows) pair to center within.
    """
    lines = render_time_display(hours, minutes, seconds)
    banner_rows = 0
    if paused:
        lines.append("")
        lines.extend(PAUSED_BANNER)
        banner_rows = len(PAUSED_BANNER)

    if size is not None:
        lines = center_frame(lines, *size)

    # colour after centering, escape codes would skew the padding
    if banner_rows and use_colors:
        start = len(lines) - banner_rows
        for i in range(start, len(lines)):
            lines[i] = Fore.YELLOW + Style.BRIGHT + lines[i] + Style.RESET_ALL

    return lines
