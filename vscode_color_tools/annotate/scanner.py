"""Delimiter scanning: turn paired delimiter characters into colored ranges.

The same character both opens and closes a region. An occurrence closes the
region on top of the stack when that region was opened by the same character,
and opens a new region otherwise, so regions nest innermost-first. Regions
still open at the end of the text are closed there and flagged as open.
"""

from collections import namedtuple

from ..color import NEUTRAL_COLOR
from .config import FIXED, RANDOM

MASK32 = 0xFFFFFFFF

Position = namedtuple("Position", ["line", "column", "offset"])
OpenRegion = namedtuple("OpenRegion", ["symbol", "color", "start"])
Range = namedtuple("Range", ["symbol", "color", "start", "end", "closed"])
AnnotationResult = namedtuple("AnnotationResult", ["ranges", "palette", "symbols"])


def _imul(a, b):
    return (a * b) & MASK32


def mulberry32(seed):
    """Mulberry32 PRNG returning floats in [0, 1).

    All arithmetic is masked to 32 bits so a seed gives the same sequence on
    every platform.
    """
    state = seed & MASK32

    def rand():
        nonlocal state
        state = (state + 0x6D2B79F5) & MASK32
        t = state
        r = _imul(t ^ (t >> 15), 1 | t)
        r = (r ^ ((r + _imul(r ^ (r >> 7), 61 | r)) & MASK32)) & MASK32
        return ((r ^ (r >> 14)) & MASK32) / 4294967296

    return rand


def pick_color(rand, palette, used):
    """Draw a palette color, preferring ones not used yet.

    An empty palette gives the neutral color without advancing ``rand``.
    """
    if not palette:
        return NEUTRAL_COLOR
    unused = [c for c in palette if c not in used]
    candidates = unused or palette
    color = candidates[int(rand() * len(candidates))]
    used.add(color)
    return color


def _resolve_color(spec, rand, palette, used):
    if spec.kind == FIXED:
        color = spec.color or NEUTRAL_COLOR
        used.add(color)
        return color
    if spec.kind == RANDOM:
        return pick_color(rand, palette, used)
    return NEUTRAL_COLOR


def annotate(text, symbols, palette, seed=0):
    """Scan text for configured delimiters and return the colored ranges.

    Args:
        text: Text to scan
        symbols: dict of single character -> SymbolSpec
        palette: Colors for random symbols (may be empty)
        seed: Seed for the color draws

    Returns:
        AnnotationResult. Ranges are in the order they closed, followed by
        regions left open at end of text in stack pop order.
    """
    rand = mulberry32(seed)
    palette = list(palette)
    used = set()

    ranges = []
    stack = []

    line = column = 0
    for offset, ch in enumerate(text):
        spec = symbols.get(ch)
        if spec is not None:
            # a delimiter occupies its own column
            here = Position(line, column if ch == "\n" else column + 1, offset)
            if stack and stack[-1].symbol == ch:
                region = stack.pop()
                ranges.append(Range(ch, region.color, region.start, here, True))
            else:
                color = _resolve_color(spec, rand, palette, used)
                stack.append(OpenRegion(ch, color, here))

        if ch == "\n":
            line += 1
            column = 0
        else:
            column += 1

    eof = Position(line, column, len(text))
    while stack:
        region = stack.pop()
        ranges.append(Range(region.symbol, region.color, region.start, eof, False))

    return AnnotationResult(ranges=ranges, palette=palette, symbols=dict(symbols))
