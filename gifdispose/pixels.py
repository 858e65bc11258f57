from __future__ import annotations
import logging

from .structclasses import structclass, ubyte

logger = logging.getLogger(__name__)

# an 8 bit index can address this many colors
TABLE_SIZE = 256


@structclass
class RGB:
    red:    ubyte
    green:  ubyte
    blue:   ubyte


@structclass
class RGBA:
    r: ubyte
    g: ubyte
    b: ubyte
    a: ubyte

    @classmethod
    def from_rgb(cls, rgb, alpha=255):
        '''opaque pixel from a 3 channel color (struct or tuple)'''
        if isinstance(rgb, tuple):
            return cls(*rgb[:3], alpha)
        return cls(rgb.red, rgb.green, rgb.blue, alpha)

    def copy(self):
        return type(self).from_buffer_copy(self)

    def __iter__(self):
        yield from (self.r, self.g, self.b, self.a)


def to_rgba(entry):
    '''convert one color table entry into a pixel.

    entries are `RGBA`, `RGB` (or `ColorTableEntry`) structs, or any
    sequence of 3 or 4 channel values.
    '''
    if isinstance(entry, RGBA):
        return entry.copy()
    if isinstance(entry, RGB):
        return RGBA.from_rgb(entry)
    entry = tuple(entry)
    if len(entry) == 4:
        return RGBA(*entry)
    return RGBA.from_rgb(entry)


def _entries(table):
    # raw palettes come out of decoders as packed r, g, b bytes
    if isinstance(table, (bytes, bytearray, memoryview)):
        raw = bytes(table)
        return [tuple(raw[i:i+3]) for i in range(0, len(raw) - 2, 3)]
    return list(table)


def materialize(table):
    '''build the 256 entry lookup array used by the blit.

    tables shorter than 256 entries are padded with the zero pixel
    so that any 8 bit index resolves, longer ones are cut.

    :param table: packed rgb bytes, or a sequence of `RGB`, `RGBA`
        or tuples
    :returns: a ctypes array of 256 `RGBA`
    '''
    entries = _entries(table)
    if len(entries) != TABLE_SIZE:
        logger.debug('color table has %d entries, resizing to %d',
                     len(entries), TABLE_SIZE)

    out = (RGBA * TABLE_SIZE)()
    for i, entry in enumerate(entries[:TABLE_SIZE]):
        out[i] = to_rgba(entry)
    return out
