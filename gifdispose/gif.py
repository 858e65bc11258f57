'''GIF header blocks, and how they feed a `Screen`.

decoders differ in what they expose but all of them hand out the raw
descriptor blocks in some form. these structs read them straight from
bytes (block introducers and extension labels excluded).
'''
from __future__ import annotations
from .structclasses import structclass, ubyte, ushort, bitfield, readfrom
from .disposal import DisposalMethod
from .pixels import RGB
from .screen import Frame, Screen


@structclass(byteorder='<')
class LogicalScreenDescriptor:
    width:      ushort
    height:     ushort

    size:       bitfield[ubyte:3]
    sort:       bitfield[ubyte:1]
    resolution: bitfield[ubyte:3]
    GCTF:       bitfield[ubyte:1]

    background: ubyte
    aspect:     ubyte


ColorTableEntry = RGB


@structclass(byteorder='<')
class ImageDescriptor:
    # separator: ubyte  # 0x2C, consumed by the decoder
    left:      ushort
    top:       ushort
    width:     ushort
    height:    ushort

    size:      bitfield[ubyte:3]
    reserved:  bitfield[ubyte:2]
    sort:      bitfield[ubyte:1]
    interlace: bitfield[ubyte:1]
    LCTF:      bitfield[ubyte:1]


@structclass(byteorder='<')
class GraphicsControlExtension:
    # introducer: ubyte  # 0x21
    # GCL:        ubyte  # 0xF9
    size:         ubyte  # == 4

    transparency: bitfield[ubyte:1]
    input:        bitfield[ubyte:1]
    disposal:     bitfield[ubyte:3]
    reserved:     bitfield[ubyte:3]

    delay:        ushort
    TCI:          ubyte  # transparent color index
    terminator:   ubyte


def read_color_table(buffer, size, offset=0):
    '''read the 2**(size + 1) entries a packed size field announces'''
    table = (ColorTableEntry * (1 << size + 1))()
    readfrom(table, buffer, offset=offset)
    return table


def screen_from_header(lsd, global_table=None):
    '''an empty screen sized after the logical screen descriptor'''
    if not lsd.GCTF:
        global_table = None
    return Screen(lsd.width, lsd.height, global_palette=global_table,
                  background_index=lsd.background)


def frame_from_blocks(image, indices, gce=None, local_table=None):
    '''a frame from an image descriptor and its decoded indices.

    :param image: the `ImageDescriptor`
    :param indices: de-interlaced palette indices, row-major
    :param gce: the `GraphicsControlExtension` preceding the image
    :param local_table: the local color table, when `image.LCTF` is set
    '''
    disposal = DisposalMethod.UNSPECIFIED
    transparent = None
    if gce is not None:
        disposal = DisposalMethod.from_code(gce.disposal)
        if gce.transparency:
            transparent = gce.TCI

    return Frame(
        image.left, image.top, image.width, image.height,
        indices,
        disposal=disposal,
        transparent=transparent,
        palette=local_table if image.LCTF else None,
    )
