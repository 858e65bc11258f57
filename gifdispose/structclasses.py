from __future__ import annotations
from ctypes import LittleEndianStructure, BigEndianStructure, Structure
from dataclasses import make_dataclass
import ctypes
import inspect
import sys

from .exceptions import StructClassError

_CData = ctypes.c_ubyte.__mro__[2]

# class attributes that belong to the user class only and must
# not leak into the generated structure
_SKIP = ('__dict__', '__weakref__', '__annotate__', '__annotate_func__',
         '__annotations_cache__')


def _get_hints(cls, globalns=None, localns=None):
    '''evaluate type hints for a class

    evaluation happens in the class's module's context, once the
    whole module has been executed. this lets a struct refer to
    ctypes aliases or other structs defined further down.

    every type annotation must be a `_CData` or a `bitfield`: they
    are the types used to lay out the pixel and descriptor memory.

    .. doctest::

        >>> class entry:
        ...     red: ubyte
        ...     green: ubyte
        ...
        >>> _get_hints(entry)
        {'red': <class 'ctypes.c_ubyte'>, 'green': <class 'ctypes.c_ubyte'>}

    :param globalns: global context dictionary
    :param localns: local (inside the class) context dictionary
    :returns: a dictionary of evaluated hints
    :raises StructClassError: when a hint is neither a ctype nor a bitfield
    '''

    if globalns is None:
        globalns = vars(sys.modules[cls.__module__])
    if localns is None:
        localns = vars(cls)

    annot = dict()
    for name, tval in getattr(cls, '__annotations__', {}).items():
        if isinstance(tval, str):
            tval = eval(tval, globalns, localns)

        ctype = tval.type if isinstance(tval, bitfield) else tval
        if not (isinstance(ctype, type) and issubclass(ctype, _CData)):
            raise StructClassError(
                f'{name}\'s type should be a ctype or a bitfield '
                f'but is {tval!r}'
            )
        annot[name] = tval
    return annot


class bitfield:
    '''a way to express types smaller than sizeof(char)

    GIF packs most of its flags into single bytes: the image
    descriptor keeps the local color table flag, the interlace flag
    and the table size in one ubyte.

    ..doctest ::

        >>> @structclass(byteorder='<')
        ... class packed:
        ...     size:      bitfield[ubyte:3]
        ...     reserved:  bitfield[ubyte:4]
        ...     flag:      bitfield[ubyte:1]
        ...
        >>> p = packed()
        >>> readfrom(p, b'\\x87')
        1
        >>> p.flag, p.size
        (1, 7)

    with a little endian structure the first declared field takes
    the least significant bits, which is the order the GIF format
    documents its packed fields in.
    '''

    def __init__(self, atype, width):
        self.type = atype
        self.width = width

    # bitfield[ubyte:3]
    def __class_getitem__(cls, key):
        return cls(key.start, key.stop)

    def __repr__(self):
        return f'bitfield[{self.type.__name__}:{self.width}]'


def _structclass_inner(cls, byteorder=None, pack=True):
    '''create a :func:`dataclass make_dataclass`
    :class:`structure ctypes.Structure` from a user class.

    methods and class attributes of the user class are kept, so a
    pixel struct can carry its own conversions.

    :param cls: the class to be made into a structure
    :param byteorder: '<', '>' or None for native order
    :param pack: pack fields without alignment padding
    '''

    dct = {k: v for k, v in cls.__dict__.items() if k not in _SKIP}
    bases = list(cls.__bases__)

    which = {'<': LittleEndianStructure,
             '>': BigEndianStructure}.get(byteorder, Structure)
    bases.insert(bases.index(object), which)

    _fields = []
    annot = _get_hints(cls)
    for attr, ctype in annot.items():
        field = (attr, ctype)
        if isinstance(ctype, bitfield):
            field = (attr, ctype.type, ctype.width)
        _fields.append(field)

    # equivalent to __attribute__((packed)) in C
    dct['_pack_'] = 1 if pack else 0
    if pack:
        dct['_layout_'] = 'ms'
    dct['_fields_'] = _fields
    dct['__annotations__'] = annot

    # dataclasses wants a signature to build the default __doc__
    dct['__signature__'] = inspect.Signature()
    dct['__qualname__'] = getattr(cls, '__qualname__', cls.__name__)

    new = make_dataclass(
        cls.__name__,
        list(annot.items()),
        bases=tuple(bases),
        namespace=dct,
        init=False,
    )
    new.__module__ = cls.__module__
    return new


def structclass(cls=None, *, byteorder=None, pack=True):
    def decorator(cls):
        return _structclass_inner(cls, byteorder=byteorder, pack=pack)
    if cls is not None:
        return _structclass_inner(cls)
    return decorator


def readfrom(struct, buffer, offset=0):
    '''fill a struct (or a ctypes array) from a bytes-like buffer.

    :returns: the number of bytes consumed
    :raises StructClassError: when the buffer is too short
    '''
    ret = ctypes.sizeof(struct)
    smem = memoryview(struct).cast('B')
    chunk = buffer[offset:offset+ret]

    if len(chunk) != ret:
        raise StructClassError(
            f'{type(struct).__name__} size: {ret}, buffer '
            f'section size: {len(chunk)}'
        )
    smem[0:ret] = chunk
    return ret


ubyte = ctypes.c_ubyte
ushort = ctypes.c_ushort
