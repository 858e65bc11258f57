'''compose decoded GIF frames into the images a viewer would show.

a decoder only hands out raw frames: a rectangle of palette indices,
maybe a local palette, maybe a transparent index and a disposal
method. the displayed image is the result of drawing every frame on
top of the previous ones, after undoing part of the last frame as its
disposal method asks.

.. doctest::

    >>> screen = Screen(4, 4, global_palette=b'\\x00\\x00\\x00\\xff\\x00\\x00')
    >>> frame = Frame(0, 0, 2, 2, bytes([1] * 4))
    >>> canvas = screen.draw_frame(frame)
    >>> canvas[1, 1]
    RGBA(r=255, g=0, b=0, a=255)
'''
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
import logging

from .canvas import Canvas, Rect
from .disposal import Disposal, DisposalMethod, Keep, capture
from .exceptions import NoPalette
from .pixels import materialize

logger = logging.getLogger(__name__)


@dataclass
class Frame:
    '''one decoded frame, as the decoder produced it'''
    left:        int
    top:         int
    width:       int
    height:      int
    indices:     bytes
    disposal:    DisposalMethod = DisposalMethod.UNSPECIFIED
    transparent: Optional[int] = None
    palette:     Optional[object] = None

    def __post_init__(self):
        # decoders usually hand out the raw 3 bit code
        self.disposal = DisposalMethod.from_code(self.disposal)

    @property
    def rect(self) -> Rect:
        return (self.left, self.top, self.width, self.height)


class Screen:
    '''the canvas of an animation plus the disposal it owes.

    :param width: logical screen width
    :param height: logical screen height
    :param global_palette: the global color table, if the file has one
    :param background_index: the declared background color index. it is
        kept for callers but never painted: background disposal always
        clears to transparent.
    '''

    def __init__(self, width: int, height: int, global_palette=None,
                 background_index: Optional[int] = None):
        self.pixels = Canvas(width, height)
        self.global_palette = global_palette
        self.background_index = background_index
        self.disposal: Disposal = Keep()

    @property
    def width(self) -> int:
        return self.pixels.width

    @property
    def height(self) -> int:
        return self.pixels.height

    def _palette(self, frame: Frame):
        pal = frame.palette
        if pal is None:
            pal = self.global_palette
        if pal is None:
            raise NoPalette()
        return pal

    def _dispose(self) -> None:
        disposal, self.disposal = self.disposal, Keep()
        logger.debug('disposing %s', type(disposal).__name__)
        disposal.apply(self.pixels)

    def _blit(self, frame: Frame, palette) -> Canvas:
        table = materialize(palette)
        area = self.pixels.subrect(frame.rect)
        self.disposal = capture(frame.disposal, frame.rect, self.pixels)

        if len(frame.indices) != len(area):
            logger.debug('frame at %s has %d indices for %d pixels',
                         frame.rect, len(frame.indices), len(area))

        transparent = frame.transparent
        for dst, index in zip(area, frame.indices):
            if index == transparent:
                continue
            dst.r, dst.g, dst.b, dst.a = table[index]
        logger.debug('drew frame at %s, disposal %s',
                     frame.rect, frame.disposal.name)
        return self.pixels

    def draw_frame(self, frame: Frame) -> Canvas:
        '''advance the screen by one frame.

        :returns: the canvas, now showing `frame`
        :raises NoPalette: when neither the frame nor the screen has a
            palette. the canvas is left untouched.
        '''
        palette = self._palette(frame)
        self._dispose()
        return self._blit(frame, palette)

    def peek_after_dispose(self) -> DisposedScreen:
        '''apply the pending disposal without drawing anything.

        the canvas is left in a state that is never displayed: it
        exists for encoders that diff frames. call `then_draw` on the
        result before reading the canvas for display again.
        '''
        self._dispose()
        return DisposedScreen(self)


class DisposedScreen:
    '''a screen between the disposal of a frame and the next draw'''

    def __init__(self, screen: Screen):
        self.screen = screen

    @property
    def pixels(self) -> Canvas:
        return self.screen.pixels

    def then_draw(self, frame: Frame) -> Canvas:
        palette = self.screen._palette(frame)
        return self.screen._blit(frame, palette)
