from __future__ import annotations
from typing import Iterable, Iterator, Tuple

from .pixels import RGB, RGBA

Rect = Tuple[int, int, int, int]  # left, top, width, height


def is_empty(rect: Rect) -> bool:
    _, _, w, h = rect
    return w <= 0 or h <= 0


class SubRect:
    '''mutable view of a rectangle of a canvas.

    iteration is row-major inside the rectangle, whatever the stride
    of the canvas. pixels handed out by iteration share memory with
    the canvas.
    '''

    def __init__(self, canvas: Canvas, rect: Rect):
        self.canvas = canvas
        self.rect = rect

    def _offsets(self) -> Iterator[int]:
        left, top, w, h = self.rect
        if is_empty(self.rect):
            return
        stride = self.canvas.width
        for y in range(top, top + h):
            start = y * stride + left
            yield from range(start, start + w)

    def __len__(self) -> int:
        if is_empty(self.rect):
            return 0
        return self.rect[2] * self.rect[3]

    def __iter__(self) -> Iterator[RGBA]:
        pixels = self.canvas.pixels
        for i in self._offsets():
            yield pixels[i]

    def fill(self, color: RGBA) -> None:
        pixels = self.canvas.pixels
        for i in self._offsets():
            pixels[i] = color

    def copy(self):
        '''owned snapshot of the rectangle, row-major'''
        pixels = self.canvas.pixels
        saved = (RGBA * len(self))()
        for j, i in enumerate(self._offsets()):
            saved[j] = pixels[i]
        return saved

    def write(self, source: Iterable[RGBA]) -> None:
        '''write pixels back row-major; stops at the shorter side'''
        pixels = self.canvas.pixels
        for i, px in zip(self._offsets(), source):
            pixels[i] = px


class Canvas:
    '''the persistent pixel buffer of a whole animation.

    starts out fully transparent. the buffer is a ctypes array of
    `RGBA`, so it can be handed to anything that speaks the buffer
    protocol without a copy.
    '''

    def __init__(self, width: int, height: int):
        if width < 0 or height < 0:
            raise ValueError(f'bad canvas size {width}x{height}')
        self.width = width
        self.height = height
        self.pixels = (RGBA * (width * height))()

    def __repr__(self):
        return f'Canvas({self.width}x{self.height})'

    def check(self, rect: Rect) -> Rect:
        '''raise when a non-empty rectangle sticks out of the canvas'''
        left, top, w, h = rect
        if is_empty(rect):
            return rect
        if (left < 0 or top < 0 or left + w > self.width
                or top + h > self.height):
            raise ValueError(
                f'rectangle {rect} out of bounds for '
                f'{self.width}x{self.height} canvas'
            )
        return rect

    def subrect(self, rect: Rect) -> SubRect:
        return SubRect(self, self.check(tuple(rect)))

    def __getitem__(self, xy: Tuple[int, int]) -> RGBA:
        x, y = xy
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f'pixel {xy} outside the canvas')
        return self.pixels[y * self.width + x].copy()

    def rows(self) -> Iterator[list]:
        w = self.width
        for y in range(self.height):
            yield [px.copy() for px in self.pixels[y * w:(y + 1) * w]]

    def rgba_bytes(self) -> bytes:
        return bytes(self.pixels)

    def rgb_bytes(self) -> bytes:
        out = (RGB * len(self.pixels))()
        for i, px in enumerate(self.pixels):
            out[i] = RGB(px.r, px.g, px.b)
        return bytes(out)
