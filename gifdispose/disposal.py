from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
import abc
import enum
import logging

from .canvas import Canvas, Rect, is_empty
from .pixels import RGBA

logger = logging.getLogger(__name__)


class DisposalMethod(enum.IntEnum):
    '''what a frame asks to happen to its rectangle once it is replaced.

    the values are the 3 bit codes of the graphic control extension.
    '''
    UNSPECIFIED = 0
    KEEP = 1
    BACKGROUND = 2
    PREVIOUS = 3

    @classmethod
    def from_code(cls, code):
        try:
            return cls(code)
        except ValueError:
            # 4 to 7 are reserved
            logger.debug('reserved disposal code %d, treated as '
                         'unspecified', code)
            return cls.UNSPECIFIED


class Disposal(abc.ABC):
    '''a restoration waiting to be applied before the next frame'''

    @abc.abstractmethod
    def apply(self, canvas: Canvas) -> None:
        raise NotImplementedError()


@dataclass
class Keep(Disposal):
    def apply(self, canvas):
        pass


@dataclass
class Background(Disposal):
    rect: Rect

    def apply(self, canvas):
        # always transparent: encoders in the wild rely on this rather
        # than on the background color index of the logical screen
        if is_empty(self.rect):
            return
        canvas.subrect(self.rect).fill(RGBA())


@dataclass
class Previous(Disposal):
    rect: Rect
    saved: Optional[object]

    def apply(self, canvas):
        saved, self.saved = self.saved, None
        if is_empty(self.rect) or saved is None:
            return
        canvas.subrect(self.rect).write(saved)


def capture(method: DisposalMethod, rect: Rect, canvas: Canvas) -> Disposal:
    '''build the disposal of a frame about to be drawn at `rect`.

    must run before the frame's pixels are written: `PREVIOUS` keeps
    a copy of what the rectangle holds right now.
    '''
    if method == DisposalMethod.PREVIOUS:
        saved = canvas.subrect(rect).copy()
        logger.debug('saved %d pixels at %s', len(saved), rect)
        return Previous(rect, saved)
    if method == DisposalMethod.BACKGROUND:
        return Background(rect)
    return Keep()
