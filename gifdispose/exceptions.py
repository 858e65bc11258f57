# base of all exceptions related to this project
class DisposeError(Exception):
    ...


class StructClassError(DisposeError, ValueError):
    ...


class NoPalette(DisposeError):
    '''the frame has no local color table and the screen no global one.

    a GIF must carry either a global palette or a per-frame palette,
    without one there is nothing to map the indices to.
    '''

    def __str__(self):
        return 'no palette'
