from __future__ import annotations


class MahjongError(ValueError):
    """Base class for every calculation error raised by mjtools."""


class NotationError(MahjongError):
    pass


class InvalidMeldError(MahjongError):
    pass


class InvalidAgariError(MahjongError):
    pass


class NotAgariError(MahjongError):
    pass


class NoYakuError(MahjongError):
    pass


class InvalidTileCountError(MahjongError):
    pass
