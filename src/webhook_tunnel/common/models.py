from typing import Optional, Union

from pydantic import BaseModel, ConfigDict


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# Frames parsed from the upstream event stream

class DataFrame(_Frozen):
    payload: str


class CommentFrame(_Frozen):
    text: str


class Ignored(_Frozen):
    pass


SSEFrame = Union[DataFrame, CommentFrame, Ignored]


# Where data frames end up

class ConsoleTarget(_Frozen):
    pass


class RemoteTarget(_Frozen):
    url: str


ForwardTarget = Union[ConsoleTarget, RemoteTarget]


# Result of a single forwarding attempt

class Delivered(_Frozen):
    status: Optional[int] = None


class Failed(_Frozen):
    reason: str


class Suppressed(_Frozen):
    reason: str


ForwardOutcome = Union[Delivered, Failed, Suppressed]
