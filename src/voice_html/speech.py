from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class SpeechErrorKind(str, Enum):
    PERMISSION = "permission"
    NETWORK = "network"
    NO_MATCH = "no_match"
    TIMEOUT = "timeout"
    OTHER = "other"


@dataclass(frozen=True)
class Started:
    pass


@dataclass(frozen=True)
class Result:
    text: str


@dataclass(frozen=True)
class Error:
    kind: SpeechErrorKind
    message: str


@dataclass(frozen=True)
class Ended:
    pass


SpeechEvent = Union[Started, Result, Error, Ended]


class SpeechError(Exception):
    def __init__(self, kind: SpeechErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def silent(self) -> bool:
        # Nothing was heard; not worth surfacing to the user.
        return self.kind in (SpeechErrorKind.NO_MATCH, SpeechErrorKind.TIMEOUT)


class SpeechInteraction:
    """One listen cycle: the recognizer emits events, the app awaits a transcript."""

    def __init__(self) -> None:
        self._events: asyncio.Queue[SpeechEvent] = asyncio.Queue()

    def emit(self, event: SpeechEvent) -> None:
        self._events.put_nowait(event)

    async def events(self):
        while True:
            event = await self._events.get()
            yield event
            if isinstance(event, (Ended, Error)):
                return

    async def transcript(self) -> Optional[str]:
        """Return the last recognized text, or None if the interaction ended without one.

        Raises SpeechError when the recognizer reports an error.
        """

        text: Optional[str] = None
        async for event in self.events():
            if isinstance(event, Result):
                text = event.text
            elif isinstance(event, Error):
                raise SpeechError(event.kind, event.message)
        return text
