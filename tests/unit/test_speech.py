"""Unit tests for speech interaction events."""
import asyncio

import pytest

from voice_html.speech import (
    Ended,
    Error,
    Result,
    SpeechError,
    SpeechErrorKind,
    SpeechInteraction,
    Started,
)


@pytest.mark.unit
class TestSpeechInteraction:

    @pytest.mark.asyncio
    async def test_transcript_from_result(self):
        interaction = SpeechInteraction()
        interaction.emit(Started())
        interaction.emit(Result("make a red button"))
        interaction.emit(Ended())

        assert await interaction.transcript() == "make a red button"

    @pytest.mark.asyncio
    async def test_last_result_wins(self):
        interaction = SpeechInteraction()
        for event in (Started(), Result("make a"), Result("make a red button"), Ended()):
            interaction.emit(event)

        assert await interaction.transcript() == "make a red button"

    @pytest.mark.asyncio
    async def test_ended_without_result(self):
        interaction = SpeechInteraction()
        interaction.emit(Started())
        interaction.emit(Ended())

        assert await interaction.transcript() is None

    @pytest.mark.asyncio
    async def test_error_raises(self):
        interaction = SpeechInteraction()
        interaction.emit(Started())
        interaction.emit(Error(SpeechErrorKind.PERMISSION, "Microphone permission denied"))

        with pytest.raises(SpeechError) as exc_info:
            await interaction.transcript()
        assert exc_info.value.kind is SpeechErrorKind.PERMISSION
        assert not exc_info.value.silent

    @pytest.mark.parametrize(
        "kind, silent",
        [
            (SpeechErrorKind.NO_MATCH, True),
            (SpeechErrorKind.TIMEOUT, True),
            (SpeechErrorKind.NETWORK, False),
            (SpeechErrorKind.PERMISSION, False),
            (SpeechErrorKind.OTHER, False),
        ],
    )
    def test_silent_kinds(self, kind, silent):
        assert SpeechError(kind, "x").silent is silent

    @pytest.mark.asyncio
    async def test_waits_for_events_from_recognizer(self):
        interaction = SpeechInteraction()

        async def recognizer():
            interaction.emit(Started())
            await asyncio.sleep(0)
            interaction.emit(Result("add a counter"))
            await asyncio.sleep(0)
            interaction.emit(Ended())

        listener = asyncio.ensure_future(interaction.transcript())
        await recognizer()

        assert await listener == "add a counter"

    @pytest.mark.asyncio
    async def test_events_stop_at_ended(self):
        interaction = SpeechInteraction()
        for event in (Started(), Result("x"), Ended(), Result("after")):
            interaction.emit(event)

        seen = [event async for event in interaction.events()]

        assert seen == [Started(), Result("x"), Ended()]
