from __future__ import annotations

import asyncio
from typing import Optional

from kaiano import logger as log

from .errors import GenerationResult, StaleResultError
from .gateway import Gateway
from .metrics import MetricsLogger, RunMetrics, Timer, estimate_tokens, new_run_id
from .render import DEFAULT_DOCUMENT
from .speech import SpeechError, SpeechInteraction

LOG = log.get_logger()


class Session:
    """Holds the rendered document and runs one generation at a time.

    A new submit cancels the one still in flight; the stale submit raises
    StaleResultError and its result never replaces a newer document.
    """

    def __init__(
        self,
        gateway: Gateway,
        initial_document: Optional[str] = None,
        metrics_logger: Optional[MetricsLogger] = None,
    ):
        self.gateway = gateway
        self.document = initial_document or DEFAULT_DOCUMENT
        # Prompt context; the bundled default is shown but never sent.
        self.context_document = initial_document
        self.metrics_logger = metrics_logger
        self.run_id = new_run_id()
        self._task: Optional[asyncio.Task] = None
        self._superseded: Optional[asyncio.Task] = None

    @property
    def busy(self) -> bool:
        return self._task is not None and not self._task.done()

    def cancel(self) -> bool:
        if self.busy:
            LOG.info("Cancelling in-flight generation")
            self._superseded = self._task
            return self._task.cancel()
        return False

    async def submit(self, transcript: str) -> GenerationResult:
        if not transcript or not transcript.strip():
            raise ValueError("Transcript is blank")

        self.cancel()

        timer = Timer()
        task = asyncio.ensure_future(self.gateway.generate_html(transcript, self.context_document))
        self._task = task
        try:
            result = await task
        except asyncio.CancelledError:
            if self._task is task:
                self._task = None
            if self._superseded is task:
                raise StaleResultError("Generation cancelled before it finished") from None
            raise

        if self._task is not task:
            # A newer submit started while this one was finishing.
            LOG.info("Discarding stale generation result")
            raise StaleResultError("A newer request replaced this generation")
        self._task = None

        self._emit_metrics(transcript, result, timer)

        if result.ok:
            self.document = self.context_document = result.html
            LOG.info("Rendered document replaced", extra={"chars": len(result.html)})
        return result

    async def listen(self, interaction: SpeechInteraction) -> Optional[GenerationResult]:
        """Wait for one speech interaction to finish and generate from its transcript.

        Returns None when the recognizer heard nothing; other recognizer errors
        raise SpeechError. A blank transcript raises ValueError like submit().
        """

        try:
            transcript = await interaction.transcript()
        except SpeechError as e:
            if e.silent:
                LOG.info("Nothing recognized", extra={"kind": e.kind.value})
                return None
            raise
        return await self.submit(transcript or "")

    def _emit_metrics(self, transcript: str, result: GenerationResult, timer: Timer) -> None:
        if self.metrics_logger is None:
            return
        metrics = RunMetrics(
            run_id=self.run_id,
            stage="generate",
            char_count_input=len(transcript),
            estimated_input_tokens=estimate_tokens(transcript),
            model=self.gateway.config.model,
            duration_s=timer.elapsed(),
            success=result.ok,
            error_kind=result.kind.value if result.kind else None,
            error=result.error.message if result.error else None,
            char_count_output=len(result.html) if result.ok else None,
            estimated_output_tokens=estimate_tokens(result.html) if result.ok else None,
        )
        try:
            self.metrics_logger.emit(metrics)
        except Exception:
            LOG.warning("Failed to emit metrics", exc_info=True)
