from __future__ import annotations

import json
import os
import time
import uuid
from dataclasses import asdict, dataclass
from typing import Optional


def estimate_tokens(text: str) -> int:
    """Rough token estimate, ~4 characters per token."""
    if not text:
        return 0
    return max(1, int(round(len(text) / 4)))


@dataclass(frozen=True)
class RunMetrics:
    run_id: str
    stage: str

    char_count_input: int
    estimated_input_tokens: int

    model: Optional[str]

    duration_s: float
    success: bool

    error_kind: Optional[str] = None
    error: Optional[str] = None

    estimated_output_tokens: Optional[int] = None
    char_count_output: Optional[int] = None

    def to_json(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False, sort_keys=True)


class MetricsLogger:
    """Per-generation metrics.

    - Emits a human-readable summary to stdout.
    - Also emits a single-line JSON record to stdout (machine-parsable).
    - Optionally appends JSONL to METRICS_PATH.
    """

    def __init__(self, metrics_path: Optional[str] = None):
        self.metrics_path = metrics_path or os.getenv("METRICS_PATH")

    def emit(self, metrics: RunMetrics) -> None:
        data = asdict(metrics)
        json_line = metrics.to_json()

        status = "OK" if data["success"] else f"FAIL ({data.get('error_kind')})"
        print(f"METRICS | {status} | {data.get('model')}")
        print(
            f"  tokens: {data.get('estimated_input_tokens')} → {data.get('estimated_output_tokens')}"
        )
        print(f"  duration: {round(data.get('duration_s', 0), 2)}s")
        if data.get("error"):
            print(f"  error: {data['error']}")
        print(f"  run: {data.get('run_id')}")

        print(f"METRICS_JSON {json_line}")

        if self.metrics_path:
            try:
                with open(self.metrics_path, "a", encoding="utf-8") as f:
                    f.write(json_line + "\n")
            except OSError as e:
                # Never fail a generation due to metrics logging
                print(
                    f"METRICS_WARN failed to append metrics to {self.metrics_path}: {e}"
                )


class Timer:
    def __init__(self):
        self._start = time.perf_counter()

    def elapsed(self) -> float:
        return time.perf_counter() - self._start


def new_run_id() -> str:
    return uuid.uuid4().hex
