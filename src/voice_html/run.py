from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional

from kaiano import logger as log

from .config import load_config_from_env
from .gateway import Gateway
from .metrics import MetricsLogger
from .render import render_error_page, user_message
from .session import Session
from .speech import Ended, Result, SpeechInteraction, Started

LOG = log.get_logger()


def _read_transcript(args: argparse.Namespace) -> str:
    if args.transcript:
        return " ".join(args.transcript)
    if not sys.stdin.isatty():
        return sys.stdin.read()
    return ""


def _write(html: str, out: Optional[Path]) -> None:
    if out is None:
        sys.stdout.write(html)
        if not html.endswith("\n"):
            sys.stdout.write("\n")
        return
    out.write_text(html, encoding="utf-8")


async def _listen(session: Session, text: str):
    # Typed or piped text stands in for the recognizer.
    interaction = SpeechInteraction()
    interaction.emit(Started())
    interaction.emit(Result(text))
    interaction.emit(Ended())
    return await session.listen(interaction)


def run(args: argparse.Namespace) -> int:
    cfg = load_config_from_env()
    gateway = Gateway(cfg)

    document = None
    if args.current:
        document = Path(args.current).read_text(encoding="utf-8")

    metrics_logger = MetricsLogger() if args.metrics else None
    session = Session(gateway, initial_document=document, metrics_logger=metrics_logger)

    transcript = _read_transcript(args).strip()
    LOG.info(
        "Generating HTML",
        extra={"model": cfg.model, "policy": cfg.prompt_policy.value, "chars": len(transcript)},
    )
    try:
        result = asyncio.run(_listen(session, transcript))
    except ValueError as e:
        LOG.warning("Transcript rejected; nothing to generate", extra={"error": str(e)})
        result = None
    if result is None:
        print("Nothing was heard. Please say what you want to build.", file=sys.stderr)
        return 2

    out = Path(args.out) if args.out else None
    if not result.ok:
        message = user_message(result.kind)
        print(message, file=sys.stderr)
        if out is not None:
            _write(render_error_page(message), out)
        return 1

    _write(session.document, out)
    LOG.info("Done", extra={"out": str(out) if out else "<stdout>"})
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="voice-html", description="Generate an HTML document from a spoken request"
    )
    parser.add_argument("transcript", nargs="*", help="Request text (read from stdin if omitted)")
    parser.add_argument("--current", help="HTML file currently rendered; the model upgrades it")
    parser.add_argument("--out", help="Write the generated HTML here instead of stdout")
    parser.add_argument("--metrics", action="store_true", help="Emit per-generation metrics")
    args = parser.parse_args(argv)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
