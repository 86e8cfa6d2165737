#!/usr/bin/env python3
"""Run the ReportPipeline end-to-end without a server.

Builds a screening session (the worked example by default, or a random one),
scores it, renders the prompt, asks the gateway for a completion and prints
every intermediate stage.  Without ``OPENAI_API_KEY`` the deterministic
fallback answers; with it the live model is called.

Usage::

    # Worked example, fallback content
    python scripts/simulate_report.py

    # Random session, reproducible
    python scripts/simulate_report.py --random --seed 7

    # Also show the rendered prompt
    python scripts/simulate_report.py -v

    # Open-ended analysis instead of the report
    python scripts/simulate_report.py --analysis
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import random
import sys
from pathlib import Path

# ---------------------------------------------------------------------------
# Ensure src/ is on sys.path when run from a checkout without installing.
# ---------------------------------------------------------------------------
_REPO_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(_REPO_ROOT / "src"))

from screening_core.config import load_llm_settings  # noqa: E402
from screening_core.gateway import LLMGateway  # noqa: E402
from screening_core.interpretation import interpret_scores  # noqa: E402
from screening_core.models.patient import PatientInfo, TestResultSet  # noqa: E402
from screening_core.pipeline import ReportPipeline  # noqa: E402
from screening_core.prompt import PromptManager  # noqa: E402
from screening_core.scoring import compute_scores  # noqa: E402

_EXAMPLE_PATIENT = {"id": "p1", "name": "Alex", "age": 8, "gender": "male"}
_EXAMPLE_RESULTS = {
    "emotionTest": [{"isCorrect": True}] * 3 + [{"isCorrect": False}],
    "reactionTest": [
        {"valid": True, "reactionTime": 250},
        {"valid": True, "reactionTime": 300},
        {"valid": True, "reactionTime": 600},
    ],
    "patternTest": [{"isCorrect": True}] * 4 + [{"isCorrect": False}],
}

_quiet = False


def _print(*args) -> None:
    if not _quiet:
        print(*args)


def _header(title: str) -> None:
    _print(f"\n{'=' * 62}")
    _print(f" {title}")
    _print(f"{'=' * 62}")


def random_results(rng: random.Random) -> dict:
    return {
        "emotionTest": [{"isCorrect": rng.random() < 0.7} for _ in range(rng.randint(4, 8))],
        "reactionTest": [
            {"valid": rng.random() > 0.15, "reactionTime": rng.randint(180, 750)}
            for _ in range(rng.randint(3, 8))
        ],
        "patternTest": [{"isCorrect": rng.random() < 0.7} for _ in range(rng.randint(3, 6))],
    }


async def run_simulation(args: argparse.Namespace) -> int:
    settings = load_llm_settings()
    prompts = PromptManager()
    gateway = LLMGateway(settings, prompts)
    pipeline = ReportPipeline(gateway, prompts, settings)

    raw = random_results(random.Random(args.seed)) if args.random else _EXAMPLE_RESULTS
    results = TestResultSet.model_validate(raw)
    patient = PatientInfo.model_validate(_EXAMPLE_PATIENT)

    _header("Scores")
    scores = compute_scores(results)
    for key, value in scores.model_dump(by_alias=True).items():
        _print(f" {key:<15s} {value}")

    _header("Interpretations")
    for key, value in interpret_scores(scores).model_dump(by_alias=True).items():
        _print(f" {key:<15s} {value}")

    if args.verbose:
        _header("Prompt")
        _print(prompts.render_report(patient, scores))

    try:
        if args.analysis:
            envelope = await pipeline.analyze(results, patient)
            _header("Analysis")
            _print(json.dumps(envelope.analysis.model_dump(by_alias=True), indent=2))
        else:
            envelope = await pipeline.generate_report(results, patient)
            report = envelope.report
            _header("Observations")
            for obs in report.observations:
                _print(f" - {obs.details}")
            _header("Red Flags")
            for flag in report.red_flags or ["(none)"]:
                _print(f" - {flag}")
            _header("Recommendations")
            for rec in report.recommendations or ["(none)"]:
                _print(f" - {rec}")
    finally:
        await gateway.aclose()

    _header("Completion")
    _print(f" Model:     {envelope.model}")
    _print(f" Degraded:  {'Yes' if envelope.degraded else 'No'}")
    if envelope.note:
        _print(f" Note:      {envelope.note}")
    return 0


def main() -> None:
    global _quiet
    parser = argparse.ArgumentParser(
        description="Run the ReportPipeline end-to-end without a server.",
    )
    parser.add_argument("--random", action="store_true",
                        help="Use a random session instead of the worked example")
    parser.add_argument("--seed", type=int, default=None, help="RNG seed for --random")
    parser.add_argument("--analysis", action="store_true",
                        help="Run the open-ended analysis instead of the report")
    parser.add_argument("-v", "--verbose", action="store_true", help="Print the rendered prompt")
    parser.add_argument("-q", "--quiet", action="store_true",
                        help="Suppress all print output (exit code still reflects success/failure)")
    args = parser.parse_args()
    _quiet = args.quiet

    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    sys.exit(asyncio.run(run_simulation(args)))


if __name__ == "__main__":
    main()
