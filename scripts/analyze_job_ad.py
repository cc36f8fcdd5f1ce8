from __future__ import annotations

import argparse
import asyncio
import json
import sys
from dataclasses import replace
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.ai.types import SchemaLevel  # noqa: E402
from app.core.config import settings  # noqa: E402
from app.core.errors import JobAdError  # noqa: E402
from app.services.job_ad_service import JobAdAnalyzer  # noqa: E402


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Analyze a job ad and print the structured critique as JSON.")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--text-file", help="Path to a file with the job ad text ('-' reads stdin).")
    source.add_argument("--url", help="URL of a page containing the job ad.")
    parser.add_argument(
        "--unconstrained",
        action="store_true",
        help="Only ask for JSON in prose instead of sending the strict schema.",
    )
    parser.add_argument("--model", help="Override AI_MODEL for this run.")
    parser.add_argument("--out", help="Write the JSON result to this path instead of stdout.")
    return parser.parse_args(argv)


def _read_text(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


async def _run(args: argparse.Namespace) -> dict:
    run_settings = replace(settings, ai_model=args.model) if args.model else settings
    schema_level = SchemaLevel.UNCONSTRAINED if args.unconstrained else None
    analyzer = JobAdAnalyzer(run_settings, schema_level=schema_level)
    try:
        if args.url:
            result = await analyzer.analyze_url(args.url)
        else:
            result = await analyzer.analyze_text(_read_text(args.text_file))
    finally:
        await analyzer.aclose()
    return result.model_dump()


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    try:
        payload = asyncio.run(_run(args))
    except JobAdError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    rendered = json.dumps(payload, ensure_ascii=False, indent=2)
    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(rendered + "\n", encoding="utf-8")
    else:
        print(rendered)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
