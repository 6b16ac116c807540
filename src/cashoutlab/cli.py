"""Evaluate a bet from a JSON file on the command line."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Sequence

from pydantic import ValidationError

from cashoutlab.api.schemas import BetPayload, request_error
from cashoutlab.config import get_settings
from cashoutlab.ev.errors import EvaluationError
from cashoutlab.ev.evaluator import evaluate


def _read_body(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, encoding="utf-8") as fh:
        return fh.read()


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Compare a bet's expected value with its cashout offer")
    parser.add_argument("bet", help="Path to a bet JSON document, or '-' for stdin")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log each calculation step")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else get_settings().log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        payload = BetPayload.model_validate_json(_read_body(args.bet))
        result = evaluate(payload.to_request())
    except ValidationError as exc:
        print(json.dumps(request_error(exc.errors())), file=sys.stderr)
        return 2
    except EvaluationError as exc:
        print(json.dumps(exc.to_dict()), file=sys.stderr)
        return 1

    print(json.dumps(result.to_dict(), indent=2))
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
