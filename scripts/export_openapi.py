"""Export the CashoutLab OpenAPI schema."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from fastapi.encoders import jsonable_encoder

from cashoutlab.api.server import app


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--output", type=Path, default=Path("api_spec/openapi.json"))
    parser.add_argument("--server-url", help="Public base URL to advertise in the schema")
    args = parser.parse_args()

    schema = app.openapi()
    if args.server_url:
        schema["servers"] = [{"url": args.server_url.rstrip("/")}]
    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(json.dumps(jsonable_encoder(schema), indent=2))
    print(f"OpenAPI schema written to {args.output}")


if __name__ == "__main__":  # pragma: no cover
    main()
