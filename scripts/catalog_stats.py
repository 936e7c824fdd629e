#!/usr/bin/env python3
"""Print catalog statistics or a single vehicle from a JSON export.

The export is a JSON object with two arrays of snapshot records::

    {"live": [{"identifier": "...", "version": "2.31", ...}, ...],
     "historical": [...]}

Usage
-----
::

    python scripts/catalog_stats.py export.json
    python scripts/catalog_stats.py export.json --version 2.29
    python scripts/catalog_stats.py export.json --vehicle p-51d-30_usaaf_korea

Options::

    --version X.Y        Reconstruct the catalog as of this version
    --vehicle ID         Show one vehicle instead of stats
    --live-fallback      Let older live rows take part in past versions
    --output FILE        Write output to FILE instead of stdout
    -v, --verbose        Enable debug logging
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pywtvehicles import CatalogConfig, InMemorySnapshotStore, VehicleCatalogService, WtError  # noqa: E402


def _load_store(path: Path) -> InMemorySnapshotStore:
    payload: dict[str, Any] = json.loads(path.read_text(encoding="utf-8"))
    return InMemorySnapshotStore.from_records(
        live=payload.get("live", []),
        historical=payload.get("historical", []),
    )


async def _run(args: argparse.Namespace) -> dict[str, Any]:
    store = _load_store(args.export)
    overrides: dict[str, Any] = {}
    if args.live_fallback:
        overrides["live_fallback"] = True
    config = CatalogConfig.from_env(**overrides)
    service = VehicleCatalogService(store, config)

    if args.vehicle:
        vehicle = await service.get_vehicle(args.vehicle, args.version)
        return vehicle.model_dump()
    stats = await service.get_stats(args.version)
    return stats.model_dump()


def main() -> int:
    parser = argparse.ArgumentParser(description="Catalog statistics from a snapshot export")
    parser.add_argument("export", type=Path, help="JSON export with 'live' and 'historical' arrays")
    parser.add_argument("--version", help="Reconstruct the catalog as of this version")
    parser.add_argument("--vehicle", help="Show a single vehicle instead of stats")
    parser.add_argument("--live-fallback", action="store_true", help="Include older live rows for past versions")
    parser.add_argument("--output", type=Path, help="Write output to FILE instead of stdout")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        result = asyncio.run(_run(args))
    except WtError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    text = json.dumps(result, indent=2, ensure_ascii=False)
    if args.output:
        args.output.write_text(text + "\n", encoding="utf-8")
    else:
        print(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
