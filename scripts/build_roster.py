"""Build assets/roster/species.json from pre-fetched PokeAPI dumps.

Input directory (default assets/roster/pokeapi_raw) holds endpoint JSONs named
like pokeapi.co_api_v2_pokemon_<id>_*.json and pokeapi.co_api_v2_move_<id>_*.json.

Usage: python scripts/build_roster.py [--raw DIR] [--out FILE]
"""
from __future__ import annotations
import argparse
import json
from pathlib import Path

from pokebattle.core.paths import ROSTER, ROSTER_FILE
from pokebattle.core.logging import logger
from pokebattle.data.pokeapi import build_roster


def _load_all(raw_dir: Path, prefix: str) -> list[dict]:
    docs = []
    for p in sorted(raw_dir.glob(f"pokeapi.co_api_v2_{prefix}_*.json")):
        try:
            docs.append(json.loads(p.read_text(encoding="utf-8")))
        except json.JSONDecodeError as e:
            logger.warn("SkippingUnreadableDump", path=str(p), error=str(e))
    return docs


def main():
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--raw", type=Path, default=ROSTER / "pokeapi_raw")
    parser.add_argument("--out", type=Path, default=ROSTER_FILE)
    args = parser.parse_args()

    roster = build_roster(_load_all(args.raw, "pokemon"), _load_all(args.raw, "move"))
    args.out.parent.mkdir(parents=True, exist_ok=True)
    args.out.write_text(json.dumps(roster, indent=2), encoding="utf-8")
    print(f"Wrote {len(roster['species'])} species / {len(roster['moves'])} moves to {args.out}")

if __name__ == "__main__":
    main()
