"""Extract the ``db`` update set from a demo record and log it.

Usage (from repository root):
    python scripts/example.py
    python scripts/example.py --tag json
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

# Make `partial` imports work without installing the package.
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from partial import ConversionError, ExtractError, PartialValue, extract
from partial.config import get_settings

logger = logging.getLogger("partial.example")


class Padawans(list, PartialValue):
    """Padawan names, exported as a plain list."""

    def partial_value(self, current: Any) -> Any:
        if not isinstance(current, Padawans):
            raise ConversionError(f"got {type(current).__name__} expected Padawans")
        return list(current)


class DefeatedEnemies(dict, PartialValue):
    """Enemy name to whether they stayed defeated."""

    def partial_value(self, current: Any) -> Any:
        if not isinstance(current, DefeatedEnemies):
            raise ConversionError(f"got {type(current).__name__} expected DefeatedEnemies")
        return dict(current)


@dataclass
class Jedi:
    name: str = field(default="", metadata={"json": "name,omitempty", "db": "name"})
    light_side: bool = field(default=False, metadata={"json": "light_side,omitempty", "db": "light_side"})
    padawans: Padawans = field(default_factory=Padawans, metadata={"json": "padawans,omitempty", "db": "padawans"})
    defeated_enemies: DefeatedEnemies = field(
        default_factory=DefeatedEnemies,
        metadata={"json": "defeated_enemies,omitempty", "db": "defeated_enemies"},
    )
    _empty: float = field(default=0.0, metadata={"json": "empty,omitempty", "db": "empty"})


def build_demo_jedi() -> Jedi:
    """Return the demo record; ``_empty`` stays zero and is left out."""

    return Jedi(
        name="Obi-Wan",
        light_side=True,
        padawans=Padawans(["Anakin Skywalker", "Ahsoka Tano"]),
        defeated_enemies=DefeatedEnemies(
            {
                "General Grievous": True,
                "Count Dooku": False,
                "Asajj Ventress": True,
                "The High Ground": True,
            }
        ),
    )


def main() -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--tag", default=settings.default_tag, help="Tag name to extract by.")
    args = parser.parse_args()

    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        values = extract(build_demo_jedi(), args.tag)
    except ExtractError:
        logger.exception("Extraction failed")
        sys.exit(2)
    logger.info("%s", values)


if __name__ == "__main__":
    main()
