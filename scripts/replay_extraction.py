"""
Replay recorded recognizer replies through the extraction normalizer.

Each input line is a JSON object with the recognizer reply under ``reply``
and, optionally, the operator-confirmed values under ``expected``. Used to
check the normalization conventions against real screenshots.

    python scripts/replay_extraction.py samples.jsonl
"""

import argparse
import json
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from services.extraction import normalize_extraction

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@dataclass
class ReplayOutcome:
    name: str
    fields: Dict[str, str]
    warnings: List[str]
    mismatches: Dict[str, tuple] = field(default_factory=dict)


def replay(records: Iterable[dict]) -> List[ReplayOutcome]:
    outcomes = []
    for index, record in enumerate(records):
        result = normalize_extraction(record.get("reply") or {})
        fields = result.data.to_dict()
        expected = record.get("expected") or {}
        mismatches = {
            key: (fields.get(key), value)
            for key, value in expected.items()
            if fields.get(key) != value
        }
        outcomes.append(
            ReplayOutcome(
                name=record.get("name") or f"sample-{index + 1}",
                fields=fields,
                warnings=result.warnings,
                mismatches=mismatches,
            )
        )
    return outcomes


def _read_jsonl(path: Path) -> List[dict]:
    with open(path, "r", encoding="utf-8") as f:
        return [json.loads(line) for line in f if line.strip()]


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("samples", type=Path, help="JSONL file of recorded replies")
    args = parser.parse_args()

    outcomes = replay(_read_jsonl(args.samples))
    failed = 0
    for outcome in outcomes:
        if outcome.mismatches:
            failed += 1
            for key, (got, want) in outcome.mismatches.items():
                logger.warning(f"{outcome.name}: {key} normalized to {got!r}, operator entered {want!r}")
        for warning in outcome.warnings:
            logger.info(f"{outcome.name}: {warning}")

    logger.info(f"{len(outcomes) - failed}/{len(outcomes)} samples match operator values")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
