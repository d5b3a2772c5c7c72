import copy
import json
from pathlib import Path

SAMPLE_SCENARIO = Path(__file__).resolve().parent.parent / "sample_scenario.json"


def write_scenario(tmp_path: Path, data: dict, filename: str = "scenario.json") -> Path:
    path = tmp_path / filename
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def clone_scenario(data: dict) -> dict:
    return copy.deepcopy(data)
