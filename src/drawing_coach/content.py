from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

import yaml

from drawing_coach.data_models import Exercise, StrokeData, parse_exercise, parse_stroke_data
from drawing_coach.errors import ConfigError


def _read_document(path: Path) -> Any:
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    with path.open("r", encoding="utf-8") as handle:
        if path.suffix.lower() == ".json":
            return json.load(handle)
        return yaml.safe_load(handle)


def load_exercises(path: Path) -> List[Exercise]:
    """
    Load authored exercises from a YAML or JSON file.

    The document may be a single exercise mapping, a list of exercises, or a
    mapping with an `exercises` list (the catalogue layout under `data/exercises`).
    """
    document = _read_document(path)
    if isinstance(document, dict) and "exercises" in document:
        document = document["exercises"]
    if isinstance(document, dict):
        document = [document]
    if not isinstance(document, list):
        raise ConfigError(f"{path} does not contain exercises")
    return [parse_exercise(item) for item in document]


def index_exercises(exercises: List[Exercise]) -> Dict[str, Exercise]:
    catalogue: Dict[str, Exercise] = {}
    for exercise in exercises:
        if exercise.id in catalogue:
            raise ConfigError(f"Duplicate exercise id: {exercise.id}")
        catalogue[exercise.id] = exercise
    return catalogue


def load_stroke_data(path: Path) -> StrokeData:
    """Read captured stroke data from JSON."""
    return parse_stroke_data(_read_document(path))
