"""
Seed loading - reads table records from a JSON file or a directory of <table>.json files.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Union

from .errors import SeedError

SeedData = Dict[str, List[Dict[str, Any]]]


def _read_json(path: Path) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise SeedError(f"Invalid JSON in seed file {path}: {e}") from e


def _check_records(table_name: str, records: Any, source: Path) -> List[Dict[str, Any]]:
    if not isinstance(records, list):
        raise SeedError(f"Seed data for table '{table_name}' in {source} must be an array")
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            raise SeedError(f"Seed record {index} for table '{table_name}' in {source} must be an object")
    return records


def load_seed_file(path: Union[str, Path]) -> SeedData:
    """Read a JSON object mapping table name to an array of records."""
    path = Path(path)
    data = _read_json(path)
    if not isinstance(data, dict):
        raise SeedError(f"Seed file {path} must contain an object mapping table names to arrays")
    return {name: _check_records(name, records, path) for name, records in data.items()}


def load_seed_directory(path: Union[str, Path]) -> SeedData:
    """Read every <table>.json file in a directory; each holds that table's array of records."""
    path = Path(path)
    seed: SeedData = {}
    for file_path in sorted(path.glob("*.json")):
        if not file_path.is_file():
            continue
        seed[file_path.stem] = _check_records(file_path.stem, _read_json(file_path), file_path)
    return seed


def load_seed_path(path: Union[str, Path]) -> SeedData:
    """Load seed data from a file or a directory."""
    path = Path(path).resolve()
    if not path.exists():
        raise SeedError(f"Seed file or folder not found: {path}")
    if path.is_dir():
        return load_seed_directory(path)
    return load_seed_file(path)
