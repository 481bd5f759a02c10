"""Shared fixtures: a small canonical dataset on disk."""

import json
from pathlib import Path

import pytest

SAMPLE_DATASET = {
    "poems": [
        {
            "id": 1,
            "title": "Morning",
            "content": "Light on the water\nand the gulls awake",
            "category": "nature",
            "author": "Ada Byron",
            "date": "2023-04-01",
        },
        {
            "id": 2,
            "title": "Letters",
            "content": "I kept every one",
            "category": "love",
            "author": "Basil Hart",
            "date": "2023-05-12",
        },
    ],
    "quotes": [
        {
            "id": 1,
            "text": "Begin anywhere.",
            "category": "courage",
            "author": "John Cage",
            "date": "2022-01-09",
        },
        {
            "id": 2,
            "text": "Love is the answer.",
            "category": "love",
            "author": "Ada Byron",
            "date": "2022-02-14",
        },
    ],
}


@pytest.fixture
def dataset_path(tmp_path: Path) -> Path:
    """Write the sample canonical dataset and return its path."""
    path = tmp_path / "data" / "content.json"
    path.parent.mkdir(parents=True)
    path.write_text(json.dumps(SAMPLE_DATASET), encoding="utf-8")
    return path


@pytest.fixture
def state_dir(tmp_path: Path) -> Path:
    """Directory for the override store, separate from the dataset."""
    path = tmp_path / "state"
    path.mkdir()
    return path
