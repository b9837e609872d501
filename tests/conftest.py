from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from mamipalabra.core.storage import LocalStorage
from mamipalabra.core.words import WordRepository


def write_words(directory: Path, length: int, entries: list[dict]) -> None:
    directory.mkdir(parents=True, exist_ok=True)
    (directory / f"words-{length}.yaml").write_text(
        yaml.safe_dump(entries, allow_unicode=True, sort_keys=False),
        encoding="utf-8",
    )


@pytest.fixture()
def storage(tmp_path: Path) -> LocalStorage:
    """LocalStorage in a temp dir so tests don't touch ~/.mamipalabra."""
    return LocalStorage(tmp_path / "store")


@pytest.fixture()
def small_words(tmp_path: Path) -> WordRepository:
    """A tiny repository with known contents for every category."""
    words_dir = tmp_path / "words"
    write_words(words_dir, 4, [
        {"word": "mesa", "hint": "Mueble", "category": "home"},
        {"word": "lobo", "hint": "Aúlla", "category": "nature"},
    ])
    write_words(words_dir, 5, [
        {"word": "gatos", "hint": "Felinos", "category": "general"},
        {"word": "gotas", "hint": "Lluvia", "category": "general"},
        {"word": "silla", "hint": "Asiento", "category": "home"},
        {"word": "queso", "hint": "Lácteo", "category": "food"},
        {"word": "llama", "hint": "Andes", "category": "nature"},
        {"word": "playa", "hint": "Arena", "category": "travel"},
        {"word": "sueño", "hint": "Dormir", "category": "general"},
    ])
    return WordRepository(words_dir)
