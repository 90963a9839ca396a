from __future__ import annotations
import pytest
from fakes import GOAL, NOW, MemoryBlobs, MemoryStore, png_bytes
from reservoir.schemas.submission import PhotoUpload
from reservoir.services.reservoir import Reservoir


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def blobs() -> MemoryBlobs:
    return MemoryBlobs()


@pytest.fixture
def reservoir(store, blobs) -> Reservoir:
    return Reservoir(store=store, blobs=blobs, goal_litres=GOAL, clock=lambda: NOW)


@pytest.fixture
def photo() -> PhotoUpload:
    return PhotoUpload(filename="butt.png", content_type="image/png", data=png_bytes())
