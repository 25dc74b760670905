"""Shared fixtures for the room plan core tests."""

from __future__ import annotations

import itertools

import pytest

from roomplan.factory import ItemFactory
from roomplan.models import Category, FurnitureItem, Room
from roomplan.state import PlanState
from roomplan.utils import EditorConfig


def make_item(
    item_id: str = "a",
    x: float = 0.0,
    y: float = 0.0,
    width: float = 1.0,
    depth: float = 1.0,
    rotation: float = 0.0,
    locked: bool = False,
    category: str = Category.CUSTOM,
    name: str = "",
    light_range=None,
) -> FurnitureItem:
    """Create a test item with the given geometry."""
    return FurnitureItem(
        id=item_id,
        name=name or item_id.upper(),
        category=category,
        x=x,
        y=y,
        width=width,
        depth=depth,
        rotation=rotation,
        locked=locked,
        light_range=light_range,
    )


@pytest.fixture
def room() -> Room:
    return Room(4.5, 5.0)


@pytest.fixture
def config() -> EditorConfig:
    return EditorConfig()


@pytest.fixture
def sequential_factory() -> ItemFactory:
    counter = itertools.count(1)
    return ItemFactory(id_factory=lambda: f"item-{next(counter)}")


class Recorder:
    """Collects collaborator callback invocations."""

    def __init__(self):
        self.items = []
        self.dimensions = []
        self.selection = []
        self.status = []


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def make_state(room, config, sequential_factory, recorder):
    def _make(*items: FurnitureItem, plan_room: Room = None) -> PlanState:
        return PlanState(
            plan_room or room,
            tuple(items),
            config=config,
            factory=sequential_factory,
            on_items_change=recorder.items.append,
            on_dimensions_change=recorder.dimensions.append,
            on_selection_change=recorder.selection.append,
            status_cb=recorder.status.append,
        )

    return _make
