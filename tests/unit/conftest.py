"""Marks every test collected under tests/unit as ``unit``."""

from pathlib import Path

import pytest
from _pytest.nodes import Item


def pytest_collection_modifyitems(
    session: object, config: object, items: list[Item]
) -> None:
    _ = (session, config)
    root = Path(__file__).resolve().parent
    for item in items:
        if item.path.resolve().is_relative_to(root):
            item.add_marker(pytest.mark.unit)
