"""Tests for image filtering and random choice (core/selection.py)."""

from __future__ import annotations

import random

import pytest

from box_ascii.core.models import FolderItem
from box_ascii.core.selection import (
    IMAGE_EXTENSIONS,
    choose_random,
    filter_image_items,
    is_image_item,
)


def _file(name: str, extension: str, type_: str = "file") -> FolderItem:
    return FolderItem(id=name, name=name, type=type_, extension=extension)


class TestIsImageItem:
    @pytest.mark.parametrize("ext", ["jpg", "jpeg", "png", "gif", "JPG", "Png"])
    def test_supported_extensions(self, ext: str) -> None:
        assert is_image_item(_file(f"x.{ext}", ext))

    @pytest.mark.parametrize("ext", ["pdf", "txt", "webp", "bmp", ""])
    def test_other_extensions(self, ext: str) -> None:
        assert not is_image_item(_file("x", ext))

    def test_folders_are_never_images(self) -> None:
        assert not is_image_item(_file("photos.png", "png", type_="folder"))

    def test_extension_set(self) -> None:
        assert IMAGE_EXTENSIONS == {"jpg", "jpeg", "png", "gif"}


class TestFilterImageItems:
    def test_keeps_listing_order(self) -> None:
        items = [
            _file("b.png", "png"),
            _file("notes.txt", "txt"),
            _file("a.gif", "gif"),
            _file("sub", "", type_="folder"),
        ]
        assert [item.name for item in filter_image_items(items)] == ["b.png", "a.gif"]

    def test_empty(self) -> None:
        assert filter_image_items([]) == []


class TestChooseRandom:
    def test_empty_gives_none(self) -> None:
        assert choose_random([], random.Random(0)) is None

    def test_single_item(self) -> None:
        only = _file("a.png", "png")
        assert choose_random([only], random.Random(123)) is only

    def test_same_seed_same_pick(self) -> None:
        items = [_file(f"{i}.png", "png") for i in range(20)]
        picks = {choose_random(items, random.Random(42)) for _ in range(5)}
        assert len(picks) == 1

    def test_every_item_reachable(self) -> None:
        items = [_file(f"{i}.png", "png") for i in range(4)]
        rng = random.Random(7)
        seen = {choose_random(items, rng) for _ in range(200)}
        assert seen == set(items)
