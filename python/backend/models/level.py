"""Selectable source images."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator

from backend.errors import InvalidConfiguration


@dataclass(frozen=True)
class SourceImage:
    """An image the player can choose to play.

    ``texture`` is opaque to the backend; it is handed straight to the
    renderer (a ``pygame.Surface``, a file path, or ``None``).
    """

    id: str
    width: int
    height: int
    texture: Any = field(default=None, compare=False)
    label: str = ""

    @property
    def title(self) -> str:
        return self.label or self.id


class LevelCatalog:
    """Ordered id -> image lookup used by the level-select screen."""

    def __init__(self, images: list[SourceImage] | None = None) -> None:
        self._images: dict[str, SourceImage] = {}
        for image in images or []:
            self.add(image)

    def add(self, image: SourceImage) -> None:
        if image.id in self._images:
            raise InvalidConfiguration(f"Duplicate level id '{image.id}'.")
        self._images[image.id] = image

    def get(self, image_id: str) -> SourceImage:
        try:
            return self._images[image_id]
        except KeyError as exc:
            raise InvalidConfiguration(f"Unknown level '{image_id}'.") from exc

    def ids(self) -> list[str]:
        return list(self._images)

    def __iter__(self) -> Iterator[SourceImage]:
        return iter(self._images.values())

    def __len__(self) -> int:
        return len(self._images)
