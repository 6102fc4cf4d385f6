"""Panorama image list navigation."""
from __future__ import annotations

import logging
from typing import Callable, Generic, Iterable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ImageNavigator(Generic[T]):
    """
    Keeps an ordered list of panorama sources and the current position.

    Sources are opaque (paths, URLs, decoded images); nothing is loaded here.
    prev()/next() wrap around at both ends.

    Callback signature: callback(index: int, source) -> None
    """

    def __init__(self, sources: Iterable[T] = ()):
        self._sources: list[T] = list(sources)
        self._index: int = 0
        self._on_image_changed_callbacks: list[Callable[[int, T], None]] = []

    @property
    def count(self) -> int:
        return len(self._sources)

    @property
    def index(self) -> int:
        return self._index

    @property
    def current(self) -> Optional[T]:
        """Get the current source, or None if the list is empty."""
        if not self._sources:
            return None
        return self._sources[self._index]

    @property
    def sources(self) -> list[T]:
        return list(self._sources)

    def replace(self, sources: Iterable[T]) -> None:
        """Replace the list and show the first source."""
        self._sources = list(sources)
        self._index = 0
        logger.info(f"Image list replaced: {self.count} images")
        if self._sources:
            self._notify_image_changed()

    def append(self, sources: Iterable[T]) -> int:
        """
        Append sources to the list.

        The first source is shown if the list was empty before.

        :return: Number of sources added
        """
        was_empty = not self._sources
        added = list(sources)
        self._sources.extend(added)
        logger.info(f"Added {len(added)} images (total {self.count})")
        if was_empty and self._sources:
            self._index = 0
            self._notify_image_changed()
        return len(added)

    def go_to(self, index: int) -> bool:
        """
        Show the source at index.

        :return: True if the index was valid
        """
        if index < 0 or index >= len(self._sources):
            logger.warning(f"Image index out of range: {index}")
            return False
        self._index = index
        self._notify_image_changed()
        return True

    def next(self) -> bool:
        if len(self._sources) <= 1:
            return False
        return self.go_to((self._index + 1) % len(self._sources))

    def prev(self) -> bool:
        if len(self._sources) <= 1:
            return False
        return self.go_to((self._index - 1) % len(self._sources))

    def on_swipe(self, direction: str) -> None:
        """Swipe callback: 'prev' or 'next'."""
        if direction == "prev":
            self.prev()
        elif direction == "next":
            self.next()
        else:
            logger.warning(f"Unknown swipe direction: {direction}")

    def add_image_changed_callback(self, callback: Callable[[int, T], None]) -> None:
        self._on_image_changed_callbacks.append(callback)

    def remove_image_changed_callback(self, callback: Callable[[int, T], None]) -> None:
        self._on_image_changed_callbacks.remove(callback)

    def _notify_image_changed(self) -> None:
        source = self._sources[self._index]
        for callback in self._on_image_changed_callbacks:
            try:
                callback(self._index, source)
            except Exception as e:
                logging.exception(f"Error in image changed callback: {e}")
