from abc import ABC, abstractmethod
from typing import Generic, TypeVar

T = TypeVar("T")


class BaseRepository(ABC, Generic[T]):
    """Read-only source of entities."""

    @abstractmethod
    def get_all(self) -> list[T]:
        raise NotImplementedError
