"""Storage backends for chemical compositions.

CompositionStorage :
    Base class for a mapping from element specifications to counts.
MappingStorage :
    Hash table storage for general use.
VectorStorage :
    Linear scan storage for compositions with few distinct elements.

Backends are registered by name with :py:func:`register_backend` and fetched
with :py:func:`get_backend`.

"""

from abc import ABC, abstractmethod
from typing import Callable, Dict, Iterator, List, Tuple, Type, TypeVar

from . import _constants as c
from . import exceptions
from .specification import ElementSpecification


class CompositionStorage(ABC):
    """
    Base class for the count storage of a composition.

    Storage classes do not validate keys or counts, and do not know about
    cached values. They must keep explicit zero counts: an entry set to zero
    is different from a missing entry.

    """

    __slots__ = ()

    @abstractmethod
    def get(self, key: ElementSpecification) -> int:
        """Retrieve the count of `key`. Returns ``0`` if `key` is not stored."""
        ...

    @abstractmethod
    def set(self, key: ElementSpecification, count: int) -> None:
        """Insert or replace the count of `key`."""
        ...

    @abstractmethod
    def items(self) -> List[Tuple[ElementSpecification, int]]:
        """List (key, count) pairs in insertion order."""
        ...

    @abstractmethod
    def copy(self) -> "CompositionStorage":
        """Create an independent copy."""
        ...

    @abstractmethod
    def __contains__(self, key) -> bool:
        ...

    @abstractmethod
    def __len__(self) -> int:
        ...

    def __iter__(self) -> Iterator[ElementSpecification]:
        return iter([k for k, _ in self.items()])

    def to_dict(self) -> Dict[ElementSpecification, int]:
        return dict(self.items())


StorageType = TypeVar("StorageType", bound=CompositionStorage)

_REGISTERED_BACKENDS: Dict[str, Type[CompositionStorage]] = dict()


def register_backend(name: str) -> Callable[[Type[StorageType]], Type[StorageType]]:
    """
    Register a storage class into the backend registry.

    Parameters
    ----------
    name : str
        Name used to fetch the backend.

    Returns
    -------
    Callable
        A class decorator.

    """

    def decorator(storage: Type[StorageType]) -> Type[StorageType]:
        _REGISTERED_BACKENDS[name] = storage
        return storage

    return decorator


def get_backend(name: str) -> Type[CompositionStorage]:
    """
    Retrieve a storage class from the registry.

    Raises
    ------
    BackendNotRegistered
        If a non-registered backend is requested.

    """
    try:
        return _REGISTERED_BACKENDS[name]
    except KeyError as e:
        raise exceptions.BackendNotRegistered(name) from e


def list_backends() -> List[str]:
    """Retrieve the list of registered backends."""
    return list(_REGISTERED_BACKENDS)


@register_backend(c.MAPPING)
class MappingStorage(CompositionStorage):
    """Dictionary based storage."""

    __slots__ = ("_counts",)

    def __init__(self):
        self._counts: Dict[ElementSpecification, int] = dict()

    def get(self, key: ElementSpecification) -> int:
        return self._counts.get(key, 0)

    def set(self, key: ElementSpecification, count: int) -> None:
        self._counts[key] = count

    def items(self) -> List[Tuple[ElementSpecification, int]]:
        return list(self._counts.items())

    def copy(self) -> "MappingStorage":
        storage = MappingStorage()
        storage._counts = self._counts.copy()
        return storage

    def __contains__(self, key) -> bool:
        return key in self._counts

    def __len__(self) -> int:
        return len(self._counts)

    def __iter__(self) -> Iterator[ElementSpecification]:
        return iter(list(self._counts))


@register_backend(c.VECTOR)
class VectorStorage(CompositionStorage):
    """
    Storage in parallel key and count lists.

    Lookups scan the key list, which is faster than hashing for the handful
    of elements found in most molecular formulas.

    """

    __slots__ = ("_keys", "_counts")

    def __init__(self):
        self._keys: List[ElementSpecification] = list()
        self._counts: List[int] = list()

    def _find(self, key) -> int:
        for i, k in enumerate(self._keys):
            if k == key:
                return i
        return -1

    def get(self, key: ElementSpecification) -> int:
        i = self._find(key)
        return 0 if i == -1 else self._counts[i]

    def set(self, key: ElementSpecification, count: int) -> None:
        i = self._find(key)
        if i == -1:
            self._keys.append(key)
            self._counts.append(count)
        else:
            self._counts[i] = count

    def items(self) -> List[Tuple[ElementSpecification, int]]:
        return list(zip(self._keys, self._counts))

    def copy(self) -> "VectorStorage":
        storage = VectorStorage()
        storage._keys = self._keys.copy()
        storage._counts = self._counts.copy()
        return storage

    def __contains__(self, key) -> bool:
        return self._find(key) != -1

    def __len__(self) -> int:
        return len(self._keys)
