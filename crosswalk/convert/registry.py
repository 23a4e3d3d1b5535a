"""Lock-guarded name -> function registry shared by parsers, validators and serializers."""

import threading
from typing import Callable, Dict, Generic, List, Optional, TypeVar

from crosswalk.convert.exceptions import StructuralError


F = TypeVar("F", bound=Callable)


class FunctionRegistry(Generic[F]):
    """Maps names to pure functions.

    Subclasses seed built-ins in `register_defaults`. Registration and lookup
    are serialized by an RLock so plugins can register while conversions run.
    """

    kind = "function"

    def __init__(self, defaults: bool = True):
        self._lock = threading.RLock()
        self._functions: Dict[str, F] = {}
        if defaults:
            self.register_defaults()

    def register_defaults(self) -> None:
        pass

    def register(self, name: str, fn: F) -> None:
        with self._lock:
            self._functions[name] = fn

    def get(self, name: str) -> Optional[F]:
        with self._lock:
            return self._functions.get(name)

    def require(self, name: str) -> F:
        """Like get, but raises StructuralError for an unregistered name."""
        fn = self.get(name)
        if fn is None:
            raise StructuralError.not_found(self.kind, name)
        return fn

    def names(self) -> List[str]:
        with self._lock:
            return sorted(self._functions)

    def __contains__(self, name: str) -> bool:
        with self._lock:
            return name in self._functions
