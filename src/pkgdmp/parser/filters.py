"""Symbol filters.

Each filter is an immutable predicate over a Symbol. A parser holds an ordered
list of filters and includes a symbol only when every filter includes it.
"""

import hashlib
import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Sequence, Union

from ..errors import FilterError
from .symbols import Symbol, SymbolKind, is_unfilterable


class FilterAction(Enum):
    """What a filter does with symbols matching its criteria."""
    EXCLUDE = "Exclude"
    INCLUDE = "Include"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class FilterUnexported:
    """Includes or excludes unexported symbols."""
    action: FilterAction

    def include(self, symbol: Symbol) -> bool:
        if is_unfilterable(symbol):
            return True
        return self.action is FilterAction.INCLUDE or symbol.is_exported()

    def __str__(self) -> str:
        return f"filterUnexported(action={self.action})"


@dataclass(frozen=True)
class FilterSymbolKinds:
    """Includes or excludes symbols of the configured kinds."""
    action: FilterAction
    kinds: frozenset

    def include(self, symbol: Symbol) -> bool:
        if is_unfilterable(symbol):
            return True
        found = symbol.symbol_kind() in self.kinds
        if self.action is FilterAction.INCLUDE:
            return found
        return not found

    def __str__(self) -> str:
        kinds = ",".join(sorted(str(k) for k in self.kinds))
        return f"filterSymbolKinds(action={self.action},kinds={kinds})"


@dataclass(frozen=True)
class FilterMatchingIdents:
    """Includes or excludes symbols whose identifier matches a pattern."""
    action: FilterAction
    pattern: re.Pattern

    def include(self, symbol: Symbol) -> bool:
        if is_unfilterable(symbol):
            return True
        match = self.pattern.search(symbol.ident()) is not None
        if self.action is FilterAction.INCLUDE:
            return match
        return not match

    def __str__(self) -> str:
        return f"filterMatchingIdents(action={self.action},pattern={self.pattern.pattern})"


@dataclass(frozen=True)
class FilterPackages:
    """Includes or excludes packages by name. Other symbols always pass."""
    action: FilterAction
    names: frozenset

    def include(self, symbol: Symbol) -> bool:
        if symbol.symbol_kind() is not SymbolKind.PACKAGE:
            return True
        found = symbol.ident() in self.names
        if self.action is FilterAction.INCLUDE:
            return found
        return not found

    def __str__(self) -> str:
        return f"filterPackages(action={self.action},names={','.join(sorted(self.names))})"


SymbolFilter = Union[FilterUnexported, FilterSymbolKinds, FilterMatchingIdents, FilterPackages]


def filter_unexported(action: FilterAction) -> FilterUnexported:
    return FilterUnexported(action=action)


def filter_symbol_kinds(action: FilterAction, *kinds: SymbolKind) -> FilterSymbolKinds:
    return FilterSymbolKinds(action=action, kinds=frozenset(kinds))


def filter_matching_idents(action: FilterAction, pattern: Union[str, re.Pattern]) -> FilterMatchingIdents:
    """Create an identifier pattern filter.

    A string pattern is compiled here; an invalid one raises FilterError so
    it never reaches extraction.
    """
    if isinstance(pattern, str):
        try:
            pattern = re.compile(pattern)
        except re.error as e:
            raise FilterError(f"invalid identifier pattern {pattern!r}: {e}") from e
    return FilterMatchingIdents(action=action, pattern=pattern)


def filter_packages(action: FilterAction, *names: str) -> FilterPackages:
    return FilterPackages(action=action, names=frozenset(names))


def all_of(filters: Sequence[SymbolFilter]) -> Callable[[Symbol], bool]:
    """Combine filters into one predicate that short-circuits on exclusion."""
    filters = tuple(filters)

    def include(symbol: Symbol) -> bool:
        for f in filters:
            if not f.include(symbol):
                return False
        return True

    return include


def filters_fingerprint(filters: Iterable[SymbolFilter]) -> str:
    """Stable digest of an ordered filter list, for tests and caching."""
    h = hashlib.sha256()
    for f in filters:
        h.update(str(f).encode("utf-8"))
        h.update(b"\n")
    return h.hexdigest()
