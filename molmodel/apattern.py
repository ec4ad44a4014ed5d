"""Search a bonded structure for paths of atoms that match a pattern.

A pattern is a sequence of atom tests.  Each test is a conjunction
(``&``) of disjunctions (``,``) of terms; a term is a property name, a
neighbour count ``xN`` or a negated term ``!term``.  Parentheses open a
branch from the last atom, and ``@N`` marks and closes rings.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Set, Tuple

_DIGITS = "0123456789"
_PATTERN_PIECE = re.compile(r"\(|\)|@\s*([0-9])?|[^\s()@]+")


class PatternError(ValueError):
    """A pattern could not be parsed."""


@dataclass
class PatternAtom:
    """An atom as seen by the pattern search."""

    symbol: str = "dummy"
    properties: Set[str] = field(default_factory=set)
    neighbors: List[int] = field(default_factory=list)

    def __post_init__(self):
        self.properties = set(self.properties)
        if not self.is_dummy():
            self.properties.add(self.symbol)

    def is_dummy(self) -> bool:
        return self.symbol == "dummy"


class _Test(ABC):
    @abstractmethod
    def matches(self, a, seen, path, atoms) -> bool:
        """Whether atom ``a`` passes this test."""

    def necessary_property(self) -> Optional[str]:
        return None


class _PropertyTest(_Test):
    def __init__(self, prop: str):
        self.prop = prop

    def matches(self, a, seen, path, atoms):
        return a not in seen and self.prop in atoms[a].properties

    def necessary_property(self):
        return self.prop


class _NeighborTest(_Test):
    def __init__(self, n: int):
        self.n = n

    def matches(self, a, seen, path, atoms):
        if a in seen:
            return False
        count = sum(1 for j in atoms[a].neighbors if not atoms[j].is_dummy())
        return count == self.n


class _Negation(_Test):
    def __init__(self, term: _Test):
        self.term = term

    def matches(self, a, seen, path, atoms):
        return a not in seen and not self.term.matches(a, seen, path, atoms)


class _Disjunction(_Test):
    def __init__(self, terms: Sequence[_Test]):
        self.terms = list(terms)

    def matches(self, a, seen, path, atoms):
        return a not in seen and any(t.matches(a, seen, path, atoms) for t in self.terms)


class _Conjunction(_Test):
    def __init__(self, terms: Sequence[_Test]):
        self.terms = list(terms)

    def matches(self, a, seen, path, atoms):
        return a not in seen and all(t.matches(a, seen, path, atoms) for t in self.terms)

    def necessary_property(self):
        for t in self.terms:
            p = t.necessary_property()
            if p is not None:
                return p
        return None


class _RingClosure(_Test):
    def __init__(self, n: int):
        self.n = n

    def matches(self, a, seen, path, atoms):
        return path[self.n] == a


def _split(s: str, sep: str) -> List[str]:
    # The first character of each piece is never taken as a separator.
    pieces = []
    start = pos = 0
    while pos < len(s):
        pos += 1
        if pos < len(s) and s[pos] == sep:
            pieces.append(s[start:pos])
            pos += 1
            start = pos
    pieces.append(s[start:])
    return pieces


def _negation(s: str) -> _Test:
    if not s:
        raise PatternError("expecting a property name")
    if len(s) > 1 and s[0] == "!":
        return _Negation(_negation(s[1:]))
    if len(s) == 2 and s[0] == "x" and s[1] in _DIGITS:
        return _NeighborTest(int(s[1]))
    return _PropertyTest(s)


def _disjunction(s: str) -> _Test:
    pieces = _split(s, ",")
    if len(pieces) == 1:
        return _negation(pieces[0])
    return _Disjunction([_negation(p) for p in pieces])


def _conjunction(s: str) -> _Test:
    pieces = _split(s, "&")
    if len(pieces) == 1:
        return _disjunction(pieces[0])
    return _Conjunction([_disjunction(p) for p in pieces])


class AtomPattern:
    """A compiled pattern; ``succeed`` is called for every matched path."""

    def __init__(self, pattern: str):
        self.pattern = pattern
        self._tests: List[_Test] = []
        self._next: List[int] = []
        save: List[int] = []
        ring: Dict[int, int] = {}
        can_branch = False
        for m in _PATTERN_PIECE.finditer(pattern):
            piece = m.group(0)
            if piece == "(":
                if not can_branch:
                    raise PatternError("too many '(' in pattern '%s'" % pattern)
                save.append(self._next[-1])
                can_branch = False
            elif piece == ")":
                if not save:
                    raise PatternError("too many ')' in pattern '%s'" % pattern)
                self._next[-1] = save.pop()
                can_branch = True
            elif piece.startswith("@"):
                nr = int(m.group(1)) if m.group(1) is not None else 10
                if not self._tests:
                    raise PatternError(
                        "ring closure must not appear first in pattern '%s'" % pattern)
                if nr not in ring:
                    ring[nr] = len(self._tests) - 1
                else:
                    self._next.append(len(self._tests) - 1)
                    self._tests.append(_RingClosure(ring.pop(nr)))
            else:
                self._next.append(len(self._tests))
                self._tests.append(_conjunction(piece))
                can_branch = True

    def __len__(self) -> int:
        return len(self._tests)

    def _search(self, a, i, seen, path, atoms) -> Iterator[Tuple[int, ...]]:
        if not self._tests[i].matches(a, seen, path, atoms):
            return
        path[i] = a
        if i < len(self._tests) - 1:
            seen.add(a)
            for n in list(atoms[path[self._next[i]]].neighbors):
                yield from self._search(n, i + 1, seen, path, atoms)
            seen.discard(a)
        else:
            yield tuple(path)

    def _paths(self, atoms, atoms_with_property) -> Iterator[Tuple[int, ...]]:
        if not self._tests:
            return
        if atoms_with_property is None:
            atoms_with_property = _index_properties(atoms)
        prop = self._tests[0].necessary_property()
        starts: Iterable[int]
        if prop is not None:
            starts = sorted(atoms_with_property.get(prop, ()))
        else:
            starts = range(len(atoms))
        seen: Set[int] = set()
        path = [-1] * len(self._tests)
        for a in starts:
            yield from self._search(a, 0, seen, path, atoms)

    def matches(self, atoms, atoms_with_property=None) -> List[Tuple[int, ...]]:
        """All matched paths, as tuples of atom indices."""
        return list(self._paths(atoms, atoms_with_property))

    def run(self, atoms, atoms_with_property=None) -> None:
        """Search ``atoms`` and call ``succeed`` for each matched path.

        ``atoms_with_property`` maps a property to the indices of the atoms
        that have it; when omitted it is built from ``atoms``.
        """
        for path in self._paths(atoms, atoms_with_property):
            self.succeed(path, atoms)

    def succeed(self, path, atoms) -> None:
        print("Path matched: " + "".join("%d " % i for i in path))


def _index_properties(atoms) -> Mapping[str, Set[int]]:
    table: Dict[str, Set[int]] = {}
    for i, atom in enumerate(atoms):
        for p in atom.properties:
            table.setdefault(p, set()).add(i)
    return table