from __future__ import annotations

from typing import Dict, Generic, Iterable, Iterator, List, Optional, TypeVar

from .game import ListMoves
from .moves import Move

G = TypeVar("G", bound=ListMoves)


class MoveNode(Generic[G]):
    """One position in the move tree: games ending here plus the moves played next."""

    __slots__ = ("games", "children")

    def __init__(self) -> None:
        self.games: List[G] = []
        self.children: Dict[Move, MoveNode[G]] = {}

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"MoveNode(games={len(self.games)}, children={[str(m) for m in self.children]})"


class MoveTree(Generic[G]):
    """Games stored by the moves played. Useful for building opening explorers.

    >>> from opening_trie import AlgebraicMove, Game, MoveTree
    >>> tree = MoveTree([
    ...     Game.from_notation(["e4", "e5"]),
    ...     Game.from_notation(["e4", "c5"]),
    ...     Game.from_notation(["e4", "c5", "Nf3"]),
    ... ])
    >>> sicilian = tree.with_next(AlgebraicMove.from_notation("e4")).with_next(
    ...     AlgebraicMove.from_notation("c5"))
    >>> sicilian.count()
    2

    The tree is built once from ``games`` and not modified afterwards, so any
    number of views may read it at the same time.
    """

    def __init__(self, games: Iterable[G] = ()) -> None:
        self.root: MoveNode[G] = MoveNode()
        for game in games:
            node = self.root
            for move in game.list_moves():
                child = node.children.get(move)
                if child is None:
                    child = node.children[move] = MoveNode()
                node = child
            node.games.append(game)

    def with_next(self, move: Move) -> "MoveTreeView[G]":
        """Return the subset of games whose next move is ``move``."""
        return self.view().with_next(move)

    def view(self) -> "MoveTreeView[G]":
        """Return a view over every game in the tree."""
        return MoveTreeView(self.root)

    def find(self, moves: Iterable[Move]) -> "MoveTreeView[G]":
        view = self.view()
        for move in moves:
            view = view.with_next(move)
        return view


class MoveTreeView(Generic[G]):
    """A read-only cursor over a subtree of a :class:`MoveTree`.

    A view with no node is absent: no game follows the prefix that produced
    it. Narrowing an absent view gives another absent view.
    """

    __slots__ = ("_node",)

    def __init__(self, node: Optional[MoveNode[G]] = None) -> None:
        self._node = node

    @property
    def is_present(self) -> bool:
        return self._node is not None

    def __bool__(self) -> bool:
        return self._node is not None

    def with_next(self, move: Move) -> "MoveTreeView[G]":
        """Behaves like :meth:`MoveTree.with_next`."""
        if self._node is None:
            return self
        return MoveTreeView(self._node.children.get(move))

    def branches(self) -> List[Move]:
        """Moves played next from this position, in no particular order."""
        if self._node is None:
            return []
        return list(self._node.children)

    def iter(self) -> Iterator[G]:
        """Yield every game at or below this position.

        Depth first, with an explicit stack of child iterators so that long
        games cannot exhaust the interpreter's recursion limit. Sibling order
        is not defined.
        """
        node = self._node
        if node is None:
            return
        yield from node.games
        stack: List[Iterator[MoveNode[G]]] = [iter(node.children.values())]
        while stack:
            child = next(stack[-1], None)
            if child is None:
                stack.pop()
                continue
            yield from child.games
            stack.append(iter(child.children.values()))

    def __iter__(self) -> Iterator[G]:
        return self.iter()

    def count(self) -> int:
        return sum(1 for _ in self.iter())

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"MoveTreeView({self._node!r})"
