"""
Token-sequence prefix tree for SimpleNER.

Stores values at paths of hashable keys (tokens) and answers longest-prefix
queries against a token stream. A node may hold a value and still have
children, so a short term and a longer term sharing its prefix coexist.
"""

import logging
from typing import (
    Any,
    Dict,
    Generic,
    Hashable,
    Iterable,
    Iterator,
    List,
    Optional,
    Sequence,
    Tuple,
    TypeVar,
)

from .core import NO_MATCH, PathLookupError, PrefixMatch

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class PrefixTreeNode(Generic[K, V]):
    """A trie node: child edges keyed by token plus an optional value."""

    __slots__ = ("children", "has_value", "value")

    def __init__(self):
        self.children: Dict[K, "PrefixTreeNode[K, V]"] = {}
        self.has_value = False
        self.value: Optional[V] = None

    def set_value(self, value: V) -> None:
        self.has_value = True
        self.value = value

    def reset_value(self) -> None:
        self.has_value = False
        self.value = None

    @property
    def is_garbage(self) -> bool:
        """A node with neither value nor children must not stay in the tree."""
        return not self.has_value and not self.children


class PrefixTree(Generic[K, V]):
    """
    Generic prefix tree keyed by sequences of tokens.

    Paths are compared element by element with exact equality; any case folding
    is the caller's responsibility.
    """

    def __init__(self):
        self.root: PrefixTreeNode[K, V] = PrefixTreeNode()
        self._count = 0

    def __len__(self) -> int:
        return self._count

    def __contains__(self, path) -> bool:
        return self.has_value(path)

    def _find_node(self, path: Iterable[K]) -> Optional[PrefixTreeNode[K, V]]:
        node = self.root
        for key in path:
            node = node.children.get(key)
            if node is None:
                return None
        return node

    def _find_or_create_node(self, path: Iterable[K]) -> PrefixTreeNode[K, V]:
        node = self.root
        for key in path:
            child = node.children.get(key)
            if child is None:
                child = PrefixTreeNode()
                node.children[key] = child
            node = child
        return node

    def set(self, path: Iterable[K], value: V) -> None:
        """Store ``value`` at ``path``, overwriting any existing value."""
        node = self._find_or_create_node(path)
        if not node.has_value:
            self._count += 1
        node.set_value(value)

    def try_set(self, path: Iterable[K], value: V) -> bool:
        """
        Store ``value`` at ``path`` only if no value is there yet.

        Returns:
            True if the value was installed, False if the path already held one
        """
        path = tuple(path)
        node = self._find_node(path)
        if node is not None and node.has_value:
            return False
        self.set(path, value)
        return True

    def get(self, path: Iterable[K]) -> V:
        """Return the value at ``path``; raise PathLookupError if there is none."""
        path = tuple(path)
        node = self._find_node(path)
        if node is None or not node.has_value:
            raise PathLookupError(path)
        return node.value

    def try_get(self, path: Iterable[K], default: Optional[V] = None) -> Optional[V]:
        node = self._find_node(path)
        if node is None or not node.has_value:
            return default
        return node.value

    def has_value(self, path: Iterable[K]) -> bool:
        node = self._find_node(path)
        return node is not None and node.has_value

    def remove(self, path: Iterable[K]) -> bool:
        """
        Remove the value stored at ``path`` and prune the dead branch.

        Walks down collecting the (parent, key) edges, clears the value, then
        walks back up deleting every node left with no value and no children.
        Pruning stops at the first ancestor that still holds a value or still
        has another child. The root is never removed.

        Args:
            path: Sequence of keys identifying the entry

        Returns:
            True if a value was removed, False if the path held no value
        """
        stack: List[Tuple[PrefixTreeNode[K, V], K]] = []
        node = self.root
        for key in path:
            child = node.children.get(key)
            if child is None:
                return False
            stack.append((node, key))
            node = child

        if not node.has_value:
            return False

        node.reset_value()
        self._count -= 1

        while stack and node.is_garbage:
            parent, key = stack.pop()
            del parent.children[key]
            logger.debug("Pruned node for key %r", key)
            node = parent

        return True

    def longest_prefix_match(self, sequence: Sequence[K], start: int = 0) -> PrefixMatch:
        """
        Find the deepest valued node reachable by following ``sequence``.

        Args:
            sequence: Tokens to follow from the root
            start: Index in ``sequence`` to begin from

        Returns:
            PrefixMatch with the number of tokens consumed and the value, or an
            empty match when no valued node lies on the path
        """
        best = NO_MATCH
        node = self.root
        depth = 0
        for index in range(start, len(sequence)):
            node = node.children.get(sequence[index])
            if node is None:
                break
            depth += 1
            if node.has_value:
                best = PrefixMatch(length=depth, value=node.value)
        return best

    def clear(self) -> None:
        self.root = PrefixTreeNode()
        self._count = 0

    def items(self) -> Iterator[Tuple[Tuple[K, ...], V]]:
        """Yield ``(path, value)`` for every stored entry, depth first."""
        pending: List[Tuple[Tuple[Any, ...], PrefixTreeNode[K, V]]] = [((), self.root)]
        while pending:
            path, node = pending.pop()
            if node.has_value:
                yield path, node.value
            for key, child in node.children.items():
                pending.append((path + (key,), child))
