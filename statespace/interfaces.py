"""
Abstract interfaces for board states and bidirectional problems.

These interfaces define the contract that external search algorithms
rely on: boards are value-comparable, hashable states that can be copied
before branching, and bidirectional problems expose a forward and a
reverse problem over the same successor semantics.
"""

from abc import ABC, abstractmethod


class BoardInterface(ABC):
    """
    Abstract interface for board states.

    A board state is a mutable grid owned by a single caller. Search
    algorithms compare and hash boards to detect repeated states, so
    equality and hashing must be structural.

    Attributes:
        size: Board dimension (fixed at construction)
    """

    @property
    @abstractmethod
    def size(self) -> int:
        """Board dimension."""
        pass

    @abstractmethod
    def copy(self) -> 'BoardInterface':
        """
        Create a deep copy of this board state.

        Returns:
            New board with identical occupancy.
        """
        pass

    @abstractmethod
    def __eq__(self, other) -> bool:
        pass

    @abstractmethod
    def __hash__(self) -> int:
        pass

    @abstractmethod
    def __str__(self) -> str:
        pass


class BidirectionalProblemInterface(ABC):
    """
    Abstract interface for problems searchable from both ends.

    Meet-in-the-middle algorithms alternate expansion between the two
    problems and test frontier membership across directions, so both
    problems must share the same action and result functions.
    """

    @abstractmethod
    def original(self):
        """Problem searched from the initial state towards the goal."""
        pass

    @abstractmethod
    def reverse(self):
        """Problem searched from the goal state back to the initial state."""
        pass
