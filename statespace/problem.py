"""
Problem records and the bidirectional problem adapter.

A Problem is a plain data record holding concrete function values
(action generator, transition function, goal predicate, step cost). Search
algorithms consume it through ``actions``, ``result``, ``is_goal`` and
``step_cost`` without knowing which formulation produced it.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

from .interfaces import BidirectionalProblemInterface


ActionsFunction = Callable[[Any], List[Any]]
ResultFunction = Callable[[Any, Any], Any]
GoalTest = Callable[[Any], bool]
StepCostFunction = Callable[[Any, Any, Any], float]


def uniform_step_cost(state: Any, action: Any, next_state: Any) -> float:
    """Every action costs 1."""
    return 1.0


@dataclass(frozen=True)
class Problem:
    """
    Search problem formulation.

    Attributes:
        initial_state: State the search starts from
        actions_fn: Maps a state to its applicable actions
        result_fn: Maps (state, action) to the successor state
        goal_test: Predicate recognising goal states
        step_cost_fn: Maps (state, action, successor) to a cost; uniform when omitted
    """
    initial_state: Any
    actions_fn: ActionsFunction
    result_fn: ResultFunction
    goal_test: GoalTest
    step_cost_fn: StepCostFunction = field(default=uniform_step_cost)

    def actions(self, state: Any) -> List[Any]:
        return self.actions_fn(state)

    def result(self, state: Any, action: Any) -> Any:
        return self.result_fn(state, action)

    def is_goal(self, state: Any) -> bool:
        return bool(self.goal_test(state))

    def step_cost(self, state: Any, action: Any, next_state: Any) -> float:
        return self.step_cost_fn(state, action, next_state)

    def successors(self, state: Any) -> List[tuple]:
        """All (action, successor) pairs reachable from ``state`` in one step."""
        return [(action, self.result_fn(state, action)) for action in self.actions_fn(state)]


def equals_state(target: Any) -> GoalTest:
    """Goal predicate matching states equal to ``target``."""
    def goal_test(state: Any) -> bool:
        return state == target
    return goal_test


def _check_concrete_state(state: Any, role: str) -> None:
    """Raise TypeError unless ``state`` is usable as an equality-comparable search state."""
    if state is None or callable(state):
        raise TypeError(f"{role} state must be a concrete state, got {state!r}")
    if type(state).__eq__ is object.__eq__:
        raise TypeError(f"{role} state of type {type(state).__name__} has no structural equality")
    try:
        hash(state)
    except TypeError:
        raise TypeError(f"{role} state of type {type(state).__name__} is not hashable") from None


class BidirectionalProblem(BidirectionalProblemInterface):
    """
    A problem paired with its reverse.

    The reverse problem starts from the concrete goal state and succeeds on
    reaching the original initial state. Both directions use the same action,
    result and step-cost functions, so successors generated from either end
    are directly comparable.
    """

    def __init__(self, problem: Problem, goal_state: Any):
        """
        Wrap ``problem`` with a reverse problem.

        Args:
            problem: Forward problem; its goal predicate is replaced by
                equality with ``goal_state``
            goal_state: Concrete goal state
        """
        _check_concrete_state(problem.initial_state, 'Initial')
        _check_concrete_state(goal_state, 'Goal')
        self._goal_state = goal_state
        self._original = Problem(
            problem.initial_state, problem.actions_fn, problem.result_fn,
            equals_state(goal_state), problem.step_cost_fn
        )
        self._reverse = Problem(
            goal_state, problem.actions_fn, problem.result_fn,
            equals_state(problem.initial_state), problem.step_cost_fn
        )

    @classmethod
    def from_functions(
        cls,
        initial_state: Any,
        goal_state: Any,
        actions_fn: ActionsFunction,
        result_fn: ResultFunction,
        step_cost_fn: Optional[StepCostFunction] = None
    ) -> 'BidirectionalProblem':
        """Build a bidirectional problem directly from its functions."""
        problem = Problem(
            initial_state, actions_fn, result_fn, equals_state(goal_state),
            step_cost_fn or uniform_step_cost
        )
        return cls(problem, goal_state)

    @property
    def goal_state(self) -> Any:
        return self._goal_state

    def original(self) -> Problem:
        return self._original

    def reverse(self) -> Problem:
        return self._reverse
