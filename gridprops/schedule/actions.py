"""ACTIONX programs and their ordered container."""

from dataclasses import dataclass
from typing import Iterator, List, Optional

from ..exceptions import ActionNotFoundError
from ..infrastructure.logging import get_logger

logger = get_logger(__name__)


@dataclass
class ActionX:
    """Run bookkeeping of one action. Times are seconds since the epoch."""
    name: str
    max_run: int = 1
    min_wait: float = 0.0
    start_time: float = 0.0
    run_count: int = 0
    last_run: Optional[float] = None

    def ready(self, sim_time: float) -> bool:
        """Whether the action may be evaluated at ``sim_time``."""
        if self.run_count >= self.max_run:
            return False
        if sim_time < self.start_time:
            return False
        if self.run_count == 0 or self.min_wait <= 0:
            return True
        return sim_time - self.last_run > self.min_wait

    def mark_run(self, sim_time: float):
        self.run_count += 1
        self.last_run = sim_time


class Actions:
    """Actions in declaration order; re-adding a name replaces it in place."""

    def __init__(self):
        self._actions: List[ActionX] = []

    def __len__(self) -> int:
        return len(self._actions)

    def empty(self) -> bool:
        return not self._actions

    def add(self, action: ActionX):
        for position, existing in enumerate(self._actions):
            if existing.name == action.name:
                logger.debug(f"Updating action {action.name}")
                self._actions[position] = action
                return
        logger.debug(f"Adding action {action.name}")
        self._actions.append(action)

    def get(self, name: str) -> ActionX:
        for action in self._actions:
            if action.name == name:
                return action
        raise ActionNotFoundError(f"No such action: {name}", context={'action': name})

    def __getitem__(self, index: int) -> ActionX:
        return self._actions[index]

    def ready(self, sim_time: float) -> bool:
        return any(action.ready(sim_time) for action in self._actions)

    def pending(self, sim_time: float) -> List[ActionX]:
        return [action for action in self._actions if action.ready(sim_time)]

    def __iter__(self) -> Iterator[ActionX]:
        return iter(self._actions)
