from enum import Enum

from genfx.exceptions import InvalidStateTransitionError


class AlgorithmState(str, Enum):
    CREATED = "created"
    INITIALIZED = "initialized"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


STEPPABLE_STATES = {
    AlgorithmState.INITIALIZED,
    AlgorithmState.RUNNING,
}

# Terminal states may be re-initialized to start a fresh run.
VALID_TRANSITIONS: dict[AlgorithmState, set[AlgorithmState]] = {
    AlgorithmState.CREATED: {
        AlgorithmState.INITIALIZED,
        AlgorithmState.FAILED,
    },
    AlgorithmState.INITIALIZED: {
        AlgorithmState.RUNNING,
        AlgorithmState.FAILED,
    },
    AlgorithmState.RUNNING: {
        AlgorithmState.COMPLETED,
        AlgorithmState.FAILED,
    },
    AlgorithmState.COMPLETED: {
        AlgorithmState.INITIALIZED,
    },
    AlgorithmState.FAILED: {
        AlgorithmState.INITIALIZED,
    },
}


def is_valid_transition(current: AlgorithmState, new: AlgorithmState) -> bool:
    if current == new:
        return True
    return new in VALID_TRANSITIONS.get(current, set())


def validate_transition(current: AlgorithmState, new: AlgorithmState) -> None:
    if not is_valid_transition(current, new):
        valid_next = VALID_TRANSITIONS.get(current, set())
        raise InvalidStateTransitionError(
            f"Invalid state transition: {current.value} -> {new.value}. "
            f"Valid transitions from {current.value}: {sorted(s.value for s in valid_next)}"
        )


def is_steppable(state: AlgorithmState) -> bool:
    return state in STEPPABLE_STATES
