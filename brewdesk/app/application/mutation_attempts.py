from __future__ import annotations

from brewdesk.app.application.state.session_state import SessionState


def mutation_key(resource: str, entity_id: int | str) -> str:
    return f"{resource}:{entity_id}"


def begin_mutation(state: SessionState, key: str) -> bool:
    with state.lock:
        if key in state.mutation_in_flight:
            return False
        state.mutation_in_flight.add(key)
        return True


def end_mutation(state: SessionState, key: str) -> None:
    with state.lock:
        state.mutation_in_flight.discard(key)
