"""Order Status Machine — decides whether a status change is allowed.

Invariants:
    - New orders always start as PENDING
    - Default mode is unconstrained: any enumerated status from any state
    - Strict mode follows STRICT_TRANSITIONS; COMPLETED and CANCELLED are terminal
    - Re-setting the current status is always allowed (touches updated_at only)

Design Decisions:
    - Unconstrained by default: fulfilment is operated by hand and staff may
      need to correct a status in any direction
    - Strict table opt-in via settings.enforce_status_transitions
"""

from app.core.domain_types import OrderStatus
from app.core.errors import InvalidStatusTransitionError

INITIAL_STATUS = OrderStatus.PENDING

TERMINAL_STATUSES = frozenset({OrderStatus.COMPLETED, OrderStatus.CANCELLED})

STRICT_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.CONFIRMED, OrderStatus.CANCELLED}),
    OrderStatus.CONFIRMED: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.COMPLETED}),
    OrderStatus.COMPLETED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


def is_transition_allowed(
    current: OrderStatus, requested: OrderStatus, *, strict: bool = False,
) -> bool:
    if not strict or current == requested:
        return True
    return requested in STRICT_TRANSITIONS[current]


def check_status_transition(
    current: OrderStatus, requested: OrderStatus, *, strict: bool = False,
) -> InvalidStatusTransitionError | None:
    """Return the rejection error, or None if the change may be applied."""
    if is_transition_allowed(current, requested, strict=strict):
        return None
    return InvalidStatusTransitionError(current.value, requested.value)
