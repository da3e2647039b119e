"""Order Status Machine — unconstrained default and the opt-in strict table."""

import pytest

from app.core.domain_types import OrderStatus
from app.core.order_status import (
    INITIAL_STATUS,
    STRICT_TRANSITIONS,
    TERMINAL_STATUSES,
    check_status_transition,
    is_transition_allowed,
)


def test_initial_status_is_pending():
    assert INITIAL_STATUS == OrderStatus.PENDING


@pytest.mark.parametrize("current", list(OrderStatus))
@pytest.mark.parametrize("requested", list(OrderStatus))
def test_default_mode_allows_every_pair(current, requested):
    assert check_status_transition(current, requested) is None


def test_strict_table_covers_every_status():
    assert set(STRICT_TRANSITIONS) == set(OrderStatus)


@pytest.mark.parametrize("terminal", sorted(TERMINAL_STATUSES))
def test_strict_terminal_states_have_no_exits(terminal):
    for requested in OrderStatus:
        if requested != terminal:
            assert not is_transition_allowed(terminal, requested, strict=True)


def test_strict_allows_same_state_rewrite():
    assert is_transition_allowed(
        OrderStatus.SHIPPED, OrderStatus.SHIPPED, strict=True,
    )


def test_strict_rejection_carries_both_states():
    error = check_status_transition(
        OrderStatus.PENDING, OrderStatus.COMPLETED, strict=True,
    )
    assert error is not None
    assert error.code == "INVALID_STATUS_TRANSITION"
    assert error.http_status == 409
    assert (error.current, error.requested) == ("pending", "completed")


def test_strict_cancel_allowed_before_shipping_only():
    assert is_transition_allowed(
        OrderStatus.CONFIRMED, OrderStatus.CANCELLED, strict=True,
    )
    assert not is_transition_allowed(
        OrderStatus.SHIPPED, OrderStatus.CANCELLED, strict=True,
    )
