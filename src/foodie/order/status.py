"""Order status ordering: the single table behind every transition check.

State Machine (4 states, forward only, skipping allowed):
    ORDER_RECEIVED → PREPARING → OUT_FOR_DELIVERY → DELIVERED

Position in ``STATUS_ORDER`` is the only thing that defines progression; the
enum values carry no ordering of their own.
"""

from enum import Enum


class OrderStatus(Enum):
    ORDER_RECEIVED = "ORDER_RECEIVED"
    PREPARING = "PREPARING"
    OUT_FOR_DELIVERY = "OUT_FOR_DELIVERY"
    DELIVERED = "DELIVERED"


STATUS_ORDER = (
    OrderStatus.ORDER_RECEIVED,
    OrderStatus.PREPARING,
    OrderStatus.OUT_FOR_DELIVERY,
    OrderStatus.DELIVERED,
)

TERMINAL_STATUS = STATUS_ORDER[-1]


def coerce_status(value) -> OrderStatus | None:
    """Map a status or its string value to ``OrderStatus``; unknown values give None."""
    if isinstance(value, OrderStatus):
        return value
    try:
        return OrderStatus(value)
    except ValueError:
        return None


def status_index(value) -> int:
    """Position of ``value`` in the declared ordering, -1 when unrecognised."""
    status = coerce_status(value)
    if status is None:
        return -1
    return STATUS_ORDER.index(status)


def is_valid_transition(current, target) -> bool:
    """True iff ``target`` sits strictly after ``current`` in ``STATUS_ORDER``.

    An unrecognised status on either side is never a valid transition.
    """
    current_index = status_index(current)
    target_index = status_index(target)
    if current_index < 0 or target_index < 0:
        return False
    return target_index > current_index


def next_status(current) -> OrderStatus | None:
    """The status one step after ``current``; None at the terminal status."""
    index = status_index(current)
    if index < 0 or index + 1 >= len(STATUS_ORDER):
        return None
    return STATUS_ORDER[index + 1]
