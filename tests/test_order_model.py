import uuid

import pytest

from paydemo.order.model import (
    InvalidStateTransitionError,
    Money,
    OrderCreated,
    OrderStatus,
    PriceBreakdown,
    new_order,
    new_order_id,
)


def new_test_order():
    return new_order(
        "user-1",
        "merchant-1",
        "prod-1",
        "Widget",
        PriceBreakdown(
            original_amount=Money(10000, "USD"),
            discount_amount=Money(1000, "USD"),
            tax_amount=Money(900, "USD"),
            final_amount=Money(9900, "USD"),
        ),
        "cpn-1",
    )


def test_new_order_creates_with_pending_payment():
    o = new_test_order()
    assert o.status is OrderStatus.PENDING_PAYMENT
    assert o.user_id == "user-1"
    assert o.price.final_amount.amount == 9900
    assert o.coupon_id == "cpn-1"
    assert len(o.events) == 1
    assert o.events[0].event_name() == "order.created"


def test_order_created_event_carries_final_amount():
    o = new_test_order()
    event = o.events[0]
    assert isinstance(event, OrderCreated)
    assert event.order_id == o.id
    assert event.amount == 9900
    assert event.currency == "USD"


def test_new_order_ids_are_unique():
    ids = [str(new_order_id()) for _ in range(20)]
    assert len(set(ids)) == 20
    for order_id in ids:
        assert str(uuid.UUID(order_id)) == order_id
    order_ids = {str(new_test_order().id) for _ in range(5)}
    assert len(order_ids) == 5


def test_mark_authorized():
    o = new_test_order()
    o.clear_events()
    o.mark_authorized("txn-1")
    assert o.status is OrderStatus.AUTHORIZED
    assert o.transaction_id == "txn-1"


def test_mark_authorized_invalid_state():
    o = new_test_order()
    o.mark_authorized("txn-1")
    with pytest.raises(InvalidStateTransitionError):
        o.mark_authorized("txn-2")
    assert o.transaction_id == "txn-1"


def test_mark_paid():
    o = new_test_order()
    o.mark_authorized("txn-1")
    o.clear_events()
    o.mark_paid()
    assert o.status is OrderStatus.PAID
    assert o.paid_at is not None and o.paid_at >= o.created_at
    assert [e.event_name() for e in o.events] == ["order.paid"]


def test_mark_paid_invalid_state():
    o = new_test_order()
    with pytest.raises(InvalidStateTransitionError):
        o.mark_paid()


def test_mark_refunded():
    o = new_test_order()
    o.mark_authorized("txn-1")
    o.mark_paid()
    o.clear_events()
    o.mark_refunded()
    assert o.status is OrderStatus.REFUNDED
    assert [e.event_name() for e in o.events] == ["order.refunded"]


def test_mark_refunded_from_authorized_fails():
    o = new_test_order()
    o.mark_authorized("txn-1")
    with pytest.raises(InvalidStateTransitionError):
        o.mark_refunded()


def test_mark_failed():
    o = new_test_order()
    o.mark_failed()
    assert o.status is OrderStatus.FAILED


def test_mark_failed_invalid_state():
    o = new_test_order()
    o.mark_authorized("txn-1")
    with pytest.raises(InvalidStateTransitionError):
        o.mark_failed()


def test_full_state_machine():
    o = new_test_order()
    o.mark_authorized("txn-1")
    o.mark_paid()
    o.mark_refunded()
    assert o.status is OrderStatus.REFUNDED


def test_clear_events_empties_the_list():
    o = new_test_order()
    first = o.clear_events()
    assert len(first) == 1
    assert o.clear_events() == []
    assert o.events == []