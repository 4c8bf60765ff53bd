# paydemo

A small payment domain: orders with price breakdowns, coupons, tax rates and
token-based authentication, plus in-memory repositories and request handlers
that take and return JSON.

Everything runs in-process and has no third-party dependencies.

## Install

    pip install .

To run the tests:

    pip install ".[test]"
    pytest

## Layout

- `paydemo.shared.money`: `Money`, an immutable amount in minor units
  (cents) with a currency code. `add`, `subtract` and `greater_than` raise
  `CurrencyMismatchError` for different currencies; `subtract` raises
  `NegativeAmountError` if the result would be negative;
  `multiply_basis_point` computes percentages, where 1000 bp is 10.00 %.
- `paydemo.shared.events`: `DomainEvent`, the base of every domain event.
- `paydemo.shared.httputil`: `Request`, `Response`, `Router` and the
  `ok`, `created`, `error` and `use_case_error` response helpers.
- `paydemo.shared.auth`: `with_user_id` and `user_id_from_context` carry the
  authenticated user ID on a request context.
- `paydemo.coupon`: the `Coupon` aggregate (`new_coupon`, `apply`,
  `rollback`, `mark_expired`), `InMemoryCouponRepository`, `CouponUseCase`
  and `CouponHandler`.
- `paydemo.identity`: `User`, `Session`, `InMemoryUserRepository`,
  `InMemorySessionRepository`, `AuthUseCase` and `AuthMiddleware`.
- `paydemo.order`: the `Order` aggregate and its state machine
  (PENDING_PAYMENT → AUTHORIZED → PAID → REFUNDED, or PENDING_PAYMENT →
  FAILED), `calculate_final_amount`, the ports in `paydemo.order.ports`,
  the adapters `CouponAdapter`, `InMemoryOrderRepository` and
  `StaticTaxQuery`, `OrderUseCase` and `OrderHandler`.

## Pricing

The final amount is the original price, less the discount, plus tax on the
discounted amount. Fractions of a cent are dropped.

```python
from paydemo.shared.money import Money
from paydemo.order.pricing import calculate_final_amount

final, discount, tax = calculate_final_amount(
    Money(10000, "USD"), "PERCENTAGE", 1000, 1000
)
# discount: 1000 USD, tax: 900 USD, final: 9900 USD
```

A fixed discount larger than the price raises `DiscountExceedsAmountError`.

## Coupons

```python
from datetime import datetime, timedelta, timezone

from paydemo.coupon.repository import InMemoryCouponRepository
from paydemo.coupon.usecase import CouponUseCase, CreateCouponRequest

now = datetime.now(timezone.utc)
use_case = CouponUseCase(InMemoryCouponRepository())
coupon = use_case.create_coupon(
    CreateCouponRequest(
        code="SAVE10",
        discount_type="PERCENTAGE",
        discount_value=1000,
        max_uses=100,
        valid_from=now,
        valid_until=now + timedelta(days=7),
    )
)
```

A coupon becomes EXHAUSTED when its use count reaches `max_uses`
(0 means unlimited). Creating a second coupon with the same code raises
`CouponCodeConflictError`; an unknown discount type raises
`CouponNotApplicableError`.

## Handlers

Handlers are plain callables from `Request` to `Response`, registered on a
`Router` by exact path:

```python
from paydemo.coupon.handler import CouponHandler
from paydemo.shared.httputil import Request, Router

router = Router()
CouponHandler(use_case).register_routes(router)

response = router.dispatch(
    Request(method="GET", path="/coupons", query={"code": "SAVE10"})
)
response.status         # 200
response.json()["code"] # "SAVE10"
```

`OrderHandler` serves `/orders` (POST to create, GET with `?id=` to look up),
`/orders/capture` and `/orders/refund`. It reads the user ID from the request
context, so wrap its handlers with `AuthMiddleware(auth_use_case).handle(...)`,
which checks the `Authorization: Bearer ...` header and answers 401 when the
token is missing, unknown, expired or belongs to a banned user.

The in-memory identity repositories are seeded with a few demo users and
sessions unless you pass your own `User` and `Session` objects.

## Orders

`OrderUseCase.create_order` looks the product up, applies the coupon,
adds tax, creates the order and asks the payment port to authorise the final
amount. If the charge fails, the coupon use is rolled back, the order is saved
as FAILED and `PaymentFailedError` is raised with the order on its `order`
attribute. `capture_order` and `refund_order` move an authorised order on to
PAID and REFUNDED; an order belonging to another user is reported as
`OrderNotFoundError`.

## What the package does not do

- It has no product catalogue and no payment provider. `CatalogQuery` and
  `PaymentCommand` in `paydemo.order.ports` are abstract; supply your own
  implementations.
- It runs no web server. `Router.dispatch` is called directly; hooking it up
  to a real HTTP server is left to you.
- Storage is in memory only and is lost when the process ends.