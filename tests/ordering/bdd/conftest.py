"""Shared BDD fixtures and step definitions for the Ordering domain."""

import json

import pytest
from ordering.order.acceptance import AcceptOrder
from ordering.order.order import Order
from ordering.order.placement import PlaceOrder
from ordering.order.status import UpdateOrderStatus
from protean import current_domain
from protean.exceptions import InvalidOperationError, ValidationError
from pytest_bdd import given, parsers, then, when


@pytest.fixture()
def error():
    """Container for captured domain errors."""
    return {"exc": None}


@pytest.fixture()
def cart():
    """Lines a customer is about to order, as product id and quantity."""
    return []


def place_order_for(customer_id, lines, error):
    command = PlaceOrder(
        customer_id=customer_id,
        name="Asha Rai",
        email="asha@example.com",
        phone="9800000000",
        address="Lakeside, Pokhara",
        items=json.dumps([{"product_id": product_id, "quantity": quantity} for product_id, quantity in lines]),
    )
    try:
        return current_domain.process(command, asynchronous=False)
    except ValidationError as exc:
        error["exc"] = exc
        return None


def run_command(command, error):
    try:
        current_domain.process(command, asynchronous=False)
    except (ValidationError, InvalidOperationError) as exc:
        error["exc"] = exc


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('the catalogue lists "{product_id}" at {price:d}'))
def catalogue_lists(catalogue, product_id, price):
    catalogue.add_product(product_id, product_id.title(), price=price)


@given(parsers.cfparse('the catalogue lists "{product_id}" at {price:d} as inactive'))
def catalogue_lists_inactive(catalogue, product_id, price):
    catalogue.add_product(product_id, product_id.title(), price=price, is_active=False)


@given(parsers.cfparse('the cart holds {quantity:d} of "{product_id}"'))
def cart_holds(cart, product_id, quantity):
    cart.append((product_id, quantity))


@given("a placed order", target_fixture="order_id")
def placed_order(catalogue, error):
    catalogue.add_product("thali", "Dal Bhat Thali", price=200)
    return place_order_for("cust-bdd", [("thali", 1)], error)


@given(parsers.cfparse('the order was accepted by "{operator_id}"'))
def order_was_accepted(order_id, operator_id, error):
    run_command(AcceptOrder(order_id=order_id, operator_id=operator_id), error)
    assert error["exc"] is None


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order status is "{status}"'))
def order_status_is(order_id, status):
    assert current_domain.repository_for(Order).get(order_id).status == status


@then(parsers.cfparse("the order fails with {error_name}"))
def order_fails_with(error, error_name):
    assert error["exc"] is not None
    assert type(error["exc"]).__name__ == error_name


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when("the customer places the order", target_fixture="order_id")
def customer_places_order(cart, error):
    return place_order_for("cust-bdd", cart, error)


@when(parsers.cfparse('operator "{operator_id}" accepts the order'))
def operator_accepts(order_id, operator_id, error):
    run_command(AcceptOrder(order_id=order_id, operator_id=operator_id), error)


@when(parsers.cfparse('the operator sets the status to "{status}"'))
def operator_sets_status(order_id, status, error):
    run_command(UpdateOrderStatus(order_id=order_id, status=status, operator_id="op-001"), error)
