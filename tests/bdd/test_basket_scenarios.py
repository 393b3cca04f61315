"""BDD tests for basket lines."""

from pytest_bdd import parsers, scenarios, then, when

from storefront.basket.items import AddBasketItem, DecrementBasketItem, RemoveBasketItem
from storefront.basket.view import current_user
from storefront.gate import dispatch

scenarios("features/basket.feature")


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.re(r"the shopper adds (?P<quantity>\d+) units? to the basket"), converters={"quantity": int})
def add_to_basket(shopper, product_id, quantity, attempt):
    command = AddBasketItem(user_id=shopper.user_id, product_id=product_id, quantity=quantity)
    attempt(lambda: dispatch(command, shopper))


@when("the shopper decrements the basket line")
def decrement_line(shopper, product_id, attempt):
    command = DecrementBasketItem(user_id=shopper.user_id, product_id=product_id)
    attempt(lambda: dispatch(command, shopper))


@when("the shopper removes the product from the basket")
def remove_line(shopper, product_id, attempt):
    command = RemoveBasketItem(user_id=shopper.user_id, product_id=product_id)
    attempt(lambda: dispatch(command, shopper))


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.re(r"the basket has (?P<count>\d+) lines?"), converters={"count": int})
def basket_has_lines(shopper, count):
    assert current_user(shopper).basket_count == count


@then(parsers.cfparse("the basket line holds {quantity:d} units"))
def basket_line_holds(shopper, quantity):
    assert current_user(shopper).lines[0].quantity == quantity


@then(parsers.cfparse("the basket total is {total:f}"))
def basket_total_is(shopper, total):
    assert current_user(shopper).basket_total == total
