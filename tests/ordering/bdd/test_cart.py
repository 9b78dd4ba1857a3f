"""BDD tests for cart line items."""

from pytest_bdd import scenarios

scenarios("features/cart.feature")
