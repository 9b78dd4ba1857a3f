"""Storefront load test scenarios.

Two journeys: a browsing shopper who only reads the catalogue, and a buyer
who fills a cart, checks out and confirms payment through the fake gateway.
Each Locust user keeps its own session cookie, so carts never collide.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import cart_item_data, customer_info, payment_confirmation
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import ShopperState


class CheckoutJourney(SequentialTaskSet):
    """Browse -> Add 1-3 products -> Review cart -> Checkout -> Confirm -> History."""

    def on_start(self):
        self.state = ShopperState()

    @task
    def browse(self):
        with self.client.get("/products", catch_response=True, name="GET /products") as resp:
            if resp.status_code != 200:
                resp.failure(f"List products failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()
                return
            self.state.products = [p for p in resp.json() if p["stock"] > 0]
            if not self.state.products:
                resp.failure("Catalogue is empty; POST /products/seed first")
                self.interrupt()

    @task
    def fill_cart(self):
        for product in random.sample(self.state.products, k=min(len(self.state.products), random.randint(1, 3))):
            with self.client.post(
                "/cart/items",
                json=cart_item_data(product["id"], product["stock"]),
                catch_response=True,
                name="POST /cart/items",
            ) as resp:
                if resp.status_code == 200:
                    self.state.cart_lines = len(resp.json()["items"])
                else:
                    resp.failure(f"Add to cart failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def review_cart(self):
        self.client.get("/cart", name="GET /cart")

    @task
    def checkout(self):
        with self.client.post(
            "/checkout",
            json={"customerInfo": customer_info()},
            catch_response=True,
            name="POST /checkout",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_id = resp.json()["orderId"]
            else:
                resp.failure(f"Checkout failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def confirm(self):
        body = payment_confirmation()
        with self.client.post(
            f"/checkout/{self.state.order_id}/confirm",
            json=body,
            catch_response=True,
            name="POST /checkout/{id}/confirm",
        ) as resp:
            expected = 200 if body["succeeded"] else 402
            if resp.status_code == expected:
                resp.success()
                if body["succeeded"]:
                    self.state.completed_orders.append(self.state.order_id)
            else:
                resp.failure(f"Confirm failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def history(self):
        self.client.get("/orders/history", name="GET /orders/history")
        self.interrupt()


class BrowsingJourney(SequentialTaskSet):
    """List products -> view 1-3 product pages."""

    @task
    def browse(self):
        resp = self.client.get("/products", name="GET /products")
        products = resp.json() if resp.status_code == 200 else []
        for product in random.sample(products, k=min(len(products), random.randint(1, 3))):
            self.client.get(f"/products/{product['id']}", name="GET /products/{id}")
        self.interrupt()


class ShopperUser(HttpUser):
    """Buyers and browsers in a 1:3 mix."""

    wait_time = between(1, 3)
    tasks = {CheckoutJourney: 1, BrowsingJourney: 3}
