"""Storefront Load Testing — Locust entry point.

Usage:
    # Seed the catalogue, then start the web UI:
    curl -X POST http://localhost:8000/products/seed
    locust -f loadtests/locustfile.py --host http://localhost:8000

    # Headless (CI mode):
    locust -f loadtests/locustfile.py --headless \
           -u 50 -r 5 -t 300s --csv=results/loadtest --host http://localhost:8000
"""

import logging
import time

import requests
from locust import events

# Import all user classes so Locust discovers them
from loadtests.helpers.response import extract_error_detail
from loadtests.scenarios.storefront import ShopperUser  # noqa: F401

logger = logging.getLogger("loadtest")


@events.request.add_listener
def on_request(request_type, name, response, exception, **_kw):
    """Log error details for every failed request."""
    if exception:
        logger.error("[EXCEPTION] %s %s: %s", request_type, name, exception)
    elif response is not None and response.status_code >= 400:
        detail = extract_error_detail(response)
        logger.error("[%s] %s %s: %s", response.status_code, request_type, name, detail)


@events.test_start.add_listener
def on_test_start(environment, **_kwargs):
    """Log a marker when load test begins, and make sure the gateway succeeds."""
    print(f"\n[LOADTEST] Started at {time.strftime('%H:%M:%S')}")
    print(f"[LOADTEST] Target host: {environment.host}")
    if environment.host:
        try:
            requests.post(
                f"{environment.host}/payments/gateway/configure",
                json={"should_succeed": True},
                timeout=5,
            )
        except requests.RequestException as e:
            print(f"[LOADTEST] Could not configure the fake gateway: {e}")
    print()


@events.test_stop.add_listener
def on_test_stop(**_kwargs):
    print(f"\n[LOADTEST] Stopped at {time.strftime('%H:%M:%S')}")
