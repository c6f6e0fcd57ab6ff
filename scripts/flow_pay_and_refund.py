#!/usr/bin/env python3
"""
Payment and refund flow script.

Only orchestrates API calls against a running server.

Usage:
    python scripts/flow_pay_and_refund.py --user-id u1 --amount 50.00
    python scripts/flow_pay_and_refund.py --user-id u1 --amount 50.00 --card 4000000000000000

Flow:
    1. Process payment
    2. Fetch payment status
    3. Validate payment
    4. Refund payment
    5. Attempt a second refund (expected 409)
    6. List payment history
"""

import argparse
import json
import sys

import httpx

DEFAULT_BASE_URL = "http://localhost:8000"


def api_request(base_url: str, method: str, endpoint: str, data: dict | None = None) -> dict:
    """Make API request and return status with decoded body."""
    url = f"{base_url}/api/payments{endpoint}"

    if method == "GET":
        response = httpx.get(url, timeout=10.0)
    elif method == "POST":
        response = httpx.post(url, json=data or {}, timeout=10.0)
    else:
        raise ValueError(f"Unknown method: {method}")

    return {"status": response.status_code, "data": response.json() if response.text else {}}


def print_step(step: int, title: str):
    print(f"\n{'='*60}")
    print(f"STEP {step}: {title}")
    print("="*60)


def print_result(result: dict, fields: list[str] | None = None) -> bool:
    """Print result, optionally filtering fields. Returns False on HTTP errors."""
    print(f"Status: {result['status']}")
    data = result["data"]
    if fields and isinstance(data, dict):
        data = {k: data.get(k) for k in fields if k in data}
    print(json.dumps(data, indent=2))
    return result["status"] < 400


def main():
    parser = argparse.ArgumentParser(description="Payment and refund flow")
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL, help="Server base URL")
    parser.add_argument("--user-id", required=True, help="Paying user ID")
    parser.add_argument("--amount", required=True, help="Payment amount, e.g. 50.00")
    parser.add_argument("--currency", default="USD", help="ISO currency code")
    parser.add_argument("--card", default="4111111111111111", help="Card number")
    parser.add_argument("--holder", default="Jane Doe", help="Card holder name")
    args = parser.parse_args()

    fields = ["paymentId", "transactionId", "status", "success", "message"]

    print_step(1, "Process payment")
    created = api_request(args.base_url, "POST", "/process", {
        "userId": args.user_id,
        "amount": args.amount,
        "currency": args.currency,
        "paymentMethod": "CARD",
        "details": {"cardNumber": args.card, "cardHolder": args.holder},
    })
    print_result(created, fields)
    payment_id = created["data"].get("paymentId")
    if not payment_id:
        sys.exit(1)

    print_step(2, "Fetch payment status")
    print_result(api_request(args.base_url, "GET", f"/{payment_id}"), fields)

    print_step(3, "Validate payment")
    print_result(api_request(args.base_url, "GET", f"/{payment_id}/validate"), fields)

    if created["data"].get("status") != "SUCCESS":
        print("\nPayment was declined, a refund will be rejected")

    print_step(4, "Refund payment")
    print_result(api_request(args.base_url, "POST", f"/{payment_id}/refund"), fields)

    print_step(5, "Refund again")
    second = api_request(args.base_url, "POST", f"/{payment_id}/refund")
    print_result(second, fields)
    if second["status"] != 409:
        print("ERROR: second refund was not rejected")
        sys.exit(1)

    print_step(6, "Payment history")
    history = api_request(args.base_url, "GET", f"/history/{args.user_id}")
    if not print_result(history):
        sys.exit(1)

    print("\n" + "="*60)
    print("PAY & REFUND FLOW COMPLETE")
    print("="*60)


if __name__ == "__main__":
    main()
