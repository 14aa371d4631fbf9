#!/usr/bin/env python3
"""
Fine payment flow smoke script.

DO NOT ADD BUSINESS LOGIC HERE.
This script only orchestrates API calls.
All rules live in the service.

Usage:
    python scripts/flow_pay_fine.py --civil-nic 199012345678 --fine-id F1
    python scripts/flow_pay_fine.py --civil-nic 199012345678 --fine-id F1 --webhook-secret whsec_...

Flow:
    1. Create checkout session
    2. (optional) Deliver a signed checkout.session.completed webhook
"""

import argparse
import hashlib
import hmac
import json
import sys
import time

import httpx

BASE_URL = "http://localhost:3001"


def print_step(step: int, title: str):
    """Print step header."""
    print(f"\n{'='*60}")
    print(f"STEP {step}: {title}")
    print("="*60)


def print_response(response: httpx.Response) -> bool:
    """Print response body, return False on error status."""
    data = response.json() if response.text else {}
    if response.status_code >= 400:
        print(f"ERROR ({response.status_code}): {json.dumps(data, indent=2)}")
        return False

    print(f"Status: {response.status_code}")
    print(json.dumps(data, indent=2))
    return True


def signed_headers(payload: str, secret: str) -> dict:
    """Stripe-Signature header for a locally built event."""
    timestamp = int(time.time())
    signature = hmac.new(
        secret.encode(), f"{timestamp}.{payload}".encode(), hashlib.sha256
    ).hexdigest()
    return {
        "Content-Type": "application/json",
        "Stripe-Signature": f"t={timestamp},v1={signature}",
    }


def main():
    parser = argparse.ArgumentParser(description="Fine payment flow")
    parser.add_argument("--civil-nic", required=True, help="Citizen NIC of the fine owner")
    parser.add_argument("--fine-id", required=True, help="Issued fine ID")
    parser.add_argument("--base-url", default=BASE_URL, help="Service base URL")
    parser.add_argument("--webhook-secret", help="Send a signed completion webhook with this secret")
    args = parser.parse_args()

    # Step 1: Create checkout session
    print_step(1, "Create checkout session")
    response = httpx.post(
        f"{args.base_url}/create-checkout-session",
        json={"civilNIC": args.civil_nic, "fineId": args.fine_id},
        timeout=30.0,
    )
    if not print_response(response):
        sys.exit(1)
    print(f"\nOpen to pay: {response.json()['checkoutUrl']}")

    if not args.webhook_secret:
        return

    # Step 2: Simulate the processor's completion callback
    print_step(2, "Deliver checkout.session.completed webhook")
    payload = json.dumps({
        "id": f"evt_local_{int(time.time())}",
        "object": "event",
        "type": "checkout.session.completed",
        "data": {
            "object": {
                "object": "checkout.session",
                "payment_status": "paid",
                "metadata": {"fineId": args.fine_id, "civilNIC": args.civil_nic},
            }
        },
    })
    response = httpx.post(
        f"{args.base_url}/webhook",
        content=payload.encode(),
        headers=signed_headers(payload, args.webhook_secret),
        timeout=30.0,
    )
    if not print_response(response):
        sys.exit(1)

    print("\n" + "="*60)
    print("FLOW COMPLETE")
    print("="*60)
    print(f"Fine:        {args.fine_id}")
    print(f"Owner NIC:   {args.civil_nic}")


if __name__ == "__main__":
    main()
