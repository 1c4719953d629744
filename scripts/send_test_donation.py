"""Post one donation to a running service and print the response.

Defaults to Braintree's sandbox test nonce so a sandbox deployment settles it.
"""

import argparse
import json
from uuid import uuid4

import httpx


def main() -> None:
    """CLI entrypoint for manual donation smoke tests."""

    parser = argparse.ArgumentParser(description="Send a test donation to the donations endpoint.")
    parser.add_argument("--base-url", default="http://localhost:8000/api/v1")
    parser.add_argument("--amount", type=float, default=10.0)
    parser.add_argument("--nonce", default="fake-valid-nonce")
    args = parser.parse_args()

    resp = httpx.post(
        f"{args.base_url.rstrip('/')}/",
        json={"donationAmount": args.amount, "nonce": args.nonce},
        headers={"x-correlation-id": str(uuid4())},
        timeout=30.0,
    )
    print(f"status={resp.status_code}")
    print(json.dumps(resp.json(), indent=2))


if __name__ == "__main__":
    main()
