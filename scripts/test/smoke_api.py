# scripts/test/smoke_api.py
"""Exercise a running portal end to end: admin login → passcode → wall."""

import argparse
import requests

DEFAULT_URL = "http://localhost:8080/api"


def main():
    parser = argparse.ArgumentParser(description="Smoke test a running portal API")
    parser.add_argument("--url", default=DEFAULT_URL)
    parser.add_argument("--username", default="admin")
    parser.add_argument("--password", required=True)
    parser.add_argument("--passcode", default="SMOKE1")
    parser.add_argument("--level", type=int, default=2)
    args = parser.parse_args()

    resp = requests.post(f"{args.url}/admin/login",
                         json={"username": args.username, "password": args.password}, timeout=10)
    print(f"✅ admin login → HTTP {resp.status_code}: {resp.json()}")
    resp.raise_for_status()
    admin_headers = {"x-admin-session": resp.json()["session"]}

    resp = requests.post(f"{args.url}/passcodes", headers=admin_headers,
                         json={"passcode": args.passcode, "level": args.level}, timeout=10)
    print(f"✅ save passcode → HTTP {resp.status_code}: {resp.json()}")

    resp = requests.post(f"{args.url}/passcode/login", json={"passcode": args.passcode}, timeout=10)
    print(f"✅ passcode login → HTTP {resp.status_code}: {resp.json()}")
    resp.raise_for_status()
    viewer_headers = {"x-session": resp.json()["session"]}

    resp = requests.get(f"{args.url}/events", headers=viewer_headers, timeout=10)
    print(f"✅ wall events → HTTP {resp.status_code}: {len(resp.json())} event(s)")

    resp = requests.delete(f"{args.url}/passcodes/{args.passcode}", headers=admin_headers, timeout=10)
    print(f"✅ delete passcode → HTTP {resp.status_code}: {resp.json()}")


if __name__ == "__main__":
    main()
