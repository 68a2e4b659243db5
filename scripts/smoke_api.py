#!/usr/bin/env python3
"""Smoke test against a running server: create, fill availability, confirm."""

import sys

import httpx


BASE_URL = "http://127.0.0.1:8001"


def run_flow() -> bool:
    print("=" * 60)
    print("Testing POST /api/v1/sessions/{id}/confirmations")
    print("=" * 60)

    try:
        response = httpx.post(
            f"{BASE_URL}/api/v1/sessions",
            json={
                "creator": "Alice",
                "group_code": "smoke",
                "title": "Smoke Song",
                "start_date": "2024-05-01",
                "end_date": "2024-05-03",
            },
            timeout=10.0,
        )
        response.raise_for_status()
        session_id = response.json()["id"]
        print(f"✅ Session created: {session_id}")

        for member, slots in {
            "Alice": ["2024-05-01_1限"],
            "Bob": ["2024-05-01_1限", "2024-05-01_昼"],
        }.items():
            httpx.put(
                f"{BASE_URL}/api/v1/sessions/{session_id}/availability/{member}",
                json={"slots": slots},
                timeout=10.0,
            ).raise_for_status()

        response = httpx.post(
            f"{BASE_URL}/api/v1/sessions/{session_id}/confirmations",
            json={"actor": "Alice", "slots": ["2024-05-01_1限", "2024-05-01_昼"], "room": "A", "equipment": ["ベーアン"]},
            timeout=10.0,
        )
        response.raise_for_status()
        for entry in response.json()["entries"]:
            print(f"  {entry['date']} {', '.join(entry['periods'])} room={entry['room']}")
            print(f"    participants: {', '.join(entry['participants'])}")
            for warning in entry["warnings"]:
                print(f"    {warning}")
        return True
    except httpx.HTTPStatusError as e:
        print(f"❌ HTTP Error: {e.response.status_code}")
        print(f"Response: {e.response.text}")
        return False
    except httpx.HTTPError as e:
        print(f"❌ Error: {e}")
        return False


def main():
    try:
        httpx.get(f"{BASE_URL}/health", timeout=5.0)
        print("✅ Server is running\n")
    except httpx.HTTPError:
        print("❌ Server is not running!")
        print("   Please start it with: uvicorn app.main:app --reload --port 8001")
        sys.exit(1)

    ok = run_flow()
    print("\n" + "=" * 60)
    print("✅ Smoke test complete!" if ok else "❌ Smoke test failed")
    print("=" * 60 + "\n")
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
