#!/usr/bin/env python3
"""
Acceptance check against a running server.
Hits every endpoint and prints PASS/FAIL per check.
"""
import asyncio
import os
import sys

import httpx

API_BASE = os.getenv("API_BASE", f"http://localhost:{os.getenv('PORT', '3000')}")


class AcceptanceRunner:
    def __init__(self):
        self.results = []
        self.passed = 0
        self.failed = 0

    def log(self, name, passed, details=""):
        status = " PASS" if passed else "❌ FAIL"
        print(f"{status} {name}")
        if details:
            print(f"   {details}")
        self.results.append((name, passed, details))
        if passed:
            self.passed += 1
        else:
            self.failed += 1

    async def fetch_rows(self, client, name, path, params=None):
        """GET an endpoint; a non-200 status is logged as a FAIL and returns None."""
        resp = await client.get(path, params=params)
        if resp.status_code != 200:
            self.log(f"{name}: status 200", False, f"Status: {resp.status_code} {resp.text}")
            return None
        return resp.json()

    async def run_all(self):
        print("\n" + "="*80)
        print(f"ACCEPTANCE CHECKS ({API_BASE})")
        print("="*80 + "\n")

        async with httpx.AsyncClient(base_url=API_BASE, timeout=60.0) as client:
            await self.check_user_types(client)
            await self.check_hours(client)
            await self.check_days(client)
            await self.check_stations(client)
            await self.check_hour_weekday(client)
            await self.check_not_found(client)

        print("\n" + "="*80)
        print(f"RESULTS: {self.passed}/{self.passed+self.failed} passed")
        print("="*80 + "\n")

        return self.failed == 0

    async def check_user_types(self, client):
        print("[1.1] Trips by user type")
        print("-"*80)
        rows = await self.fetch_rows(client, "1.1", "/api/trips/1.1")
        if rows is not None:
            self.log("1.1: returns rows", len(rows) > 0, f"Rows: {len(rows)}")
        print()

    async def check_hours(self, client):
        print("[1.2] Trips by hour")
        print("-"*80)
        rows = await self.fetch_rows(client, "1.2", "/api/trips/1.2")
        if rows is None:
            print()
            return
        hours = [r["hora"] for r in rows]
        self.log("1.2: sorted by hour", hours == sorted(hours), f"Hours: {hours}")

        if rows:
            first = rows[0]
            filtered = await self.fetch_rows(client, "1.2?hour", "/api/trips/1.2", {"hour": first["hora"]})
            if filtered is not None:
                self.log("1.2: hour filter keeps full aggregate", filtered == [first])
        print()

    async def check_days(self, client):
        print("[1.3] Trips by day")
        print("-"*80)
        rows = await self.fetch_rows(client, "1.3", "/api/trips/1.3")
        if rows is not None:
            dates = [r["fecha"] for r in rows]
            self.log("1.3: sorted by date", dates == sorted(dates), f"Days: {len(dates)}")
        print()

    async def check_stations(self, client):
        print("[1.4] Top stations")
        print("-"*80)
        rows = await self.fetch_rows(client, "1.4", "/api/trips/1.4", {"limit": 3})
        if rows is not None:
            counts = [r["total_Salidas"] for r in rows]
            self.log("1.4: limit=3", len(rows) <= 3 and counts == sorted(counts, reverse=True),
                     f"Counts: {counts}")

        zero = await self.fetch_rows(client, "1.4?limit=0", "/api/trips/1.4", {"limit": 0})
        one = await self.fetch_rows(client, "1.4?limit=1", "/api/trips/1.4", {"limit": 1})
        if zero is not None and one is not None:
            self.log("1.4: limit=0 same as limit=1", zero == one)
        print()

    async def check_hour_weekday(self, client):
        print("[1.5] Trips by hour and weekday")
        print("-"*80)
        rows = await self.fetch_rows(client, "1.5", "/api/trips/1.5", {"hour": 10, "day": 2})
        if rows is not None:
            self.log("1.5: hour=10&day=2 filter",
                     all(r["hora"] == 10 and r["dia_Semana"] == 2 for r in rows),
                     f"Rows: {len(rows)}")
        print()

    async def check_not_found(self, client):
        resp = await client.get("/api/nope")
        self.log("404 body", resp.status_code == 404 and resp.json() == {"error": "not found"})


async def main():
    try:
        async with httpx.AsyncClient(timeout=5.0) as client:
            resp = await client.get(f"{API_BASE}/api/health")
            if resp.status_code != 200:
                print(f"Backend not healthy: {resp.text}")
                return 1
    except httpx.HTTPError:
        print(f"Cannot connect to {API_BASE}. Start it with: python -m api.main")
        return 1

    runner = AcceptanceRunner()
    success = await runner.run_all()

    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
