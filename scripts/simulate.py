"""
Order Flow Simulation Script

Drives a running server through the dish / user / order flow, then fires a
burst of concurrent orders and checks the per-dish totals add up.
Run from project root: python scripts/simulate.py

Author: Khalil_Bannouri
Version: 1.0.0
"""

import asyncio
import sys
import random
import time
import argparse
from datetime import datetime
from typing import Any

import httpx

# Windows event loop fix
if sys.platform == "win32":
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

# Configuration
API_BASE_URL = "http://localhost:3000"
TOTAL_ORDERS = 50

# Sample data for random customers and dishes
FIRST_NAMES = ["Amira", "Youssef", "Sami", "Leila", "Nour", "Hedi", "Ines", "Omar", "Rania", "Walid"]
MENU_ITEMS = [
    {"name": "Couscous Royal", "price": 15},
    {"name": "Brik à l'oeuf", "price": 4.5},
    {"name": "Ojja Merguez", "price": 9},
    {"name": "Lablabi", "price": 6},
]


def generate_random_customer() -> dict[str, Any]:
    """Generate a customer with a random 8-digit phone."""
    return {
        "name": f"{random.choice(FIRST_NAMES)} {random.randint(100, 999)}",
        "tel": random.randint(20000000, 99999999),
    }


# =============================================================================
# SETUP
# =============================================================================

async def create_menu(client: httpx.AsyncClient) -> list[dict[str, Any]]:
    """Add the simulation dishes and return them."""
    dishes = []
    for item in MENU_ITEMS:
        response = await client.post(f"{API_BASE_URL}/dishes", json=item)
        response.raise_for_status()
        dishes.append(response.json())
    return dishes


async def create_customers(client: httpx.AsyncClient, count: int) -> list[dict[str, Any]]:
    """Register customers, retrying on phone collisions (409)."""
    users = []
    while len(users) < count:
        response = await client.post(f"{API_BASE_URL}/users", json=generate_random_customer())
        if response.status_code == 409:
            continue
        response.raise_for_status()
        users.append(response.json())
    return users


# =============================================================================
# ORDERS
# =============================================================================

async def send_order(
    client: httpx.AsyncClient,
    order_num: int,
    user_id: int,
    dish_id: int,
) -> dict[str, Any]:
    """Place a single order."""
    start_time = time.time()

    try:
        response = await client.post(
            f"{API_BASE_URL}/orders",
            json={"userId": user_id, "dishId": dish_id},
            timeout=30.0,
        )
        elapsed = round(time.time() - start_time, 3)

        if response.status_code == 201:
            return {
                "order_num": order_num,
                "success": True,
                "order_id": response.json().get("id"),
                "dish_id": dish_id,
                "time": elapsed,
            }
        return {
            "order_num": order_num,
            "success": False,
            "error": response.text[:100],
            "time": elapsed,
        }
    except httpx.HTTPError as e:
        elapsed = round(time.time() - start_time, 3)
        return {
            "order_num": order_num,
            "success": False,
            "error": str(e)[:100],
            "time": elapsed,
        }


async def run_simulation(num_orders: int = TOTAL_ORDERS) -> dict[str, Any]:
    """
    Run the order burst.

    Args:
        num_orders: Number of orders to place concurrently
    """
    print("=" * 70)
    print("🔥 ORDER SIMULATION")
    print("=" * 70)
    print(f"📋 Total Orders: {num_orders}")
    print(f"🎯 Target: {API_BASE_URL}")
    print(f"⏰ Started: {datetime.now().strftime('%H:%M:%S')}")
    print("=" * 70)

    async with httpx.AsyncClient() as client:
        dishes = await create_menu(client)
        users = await create_customers(client, count=5)
        print(f"\n🍽️  {len(dishes)} dishes, 👤 {len(users)} customers created")

        start_time = time.time()
        tasks = [
            send_order(
                client,
                i + 1,
                user_id=random.choice(users)["id"],
                dish_id=random.choice(dishes)["id"],
            )
            for i in range(num_orders)
        ]
        results = await asyncio.gather(*tasks)
        total_time = round(time.time() - start_time, 2)

        successful = [r for r in results if r["success"]]
        failed = [r for r in results if not r["success"]]

        print("\n" + "=" * 70)
        print("📊 SIMULATION RESULTS")
        print("=" * 70)
        print(f"\n✅ Successful Orders: {len(successful)}/{num_orders}")
        print(f"❌ Failed Orders: {len(failed)}/{num_orders}")
        print(f"⏱️  Total Time: {total_time}s")

        if failed:
            print("\n⚠️  Failed Order Details (showing first 5):")
            for f in failed[:5]:
                print(f"   Order #{f['order_num']}: {f.get('error', 'Unknown error')}")

        # Totals check: each dish total must equal placed orders × price
        print("\n💰 Per-dish totals:")
        mismatches = 0
        for dish in dishes:
            placed = len([r for r in successful if r["dish_id"] == dish["id"]])
            response = await client.get(f"{API_BASE_URL}/orders/total/{dish['id']}")
            total = response.json()["total"]
            expected = placed * dish["price"]
            marker = "✅" if abs(total - expected) < 1e-9 else "❌"
            if marker == "❌":
                mismatches += 1
            print(f"   {marker} {dish['name']}: {placed} × {dish['price']} = {total}")

    print("\n" + "=" * 70)

    return {
        "total": num_orders,
        "successful": len(successful),
        "failed": len(failed),
        "mismatches": mismatches,
        "total_time": total_time,
    }


async def test_single_flows() -> bool:
    """Exercise each endpoint once before the burst."""
    print("\n" + "=" * 70)
    print("🧪 TESTING INDIVIDUAL FLOWS")
    print("=" * 70)

    async with httpx.AsyncClient() as client:
        print("\n1️⃣ Health Check...")
        response = await client.get(f"{API_BASE_URL}/health")
        if response.status_code != 200:
            print(f"   ❌ Failed: {response.text}")
            return False
        data = response.json()
        print(f"   ✅ Status: {data.get('status')}")
        print(f"   Dishes: {data.get('dishes')}  Users: {data.get('users')}  Orders: {data.get('orders')}")

        print("\n2️⃣ Invalid phone is rejected...")
        response = await client.post(f"{API_BASE_URL}/users", json={"name": "Short", "tel": "2460090"})
        print(f"   {'✅' if response.status_code == 400 else '❌'} Status: {response.status_code}")

        print("\n3️⃣ Order for an unknown dish...")
        response = await client.post(f"{API_BASE_URL}/orders", json={"userId": 1, "dishId": 99999})
        print(f"   {'✅' if response.status_code == 404 else '❌'} Status: {response.status_code}")

        print("\n4️⃣ Enriched orders...")
        response = await client.get(f"{API_BASE_URL}/orders")
        if response.status_code == 200:
            print(f"   ✅ {len(response.json())} orders")
        else:
            print(f"   ❌ Failed: {response.text}")
            return False

    print("\n" + "=" * 70)
    return True


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Order Flow Simulation Script")
    parser.add_argument("--orders", type=int, default=TOTAL_ORDERS, help="Number of orders")
    parser.add_argument("--url", default=API_BASE_URL, help="Server base URL")
    parser.add_argument("--skip-tests", action="store_true", help="Skip individual tests")
    args = parser.parse_args()

    API_BASE_URL = args.url.rstrip("/")

    if not args.skip_tests:
        if not asyncio.run(test_single_flows()):
            print("\n❌ Pre-flight tests failed. Is the server running?")
            sys.exit(1)
        print("\n✅ Pre-flight tests passed!")

    summary = asyncio.run(run_simulation(num_orders=args.orders))
    sys.exit(1 if summary["failed"] or summary["mismatches"] else 0)
