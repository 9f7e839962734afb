"""
Concurrency Simulation Script

Fires concurrent product and order creations at a running server and
checks that the ids handed out are unique.
Run from project root: python scripts/simulate.py

Version: 1.0.0
"""

import argparse
import asyncio
import os
import random
import sys
import time
from collections import Counter
from datetime import datetime
from typing import Any

import httpx

# Windows event loop fix
if sys.platform == "win32":
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

# Configuration
API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:3010")
TOTAL_ORDERS = 50

# Sample data for random orders
FIRST_NAMES = ["Asha", "Ravi", "Meera", "Arjun", "Fatima", "Omar", "Lakshmi", "Kiran", "Noor", "Vikram"]
LAST_NAMES = ["Menon", "Nair", "Iyer", "Khan", "Pillai", "Rao", "Shah", "Das", "Reddy", "Joseph"]
STREETS = ["Beach Road", "Gulf Street", "Salem Al Mubarak St", "Fahad Al Salem St", "Tunis Street"]
PAYMENT_METHODS = ["cash", "card", "knet"]
MENU_ITEMS = [
    {"name": "Idli", "description": "Steamed rice cake", "price": "1.5"},
    {"name": "Vada", "description": "Crispy lentil doughnut", "price": "1.250"},
    {"name": "Chole Bhature", "description": "Spiced chickpeas with fried bread", "price": "2.750"},
    {"name": "Mango Lassi", "description": "Sweet yogurt drink", "price": "1.000"},
    {"name": "Gulab Jamun", "description": "Milk dumplings in syrup", "price": "1.200"},
]


def generate_random_customer() -> dict[str, str]:
    """Generate random customer info."""
    first = random.choice(FIRST_NAMES)
    last = random.choice(LAST_NAMES)
    return {
        "customerName": f"{first} {last}",
        "phoneNumber": f"965{random.randint(10000000, 99999999)}",
        "deliveryAddress": f"Block {random.randint(1, 12)}, {random.choice(STREETS)}",
        "paymentMethod": random.choice(PAYMENT_METHODS),
    }


def generate_order_payload(products: list[dict[str, Any]]) -> dict[str, Any]:
    """Build an order from a random selection of catalog products."""
    picks = random.sample(products, k=min(len(products), random.randint(1, 3)))
    items = [
        {
            "id": p["id"],
            "name": p.get("name"),
            "price": float(p.get("price") or 0),
            "quantity": random.randint(1, 3),
            "image": p.get("image"),
        }
        for p in picks
    ]
    total = round(sum(i["price"] * i["quantity"] for i in items), 3)
    return {
        **generate_random_customer(),
        "items": items,
        "totalAmount": total,
        "notes": random.choice([None, "Extra chutney", "Ring the bell", "No onions"]),
    }


async def send(
    client: httpx.AsyncClient,
    path: str,
    payload: dict[str, Any],
    num: int,
    mode: str,
) -> dict[str, Any]:
    """POST one payload and record the outcome."""
    start_time = time.time()
    try:
        response = await client.post(f"{API_BASE_URL}{path}", json=payload, timeout=30.0)
        elapsed = round(time.time() - start_time, 3)
        if response.status_code == 201:
            return {"num": num, "success": True, "id": response.json().get("id"), "time": elapsed, "mode": mode}
        return {"num": num, "success": False, "error": response.text[:100], "time": elapsed, "mode": mode}
    except Exception as e:
        elapsed = round(time.time() - start_time, 3)
        return {"num": num, "success": False, "error": str(e)[:100], "time": elapsed, "mode": mode}


def report_duplicates(label: str, entries: list[dict[str, Any]]) -> int:
    counts = Counter(str(e.get("id")) for e in entries)
    duplicates = {k: v for k, v in counts.items() if v > 1}
    if duplicates:
        print(f"   ⚠️ {label}: duplicate ids {duplicates}")
    else:
        print(f"   ✅ {label}: {len(entries)} entries, ids unique")
    return len(duplicates)


# =============================================================================
# MAIN SIMULATION RUNNER
# =============================================================================

async def run_simulation(mode: str = "both", num_orders: int = TOTAL_ORDERS) -> dict[str, Any]:
    """
    Run the concurrency simulation.

    Args:
        mode: "products", "orders", or "both"
        num_orders: Number of requests per kind
    """
    print("=" * 70)
    print("🔥 CONCURRENCY SIMULATION")
    print("=" * 70)
    print(f"📋 Requests: {num_orders}")
    print(f"🎯 Target: {API_BASE_URL}")
    print(f"🔧 Mode: {mode}")
    print(f"⏰ Started: {datetime.now().strftime('%H:%M:%S')}")
    print("=" * 70)

    results = []
    start_time = time.time()

    async with httpx.AsyncClient() as client:
        tasks = []
        if mode in ("products", "both"):
            for i in range(num_orders):
                tasks.append(send(client, "/products", dict(random.choice(MENU_ITEMS)), i + 1, "products"))

        if mode in ("orders", "both"):
            catalog = (await client.get(f"{API_BASE_URL}/products")).json() or MENU_ITEMS
            catalog = [dict(p, id=p.get("id", str(n))) for n, p in enumerate(catalog, start=1)]
            for i in range(num_orders):
                tasks.append(send(client, "/orders", generate_order_payload(catalog), i + 1, "orders"))

        results = await asyncio.gather(*tasks)

        total_time = round(time.time() - start_time, 2)
        successful = [r for r in results if r["success"]]
        failed = [r for r in results if not r["success"]]

        print("\n" + "=" * 70)
        print("📊 SIMULATION RESULTS")
        print("=" * 70)
        print(f"\n✅ Successful: {len(successful)}/{len(results)}")
        print(f"❌ Failed: {len(failed)}/{len(results)}")
        print(f"⏱️  Total Time: {total_time}s")

        if successful:
            avg_time = round(sum(r["time"] for r in successful) / len(successful), 3)
            print(f"\n📈 Average Response: {avg_time}s")

        if failed:
            print("\n⚠️  Failed Request Details (showing first 5):")
            for f in failed[:5]:
                print(f"   #{f['num']} [{f['mode']}]: {f.get('error', 'Unknown error')}")

        print("\n🔍 ID UNIQUENESS")
        duplicates = 0
        if mode in ("products", "both"):
            duplicates += report_duplicates("products", (await client.get(f"{API_BASE_URL}/products")).json())
        if mode in ("orders", "both"):
            duplicates += report_duplicates("orders", (await client.get(f"{API_BASE_URL}/orders")).json())

    print("\n" + "=" * 70)
    print("Next: python scripts/verify.py")
    print("=" * 70)

    return {
        "total": len(results),
        "successful": len(successful),
        "failed": len(failed),
        "duplicates": duplicates,
        "total_time": total_time,
    }


async def preflight() -> bool:
    """Check the server answers before firing requests."""
    async with httpx.AsyncClient() as client:
        try:
            response = await client.get(f"{API_BASE_URL}/health")
        except httpx.HTTPError as e:
            print(f"   ❌ Server unreachable: {e}")
            return False
        if response.status_code != 200:
            print(f"   ❌ Failed: {response.text}")
            return False
        data = response.json()
        print(f"   ✅ Status: {data.get('status')}")
        print(f"   Products: {data.get('products')}  Orders: {data.get('orders')}")
        print(f"   Document store: {data.get('document_store')}")
    return True


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Concurrency Simulation Script")
    parser.add_argument("--products", action="store_true", help="Create products only")
    parser.add_argument("--orders-only", action="store_true", help="Create orders only")
    parser.add_argument("--orders", type=int, default=TOTAL_ORDERS, help="Requests per kind")
    args = parser.parse_args()

    if args.products:
        mode = "products"
    elif args.orders_only:
        mode = "orders"
    else:
        mode = "both"

    print("\n1️⃣ Health Check...")
    if not asyncio.run(preflight()):
        print("\n❌ Pre-flight check failed. Start the server first: food-ordering-api")
        sys.exit(1)

    summary = asyncio.run(run_simulation(mode=mode, num_orders=args.orders))
    sys.exit(1 if summary["duplicates"] else 0)
