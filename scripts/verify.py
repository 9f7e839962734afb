"""
Data File Verification Script

Verifies integrity of the products and orders JSON documents.
Run from project root: python scripts/verify.py

Version: 1.0.0
"""

import json
import os
import sys
from datetime import datetime

import pandas as pd

DATA_DIR = os.getenv("DATA_DIRECTORY", "data")
PRODUCTS_FILE = os.path.join(DATA_DIR, "products.json")
ORDERS_FILE = os.path.join(DATA_DIR, "orders.json")


def load_frame(path: str) -> pd.DataFrame | None:
    """Load a JSON array document into a DataFrame."""
    if not os.path.exists(path):
        print(f"\n❌ {path} not found!")
        print("   Start the server once to create it: food-ordering-api")
        return None
    try:
        with open(path, encoding="utf-8") as f:
            records = json.load(f)
    except Exception as e:
        print(f"\n❌ Could not read {path}: {e}")
        return None
    if not isinstance(records, list):
        print(f"\n❌ {path} does not hold a JSON array")
        return None
    print(f"\n✅ {path} loaded ({len(records)} entries)")
    return pd.json_normalize(records, max_level=0)


def check_ids(label: str, df: pd.DataFrame) -> bool:
    if "id" not in df.columns:
        if len(df):
            print(f"⚠️ {label}: no id column")
            return False
        return True
    duplicates = int(df["id"].duplicated().sum())
    if duplicates:
        print(f"⚠️ {label}: {duplicates} duplicate ids found!")
        return False
    print(f"✅ {label}: no duplicate ids")
    return True


def verify_data() -> bool:
    """Verify both data documents."""

    print("=" * 60)
    print("🔍 DATA VERIFICATION REPORT")
    print("=" * 60)
    print(f"⏰ Timestamp: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    print(f"📁 Directory: {DATA_DIR}")
    print("=" * 60)

    ok = True

    products = load_frame(PRODUCTS_FILE)
    if products is None:
        ok = False
    else:
        ok &= check_ids("Products", products)
        if "price" in products.columns:
            prices = pd.to_numeric(products["price"], errors="coerce")
            missing = int(prices.isna().sum())
            negative = int((prices < 0).sum())
            if missing:
                print(f"⚠️ Products: {missing} without a numeric price")
            if negative:
                print(f"⚠️ Products: {negative} with a negative price")

    orders = load_frame(ORDERS_FILE)
    if orders is None:
        ok = False
    else:
        ok &= check_ids("Orders", orders)
        if "totalAmount" in orders.columns and len(orders):
            totals = pd.to_numeric(orders["totalAmount"], errors="coerce")
            print(f"\n💰 REVENUE:")
            print(f"   Total: {totals.sum():.3f}")
            print(f"   Average: {totals.mean():.3f}")

            print(f"\n📋 RECENT ORDERS:")
            print("-" * 60)
            cols = [c for c in ["id", "customerName", "totalAmount", "createdAt"] if c in orders.columns]
            print(orders[cols].tail(5).to_string(index=False))

    print("\n" + "=" * 60)
    print("✅ VERIFICATION COMPLETE" if ok else "⚠️ VERIFICATION FOUND PROBLEMS")
    print("=" * 60)

    return ok


if __name__ == "__main__":
    sys.exit(0 if verify_data() else 1)
