from __future__ import annotations

import argparse
import sys

from app.core.db import SessionLocal
from app.core.errors import StorefrontError
from app.core.logging import setup_logging
from app.services.pricing import recalculate_all_prices, recalculate_price


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Recalculate displayed product prices.")
    parser.add_argument("product_ids", nargs="*", type=int, help="only these products (default: all)")
    parser.add_argument("--log-level", default=None)
    args = parser.parse_args(argv)

    setup_logging(args.log_level)
    db = SessionLocal()
    try:
        if args.product_ids:
            status = 0
            for pid in args.product_ids:
                try:
                    out = recalculate_price(db, pid)
                except StorefrontError as e:
                    print(f"Product {pid}: {e.message}")
                    status = 1
                    continue
                print(f"Product {pid}: {out['formatted_price']}")
            return status

        out = recalculate_all_prices(db)
    finally:
        db.close()

    print(f"Updated: {out['updated']}")
    print(f"Failed: {out['failed']}")
    for f in out["failures"]:
        print(f"  product {f['product_id']}: {f['error']}")
    return 1 if out["failed"] else 0


if __name__ == "__main__":
    sys.exit(main())
