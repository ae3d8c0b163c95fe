"""
Import bookings saved by the browser booking tool into the booking store.

Export the browser's localStorage keys 'leaderCruises_savedBookings' and
'orderCounter' to a JSON file (or save just the bookings array), then run:

Usage:
    python scripts/import_saved_bookings.py dump.json [--store data/bookings.json] [--dry-run]
"""

import argparse
import json
import logging
import sys
from pathlib import Path

# Add parent dir to path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("import_saved_bookings")

from dotenv import load_dotenv
load_dotenv()

from db.booking_store import BookingStore, BookingStoreError
from db.local_storage_import import parse_local_storage_dump


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("dump", type=Path, help="JSON file with the localStorage dump")
    parser.add_argument("--store", default=None, help="Booking store path (default: BOOKINGS_STORE_PATH)")
    parser.add_argument("--dry-run", action="store_true", help="Parse and report without writing")
    args = parser.parse_args()

    try:
        with open(args.dump, "r", encoding="utf-8") as f:
            dump = json.load(f)
        bookings, counter = parse_local_storage_dump(dump)
    except (OSError, json.JSONDecodeError, BookingStoreError) as e:
        logger.error(f"Cannot read {args.dump}: {e}")
        return 1

    for booking in bookings:
        print(f"  {booking.order_number or '-':>8}  {booking.date}  {booking.yacht_name}  {booking.client_name}")

    if args.dry_run:
        print(f"\n(Dry run: {len(bookings)} bookings parsed, nothing written)")
        return 0

    try:
        store = BookingStore(args.store)
        imported = store.import_bookings(bookings, counter)
    except BookingStoreError as e:
        logger.error(f"Import failed: {e}")
        return 1

    print(f"\nImported {imported} bookings into {store.path}; next order number {store.order_counter}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
