#!/usr/bin/env python3
"""
FuelEU Ledger CLI Tool.

Command-line interface for administrative tasks:
- Database operations (create, drop, seed)
- Compliance balance computation
- Banking ledger inspection
- Health checks

Usage:
    python -m api.cli init-db
    python -m api.cli seed
    python -m api.cli compute-cb --ship SHIP001 --year 2025 --intensity 88.2 --fuel 4800
    python -m api.cli bank-records --ship SHIP001
    python -m api.cli check-health
"""
import argparse
import sys
from typing import Optional


def init_db() -> None:
    """Initialize the database."""
    from api.database import init_db as do_init

    print("Initializing database...")
    do_init()
    print("Database initialized successfully.")


def drop_db(confirmed: bool) -> None:
    """Drop all tables."""
    from api.database import drop_db as do_drop

    if not confirmed:
        print("\nRefusing to drop tables without --yes.")
        sys.exit(1)
    do_drop()
    print("Database tables dropped.")


def seed(keep_existing: bool = False) -> None:
    """Load the reference routes and compliance balances."""
    from api.database import get_db_context, init_db as do_init
    from api.seed import seed_database

    do_init()
    with get_db_context() as db:
        counts = seed_database(db, clear=not keep_existing)

    print(f"\nSeeded {counts['routes']} routes and "
          f"{counts['ship_compliance']} compliance records.")


def compute_cb(ship_id: str, year: int, intensity: float, fuel: float) -> None:
    """Compute, store and print a ship's compliance balance."""
    from api.database import get_db_context
    from api.repositories import SqlAlchemyComplianceRepository
    from src.compliance import ComplianceService

    with get_db_context() as db:
        service = ComplianceService(SqlAlchemyComplianceRepository(db))
        record, calc = service.compute_cb(ship_id, year, intensity, fuel)

    status = "surplus" if record.cb_gco2eq > 0 else "deficit" if record.cb_gco2eq < 0 else "balanced"

    print("\n" + "=" * 60)
    print(f"COMPLIANCE BALANCE  {ship_id} / {year}")
    print("=" * 60)
    print(f"Target intensity:  {calc.target_intensity:>18.4f} gCO2eq/MJ")
    print(f"Actual intensity:  {calc.actual_intensity:>18.4f} gCO2eq/MJ")
    print(f"Energy in scope:   {calc.energy_in_scope:>18,.0f} MJ")
    print(f"CB:                {record.cb_gco2eq:>18,.2f} gCO2eq ({status})")
    print("=" * 60 + "\n")


def bank_records(ship_id: str, year: Optional[int] = None) -> None:
    """List banking ledger entries for a ship."""
    from api.database import get_db_context
    from api.repositories import SqlAlchemyBankRepository, SqlAlchemyComplianceRepository
    from src.compliance import BankingLedger
    from src.compliance.banking import available_balance

    with get_db_context() as db:
        bank_repo = SqlAlchemyBankRepository(db)
        ledger = BankingLedger(bank_repo, SqlAlchemyComplianceRepository(db))
        entries = ledger.get_records(ship_id, year)
        available = bank_repo.find_available_balance(ship_id)

    if not entries:
        print(f"\nNo bank entries found for {ship_id}.")
        return

    print("\n" + "=" * 80)
    print(f"BANK ENTRIES  {ship_id}")
    print("=" * 80)
    print(f"{'ID':<36} {'Year':<6} {'Type':<8} {'Amount (gCO2eq)':>18} {'Created':<16}")
    print("-" * 80)

    for entry in entries:
        created = entry.created_at.strftime("%Y-%m-%d %H:%M") if entry.created_at else "-"
        print(
            f"{entry.id:<36} "
            f"{entry.year:<6} "
            f"{'applied' if entry.is_applied else 'banked':<8} "
            f"{entry.amount_gco2eq:>18,.2f} "
            f"{created:<16}"
        )

    print("=" * 80)
    print(f"Listed: {len(entries)} entries, banked in view: "
          f"{available_balance(entries):,.2f}, available: {available:,.2f}\n")


def check_health(url: str) -> None:
    """Check API health."""
    import requests

    try:
        response = requests.get(url, timeout=5)
        if response.status_code == 200:
            data = response.json()
            print(f"\nAPI Status: {data.get('status', 'unknown')}")
            print(f"Version: {data.get('version', 'unknown')}")
            print(f"Timestamp: {data.get('timestamp', 'unknown')}")
        else:
            print(f"\nAPI returned status code: {response.status_code}")
            sys.exit(1)
    except requests.exceptions.ConnectionError:
        print("\nError: Could not connect to API. Is the server running?")
        sys.exit(1)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="FuelEU Ledger CLI Tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Create tables and load reference data:
    python -m api.cli init-db
    python -m api.cli seed

  Compute a compliance balance:
    python -m api.cli compute-cb --ship SHIP001 --year 2025 --intensity 88.2 --fuel 4800

  Show banking ledger:
    python -m api.cli bank-records --ship SHIP001 --year 2024

  Check API health:
    python -m api.cli check-health
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("init-db", help="Initialize the database")

    drop_parser = subparsers.add_parser("drop-db", help="Drop all tables")
    drop_parser.add_argument("--yes", action="store_true", help="Confirm dropping all data")

    seed_parser = subparsers.add_parser("seed", help="Load reference routes and balances")
    seed_parser.add_argument(
        "--keep-existing",
        action="store_true",
        help="Do not clear existing data first",
    )

    cb_parser = subparsers.add_parser("compute-cb", help="Compute and store a ship's CB")
    cb_parser.add_argument("--ship", required=True, help="Ship identifier")
    cb_parser.add_argument("--year", type=int, required=True, help="Compliance year")
    cb_parser.add_argument(
        "--intensity", type=float, required=True, help="Actual GHG intensity (gCO2eq/MJ)"
    )
    cb_parser.add_argument("--fuel", type=float, required=True, help="Fuel consumption (t)")

    records_parser = subparsers.add_parser("bank-records", help="List banking ledger entries")
    records_parser.add_argument("--ship", required=True, help="Ship identifier")
    records_parser.add_argument("--year", type=int, help="Restrict to one year")

    health_parser = subparsers.add_parser("check-health", help="Check API health")
    health_parser.add_argument(
        "--url", default="http://localhost:8000/health", help="Health endpoint URL"
    )

    args = parser.parse_args(argv)

    if args.command == "init-db":
        init_db()
    elif args.command == "drop-db":
        drop_db(args.yes)
    elif args.command == "seed":
        seed(args.keep_existing)
    elif args.command == "compute-cb":
        compute_cb(args.ship, args.year, args.intensity, args.fuel)
    elif args.command == "bank-records":
        bank_records(args.ship, args.year)
    elif args.command == "check-health":
        check_health(args.url)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
