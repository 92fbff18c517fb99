import argparse
import json
from contextlib import contextmanager
from decimal import Decimal
from pathlib import Path
from typing import Iterator, List, Optional

from . import __version__
from .database import get_session, init_database
from .env import Settings, load_env
from .errors import JobboardError
from .logger import get_logger
from .repositories import JobFilters, JobRepository, JobUpdate
from .schema import validate_job


def _json_default(value):
    if isinstance(value, Decimal):
        return format(value.normalize(), "f")
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _print_json(data) -> None:
    print(json.dumps(data, indent=2, default=_json_default))


@contextmanager
def _repository(args: argparse.Namespace) -> Iterator[JobRepository]:
    session = get_session(Path(args.db))
    try:
        yield JobRepository(session)
    finally:
        session.close()


def _check(errors: List[str]) -> None:
    if errors:
        raise SystemExit("Invalid job:\n" + "\n".join(f"  - {e}" for e in errors))


def cmd_init_db(args: argparse.Namespace) -> None:
    db_path = Path(args.db)
    init_database(db_path)
    print(f"Initialized database at {db_path}")


def cmd_create(args: argparse.Namespace) -> None:
    data = {
        "title": args.title,
        "salary": args.salary,
        "equity": args.equity,
        "company_handle": args.company,
    }
    _check(validate_job(data))
    with _repository(args) as repo:
        _print_json(repo.create(**data))


def cmd_list(args: argparse.Namespace) -> None:
    filters = JobFilters(
        min_salary=args.min_salary,
        has_equity=args.has_equity,
        title=args.title,
    )
    with _repository(args) as repo:
        jobs = repo.find_all(filters)
    _print_json(jobs)


def cmd_get(args: argparse.Namespace) -> None:
    with _repository(args) as repo:
        _print_json(repo.get(args.id))


def cmd_update(args: argparse.Namespace) -> None:
    data = {
        field: getattr(args, field)
        for field in ("title", "salary", "equity")
        if getattr(args, field) is not None
    }
    _check(validate_job(data, partial=True))
    with _repository(args) as repo:
        _print_json(repo.update(args.id, JobUpdate(**data)))


def cmd_remove(args: argparse.Namespace) -> None:
    with _repository(args) as repo:
        repo.remove(args.id)
    _print_json({"deleted": args.id})


def main(argv: Optional[List[str]] = None):
    load_env()
    settings = Settings.from_env()
    logger = get_logger(
        level=settings.log_level,
        log_dir=settings.log_dir,
        enable_console=False,
    )

    parser = argparse.ArgumentParser(prog="jobboard", description="Job board data access CLI")
    parser.add_argument("--version", action="store_true", help="Show version")
    parser.add_argument("--db", default=str(settings.db_path), help=f"Path to SQLite database (default: {settings.db_path})")
    subparsers = parser.add_subparsers(dest="command")

    ini = subparsers.add_parser("init-db", help="Create the companies and jobs tables")
    ini.set_defaults(func=cmd_init_db)

    crt = subparsers.add_parser("create", help="Create a job")
    crt.add_argument("--title", required=True, help="Job title")
    crt.add_argument("--company", required=True, help="Handle of the owning company")
    crt.add_argument("--salary", type=int, help="Yearly salary")
    crt.add_argument("--equity", type=Decimal, help="Equity fraction between 0 and 1")
    crt.set_defaults(func=cmd_create)

    lst = subparsers.add_parser("list", help="List jobs, optionally filtered")
    lst.add_argument("--min-salary", type=int, help="Only jobs paying at least this much")
    lst.add_argument("--has-equity", action="store_true", help="Only jobs with non-zero equity")
    lst.add_argument("--title", help="Case-insensitive title substring")
    lst.set_defaults(func=cmd_list)

    gt = subparsers.add_parser("get", help="Show a job and its company")
    gt.add_argument("id", type=int, help="Job id")
    gt.set_defaults(func=cmd_get)

    upd = subparsers.add_parser("update", help="Change title, salary or equity of a job")
    upd.add_argument("id", type=int, help="Job id")
    upd.add_argument("--title", help="New title")
    upd.add_argument("--salary", type=int, help="New salary")
    upd.add_argument("--equity", type=Decimal, help="New equity")
    upd.set_defaults(func=cmd_update)

    rmv = subparsers.add_parser("remove", help="Delete a job")
    rmv.add_argument("id", type=int, help="Job id")
    rmv.set_defaults(func=cmd_remove)

    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    if hasattr(args, "func"):
        try:
            args.func(args)
        except JobboardError as e:
            logger.warning("Command failed", command=args.command, error=e.message)
            raise SystemExit(f"Error: {e.message}")
        return

    parser.print_help()


if __name__ == "__main__":
    main()
