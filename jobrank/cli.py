"""jobrank CLI — ``jobrank <command>``."""

import argparse
import logging
import sys
from pathlib import Path


def _build_parser() -> argparse.ArgumentParser:
    from jobrank import __version__

    parser = argparse.ArgumentParser(
        prog="jobrank",
        description="Find out which jobs appeal to you, one pair at a time.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument("--config", type=str, default=None, help="Path to config.yaml")
    parser.add_argument("--catalog", type=str, default=None, help="Path to catalog JSON")
    parser.add_argument("--state", type=str, default=None, help="Path to saved progress JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command")

    # ── init ────────────────────────────────────────────────────────
    sub.add_parser("init", help="Create the config directory and a default config.yaml")

    # ── compare ─────────────────────────────────────────────────────
    cmp_ = sub.add_parser("compare", help="Answer pairwise questions in the terminal")
    cmp_.add_argument("--seed", type=int, default=None, help="Random seed for pair selection")
    cmp_.add_argument("--limit", type=int, default=None, help="Stop after this many answers")

    # ── results ─────────────────────────────────────────────────────
    res = sub.add_parser("results", help="Show the current ranking")
    res.add_argument("--top", type=int, default=20, help="Number of jobs to show (0 = all)")

    # ── export ──────────────────────────────────────────────────────
    exp = sub.add_parser("export", help="Export the ranking as CSV")
    exp.add_argument("output", type=str, nargs="?", default="job-rankings.csv", help="CSV path")

    # ── reset ───────────────────────────────────────────────────────
    rst = sub.add_parser("reset", help="Delete all saved progress")
    rst.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")

    # ── serve ───────────────────────────────────────────────────────
    srv = sub.add_parser("serve", help="Start the HTTP API")
    srv.add_argument("--host", default="127.0.0.1", help="Host to bind to")
    srv.add_argument("--port", type=int, default=8000, help="Port to bind to")
    srv.add_argument("--reload", action="store_true", help="Enable auto-reload for development")

    # ── status ──────────────────────────────────────────────────────
    sub.add_parser("status", help="Show config location, catalog and progress")

    return parser


# ── shared helpers ──────────────────────────────────────────────────


def _load_env() -> None:
    from dotenv import load_dotenv

    from jobrank.dirs import get_env_path

    load_dotenv()
    user_env = get_env_path()
    if user_env.exists():
        load_dotenv(user_env)


def _load_config(args: argparse.Namespace):
    """Load config and apply command-line path overrides. Exits on error."""
    from jobrank.core.config import load_config

    config_path = Path(args.config) if args.config else None
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        print(f"Error: Config file not found: {args.config}")
        sys.exit(1)
    except ValueError as e:
        print(f"Error: Invalid config: {e}")
        sys.exit(1)

    if args.catalog:
        config.paths.catalog = Path(args.catalog)
    if args.state:
        config.paths.state_file = Path(args.state)
    if getattr(args, "seed", None) is not None:
        config.session.seed = args.seed
    if not args.verbose:
        logging.getLogger().setLevel(config.logging.level)
    return config


def _open_session(args: argparse.Namespace):
    """Load catalog and saved progress into a session. Exits on fatal errors."""
    from jobrank.core.catalog import Catalog
    from jobrank.core.errors import CatalogError
    from jobrank.core.storage import SnapshotStore
    from jobrank.dirs import find_catalog
    from jobrank.ranking.session import ComparisonSession

    config = _load_config(args)
    catalog_path = config.paths.catalog or find_catalog()
    if catalog_path is None:
        print("Error: No catalog found. Pass --catalog or set paths.catalog in config.yaml")
        sys.exit(1)
    try:
        catalog = Catalog.load(catalog_path)
    except CatalogError as e:
        print(f"Error: Failed to load data: {e}")
        sys.exit(1)

    store = SnapshotStore(config.paths.state_file)
    return ComparisonSession.resume(catalog, store.load(), config=config, store=store)


def _format_job(session, job_id: str, label: str) -> str:
    catalog = session.catalog
    job = catalog.job(job_id)
    lines = [f"  [{label}] {job.title}"]
    if job.description:
        lines.append(f"      {job.description}")
    lines.append(f"      Field:     {catalog.sector_label(job_id) or 'N/A'}")
    lines.append(f"      Salary:    ${job.median_pay_annual:,}/yr")
    lines.append(f"      Education: {job.entry_level_education or 'N/A'}")
    lines.append(f"      Growth:    {job.employment_outlook_percent:g}%")
    return "\n".join(lines)


def _print_ranking(rows, top: int) -> None:
    shown = rows if top <= 0 else rows[:top]
    for r in shown:
        print(
            f"  {r['rank']:4d}. {r['title'][:45]:45s} {r['sector'][:28]:28s} "
            f"Score: {r['score']:5d}  ${r['median_pay_annual']:,}/yr"
        )
    if len(shown) < len(rows):
        print(f"  ... {len(rows) - len(shown)} more")


# ── subcommand handlers ─────────────────────────────────────────────


def _cmd_init(args: argparse.Namespace) -> None:
    """Create config directory and default config file."""
    from jobrank.core.config import default_config_yaml
    from jobrank.dirs import ensure_dirs

    print("\njobrank setup")
    print("=" * 40)
    config_dir = ensure_dirs()
    print(f"  Config directory: {config_dir}")

    config_file = config_dir / "config.yaml"
    if config_file.exists():
        print(f"  Config already exists: {config_file}")
    else:
        config_file.write_text(default_config_yaml(), encoding="utf-8")
        print(f"  Wrote default config: {config_file}")

    catalog = config_dir / "catalog.json"
    if not catalog.exists():
        print(f"\n  Place your job catalog at {catalog}")
        print("  or pass --catalog to each command.")
    print("\nSetup complete!")


def _cmd_compare(args: argparse.Namespace) -> None:
    """Interactive comparison loop."""
    from jobrank.core.errors import NoEligibleGroupsError

    session = _open_session(args)
    try:
        session.start()
    except NoEligibleGroupsError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print("\nWhich job appeals to you more?")
    print("Your choices help us learn which fields and roles you prefer.")
    print("Answer 1 or 2, s to skip, r for results, q to quit.")

    answered = 0
    while args.limit is None or answered < args.limit:
        stats = session.stats()
        print(
            f"\nToday: {stats['today_count']}/{stats['daily_target']}   "
            f"Total: {stats['total_comparisons']}"
        )
        proposal = session.current
        print(_format_job(session, proposal.job_a, "1"))
        print(_format_job(session, proposal.job_b, "2"))

        try:
            answer = input("> ").strip().lower()
        except EOFError:
            print()
            break

        if answer in ("1", "2"):
            outcome = session.choose(int(answer))
            answered += 1
            winner = session.catalog.job(outcome.winner_id).title
            print(f"  Noted: {winner} ({outcome.winner_score:.0f})")
        elif answer == "s":
            session.skip()
        elif answer == "r":
            rows = session.show_results()
            print("\nYour ranking so far:")
            _print_ranking(rows, 10)
            session.back_to_comparison()
        elif answer == "q":
            break
        else:
            print("  Please answer 1, 2, s, r or q.")

    print(f"\nSaved. {session.state.total_comparisons} comparisons in total.")


def _cmd_results(args: argparse.Namespace) -> None:
    session = _open_session(args)
    rows = session.ranking()
    print(f"\nRanking after {session.state.total_comparisons} comparisons:\n")
    _print_ranking(rows, args.top)


def _cmd_export(args: argparse.Namespace) -> None:
    from jobrank.ranking.report import export_csv

    session = _open_session(args)
    path = export_csv(session.ranking(), Path(args.output))
    print(f"Exported {len(session.catalog)} jobs to {path}")


def _cmd_reset(args: argparse.Namespace) -> None:
    from jobrank.core.storage import SnapshotStore

    config = _load_config(args)
    store = SnapshotStore(config.paths.state_file)
    if not store.exists():
        print("No saved progress to reset.")
        return
    if not args.yes:
        confirm = input("Are you sure you want to reset all progress? [y/N] ").strip().lower()
        if confirm != "y":
            print("Kept existing progress.")
            return
    if store.clear():
        print(f"Progress reset ({config.paths.state_file})")
    else:
        print("No saved progress to reset.")


def _cmd_serve(args: argparse.Namespace) -> None:
    """Start the HTTP API."""
    from jobrank.compat import require

    require("fastapi", "api")
    uvicorn = require("uvicorn", "api")

    import os

    config = _load_config(args)
    # The API process reads its paths from the environment.
    if config.paths.catalog:
        os.environ["JOBRANK_CATALOG"] = str(config.paths.catalog)
    os.environ["JOBRANK_STATE"] = str(config.paths.state_file)
    if args.config:
        os.environ["JOBRANK_CONFIG"] = args.config

    from jobrank.api.app import create_app

    uvicorn.run(create_app(), host=args.host, port=args.port, reload=args.reload)


def _cmd_status(args: argparse.Namespace) -> None:
    """Show config location, catalog and progress."""
    from jobrank import __version__
    from jobrank.compat import missing
    from jobrank.core.storage import SnapshotStore
    from jobrank.dirs import find_catalog, find_config, get_config_dir

    print(f"jobrank v{__version__}")
    print()

    config_dir = get_config_dir()
    print(f"Config directory:  {config_dir}")
    print(f"  exists: {'yes' if config_dir.exists() else 'no'}")

    cfg_path = Path(args.config) if args.config else find_config()
    if cfg_path:
        print(f"Active config:     {cfg_path}")
    else:
        print("Active config:     (defaults -- no config file found)")

    config = _load_config(args)
    catalog = config.paths.catalog or find_catalog()
    print(f"Catalog:           {catalog if catalog else '(not found)'}")

    store = SnapshotStore(config.paths.state_file)
    print(f"Saved progress:    {store.path}")
    snapshot = store.load()
    if snapshot:
        print(f"  {snapshot['totalComparisons']} comparisons, last active {snapshot['lastDate']}")
    elif store.exists():
        print("  (unreadable; the next session starts fresh and overwrites it)")
    else:
        print("  (none)")

    absent = missing("api")
    print()
    print(f"HTTP API extra:    {'installed' if not absent else 'missing ' + ', '.join(absent)}")


# ── main ────────────────────────────────────────────────────────────


_COMMANDS = {
    "init": _cmd_init,
    "compare": _cmd_compare,
    "results": _cmd_results,
    "export": _cmd_export,
    "reset": _cmd_reset,
    "serve": _cmd_serve,
    "status": _cmd_status,
}


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    _load_env()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    handler = _COMMANDS.get(args.command)
    if handler:
        handler(args)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
