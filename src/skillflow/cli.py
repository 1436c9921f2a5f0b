"""Command-line entry point: run the API and perform admin maintenance.

Maintenance commands always work against the local record store.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from dataclasses import replace
from pathlib import Path

from skillflow.config import BACKEND_LOCAL, Settings, get_settings
from skillflow.data.db import init_db
from skillflow.services import SkillFlowServices, build_services
from skillflow.utils.export import backup_filename, csv_filename, export_backup, export_to_csv

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="skillflow", description="SkillFlow learning tracker administration"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    serve = commands.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=5000)
    serve.add_argument("--reload", action="store_true")

    commands.add_parser("seed-admin", help="Create the bootstrap admin account")
    commands.add_parser("stats", help="Print system statistics")

    export = commands.add_parser("export-backup", help="Write a full-system backup")
    export.add_argument("path", nargs="?", type=Path, default=None)

    restore = commands.add_parser("import-backup", help="Restore from a backup file")
    restore.add_argument("path", type=Path)

    csv_export = commands.add_parser("export-csv", help="Export one user's skills as CSV")
    csv_export.add_argument("email")
    csv_export.add_argument("path", nargs="?", type=Path, default=None)
    return parser


def _local_services(settings: Settings) -> SkillFlowServices:
    init_db()
    return build_services(replace(settings, backend=BACKEND_LOCAL))


def _print_stats(services: SkillFlowServices) -> None:
    stats = services.stats.compute_stats()
    print("=" * 60)
    print("SkillFlow System Statistics")
    print("=" * 60)
    print(f"Users:   {stats.total_users}")
    print(f"Skills:  {stats.total_skills}")
    print(f"Entries: {stats.total_entries}")
    print(f"Storage: {stats.storage_used_kb} KB / {stats.storage_limit_kb} KB")
    if stats.per_user_stats:
        print("-" * 60)
        for item in stats.per_user_stats:
            print(
                f"{item.user.name} <{item.user.email}> [{item.user.role}]: "
                f"{item.skills_count} skills, {item.entries_count} entries"
            )


def run_cli(argv: Sequence[str] | None = None) -> int:
    """Dispatch one subcommand.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    args = _build_parser().parse_args(argv)
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "serve":
        from skillflow.api.main import main as serve

        serve(host=args.host, port=args.port, reload=args.reload)
        return 0

    services = _local_services(settings)

    if args.command == "seed-admin":
        if services.users.seed_super_admin(settings.admin_password):
            print(f"Created admin account {settings.admin_email}")
        else:
            print(f"Admin account {settings.admin_email} already exists")
        return 0

    if args.command == "stats":
        _print_stats(services)
        return 0

    if args.command == "export-backup":
        path = args.path or Path(backup_filename())
        export_backup(services.backup.export_json(), path)
        print(f"Backup written to {path}")
        return 0

    if args.command == "import-backup":
        try:
            document = args.path.read_text(encoding="utf-8")
        except OSError as exc:
            print(f"Error: cannot read {args.path}: {exc}")
            return 1
        if not services.backup.import_all(document, performed_by="CLI"):
            print("Error: invalid backup file")
            return 1
        print("System restored successfully")
        return 0

    if args.command == "export-csv":
        user = services.users.find_by_email(args.email)
        if user is None:
            print(f"Error: no user with email {args.email}")
            return 1
        path = args.path or Path(csv_filename())
        export_to_csv(services.skills.load(user.id), path)
        print(f"CSV written to {path}")
        return 0

    print(f"Unknown command: {args.command}")
    return 1


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the CLI application."""
    try:
        return run_cli(argv)
    except KeyboardInterrupt:
        print("\nInterrupted by user. Exiting.")
        return 130
    except Exception as exc:
        logger.exception("Command failed")
        print(f"\nUnexpected error: {exc}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
