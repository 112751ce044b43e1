"""
Admissions Match admin CLI.

Uses the repositories, recalculation service, and scheduler jobs over the
unified database layer.
"""

import argparse
import json
import sys

from dotenv import load_dotenv

from admissions_match.config import get_settings
from admissions_match.db import db
from admissions_match.logging import configure_logging
from admissions_match.repositories import RecommendationRepository, StudentRepository
from admissions_match.scheduler import run_worker_forever
from admissions_match.scheduler.jobs import run_recommendation_worker
from admissions_match.services import PendingRecalculationSet, recalculate_for_student


def _init_database(create_tables: bool = False) -> None:
    db.initialize()
    if create_tables:
        db.create_all_tables()


def cmd_init_db(args) -> int:
    """Create all tables (use alembic for managed databases)."""
    _init_database(create_tables=True)
    print("Database initialized")
    return 0


def cmd_worker(args) -> int:
    """Run the periodic recommendation worker until interrupted."""
    _init_database()
    run_worker_forever()
    return 0


def cmd_run_once(args) -> int:
    """Process a single batch of pending students."""
    _init_database()
    processed = run_recommendation_worker(batch_size=args.batch_size)
    with db.session() as session:
        remaining = PendingRecalculationSet(StudentRepository(session)).size()
    print(f"Processed {processed} student(s); {remaining} still pending")
    return 0


def cmd_recalculate(args) -> int:
    """Recalculate one student immediately."""
    _init_database()
    written = recalculate_for_student(args.student_id)
    if written is None:
        print(f"Student {args.student_id} not found", file=sys.stderr)
        return 1
    print(f"Student {args.student_id}: {written} recommendation(s) written")
    return 0


def cmd_mark_dirty(args) -> int:
    """Flag one student, or every student, for recalculation."""
    _init_database()
    with db.session() as session:
        pending = PendingRecalculationSet(StudentRepository(session))
        if args.all:
            count = pending.enqueue_all()
            print(f"Flagged {count} student(s)")
            return 0
        if not pending.enqueue(args.student_id):
            print(f"Student {args.student_id} not found", file=sys.stderr)
            return 1
    print(f"Flagged student {args.student_id}")
    return 0


def cmd_show(args) -> int:
    """Show a student's top recommendations."""
    _init_database()
    with db.session() as session:
        if not StudentRepository(session).get_by_id(args.student_id):
            print(f"Student {args.student_id} not found", file=sys.stderr)
            return 1
        recommendations = RecommendationRepository(session).list_for_student(
            args.student_id, limit=args.limit
        )
        rows = [
            {**rec.to_dict(), "university_name": rec.university.university_name}
            for rec in recommendations
        ]

    if args.json:
        print(json.dumps(rows, indent=2))
        return 0

    if not rows:
        print("No recommendations yet")
        return 0

    print(f"\n{'=' * 60}\nTop recommendations for student {args.student_id}\n{'=' * 60}")
    for rank, row in enumerate(rows, start=1):
        print(f"{rank:>3}. {row['match_score']:.3f}  {row['university_name']} (#{row['university_id']})")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="admissions-match",
        description="Student/university match scoring and recommendation worker",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    init_parser = subparsers.add_parser("init-db", help="Create database tables")
    init_parser.set_defaults(func=cmd_init_db)

    worker_parser = subparsers.add_parser("worker", help="Run the periodic recommendation worker")
    worker_parser.set_defaults(func=cmd_worker)

    run_parser = subparsers.add_parser("run-once", help="Process one batch of pending students")
    run_parser.add_argument("--batch-size", type=int, default=None, help="Override batch size")
    run_parser.set_defaults(func=cmd_run_once)

    recalc_parser = subparsers.add_parser("recalculate", help="Recalculate one student now")
    recalc_parser.add_argument("student_id", type=int)
    recalc_parser.set_defaults(func=cmd_recalculate)

    dirty_parser = subparsers.add_parser("mark-dirty", help="Flag students for recalculation")
    target = dirty_parser.add_mutually_exclusive_group(required=True)
    target.add_argument("student_id", type=int, nargs="?")
    target.add_argument("--all", action="store_true", help="Flag every student")
    dirty_parser.set_defaults(func=cmd_mark_dirty)

    show_parser = subparsers.add_parser("show", help="Show a student's top recommendations")
    show_parser.add_argument("student_id", type=int)
    show_parser.add_argument("--limit", type=int, default=10)
    show_parser.add_argument("--json", action="store_true", help="Output JSON")
    show_parser.set_defaults(func=cmd_show)

    return parser


def main(argv=None) -> int:
    load_dotenv()
    # settings may have been read at import, before .env was loaded
    get_settings.cache_clear()
    args = build_parser().parse_args(argv)
    configure_logging(get_settings().log_level)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
