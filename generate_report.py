#!/usr/bin/env python3
"""
Script to generate a work report from the git commits of a time period:
- Repository path (optional, defaults to the current directory)
- Period: today, yesterday, thisWeek, lastWeek or custom (--from/--to)
- Mode: plain, structured or ai
- --branches: attribute each commit to a branch
- --list: print the commit list instead of a report
- --output: also write the report to a Markdown file
"""

import argparse
import sys
from pathlib import Path

from git_reporter.core.config import Settings, load_settings
from git_reporter.core.logging import setup_logging
from git_reporter.git.domain.value_objects import DateRange, Period
from git_reporter.git.repositories.implementations import GitRepositoryImpl
from git_reporter.git.services.branch_annotation_service import BranchAnnotationService
from git_reporter.git.services.commit_retrieval_service import CommitRetrievalService
from git_reporter.git.services.date_range_service import DateRangeService
from git_reporter.notifications.repositories.implementations import ConsoleNotifierImpl
from git_reporter.notifications.services.notification_service import NotificationService
from git_reporter.reporting.domain.value_objects import ReportMode
from git_reporter.reporting.services.report_generation_service import (
    ReportGenerationService,
)
from git_reporter.reporting.services.report_service import ReportService
from git_reporter.summarization.repositories.factory import LLMAgentProvider
from git_reporter.summarization.services.ai_report_service import AIReportService


def build_generation_service(
    repo_path: Path, settings: Settings, notification_service: NotificationService
) -> ReportGenerationService:
    """Wire the reporting pipeline for one repository."""
    git_repo = GitRepositoryImpl()
    retrieval_service = CommitRetrievalService(
        git_repo,
        repo_path,
        notification_service,
        all_branches=settings.all_branches,
        broad_limit=settings.broad_limit,
        recent_limit=settings.recent_limit,
    )
    branch_service = BranchAnnotationService(
        git_repo,
        repo_path,
        history_limit=settings.branch_history_limit,
        max_containment_queries=settings.max_containment_queries,
    )
    report_service = ReportService(date_format=settings.date_format)
    ai_report_service = AIReportService(
        LLMAgentProvider(settings), date_format=settings.date_format
    )
    return ReportGenerationService(
        retrieval_service,
        report_service,
        notification_service,
        branch_annotation_service=branch_service,
        ai_report_service=ai_report_service,
    )


def resolve_date_range(
    args: argparse.Namespace, settings: Settings, date_range_service: DateRangeService
) -> DateRange:
    """Turn the period arguments into a date range."""
    if args.date_from or args.date_to:
        if not (args.date_from and args.date_to):
            raise ValueError("--from and --to must be given together")
        return date_range_service.parse_custom_range(args.date_from, args.date_to)

    period = Period(args.period) if args.period else settings.default_period
    if period == Period.CUSTOM:
        raise ValueError("The custom period needs --from and --to")
    return date_range_service.resolve(period)


def main() -> None:
    """Main function to parse arguments and print the report."""
    parser = argparse.ArgumentParser(
        description="Generate a Markdown work report from your recent git commits"
    )
    parser.add_argument(
        "repo_path",
        type=Path,
        nargs="?",
        default=Path("."),
        help="Path to the git repository directory (default: current directory)",
    )
    parser.add_argument(
        "--period",
        "-p",
        choices=[period.value for period in Period],
        default=None,
        help="Time period to report on (default: GIT_REPORTER_DEFAULT_PERIOD or today)",
    )
    parser.add_argument(
        "--from",
        dest="date_from",
        type=str,
        default=None,
        help="First day of a custom period (YYYY-MM-DD)",
    )
    parser.add_argument(
        "--to",
        dest="date_to",
        type=str,
        default=None,
        help="Last day of a custom period (YYYY-MM-DD)",
    )
    parser.add_argument(
        "--author",
        type=str,
        default=None,
        help="Only include commits whose author matches this pattern",
    )
    parser.add_argument(
        "--mode",
        "-m",
        choices=[mode.value for mode in ReportMode],
        default=ReportMode.STRUCTURED.value,
        help="Report style (default: structured)",
    )
    parser.add_argument(
        "--branches",
        action="store_true",
        help="Resolve the branch each commit was made on",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="Print the commits grouped by day, most recent first, instead of a report",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Also write the report to this Markdown file",
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Load configuration from this .env file",
    )

    args = parser.parse_args()

    try:
        settings = load_settings(args.env_file)
        setup_logging(settings.log_level, settings.log_json)
        date_range = resolve_date_range(args, settings, DateRangeService())
    except ValueError as e:
        print(f"✗ Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    repo_path = args.repo_path.resolve()
    if not repo_path.is_dir():
        print(f"✗ Repository path is not a directory: {repo_path}", file=sys.stderr)
        sys.exit(1)

    notification_service = NotificationService(ConsoleNotifierImpl())
    generation_service = build_generation_service(repo_path, settings, notification_service)

    print(
        f"📝 Collecting commits from {date_range.start:%Y-%m-%d %H:%M} "
        f"to {date_range.end:%Y-%m-%d %H:%M}...",
        file=sys.stderr,
    )

    if args.list:
        commits = generation_service.collect_commits(
            date_range, author=args.author, annotate_branches=args.branches
        )
        report = ReportService(date_format=settings.date_format).render_commit_list(commits)
    else:
        report = generation_service.generate(
            date_range,
            mode=ReportMode(args.mode),
            author=args.author,
            annotate_branches=args.branches,
        )
        if report is None:
            sys.exit(1)

    print(report)

    if args.output is not None:
        try:
            written = ReportGenerationService.save_report(report, args.output)
        except OSError as e:
            print(f"✗ Failed to write report: {e}", file=sys.stderr)
            sys.exit(1)
        print(f"✓ Report saved to {written.absolute()}", file=sys.stderr)

    sys.exit(0)


if __name__ == "__main__":
    main()
