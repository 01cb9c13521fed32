import argparse
import logging
import sys
from datetime import date, datetime
from typing import List, Optional

from prayer_tracker.core.config import Config
from prayer_tracker.core.db import init_db
from prayer_tracker.tracker import service
from prayer_tracker.tracker.calendar_grid import current_year_month, render_text
from prayer_tracker.tracker.catalog import list_prayers
from prayer_tracker.tracker.errors import InvalidArgument
from prayer_tracker.tracker.next_prayer import current_or_next_prayer, time_until_next
from prayer_tracker.tracker.record import DayRecord
from prayer_tracker.tracker.rules import day_status, day_status_on, is_group_complete

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'

logger = logging.getLogger(__name__)


def setup_basic_logging():
    """Setup basic stdout logging before config is loaded"""
    root_logger = logging.getLogger()
    if not root_logger.handlers:  # Only add handler if none exists
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root_logger.addHandler(handler)
        root_logger.setLevel(logging.DEBUG)
        logging.debug("Basic logging initialized")


def setup_logging(config: Config) -> None:
    """Apply logging.level and add a file handler when logging.file is set"""
    log_config = config.get_section("logging")
    root_logger = logging.getLogger()
    level_name = str(log_config.get("level", "INFO")).upper()
    root_logger.setLevel(getattr(logging, level_name, logging.INFO))

    log_file = log_config.get("file")
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root_logger.addHandler(file_handler)
    logging.info(f"Logging configured: level={level_name}, file={log_file}")


def _print_day(config: Config, day: str) -> None:
    stored = service.get_record(day)
    record = stored or DayRecord.empty(day)
    if config.mark_missed_days:
        status = day_status_on(stored, day, date.today())
    else:
        status = day_status(stored)
    print(f"{record.date}: {status.value}")
    for prayer in list_prayers(config.prayer_time_overrides):
        print(f"  {prayer.name} ({prayer.time})")
        for group in prayer.groups:
            mark = "x" if is_group_complete(record, group.unit_ids) else " "
            print(f"    [{mark}] {group.label}: {', '.join(group.unit_ids)}")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Prayer Tracker')
    parser.add_argument('--config',
                        help='Path to config file (default: ./config.yaml)')
    sub = parser.add_subparsers(dest='command')

    sub.add_parser('serve', help='Run the HTTP API')

    show = sub.add_parser('show', help='Show one day (default today)')
    show.add_argument('date', nargs='?')

    toggle = sub.add_parser('toggle', help='Toggle unit ids for a date')
    toggle.add_argument('date')
    toggle.add_argument('unit_ids', nargs='+')

    cal = sub.add_parser('calendar', help='Print a month grid (default this month)')
    cal.add_argument('year_month', nargs='?')

    sub.add_parser('next', help='Show the next prayer')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    setup_basic_logging()

    args = _build_parser().parse_args(argv)
    command = args.command or 'serve'

    config = Config(config_path=args.config, watch=command == 'serve')
    setup_logging(config)
    init_db(config.data)

    try:
        if command == 'serve':
            from prayer_tracker.api import run_api_server
            try:
                run_api_server(config)
            finally:
                config.cleanup()
        elif command == 'show':
            _print_day(config, args.date or date.today().isoformat())
        elif command == 'toggle':
            service.toggle_units_for_date(args.date, args.unit_ids)
            _print_day(config, args.date)
        elif command == 'calendar':
            year_month = args.year_month or current_year_month()
            days = service.build_month_for(year_month, date.today(), mark_missed=config.mark_missed_days)
            print(year_month)
            print(render_text(days))
            print(f"Days with all Fard completed: {service.get_complete_fard_days_count(year_month)}")
        elif command == 'next':
            now = datetime.now()
            overrides = config.prayer_time_overrides
            upcoming = current_or_next_prayer(now.hour, now.minute, overrides)
            remaining = time_until_next(now.hour, now.minute, overrides)
            print(f"{upcoming.display_name}: {remaining}" if upcoming else remaining)
    except InvalidArgument as e:
        logger.error(str(e))
        print(f"error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
