"""
echoes: Every command tells a story.

Command-line entry point. Prints a per-month summary of the last year.
"""

from echoes import config
from echoes.config import validate_config
from echoes.history_client import AbacusClient, AbacusClientError
from echoes.logging_config import configure_logging
from echoes.models import CalendarGrid, HeatmapError
from echoes.pipeline import build_calendar_grid
from echoes.calendar_grouper import flatten_days
from echoes.range_builder import one_year_window


def format_month_summary(grid: CalendarGrid) -> list[str]:
    """
    Format one summary line per month of the grid.

    Args:
        grid: Grid from build_calendar_grid()

    Returns:
        Lines like "  Jan 2024   5 weeks    1,234 commands  peak 9"
    """
    lines = []
    for month in grid.months:
        days = flatten_days([month])
        commands = sum(day.count for day in days)
        peak = max(day.intensity for day in days)
        week_word = "week" if len(month.weeks) == 1 else "weeks"
        lines.append(
            f"  {month.label} {month.year}  {len(month.weeks)} {week_word:<5}"
            f" {commands:>8,} commands  peak {peak}"
        )
    return lines


def main():
    configure_logging()

    print("echoes - Every command tells a story")
    print("-" * 50)

    # Validate configuration
    try:
        validate_config()
    except ValueError as e:
        print(f"\nConfiguration Error:\n{e}")
        return 1

    client = AbacusClient(
        config.ABACUS_API_URL, config.ABACUS_TIMEZONE, timeout=config.get_timeout()
    )
    start, end = one_year_window()

    try:
        print(f"\nFetching history since {start.isoformat()}...\n")
        history = client.get_history(start)
    except AbacusClientError as e:
        print(f"\nError: {e}")
        return 1

    try:
        total = client.get_total(start)
    except AbacusClientError as e:
        print(f"Warning: could not fetch total ({e})")
        total = None

    try:
        grid = build_calendar_grid(history, start, end, total=total)
    except HeatmapError as e:
        print(f"\nError: {e}")
        return 1

    for line in format_month_summary(grid):
        print(line)

    print()
    if grid.total is not None:
        print(f"Total: {grid.total:,} commands")

    return 0


if __name__ == "__main__":
    exit(main())
