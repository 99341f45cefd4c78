"""Number and duration formatting for run reports."""


def elapsed_str(seconds: float) -> str:
    """Format a duration compactly: "3.2s", "1m 02.5s" or "2h 05m 00.0s"."""
    minutes, secs = divmod(seconds, 60)
    if minutes < 1:
        return f"{secs:.1f}s"
    hours, minutes = divmod(int(minutes), 60)
    if hours:
        return f"{hours}h {minutes:02}m {secs:04.1f}s"
    return f"{minutes}m {secs:04.1f}s"


def int_comma(n: int) -> str:
    """Format an integer with thousands separators, e.g. "1,234"."""
    return f"{n:,}"
