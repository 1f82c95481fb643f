"""Human-readable duration formatting."""


def format_duration(seconds: int) -> str:
    """
    Format a tracked duration for totals.

    Example: 3900 -> "1h 5m", 300 -> "5m"
    """
    seconds = max(int(seconds), 0)
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def format_elapsed(seconds: int) -> str:
    """Format a running timer as HH:MM:SS."""
    seconds = max(int(seconds), 0)
    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"
