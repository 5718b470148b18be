from datetime import date, timedelta


def hhmmss_to_seconds(hhmmss: str) -> int:
    """
    Convert 'HH:MM:SS' -> total seconds (int).
    Example: '00:45:32' -> 2732
    """
    parts = hhmmss.split(":")
    if len(parts) != 3:
        raise ValueError("Duration must be in HH:MM:SS format")

    hours, minutes, seconds = map(int, parts)
    return hours * 3600 + minutes * 60 + seconds


def seconds_to_hhmmss(total_seconds: int) -> str:
    """
    Convert total seconds (int) -> 'HH:MM:SS'.
    Example: 2732 -> '00:45:32'
    """
    total_seconds = int(total_seconds or 0)
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def compute_pace(duration_seconds: int, distance_mi: float) -> str:
    """
    Compute pace per mile as 'M:SS/mi' or 'MM:SS/mi'.
    Example: duration=2732 sec, distance=7.35 -> '6:11/mi'
    """
    if not distance_mi or distance_mi <= 0:
        return "0:00/mi"

    pace_sec = int((duration_seconds or 0) / distance_mi)

    minutes = pace_sec // 60
    seconds = pace_sec % 60
    return f"{minutes}:{seconds:02d}/mi"


def monday_of(d: date) -> date:
    # Monday = 0, Sunday = 6
    return d - timedelta(days=d.weekday())


def iso_week_bounds(d: date) -> tuple[date, date]:
    """Return the half-open [Monday, next Monday) interval containing `d`."""
    start = monday_of(d)
    return start, start + timedelta(days=7)
