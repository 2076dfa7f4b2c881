# utils/timeutils.py
from datetime import datetime


def run_timestamp() -> datetime:
    """Local wall-clock time with its UTC offset; one per run."""
    return datetime.now().astimezone()
