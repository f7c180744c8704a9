"""Human-readable statistics for a backup run."""

from __future__ import annotations

_DURATION_UNITS = (("seconds", 60), ("minutes", 60), ("hours", 24), ("days", None))
_SIZE_UNITS = ("B", "KiB", "MiB", "GiB", "TiB", "PiB")


def friendly_duration(seconds: float) -> str:
    """Scale ``seconds`` up to the largest unit it does not overflow.

    >>> friendly_duration(125)
    '2.08 minutes'
    """
    value = float(seconds)
    for name, rollover in _DURATION_UNITS:
        if rollover is None or value < rollover:
            return f"{value:.2f} {name}"
        value /= rollover
    raise AssertionError("unreachable")


def friendly_size(nbytes: int) -> str:
    value = float(nbytes)
    for unit in _SIZE_UNITS[:-1]:
        if value < 1024:
            return f"{value:.2f} {unit}"
        value /= 1024
    return f"{value:.2f} {_SIZE_UNITS[-1]}"


def throughput(total_bytes: int, elapsed: float) -> tuple[float, float]:
    """Return ``(mebibits per second, megabytes per second)``."""
    elapsed = max(elapsed, 1e-6)
    mebibits = total_bytes * 8 / 2**20 / elapsed
    megabytes = total_bytes / 10**6 / elapsed
    return mebibits, megabytes


def render_report(
    start: float,
    end: float,
    file_count: int,
    total_bytes: int,
    shared_link: str | None = None,
) -> str:
    elapsed = end - start
    mebibits, megabytes = throughput(total_bytes, elapsed)
    lines = [
        f"Uploaded {file_count} files, {friendly_size(total_bytes)} ({total_bytes} bytes)",
        f"Took {friendly_duration(elapsed)}",
        f"Average speed: {mebibits:.2f} Mibit/s ({megabytes:.2f} MB/s)",
    ]
    if shared_link:
        lines.append(f"Shared link: {shared_link}")
    return "\n".join(lines)


__all__ = ["friendly_duration", "friendly_size", "throughput", "render_report"]
