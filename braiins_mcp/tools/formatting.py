"""
Human-readable formatters shared by the Braiins Pool tools.

All helpers are pure functions; time-relative helpers accept an optional
``now`` so output is deterministic in tests.
"""
from datetime import datetime, timezone
from typing import Optional, Sequence

HASHRATE_UNITS = ("H/s", "KH/s", "MH/s", "GH/s", "TH/s", "PH/s", "EH/s")
POOL_HASHRATE_UNITS = HASHRATE_UNITS + ("ZH/s",)

SPARKLINE_CHARS = "▁▂▃▄▅▆▇█"
SPARKLINE_FLAT = "━"

STATUS_LABELS = {
    "active": "🟢 Active",
    "inactive": "🔴 Inactive",
    "disabled": "⚫ Disabled",
}


def _utc(value: datetime) -> datetime:
    # Naive timestamps from the API are UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _now(now: Optional[datetime]) -> datetime:
    return _utc(now) if now is not None else datetime.now(timezone.utc)


def format_hashrate(hashrate: float, units: Sequence[str] = HASHRATE_UNITS) -> str:
    """
    Scale a hashrate in H/s to the largest unit below 1000.

    Example:
        >>> format_hashrate(1.5e14)
        '150.00 TH/s'
    """
    value = float(hashrate)
    unit_index = 0
    while value >= 1000 and unit_index < len(units) - 1:
        value /= 1000
        unit_index += 1
    return f"{value:.2f} {units[unit_index]}"


def format_number(value: float) -> str:
    return f"{value:,}"


def format_relative_time(timestamp: Optional[datetime], now: Optional[datetime] = None) -> str:
    """
    Describe how long ago a timestamp was ("5m ago", "3h ago", "2d ago").

    Returns "Never" for a missing timestamp and "Unknown" for one in the future.
    """
    if timestamp is None:
        return "Never"

    diff_seconds = (_now(now) - _utc(timestamp)).total_seconds()
    if diff_seconds < 0:
        return "Unknown"

    minutes = int(diff_seconds // 60)
    hours = minutes // 60
    days = hours // 24

    if minutes < 1:
        return "Just now"
    if minutes < 60:
        return f"{minutes}m ago"
    if hours < 24:
        return f"{hours}h ago"
    return f"{days}d ago"


def format_time_until(timestamp: datetime, now: Optional[datetime] = None) -> str:
    """Time remaining until a future timestamp ("2d 5h", "3h", "45m", "Imminent")."""
    diff_seconds = (_utc(timestamp) - _now(now)).total_seconds()
    if diff_seconds <= 0:
        return "Imminent"

    hours = int(diff_seconds // 3600)
    days = hours // 24
    remaining_hours = hours % 24

    if days > 0:
        return f"{days}d {remaining_hours}h" if remaining_hours > 0 else f"{days}d"
    if hours > 0:
        return f"{hours}h"
    return f"{int(diff_seconds // 60)}m"


def format_datetime(timestamp: datetime) -> str:
    return _utc(timestamp).strftime("%Y-%m-%d %H:%M:%S UTC")


def format_short_timestamp(timestamp: datetime) -> str:
    return _utc(timestamp).strftime("%b %d, %H:%M")


def format_date(timestamp: datetime) -> str:
    return _utc(timestamp).strftime("%b %d, %Y")


def format_status(status: str) -> str:
    return STATUS_LABELS.get(status, status)


def rejection_rate(valid: int, invalid: int, stale: int) -> str:
    """
    Share of rejected (invalid + stale) shares as a percentage string.

    Example:
        >>> rejection_rate(990, 5, 5)
        '1.00%'
    """
    total = valid + invalid + stale
    if total == 0:
        return "0.00%"
    return f"{(invalid + stale) / total * 100:.2f}%"


def format_luck(value: float) -> str:
    percentage = f"{value * 100:.1f}"
    if value >= 1.1:
        return f"🍀 {percentage}% (Very Lucky)"
    if value >= 1.0:
        return f"✨ {percentage}% (Lucky)"
    if value >= 0.9:
        return f"📊 {percentage}% (Normal)"
    if value >= 0.8:
        return f"📉 {percentage}% (Unlucky)"
    return f"⚠️ {percentage}% (Very Unlucky)"


def format_difficulty(difficulty: float) -> str:
    if difficulty >= 1e12:
        return f"{difficulty / 1e12:.2f} T"
    if difficulty >= 1e9:
        return f"{difficulty / 1e9:.2f} B"
    if difficulty >= 1e6:
        return f"{difficulty / 1e6:.2f} M"
    return format_number(difficulty)


def format_block_time(seconds: float) -> str:
    minutes = int(seconds // 60)
    remaining = round(seconds % 60)

    if minutes == 0:
        return f"{remaining}s"
    if remaining == 0:
        return f"{minutes}m"
    return f"{minutes}m {remaining}s"


def block_time_indicator(actual: float, target: float) -> str:
    ratio = actual / target
    if ratio < 0.9:
        return "⚡ Fast"
    if ratio > 1.1:
        return "🐢 Slow"
    return "✅ On Target"


def format_btc(amount: str) -> str:
    """BTC amount; dust below 0.00001 BTC also shows satoshis."""
    value = float(amount)
    if value == 0:
        return "0 BTC"
    if value < 0.00001:
        return f"{amount} BTC ({round(value * 100_000_000)} sats)"
    return f"{amount} BTC"


def sparkline(values: Sequence[float], width: int = 20) -> str:
    """
    Render a series as a unicode sparkline of at most ``width`` characters.

    Longer series are sampled evenly; a constant series is a flat line.
    """
    if not values:
        return ""
    if len(values) == 1:
        return SPARKLINE_FLAT

    low = min(values)
    high = max(values)
    spread = high - low
    sample_size = min(width, len(values))

    if spread == 0:
        return SPARKLINE_FLAT * sample_size

    step = len(values) / sample_size
    sampled = [values[int(i * step)] for i in range(sample_size)]

    chars = []
    for value in sampled:
        index = min(int((value - low) / spread * len(SPARKLINE_CHARS)), len(SPARKLINE_CHARS) - 1)
        chars.append(SPARKLINE_CHARS[index])
    return "".join(chars)
