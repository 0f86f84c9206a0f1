"""Formatting helpers for CLI output"""


def humanize_bytes(num: float, suffix: str = 'B') -> str:
    """Convert bytes to human readable format"""
    for unit in ['', 'K', 'M', 'G', 'T', 'P', 'E', 'Z']:
        if abs(num) < 1000.0:
            return f'{num:3.1f} {unit}{suffix}'
        num /= 1000.0
    return f'{num:.1f} Y{suffix}'


def humanize_speed(bytes_per_second: float) -> str:
    return humanize_bytes(bytes_per_second, 'B/s')


def format_progress(progress: float) -> str:
    """Render a 0..1 progress fraction as a percentage"""
    return f'{progress * 100:.1f}%'
