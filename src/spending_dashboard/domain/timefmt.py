def format_duration(seconds: float) -> str:
    if seconds <= 0:
        return "0 ms"
    if seconds < 0.001:
        return f"{seconds * 1_000_000:.0f} us"
    if seconds < 1:
        return f"{seconds * 1000:.1f} ms"
    return f"{seconds:.2f} s"
