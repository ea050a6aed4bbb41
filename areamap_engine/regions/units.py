"""Human-readable area strings."""

# Shown instead of a number while the ring self-intersects
ILLEGAL_AREA = "---"


def format_area(square_metres: float) -> str:
    """
    Format an area for display.

    Examples:
        >>> format_area(9876.54321)
        '9877 m²'
        >>> format_area(2.5e6)
        '2.5000 km²'
        >>> format_area(5.1e14)
        '5.100e+08 km²'
    """
    if square_metres > 1e9:
        return f"{square_metres / 1e6:.3e} km²"
    if square_metres > 1e4:
        return f"{square_metres / 1e6:.4f} km²"
    return f"{square_metres:.4g} m²"
