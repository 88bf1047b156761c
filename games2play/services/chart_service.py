from games2play.core.errors import InsufficientData
from games2play.services.trends_service import TimeSeriesPoint

WIDTH = 800
HEIGHT = 400
PAD_X = 20
PAD_Y = 20
STROKE = "#FEE440"


def chart_path(
    points: list[TimeSeriesPoint],
    width: int = WIDTH,
    height: int = HEIGHT,
    pad_x: int = PAD_X,
    pad_y: int = PAD_Y,
) -> str:
    """Map a series onto the canvas and return the SVG path data.

    Points are spaced evenly by index, not by time. Values are scaled
    between min and max so the largest sits at the top padding; a flat
    series is drawn along the vertical middle.
    """
    if len(points) < 2:
        raise InsufficientData()
    if pad_x < 0 or pad_y < 0 or width < 2 * pad_x or height < 2 * pad_y:
        raise ValueError(f"canvas {width}x{height} too small for padding {pad_x}x{pad_y}")

    values = [p.value for p in points]
    vmin = min(values)
    vmax = max(values)
    flat = vmax == vmin
    vrange = (vmax - vmin) or 1
    plot_w = width - 2 * pad_x
    plot_h = height - 2 * pad_y
    last = len(values) - 1

    def x(i: int) -> float:
        return (i / last) * plot_w + pad_x

    def y(v: float) -> float:
        if flat:
            return height / 2
        return height - pad_y - ((v - vmin) / vrange) * plot_h

    return " ".join(
        f"{'M' if i == 0 else 'L'} {x(i):.2f},{y(v):.2f}" for i, v in enumerate(values)
    )


def render_trend_svg(
    points: list[TimeSeriesPoint],
    width: int = WIDTH,
    height: int = HEIGHT,
    stroke: str = STROKE,
) -> str:
    path_d = chart_path(points, width=width, height=height)
    return f"""<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" viewBox="0 0 {width} {height}" style="background: #fff;">
  <path d="{path_d}" stroke="{stroke}" stroke-width="3" fill="none" />
</svg>
"""
