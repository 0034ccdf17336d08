from __future__ import annotations

import argparse
import logging
import math
from pathlib import Path

import numpy as np

from plotview import Function, Histogram, Line, Page, Scatter, View


def build_view() -> View:
    x = np.linspace(0.0, 10.0, 21, dtype=np.float64)
    noisy = np.sin(x) + np.linspace(-0.2, 0.2, x.size)
    return (
        View()
        .add(Function(math.sin, 0.0, 10.0, samples=200))
        .add(Line(x=x, y=noisy, colour="#66cc66", glyph="-"))
        .add(Scatter(x=x, y=noisy, marker="cross"))
        .x_label("t")
        .y_label("signal")
    )


def main() -> None:
    parser = argparse.ArgumentParser(prog="plotview-demo")
    parser.add_argument("--width", type=int, default=60, help="text face width in characters")
    parser.add_argument("--height", type=int, default=15, help="text face height in rows")
    parser.add_argument("--svg", type=Path, default=None, help="also write an SVG page here")
    parser.add_argument("--histogram", action="store_true", help="plot a histogram of normal samples instead")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.histogram:
        samples = np.random.default_rng(7).normal(size=500)
        view = View().add(Histogram(samples, bins=20)).x_label("value")
    else:
        view = build_view()

    print(view.to_text(args.width, args.height))
    if args.svg is not None:
        Page.single(view).dimensions(800, 500).save(args.svg)


if __name__ == "__main__":
    main()
