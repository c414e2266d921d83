"""Example pipeline: expand cable rows, pack them and print the bore."""

import numpy as np

from boresizer import Cable, PackingConfig, TableRow, format_result, generate_bore

ROWS = [
    TableRow(Cable(name="HDMI", diameter=1.5), quantity=2),
    TableRow(Cable(name="USB", diameter=0.5), quantity=4),
    TableRow(Cable(name="Ethernet", diameter=0.8), quantity=3),
    TableRow("custom", quantity=1, custom_name="Fiber", custom_diameter=0.3),
    # Blank rows from the table are ignored.
    TableRow("custom", quantity=2),
]


def main() -> None:
    config = PackingConfig(max_iterations=30, radius_step_size=0.05, angle_step_size=2.0)
    result = generate_bore(ROWS, config, rng=np.random.default_rng(123))
    print(format_result(result))


if __name__ == "__main__":
    main()
