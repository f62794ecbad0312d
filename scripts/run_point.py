#!/usr/bin/env python3
"""
Run the PyRadSnow pipeline for a single point.

Reads a CSV time series of meteo samples, runs the radiation and snow
components at every timestamp and writes the outputs to CSV.

The forcing CSV needs a timestamp column (UTC) and any of the columns
t_air [°C], rh [%], t_soil [°C], sw_measured [W/m²], precip [mm],
energy_index. Empty cells are missing values.

Usage:
    python run_point.py forcing.csv --config point.json --output out.csv
    python run_point.py forcing.csv --latitude 46.5 --elevation 1800 --melt-model hoock

Examples:
    # Run with a JSON config holding any PointConfig fields
    python run_point.py station.csv --config station.json -o station_out.csv

    # Override models from the command line
    python run_point.py station.csv --emissivity-model 5 --decomposition-model boland
"""

import argparse
import json
import logging
import sys
from pathlib import Path

import pandas as pd

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from pyradsnow import PointModel, PointConfig, ConfigurationError

logger = logging.getLogger('run_point')


def load_forcing(path, time_column='timestamp'):
    """Read a forcing CSV into a DataFrame indexed by UTC timestamps."""
    forcing = pd.read_csv(path)
    if time_column not in forcing.columns:
        raise ValueError(f"Forcing file has no '{time_column}' column: {path}")

    forcing.index = pd.to_datetime(forcing.pop(time_column), utc=True)
    forcing.index.name = time_column
    return forcing


def build_config(args):
    """Merge the JSON config file with command-line overrides."""
    values = {}
    if args.config:
        with open(args.config) as f:
            values.update(json.load(f))

    overrides = {
        'latitude': args.latitude,
        'elevation': args.elevation,
        'skyview': args.skyview,
        'emissivity_model': args.emissivity_model,
        'decomposition_model': args.decomposition_model,
        'melt_model': args.melt_model,
        'initial_solid': args.initial_solid,
    }
    values.update({k: v for k, v in overrides.items() if v is not None})

    return PointConfig.from_dict(values)


def print_summary(outputs):
    """Print seasonal totals of the main outputs."""
    print("\n" + "-" * 60)
    print(f"{'Steps':<28} {len(outputs):>12d}")
    print(f"{'Peak SWE [mm]':<28} {outputs['swe'].max():>12.1f}")
    print(f"{'Total snowfall [mm]':<28} {outputs['snowfall'].sum():>12.1f}")
    print(f"{'Total rainfall [mm]':<28} {outputs['rainfall'].sum():>12.1f}")
    print(f"{'Total melt discharge [mm]':<28} {outputs['melt_discharge'].sum():>12.1f}")
    print(f"{'Mean all-sky SW [W/m2]':<28} {outputs['sw_all_sky'].mean():>12.1f}")
    print(f"{'Mean LW down [W/m2]':<28} {outputs['lw_down'].mean():>12.1f}")
    print("-" * 60)


def main():
    parser = argparse.ArgumentParser(
        description='Run the PyRadSnow pipeline for a single point.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument('forcing', type=str, help='Forcing CSV file')
    parser.add_argument('--config', type=str, help='JSON file with PointConfig fields')
    parser.add_argument('-o', '--output', type=str, default=None,
                        help='Output CSV (default: <forcing>_out.csv)')
    parser.add_argument('--time-column', type=str, default='timestamp',
                        help='Name of the timestamp column (default: timestamp)')
    parser.add_argument('--latitude', type=float, help='Latitude [degrees]')
    parser.add_argument('--elevation', type=float, help='Elevation [m]')
    parser.add_argument('--skyview', type=float, help='Skyview factor [0-1]')
    parser.add_argument('--emissivity-model', type=str,
                        help='Clear-sky emissivity model name or code 1-5')
    parser.add_argument('--decomposition-model', type=str,
                        help='erbs, reindl or boland')
    parser.add_argument('--melt-model', type=str, help='classical, cazorzi or hoock')
    parser.add_argument('--initial-solid', type=float,
                        help='Initial solid water content [mm]')
    parser.add_argument('--log-level', type=str, default='INFO',
                        help='Logging level (default: INFO)')

    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format='%(asctime)s %(name)s %(levelname)s: %(message)s'
    )

    try:
        config = build_config(args)
        model = PointModel(config)
    except ConfigurationError as err:
        logger.error("Invalid configuration: %s", err)
        sys.exit(2)

    forcing = load_forcing(args.forcing, time_column=args.time_column)
    logger.info("Loaded %d samples from %s", len(forcing), args.forcing)

    outputs = model.run(forcing)

    if args.output:
        output_file = Path(args.output)
    else:
        forcing_path = Path(args.forcing)
        output_file = forcing_path.with_name(f'{forcing_path.stem}_out.csv')
    outputs.to_csv(output_file)
    logger.info("Outputs written: %s", output_file)

    print_summary(outputs)


if __name__ == '__main__':
    main()
