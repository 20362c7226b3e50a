"""Entry point to build a hexbin shot chart table.

Usage (from project root):

    python run_pipeline.py --config config.yaml
    python run_pipeline.py --init-config config.yaml
"""
import argparse
import logging
from pathlib import Path

from atlas_hex_charts.config import save_default_config
from atlas_hex_charts.pipeline import run_full_pipeline


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "--config",
        type=str,
        default="config.yaml",
        help="Path to hexbin chart config YAML (relative to project root)",
    )
    parser.add_argument(
        "--init-config",
        action="store_true",
        help="Write a default config to --config and exit",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if args.init_config:
        save_default_config(args.config)
        print(f"Wrote default config to {args.config}")
        return

    project_root = Path(".")
    output_path = run_full_pipeline(project_root, args.config)
    print(f"Wrote hexbin table to {output_path}")


if __name__ == "__main__":
    main()
