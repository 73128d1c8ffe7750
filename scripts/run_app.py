#!/usr/bin/env python
"""
Run the Streamlit delivery pricing page.

Usage:
    python scripts/run_app.py [--port 8501] [--headless] [--inclusive-free-delivery]
"""
import argparse
import os
import subprocess
import sys
from pathlib import Path


def build_command(ui_path: Path, port: int, headless: bool) -> list[str]:
    cmd = [
        sys.executable, '-m', 'streamlit', 'run', str(ui_path),
        '--server.port', str(port),
    ]
    if headless:
        cmd.extend(['--server.headless', 'true'])
    return cmd


def main():
    parser = argparse.ArgumentParser(description="Run the delivery pricing Streamlit page")
    parser.add_argument("--port", type=int, default=8501)
    parser.add_argument("--headless", action="store_true", help="Do not open a browser window")
    parser.add_argument(
        "--inclusive-free-delivery",
        action="store_true",
        help="Give free delivery to carts at the threshold, not only above it",
    )
    args = parser.parse_args()

    project_root = Path(__file__).parent.parent
    ui_path = project_root / 'src' / 'delivery_pricing' / 'ui' / 'app_streamlit.py'

    if not ui_path.exists():
        print(f"ERROR: UI module not found at {ui_path}")
        sys.exit(1)

    # The page reads its fee schedule through get_settings()
    env = os.environ.copy()
    if args.inclusive_free_delivery:
        env["DELIVERY_FREE_DELIVERY_INCLUSIVE"] = "1"

    cmd = build_command(ui_path, args.port, args.headless)
    print(f"Starting Delivery Pricing page on port {args.port}...")

    try:
        subprocess.run(cmd, cwd=str(project_root), env=env)
    except KeyboardInterrupt:
        print("\nApplication stopped.")


if __name__ == "__main__":
    main()
