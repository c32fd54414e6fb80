#!/usr/bin/env python3
"""
Start the Kinematics Engine backend server

Usage:
    python scripts/start_backend.py [--port PORT] [--host HOST] [--config-dir DIR]

Runs the same start path as ``kinematics-engine serve``. Defaults come from
config/engine.yaml and the KINEMATICS_ADDR environment variable.
"""

import argparse
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from kinematics_engine.cli import start_server


def main():
    parser = argparse.ArgumentParser(
        description='Start Kinematics Engine backend server',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument('--host', default=None, help='Host to bind to (default: from config)')
    parser.add_argument('--port', type=int, default=None, help='Port to bind to (default: from config)')
    parser.add_argument(
        '--config-dir',
        type=Path,
        default=None,
        help='Directory holding engine.yaml (default: KINEMATICS_CONFIG_DIR or config/)'
    )

    args = parser.parse_args()
    start_server(host=args.host, port=args.port, config_dir=args.config_dir)


if __name__ == '__main__':
    main()
