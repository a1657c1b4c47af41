#!/usr/bin/env python3
"""
generate - render installation guides from config.yaml and templates/.
"""
import sys
from pathlib import Path

# Add project root to path to allow importing core
project_root = Path(__file__).resolve().parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from install_template.src.cli import main as cli_main


def main() -> int:
    """Delegate to the install_template CLI entry point."""
    return cli_main(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(main())
