#!/usr/bin/env python
"""Simulate a bioenergetic food web from a YAML configuration.

Usage:
    python scripts/simulate.py --config src/bioenergetic/config/default.yaml
    python scripts/simulate.py --override productivity.mode=nutrients --override simulation.stop=5000
"""

from bioenergetic.cli import main

if __name__ == "__main__":
    main()
