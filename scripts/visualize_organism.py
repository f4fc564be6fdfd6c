#!/usr/bin/env python3
"""
Utility script to visualize a persisted organism.

Usage:
    python scripts/visualize_organism.py --organism saved_organism.json
"""

import sys
import argparse
import json

from copperhorn.graph import Organism


def main():
    parser = argparse.ArgumentParser(description='Visualize a copperhorn organism')
    parser.add_argument('--organism', type=str, required=True,
                        help='Path to a JSON file produced from Organism.to_dict()')
    parser.add_argument('--output', type=str, default='organism',
                        help='Output filename (without extension)')
    parser.add_argument('--format', type=str, default='png',
                        choices=['png', 'pdf', 'svg'],
                        help='Output format')
    parser.add_argument('--no-view', action='store_true',
                        help='Do not automatically open the generated file')

    args = parser.parse_args()

    with open(args.organism) as f:
        data = json.load(f)

    try:
        organism = Organism.from_dict(data)
    except (KeyError, ValueError) as e:
        print(f"Error: cannot load organism: {e}")
        sys.exit(1)

    dot = organism.visualize(view=False)
    dot.format = args.format
    dot.render(args.output, view=not args.no_view)
    print(f"Organism visualization saved to {args.output}.{args.format}")


if __name__ == '__main__':
    main()
