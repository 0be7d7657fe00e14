#!/usr/bin/env python3
"""
gen_go.py - Go binding generator entry point

Generates the cgo bindings for CEF from the header scanner's JSON output.

Usage:
    python scripts/gen_go.py REGISTRY [--output DIR] [--package NAME]
                             [--include HEADER ...] [--config JSON] [--log-level LEVEL]
"""

import argparse
import json
import os
import sys

# Get paths
script_dir = os.path.dirname(os.path.abspath(__file__))
root_dir = os.path.abspath(os.path.join(script_dir, '..'))

# Add scripts directory to path
sys.path.insert(0, script_dir)

from gobind_gen import Generator, GeneratorError
from gobind_gen.logging import configure_logging, get_logger
from bindings import cef


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Generate Go bindings')
    parser.add_argument('registry',
                        help='JSON dump of the scanned struct and enum declarations')
    parser.add_argument('--output', default=os.path.join(root_dir, 'cef'),
                        help='Output directory for the generated sources')
    parser.add_argument('--package', default='cef',
                        help='Go package name of the generated file')
    parser.add_argument('--include', action='append', default=[],
                        help='C header included by the trampolines (repeatable)')
    parser.add_argument('--config', default=None,
                        help='JSON file overriding generator settings')
    parser.add_argument('--log-level', default=os.environ.get('GOBIND_LOG_LEVEL', 'info'),
                        help='Log level (default: info)')
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    configure_logging(args.log_level)

    with open(args.registry, 'r', encoding='utf-8') as f:
        data = json.load(f)
    overrides = None
    if args.config:
        with open(args.config, 'r', encoding='utf-8') as f:
            overrides = json.load(f)

    try:
        registry = cef.load_registry(data, overrides)
    except GeneratorError as exc:
        get_logger().critical('%s', exc.message)
        sys.exit(1)
    gen = Generator(registry)

    # Apply CEF-specific configuration
    cef.configure(gen)

    gen.write(args.output, args.package, args.include)


if __name__ == '__main__':
    main()
