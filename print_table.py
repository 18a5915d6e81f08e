"""
Print Table Sample Program

A simple sample program that prints the integers 0 through 9, pausing one second
after each, then prints a completion message.

Purpose:
    This script serves as a fixture for debuggers and process-monitoring tools.
    It runs long enough to be attached to or observed, and its output is fully
    deterministic so callers can compare it byte for byte.

Configuration:
    Reads count, interval_seconds and exit_message from print_table_config.yml
    (or the file given with --config). The shipped config holds the defaults.

Output:
    Prints one number per line, then "Process Exited". Only those lines go to
    stdout; config messages go to stderr. All print statements use flush=True
    to ensure immediate output for real-time display in parent processes.
"""
import math
import time
import yaml
from pathlib import Path
import argparse
import sys


DEFAULT_CONFIG = {
    'count': 10,
    'interval_seconds': 1.0,
    'exit_message': 'Process Exited',
}


class ConfigError(ValueError):
    """Raised when the config file cannot be used"""


def default_config_path():
    return Path(__file__).parent / 'print_table_config.yml'


def load_config(config_path):
    """
    Load the YAML config and merge it over the defaults.

    A missing or empty file falls back to the defaults with a warning on stderr.

    Args:
        config_path (Path): Path to the YAML config file

    Returns:
        dict: count, interval_seconds and exit_message

    Raises:
        ConfigError: If the file cannot be read, is not valid YAML or holds invalid values
    """
    config = dict(DEFAULT_CONFIG)
    config_path = Path(config_path)

    print(f"Loading config from: {config_path}", file=sys.stderr, flush=True)

    if not config_path.exists():
        print("Warning: Config file not found, using defaults", file=sys.stderr, flush=True)
        return config

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            loaded = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read {config_path}: {e}") from e

    if loaded is None:
        print("Warning: Config file is empty, using defaults", file=sys.stderr, flush=True)
        return config
    if not isinstance(loaded, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")

    for key in DEFAULT_CONFIG:
        if loaded.get(key) is not None:
            config[key] = loaded[key]

    count = config['count']
    if isinstance(count, bool) or not isinstance(count, int) or count < 0:
        raise ConfigError(f"count must be a non-negative integer, got {count!r}")

    try:
        interval = float(config['interval_seconds'])
    except (TypeError, ValueError):
        raise ConfigError(f"interval_seconds must be a number, got {config['interval_seconds']!r}")
    if not math.isfinite(interval) or interval < 0:
        raise ConfigError(f"interval_seconds must be a finite non-negative number, got {interval}")
    config['interval_seconds'] = interval

    config['exit_message'] = str(config['exit_message'])
    return config


def print_table(count=10, interval=1.0, sleep=time.sleep):
    # sleep follows every print, including the last one
    for i in range(count):
        print(i, flush=True)
        sleep(interval)


def main(argv=None, sleep=time.sleep):
    parser = argparse.ArgumentParser(description='Print 0 through 9 with a one second pause')
    parser.add_argument('--config', type=str, help='Path to config file')
    args = parser.parse_args(argv)

    if args.config:
        config_path = Path(args.config)
    else:
        # Fallback to default location
        config_path = default_config_path()

    try:
        config = load_config(config_path)
    except ConfigError as e:
        print(f"Error loading config: {e}", file=sys.stderr, flush=True)
        return 1

    print_table(config['count'], config['interval_seconds'], sleep)
    print(config['exit_message'], flush=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())
