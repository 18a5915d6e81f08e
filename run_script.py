"""
Run Monitor

Launches a sample script as a subprocess and streams its output line by line
while it runs, recording when each line arrived.

Purpose:
    This is the observing side of the sample programs. It shows the real-time
    output of a long-running script, checks its exit status and keeps a history
    of runs in a JSON file.

Usage:
    python run_script.py print_table.py [--config FILE] [--history FILE]
"""
import subprocess
import sys
import os
import threading
import time
import json
import argparse
from pathlib import Path
from datetime import datetime


HISTORY_LIMIT = 100


class RunResult:
    """Outcome of a single script run"""

    def __init__(self, command, returncode, lines, stderr, started_at, duration=0.0):
        self.command = command
        self.returncode = returncode
        self.lines = lines  # list of (elapsed_seconds, line) tuples
        self.stderr = stderr
        self.started_at = started_at
        self.duration = duration  # seconds from launch until the process exited

    @property
    def success(self):
        return self.returncode == 0

    @property
    def output(self):
        """Captured stdout exactly as the script wrote it"""
        return ''.join(line for _, line in self.lines)


def build_command(script_path, config_file_path=None):
    command = [sys.executable, '-u', str(script_path)]
    if config_file_path:
        command.extend(['--config', str(config_file_path)])
    return command


def run_script(script_path, config_file_path=None, on_line=None):
    """
    Run a script and collect its stdout line by line as it is produced.

    Args:
        script_path (str or Path): Script to execute with the current interpreter
        config_file_path (str or Path): Optional config passed as --config
        on_line (callable): Called with (elapsed_seconds, line) for each line

    Returns:
        RunResult: Command, return code, timed lines and stderr text
    """
    script_path = Path(script_path)
    if not script_path.exists():
        raise FileNotFoundError(f"Script not found: {script_path}")

    # Set environment variables for unbuffered output
    env = os.environ.copy()
    env['PYTHONUNBUFFERED'] = '1'

    command = build_command(script_path, config_file_path)
    started_at = datetime.now()
    start = time.monotonic()

    process = subprocess.Popen(
        command,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        bufsize=1,
        env=env
    )

    lines = []
    stderr_chunks = []
    # stderr is drained on its own thread while stdout is read
    stderr_reader = threading.Thread(
        target=lambda: stderr_chunks.append(process.stderr.read()),
        daemon=True
    )
    with process:
        stderr_reader.start()
        # Read output line by line
        for line in iter(process.stdout.readline, ''):
            elapsed = time.monotonic() - start
            lines.append((elapsed, line))
            if on_line is not None:
                on_line(elapsed, line)
        stderr_reader.join()
        process.wait()
    duration = time.monotonic() - start

    return RunResult(
        ' '.join(str(c) for c in command),
        process.returncode,
        lines,
        ''.join(stderr_chunks),
        started_at,
        duration,
    )


def save_run_to_history(history_file, result, script, config_file=None):
    """Prepend a run entry to the JSON history file, keeping the newest runs"""
    history_file = Path(history_file)
    if history_file.exists():
        with open(history_file, 'r') as f:
            history = json.load(f)
        if not isinstance(history, list):
            raise ValueError(f"History file {history_file} must contain a JSON list")
    else:
        history = []

    entry = {
        'timestamp': result.started_at.strftime('%Y-%m-%d %H:%M:%S'),
        'script': str(script),
        'config_file': str(config_file) if config_file else None,
        'success': result.success,
        'returncode': result.returncode,
        'command': result.command,
        'duration_seconds': round(result.duration, 3),
    }

    # Add to beginning of history
    history.insert(0, entry)
    history = history[:HISTORY_LIMIT]

    with open(history_file, 'w') as f:
        json.dump(history, f, indent=2)
    return entry


def _print_line(elapsed, line):
    print(f"[{elapsed:7.2f}s] {line}", end='', flush=True)


def main(argv=None):
    parser = argparse.ArgumentParser(description='Run a script and stream its output')
    parser.add_argument('script', type=str, help='Path to the script to run')
    parser.add_argument('--config', type=str, help='Config file passed to the script')
    parser.add_argument('--history', type=str, help='JSON file to record the run in')
    args = parser.parse_args(argv)

    print(f"Running: {args.script}", flush=True)
    try:
        result = run_script(args.script, args.config, on_line=_print_line)
    except FileNotFoundError as e:
        print(f"Error running script: {e}", file=sys.stderr, flush=True)
        return 1

    if result.success:
        print("\nScript completed successfully!", flush=True)
    else:
        print(f"\nError (exit code {result.returncode}): {result.stderr}", flush=True)

    if args.history:
        try:
            save_run_to_history(args.history, result, args.script, args.config)
        except (OSError, ValueError) as e:
            print(f"Error saving to history: {e}", file=sys.stderr, flush=True)
            return 1

    return result.returncode


if __name__ == "__main__":
    sys.exit(main())
