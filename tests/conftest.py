"""
Pytest fixtures shared by the test modules.
"""
from pathlib import Path

import yaml
from pytest import fixture


EXPECTED_OUTPUT = "0\n1\n2\n3\n4\n5\n6\n7\n8\n9\nProcess Exited\n"


@fixture(scope="session")
def repo_root() -> Path:
    return Path(__file__).parent.parent


@fixture(scope="session")
def print_table_script(repo_root: Path) -> Path:
    return repo_root / "print_table.py"


@fixture(scope="function")
def write_config(tmp_path: Path):
    def _write(data, name="config.yml") -> Path:
        config_path = tmp_path / name
        with open(config_path, "w") as f:
            if isinstance(data, str):
                f.write(data)
            else:
                yaml.dump(data, f, default_flow_style=False)
        return config_path

    return _write


@fixture(scope="function")
def fast_config(write_config) -> Path:
    return write_config({"interval_seconds": 0.01})
