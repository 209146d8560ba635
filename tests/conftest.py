import sys
import pytest
from pathlib import Path

# Allow the import of support modules for tests
sys.path.append(str(Path(__file__).resolve().parent))

from typelayout import TypeRegistry, LayoutEngine
from support_modules.test_tools.fixtures import FuzzingConfig, sample_registry


@pytest.fixture
def registry() -> TypeRegistry:
    return TypeRegistry()


@pytest.fixture
def samples() -> TypeRegistry:
    return sample_registry()


@pytest.fixture
def engine(samples) -> LayoutEngine:
    return LayoutEngine(samples)


# Fuzzing testsuite

def pytest_addoption(parser):
    parser.addoption("--fuzzing", action="store", nargs='*', type=str, help="You can specify FuzzingConfig parameters: num_types=200 type_seed=3 max_members=6 verbose=1")


def pytest_configure(config):
    config.addinivalue_line("markers", "fuzzing: randomized layout checks, enabled with --fuzzing")


def pytest_runtest_setup(item):
    if 'fuzzing' in item.keywords and item.config.getoption("fuzzing") is None:
        pytest.skip("need --fuzzing option to run this test")


@pytest.fixture
def fuzzing_config(pytestconfig) -> FuzzingConfig:
    data = {}
    for arg in pytestconfig.getoption("fuzzing") or []:
        name, value = arg.split('=')
        if name in ["num_types", "type_seed", "max_members"]:
            value = int(value)
        elif name in ["verbose"]:
            value = value.lower() in ["1", "true", "yes"]
        elif name in ["typenames"]:
            pass
        else:
            raise ValueError(f"Unknown config item {name}")
        data[name] = value
    return FuzzingConfig(**data)
