"""
Pytest configuration and shared fixtures for the joularpy test suite.

This module provides common fixtures, test utilities, and configuration
for all test modules in the project.
"""

import shutil
import sys
import tempfile
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "e2e: mark test as an end-to-end test")


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def sample_agent_data():
    """Sample [agent] configuration table for testing."""
    return {
        "output_dir": "results",
        "track_consumption_evolution": True,
        "evolution_data_path": "evolution",
        "call_trees_consumption": True,
        "logger_level": "INFO",
        "storage": {"format": "csv", "compression": "snappy"},
    }


@pytest.fixture
def sample_snapshot():
    """Snapshot with every dataset populated."""
    from joularpy.models.snapshot import MeasurementSnapshot

    return MeasurementSnapshot(
        total_consumed_energy=12.3456,
        methods_energy={"foo()": 1.234, "bar()": 0.5},
        filtered_methods_energy={"foo()": 1.234},
        call_trees_energy={"main;foo()": 1.0, "main;bar()": 0.25},
        filtered_call_trees_energy={"main;foo()": 1.0},
        methods_evolution={"m<init>": {1000: 0.1, 2000: 0.2}, "foo()": {1000: 0.7}},
        filtered_methods_evolution={"foo()": {1000: 0.7}},
        peak_memory_bytes=52_999_999,
    )


@pytest.fixture
def mock_cpu():
    """Monitoring resource whose close() succeeds."""
    cpu = Mock()
    cpu.close.return_value = None
    return cpu


@pytest.fixture
def agent_config(temp_dir):
    """AgentConfig writing into the temporary directory, optional outputs off."""
    from joularpy.models.config import AgentConfig

    return AgentConfig(output_dir=temp_dir)


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def config_files(temp_dir, sample_agent_data):
    """Create a temporary config.toml for testing."""
    import toml

    config_file = temp_dir / "config.toml"
    with open(config_file, "w") as f:
        toml.dump({"agent": sample_agent_data}, f)

    return {"config": config_file, "dir": temp_dir}


# ============================================================================
# Test Utilities
# ============================================================================


class TestUtils:
    """Utility functions for testing."""

    @staticmethod
    def read_csv_rows(path: Path):
        """Read a header-less key,value file into a list of (str, str) pairs."""
        with open(path, "r", encoding="utf-8") as f:
            return [tuple(line.rstrip("\n").split(",", 1)) for line in f if line.strip()]


@pytest.fixture
def test_utils():
    """Provide test utility functions."""
    return TestUtils


@pytest.fixture(autouse=True)
def clear_config_after_test():
    """Automatically reset the configuration singleton after each test."""
    from joularpy.config import manager

    original_config_path = manager._CONFIG_FILE_PATH

    yield  # Run the test

    manager.clear_config_cache()
    manager._CONFIG_FILE_PATH = original_config_path
