"""Shared fixtures for cpp-smells tests."""

import pytest

from cpp_smells.config.thresholds import ThresholdConfig
from cpp_smells.parsers.cpp import CppSyntaxProvider


@pytest.fixture(scope="session")
def cpp_provider() -> CppSyntaxProvider:
    """Real tree-sitter provider, initialized once for the whole session."""
    provider = CppSyntaxProvider()
    provider.initialize()
    return provider


@pytest.fixture
def parse_cpp(cpp_provider):
    """Parse C++ source and return the root node."""

    def _parse(source: str):
        return cpp_provider.parse(source).root_node

    return _parse


@pytest.fixture
def thresholds() -> ThresholdConfig:
    return ThresholdConfig()

