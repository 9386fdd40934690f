import logging
import random

import pytest
from eth_utils import to_checksum_address


@pytest.fixture(name="seeded_random", autouse=True)
def fixture_seeded_random():
    """Seeds the module level generator so random loops are reproducible"""
    random.seed(0xCA11)
    return random


@pytest.fixture(name="random_address")
def fixture_random_address():
    def _generate_random_address():
        return to_checksum_address(random.randbytes(20).hex())

    return _generate_random_address


@pytest.fixture(name="frame_line")
def fixture_frame_line():
    """Renders a single call frame the way the tracer prints it"""

    def _render_frame_line(
        function_name: str,
        params: str = "",
        depth: int = 0,
        gas: int = 2300,
        address: str = "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48",
        call_type: str | None = None,
    ) -> str:
        if depth == 0:
            prefix = "  "
        else:
            prefix = "  " + "│   " * (depth - 1) + "├─ "

        line = f"{prefix}[{gas}] {address}::{function_name}({params})"
        if call_type:
            line += f" [{call_type}]"
        return line

    return _render_frame_line


@pytest.fixture(name="debug_logs")
def fixture_debug_logs(caplog):
    caplog.set_level(logging.DEBUG, logger="nethermind")
    return caplog
