"""Shared fixtures for ranking tests."""

import pytest
from tests.conftest import make_result


@pytest.fixture
def scenario_a():
    """Three CSE 2021 students, CGPIs 9.0, 8.5, 9.0 in that order.

    Expected college ranks: 1, 3, 2 (first 9.0 above second 9.0).
    """
    return [
        make_result("S1", [8.0, 9.0]),
        make_result("S2", [8.5]),
        make_result("S3", [9.5, 9.0]),
    ]


@pytest.fixture
def mixed_college():
    """Two batches, three branches.

        roll   batch  branch  cgpi
        A1     2021   CSE     9.1
        A2     2021   CSE     7.4
        A3     2021   ECE     8.8
        B1     2022   CSE     9.6
        B2     2022   ME      6.2
        B3     2022   CSE     8.8
        A4     2021   ECE     8.8
    """
    return [
        make_result("A1", [9.1], batch=2021, branch="CSE"),
        make_result("A2", [7.4], batch=2021, branch="CSE"),
        make_result("A3", [8.8], batch=2021, branch="ECE"),
        make_result("B1", [9.6], batch=2022, branch="CSE"),
        make_result("B2", [6.2], batch=2022, branch="ME"),
        make_result("B3", [8.8], batch=2022, branch="CSE"),
        make_result("A4", [8.8], batch=2021, branch="ECE"),
    ]
