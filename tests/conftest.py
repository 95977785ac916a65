import pytest

from calculator_engine.engine import CalculatorEngine


@pytest.fixture
def engine():
    return CalculatorEngine()


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    outcome = yield
    report = outcome.get_result()
    if report.when == "call":
        print(f"TEST: {item.name} - {'PASSED' if report.passed else 'FAILED'}")
