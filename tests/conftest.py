import time
import pytest

from vetocore import vetorules

test_durations = []

# markers for tests that require an optional backend
BACKEND_MARKERS = {
    "ortools": "ortools-cp",
    "gmpy2": "gmpy2-fractions",
}


def pytest_configure(config):
    config.addinivalue_line("markers", "ortools: requires OR-Tools (algorithm ortools-cp)")
    config.addinivalue_line("markers", "gmpy2: requires gmpy2 (algorithm gmpy2-fractions)")
    config.addinivalue_line("markers", "slow: slow tests")


def pytest_collection_modifyitems(config, items):
    for item in items:
        for marker, algorithm in BACKEND_MARKERS.items():
            if marker in item.keywords and algorithm not in vetorules.available_algorithms:
                item.add_marker(pytest.mark.skip(reason=f"{algorithm} is not available"))


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_call(item):
    start = time.perf_counter()
    yield
    duration = time.perf_counter() - start
    test_durations.append((item.nodeid, duration))


def pytest_sessionfinish(session, exitstatus):
    print("\nTest durations:")
    total_time = sum(d for _, d in test_durations)
    if test_durations:
        avg = total_time / len(test_durations)
        print(f"\nAverage test duration: {avg:.4f} seconds")
