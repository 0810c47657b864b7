import io
import logging
import pathlib

import pytest

LOG_DIR = pathlib.Path(__file__).parent / "test-logs"


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    outcome = yield
    rep = outcome.get_result()
    setattr(item, "rep_" + rep.when, rep)


@pytest.fixture(autouse=True)
def polyslice_test_log(request):
    """Buffer DEBUG output of the polyslice loggers and keep it only for failing tests."""
    pkg = logging.getLogger("polyslice")
    buf = io.StringIO()
    handler = logging.StreamHandler(buf)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    prev_level = pkg.level
    pkg.addHandler(handler)
    pkg.setLevel(logging.DEBUG)
    try:
        yield
    finally:
        pkg.removeHandler(handler)
        pkg.setLevel(prev_level)
        rep = getattr(request.node, "rep_call", None)
        if rep is not None and rep.failed:
            LOG_DIR.mkdir(exist_ok=True)
            name = request.node.nodeid.replace("::", "__").replace("/", "_")
            (LOG_DIR / f"{name}.log").write_text(buf.getvalue(), encoding="utf-8")
