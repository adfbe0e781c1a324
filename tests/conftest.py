import pytest

# Behaviour shared by both evaluation modes is exercised twice through the
# `mode` fixture. Tests that depend on one policy pass the mode explicitly.


@pytest.fixture(params=["lenient", "strict"])
def mode(request):
    return request.param


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch):
    # Keep a developer's shell configuration out of the test run.
    monkeypatch.delenv("HASCHEMA_EVAL_MODE", raising=False)
    monkeypatch.delenv("HASCHEMA_LOG_LEVEL", raising=False)
