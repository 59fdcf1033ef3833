import pytest


@pytest.fixture(autouse=True)
def skip_mlflow(monkeypatch):
    """Keep test runs out of the MLflow tracking store."""
    monkeypatch.setenv("SKIP_MLFLOW", "1")
