# tests/test_layout.py
import importlib


def test_same_named_test_modules_are_distinct() -> None:
    """Service and endpoint test modules share basenames and must import side by side."""
    for name in ("test_conversations", "test_interest", "test_messages"):
        service_module = importlib.import_module(f"tests.services.{name}")
        endpoint_module = importlib.import_module(f"tests.v1.{name}")
        assert service_module is not endpoint_module
        assert service_module.__file__ != endpoint_module.__file__
