pytest_plugins = ["intentgate.testing.conftest"]
