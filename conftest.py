from runtests import configure


def pytest_configure(config):
    configure()
