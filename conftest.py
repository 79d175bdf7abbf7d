import logging

logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "gui: mark test as needing a reachable PulseAudio server and pactl to run"
    )
