import logging

import pytest

from py_puttcalc import PreferredUnits
from py_puttcalc.interface import _EngineLoader
from py_puttcalc.logger import logger

logger.setLevel(logging.DEBUG)


def pytest_addoption(parser):
    parser.addoption(
        "--engine",
        action="store",
        default=None,  # be sure to use the default value from _EngineLoader
        help="Specify the engine entry point name",
    )


@pytest.fixture(scope="class")
def loaded_engine_instance(request):
    engine_name = request.config.getoption("--engine", None)
    logger.info(f"Attempting to load engine: '{engine_name}'")
    try:
        engine = _EngineLoader.load(engine_name)
        try:
            # instantiate with default config
            engine({})
        except Exception as e:
            raise Exception(f"Engine {engine} loaded but cannot be instantiated: {e}")
        print(f"Successfully loaded engine: {engine}")
        yield engine
    except Exception as e:
        pytest.exit(f"Cannot start tests:\nFailed to load engine via _EngineLoader: {e}", returncode=1)


@pytest.fixture(autouse=True)
def default_units():
    PreferredUnits.restore_defaults()
    yield
    PreferredUnits.restore_defaults()
