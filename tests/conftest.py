import pytest

from jugx.config import JugConfig
from jugx.engine import TransferEngine
from jugx.puzzles.liquid_transfer import LiquidTransfer
from jugx.session import JugSession


@pytest.fixture(scope="module")
def three_jars():
    """The classic 3/5/8 puzzle with target 4."""
    return LiquidTransfer(capacities=(3, 5, 8), target=4)


@pytest.fixture
def engine():
    return TransferEngine(JugConfig.create([3, 5, 8], 4))


@pytest.fixture
def session():
    session = JugSession()
    session.setup([3, 5, 8], 4)
    return session
