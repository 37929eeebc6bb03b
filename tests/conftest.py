from loguru import logger
import numpy as np
import pytest

from sierpinski.geometry import compute_vertices


@pytest.fixture
def tetra():
    return compute_vertices(100)


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def debug_messages():
    messages = []
    handler_id = logger.add(lambda message: messages.append(message.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)
