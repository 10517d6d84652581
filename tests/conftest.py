import pytest
from loguru import logger

@pytest.fixture
def log_messages():
    """Collect loguru records emitted during a test"""
    messages = []
    handler_id = logger.add(lambda msg: messages.append(msg.record), level="DEBUG")
    yield messages
    logger.remove(handler_id)
