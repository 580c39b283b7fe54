import pytest
from loguru import logger

from modelcontainer import Accessor, ModelBase, ModelProperty, ViewModelBase


class Counter(ModelBase):
    """Model with one int property, read by several accessors."""
    count: int = ModelProperty(default=0)
    title: str = ModelProperty(default="untitled")


class CounterViewModel(ViewModelBase):
    count = Accessor()
    doubled = Accessor("count", transform=lambda c: c * 2, inverse_transform=lambda d: d // 2)
    count_text = Accessor("count", transform=str, inverse_transform=int)
    heading = Accessor("title", transform=str.upper, read_only=True)


@pytest.fixture
def counter():
    return Counter()


@pytest.fixture
def counter_vm(counter):
    return CounterViewModel(counter)


@pytest.fixture
def log_messages():
    """Capture loguru records (level name, message) emitted during the test."""
    messages = []
    handler_id = logger.add(
        lambda m: messages.append((m.record["level"].name, m.record["message"])),
        level="TRACE",
    )
    yield messages
    logger.remove(handler_id)
