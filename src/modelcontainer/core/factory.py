from typing import Any, Type, TypeVar
from loguru import logger

T = TypeVar('T')


class InstanceFactory:
    """
    Creates model and view-model instances from their declared constructors.

    Replace it with a factory that resolves dependencies (service locator,
    DI container) when the constructors need more than the model.
    """

    def construct(self, cls: Type[T], *args: Any, **kwargs: Any) -> T:
        instance = cls(*args, **kwargs)
        logger.debug(f"Constructed {cls.__name__}")
        return instance
