import logging


__all__ = [
    "getname",
    "get_logger",
]


def getname(o) -> str:
    """Returns a dotted name for a module, a class or an instance's class."""
    if not hasattr(o, "__name__"):
        o = o.__class__
    module = getattr(o, "__module__", None)
    return f"{module}.{o.__qualname__}" if module else o.__name__


def get_logger(o) -> logging.Logger:
    """
    Returns a logger named after `o`.

    Args:
        o: A logger name, a module, a class or an instance.
           Instances are named after their class.
    """
    name = o if isinstance(o, str) else getname(o)
    return logging.getLogger(name)
