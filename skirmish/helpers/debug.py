import functools
import logging

logger = logging.getLogger("debug")


def log_call(fn):
    @functools.wraps(fn)
    def __wrapped(*args, **kwargs):
        logger.debug(f"Calling {fn.__name__} {args[1:]} {kwargs}")
        return fn(*args, **kwargs)
    return __wrapped
