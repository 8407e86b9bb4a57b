import functools
import logging

logger = logging.getLogger("calls")


def log_call(fn):
    @functools.wraps(fn)
    def __wrapped(*args, **kwargs):
        logger.debug(f"Calling {fn.__qualname__} {args[1:]} {kwargs}")
        return fn(*args, **kwargs)
    return __wrapped
