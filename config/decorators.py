import time
import functools
import logging

import httpx
from google.genai import errors as genai_errors

from config.settings import GENERATION_MAX_RETRIES, GENERATION_RETRY_DELAY

logger = logging.getLogger(__name__)

TRANSIENT_ERRORS = (httpx.TransportError, genai_errors.ServerError)


def retry_on_transient_error(func):
    """
    A decorator to retry a blocking call if it fails with a transient
    transport or server-side error from the model API.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        max_attempts = max(0, GENERATION_MAX_RETRIES) + 1
        for attempt in range(max_attempts):
            try:
                return func(*args, **kwargs)
            except TRANSIENT_ERRORS as e:
                if attempt < max_attempts - 1:
                    logger.warning(f"Transient error on {func.__name__}: {e}. Retrying in {GENERATION_RETRY_DELAY} seconds... (Attempt {attempt + 1}/{max_attempts})")
                    time.sleep(GENERATION_RETRY_DELAY)
                else:
                    logger.error(f"Failed on last attempt of {func.__name__}: {e}")
                    raise
    return wrapper
