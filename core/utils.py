# Purpose: Utility functions for the Flask application: app config access and API timing logs.

"""
Utility functions for the Flask application.
"""
import os
import logging
import functools
import threading
import time

from flask import current_app, request, has_request_context

logger = logging.getLogger(__name__)

# Global lock for thread-safe timing log writes
timing_log_lock = threading.Lock()


def load_app_config():
    """Load application configuration from settings"""
    from core.settings_loader import get_app_config
    return get_app_config()


def is_api_timing_enabled():
    """Check if API timing is enabled in configuration"""
    config = load_app_config()
    return bool(config.get('api_timing_enabled', False))


def get_environment():
    """Reported environment: BOND_CALC_ENV wins over settings.yaml."""
    return os.environ.get('BOND_CALC_ENV') or load_app_config().get('environment', 'development')


def setup_timing_logger(app):
    """Set up the timing logger writing to <instance>/loading_times.log"""
    timing_log_path = os.path.join(app.instance_path, 'loading_times.log')

    timing_logger = logging.getLogger('api_timing')
    timing_logger.setLevel(logging.INFO)

    # Remove existing handlers to avoid duplicates when create_app runs twice
    timing_logger.handlers.clear()

    timing_handler = logging.FileHandler(timing_log_path)
    timing_formatter = logging.Formatter(
        '%(asctime)s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    timing_handler.setFormatter(timing_formatter)
    timing_logger.addHandler(timing_handler)

    # Keep timing lines out of the main application log
    timing_logger.propagate = False

    return timing_logger


def log_api_timing(endpoint, method, duration_ms, status_code, error_msg=None):
    """Log API timing information"""
    timing_logger = logging.getLogger('api_timing')

    remote_addr = request.remote_addr if has_request_context() else 'unknown'

    status_info = f"STATUS:{status_code}"
    if error_msg:
        status_info += f" ERROR:{error_msg}"

    timing_info = (
        f"ENDPOINT:{endpoint} | "
        f"METHOD:{method} | "
        f"DURATION:{duration_ms:.2f}ms | "
        f"{status_info} | "
        f"IP:{remote_addr}"
    )

    with timing_log_lock:
        timing_logger.info(timing_info)


def time_api_calls(f):
    """Decorator to time API calls and log the results"""
    @functools.wraps(f)
    def decorated_function(*args, **kwargs):
        if not is_api_timing_enabled():
            return f(*args, **kwargs)

        start_time = time.perf_counter()
        status_code = 200
        error_msg = None

        try:
            response = f(*args, **kwargs)

            if hasattr(response, 'status_code'):
                status_code = response.status_code
            elif isinstance(response, tuple) and len(response) > 1:
                status_code = response[1]

            return response

        except Exception as e:
            status_code = 500
            error_msg = str(e)[:200]
            raise

        finally:
            duration_ms = (time.perf_counter() - start_time) * 1000
            endpoint = request.endpoint if has_request_context() else f.__name__
            method = request.method if has_request_context() else 'UNKNOWN'
            try:
                log_api_timing(endpoint, method, duration_ms, status_code, error_msg)
            except OSError as log_err:
                current_app.logger.error(f"Error logging API timing: {log_err}")

    return decorated_function
