# FILE: backend/logging_config.py
"""
Root logger configuration
"""
import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger with a single stderr handler"""
    root = logging.getLogger()
    root.setLevel(level)
    
    # Remove existing handlers to avoid duplicate lines on app reload
    for handler in list(root.handlers):
        if getattr(handler, "_memory_lane", False):
            root.removeHandler(handler)
    
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._memory_lane = True
    root.addHandler(handler)
    
    # Multipart parser is chatty at DEBUG
    logging.getLogger("multipart").setLevel(logging.WARNING)
    logging.getLogger("python_multipart").setLevel(logging.WARNING)
