# utils.py
"""
Utility functions for the generator toolkit.

This module provides helpers that are used across the application but do
not belong to a specific generator: logging setup, configuration loading,
and small text measures (Shannon entropy and a non-cryptographic hash).
"""
import logging
import logging.handlers
import json
import math
import os
from collections import Counter
from typing import Dict, Any

# --- Data Contracts ---
#
# setup_logging(config: Dict[str, Any]) -> None:
#   - Inputs:
#     - config: A dictionary with an optional "logging" key holding
#       "level", "format", and "log_file" sub-keys.
#   - Side Effects: Configures the root Python logger. Creates the log
#     directory if it doesn't exist. Sets up a console handler and a
#     rotating file handler.
#
# text_entropy(s: str) -> float:
#   - Shannon entropy, in bits, of the character frequencies of s.
#     The empty string has entropy 0.
#
# hash_str(s: str) -> str:
#   - 32-bit FNV-1a over the UTF-16 code units of s, as lowercase hex
#     without leading zeros.

FNV_OFFSET_BASIS = 2166136261
FNV_PRIME = 16777619


def setup_logging(config: Dict[str, Any]) -> None:
    """
    Configures the logging system from a configuration dictionary.

    Sets up logging to both the console and a rotating file.
    """
    log_config = config.get('logging', {})
    log_level = log_config.get('level', 'INFO').upper()
    log_format = log_config.get('format', '%(asctime)s - %(levelname)s - %(message)s')
    log_file_path = log_config.get('log_file', 'logs/generation.log')

    log_dir = os.path.dirname(log_file_path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    logger = logging.getLogger()
    logger.setLevel(log_level)

    # Clear existing handlers to avoid duplication
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # Rotates when the log reaches 1MB, keeps 5 backup logs.
    file_handler = logging.handlers.RotatingFileHandler(
        log_file_path, maxBytes=1024*1024, backupCount=5
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    logging.info("Logging system initialized.")
    logging.debug(f"Log level set to {log_level}.")
    logging.debug(f"Log file path: {log_file_path}")


def load_config(path: str) -> Dict[str, Any]:
    """Loads a JSON configuration file."""
    logging.info(f"Loading configuration from {path}...")
    try:
        with open(path, 'r') as f:
            config = json.load(f)
        logging.info("Configuration loaded successfully.")
        return config
    except FileNotFoundError:
        logging.error(f"Configuration file not found at {path}.")
        raise
    except json.JSONDecodeError:
        logging.error(f"Error decoding JSON from {path}.")
        raise


def text_entropy(s: str) -> float:
    """Shannon entropy of a string's character distribution, in bits."""
    n = len(s)
    entropy = 0.0
    for count in Counter(s).values():
        p = count / n
        entropy -= p * math.log2(p)
    return entropy


def hash_str(s: str) -> str:
    """FNV-1a 32-bit hash of a string, as a lowercase hex string."""
    h = FNV_OFFSET_BASIS
    # Lone surrogates are hashed as the code units they are.
    units = s.encode('utf-16-le', 'surrogatepass')
    for i in range(0, len(units), 2):
        h ^= units[i] | (units[i + 1] << 8)
        h = (h * FNV_PRIME) & 0xFFFFFFFF
    return format(h, 'x')
