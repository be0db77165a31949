# logger_setup.py

import logging
import os
import json

REQUIRED_KEYS = {
    'run_id': None,
    'logging': ('level', 'format'),
    'animation': ('max_ticks', 'log_every_ticks'),
}


def load_config(config_path='config.json'):
    """
    Reads and validates the application config file.

    Data Contract:
    - Inputs: config_path (str) - Path to the JSON configuration file.
    - Outputs: dict - The parsed configuration.
    - Raises: ValueError if a required section or key is missing.
    """
    with open(config_path, 'r') as f:
        config = json.load(f)

    for key, sub_keys in REQUIRED_KEYS.items():
        if key not in config:
            raise ValueError(f"Config '{config_path}' is missing required key '{key}'")
        for sub_key in sub_keys or ():
            if sub_key not in config[key]:
                raise ValueError(f"Config '{config_path}' is missing required key '{key}.{sub_key}'")
    return config


def setup_logging(config_path='config.json'):
    """
    Sets up logging for the application.

    Reads logging configuration, creates a run-specific log directory, and
    configures a dedicated application logger (not the root logger) to output
    to both the console and a log file. This keeps pygame and numba output out
    of the run log.

    Data Contract:
    - Inputs: config_path (str) - Path to the configuration file.
    - Outputs: logging.Logger - The configured "convection_viz" logger.
    - Side Effects:
        - Configures the "convection_viz" logger.
        - Creates runs/<run_id>/ for the log file.
    """
    config = load_config(config_path)

    run_id = config['run_id']
    log_config = config['logging']

    # --- Get a dedicated logger for the application ---
    logger = logging.getLogger("convection_viz")
    logger.setLevel(log_config['level'])
    logger.propagate = False

    log_dir = os.path.join('runs', run_id)
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, 'visualization.log')

    formatter = logging.Formatter(log_config['format'])

    file_handler = logging.FileHandler(log_file)
    file_handler.setFormatter(formatter)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)

    # Clear existing handlers to avoid duplication if this function is called again
    if logger.hasHandlers():
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()
    logger.addHandler(file_handler)
    logger.addHandler(stream_handler)

    logger.info(f"Logging initialized. Run ID: {run_id}. Log file: {log_file}")
    return logger
