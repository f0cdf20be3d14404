"""
GitHub Actions Runtime Helpers

Reads action inputs and writes outputs and workflow commands the way
the Actions runner expects them.
"""

import os
import uuid
import logging

from .config import ConfigurationError


logger = logging.getLogger(__name__)


def _input_env_name(name: str) -> str:
    return f"INPUT_{name.replace(' ', '_').upper()}"


def get_input(name: str, required: bool = False) -> str:
    """
    Read an action input.

    Args:
        name: Input name as declared in action.yml
        required: Raise when the input is missing or empty

    Returns:
        The stripped input value, or an empty string

    Raises:
        ConfigurationError: If a required input is not supplied
    """
    value = os.getenv(_input_env_name(name), "").strip()
    if required and not value:
        raise ConfigurationError(f"Input required and not supplied: {name}")
    return value


def get_boolean_input(name: str) -> bool:
    """Only the literal string 'true' enables a flag."""
    return get_input(name) == "true"


def set_output(name: str, value: str) -> None:
    """Append an output to the file named by GITHUB_OUTPUT."""
    output_path = os.getenv("GITHUB_OUTPUT")
    if not output_path:
        logger.debug(f"GITHUB_OUTPUT not set, dropping output {name}")
        return

    with open(output_path, 'a', encoding='utf-8') as f:
        if "\n" in value:
            delimiter = f"ghadelimiter_{uuid.uuid4()}"
            f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
        else:
            f.write(f"{name}={value}\n")


def error(message: str) -> None:
    """Emit an error annotation on the workflow run."""
    escaped = message.replace('%', '%25').replace('\r', '%0D').replace('\n', '%0A')
    print(f"::error::{escaped}", flush=True)
