#!/usr/bin/env python3
"""
Tool Configuration

Parser for the optional cellanim.ini file holding command line defaults.

INI Format:
    [output]
    indent = 2
    indexize = false

    [convert]
    rescale = true

    [logging]
    log_file = cellanim.log
    verbose = false

Every key is optional. Unknown sections and keys are ignored.
"""

import configparser
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from ..utils import logDebug, logWarning

DEFAULT_CONFIG_NAME = "cellanim.ini"


@dataclass
class ToolConfig:
    """Defaults for the command line tool"""
    indent: int = 2  # JSON indentation for serialized files
    indexize: bool = False  # Write sprites as an index -> sprite mapping
    rescale: bool = True  # Rescale texture geometry when converting formats
    log_file: Optional[Path] = None  # Mirror console output to this file
    verbose: bool = False  # Echo debug messages to the console

    def __post_init__(self):
        """Validate configuration"""
        if not 0 <= self.indent <= 16:
            raise ValueError(f"indent {self.indent} out of range (0-16)")


def load_config(config_path: Optional[Union[str, Path]] = None) -> ToolConfig:
    """
    Load tool configuration.

    Args:
        config_path: Path to the INI file. When omitted, cellanim.ini in the
            working directory is used if it exists.

    Returns:
        ToolConfig with defaults for anything not set in the file

    Raises:
        ValueError: if a value cannot be parsed
    """
    explicit = config_path is not None
    path = Path(config_path) if explicit else Path(DEFAULT_CONFIG_NAME)

    if not path.exists():
        if explicit:
            logWarning(f"Config file not found: {path}, using defaults")
        return ToolConfig()

    parser = configparser.ConfigParser()
    parser.read(path, encoding='utf-8')

    try:
        log_file = parser.get('logging', 'log_file', fallback=None)
        config = ToolConfig(
            indent=parser.getint('output', 'indent', fallback=2),
            indexize=parser.getboolean('output', 'indexize', fallback=False),
            rescale=parser.getboolean('convert', 'rescale', fallback=True),
            log_file=Path(log_file) if log_file else None,
            verbose=parser.getboolean('logging', 'verbose', fallback=False),
        )
    except ValueError as e:
        raise ValueError(f"Invalid value in {path}: {e}") from e

    logDebug(f"Loaded config from {path}")
    return config
