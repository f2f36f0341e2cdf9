"""
Config Package

Handles the optional INI file with command line defaults.
"""

from .tool_config import ToolConfig, load_config, DEFAULT_CONFIG_NAME
