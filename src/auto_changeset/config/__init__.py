"""
Configuration loading for auto_changeset.

Provides the run settings, optionally read from a JSON file inside the
repository's changeset directory. See :mod:`auto_changeset.config.loader`
for implementation details.
"""

from .loader import ConfigurationError, Settings, load_config  # noqa: F401
