"""Repository manifest (``repo.properties``) parsing."""

from devenv.manifest.loader import load_configurations, parse_configurations
from devenv.manifest.properties import parse_properties, read_properties

__all__ = ["load_configurations", "parse_configurations", "parse_properties", "read_properties"]
