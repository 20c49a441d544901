"""Program catalog adapters."""

from .yaml_program_catalog import YamlProgramCatalog

__all__ = ["YamlProgramCatalog"]
