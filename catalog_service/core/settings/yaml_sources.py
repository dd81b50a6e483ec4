"""YAML config source with conf.d directory support.

For a settings domain ``<name>`` the following files are loaded when they
exist, later files overriding earlier ones:

- ``conf/<name>.yaml``
- ``conf/<name>.d/*.yaml``, ``*.yml`` and ``*.json`` in alphabetical order

The base directory can be moved with ``<NAME>_CONFIG_DIR``.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic_settings import YamlConfigSettingsSource

if TYPE_CHECKING:
    from pydantic_settings import BaseSettings


class ConfDYamlConfigSettingsSource(YamlConfigSettingsSource):
    """YAML settings source merging a main file with a conf.d directory."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        yaml_file: str,
        confd_dir: str | None,
        config_dir_env: str,
        base_dir: str = "conf",
        yaml_file_encoding: str | None = "utf-8",
    ) -> None:
        """Initialize the conf.d YAML source.

        Args:
            settings_cls: The settings class being configured.
            yaml_file: Main YAML file name (e.g. "app.yaml").
            confd_dir: conf.d subdirectory name (e.g. "app.d"), or None.
            config_dir_env: Environment variable overriding the base directory.
            base_dir: Default base directory for config files.
            yaml_file_encoding: File encoding for YAML files.
        """
        config_base = Path(os.getenv(config_dir_env, base_dir))

        yaml_files: list[Path] = []
        main_file = config_base / yaml_file
        if main_file.exists():
            yaml_files.append(main_file)

        if confd_dir:
            confd_path = config_base / confd_dir
            if confd_path.is_dir():
                yaml_files.extend(sorted(confd_path.glob("*.yaml")))
                yaml_files.extend(sorted(confd_path.glob("*.yml")))
                yaml_files.extend(sorted(confd_path.glob("*.json")))

        self._yaml_files = yaml_files
        super().__init__(
            settings_cls=settings_cls,
            yaml_file=yaml_files or None,
            yaml_file_encoding=yaml_file_encoding,
        )

    def __repr__(self) -> str:
        files = ", ".join(str(f) for f in self._yaml_files)
        return f"{self.__class__.__name__}(yaml_files=[{files}])"


def create_yaml_source(
    settings_cls: type[BaseSettings], name: str
) -> ConfDYamlConfigSettingsSource:
    """Create the YAML source of one settings domain.

    Example:
        create_yaml_source(AppSettings, "app")
        # conf/app.yaml, conf/app.d/*.yaml, base dir from APP_CONFIG_DIR
    """
    return ConfDYamlConfigSettingsSource(
        settings_cls,
        yaml_file=f"{name}.yaml",
        confd_dir=f"{name}.d",
        config_dir_env=f"{name.upper()}_CONFIG_DIR",
    )
