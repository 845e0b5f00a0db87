"""
Filesystem Factory

Builds the backend selected by a Config. Callers hold on to the returned
FileSystem and pass it to whatever needs it; there is no global instance.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional

from filesys.base import FileSystem
from filesys.core.config_loader import Config, ConfigLoader, ConfigValidationError
from filesys.logger import Logger, LogLevel, get_logger
from filesys.osfs import OsFileSystem
from filesys.virtual import VirtualFileSystem


def configure_logging(config: Config) -> None:
    """Install log handlers as described by config.logging."""
    Logger.initialize(
        level=LogLevel.from_name(config.logging.level),
        log_file=config.logging.log_file,
        use_colors=config.logging.use_colors,
        console_output=config.logging.console_output
    )


def create_filesystem(config: Optional[Config] = None) -> FileSystem:
    """
    Create the filesystem described by config.

    For the virtual backend, ``working_dir`` is created if needed and
    becomes the working directory of the returned instance. For the OS
    backend it must already exist.

    Args:
        config: Configuration; defaults to Config()

    Returns:
        A ready-to-use FileSystem

    Raises:
        ConfigValidationError: The configuration is invalid
    """
    config = config or Config()
    ConfigLoader.validate(config)
    fs_config = config.filesystem
    logger = get_logger('factory')

    if fs_config.backend == 'virtual':
        fs: FileSystem = VirtualFileSystem(
            dir_mode=fs_config.dir_mode,
            file_mode=fs_config.file_mode
        )
        if fs_config.working_dir:
            fs.mkdir_all(fs_config.working_dir)
            fs = fs.change_dir(fs_config.working_dir)
    elif fs_config.backend == 'os':
        fs = OsFileSystem(fs_config.working_dir)
        if not fs.is_directory(fs.current_dir()):
            raise ConfigValidationError(
                f"Working directory does not exist: {fs.current_dir()}",
                key="filesystem.working_dir"
            )
    else:
        raise ConfigValidationError(
            f"Unknown backend: {fs_config.backend!r}",
            key="filesystem.backend"
        )

    logger.info(
        "Filesystem created",
        context={'backend': fs_config.backend, 'cwd': fs.current_dir()}
    )
    return fs
