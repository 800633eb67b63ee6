"""Configuration for filesystem backends.

Provides configuration dataclasses, the connect_fs factory that validates
them, and new_fs which builds the configured filesystem.
"""

from dataclasses import dataclass
from typing import Literal

from .memfs import MemFS
from .osfs import OSFS


@dataclass
class MemFSConfig:
    """Configuration for the in-memory filesystem.

    Attributes:
        type: Always "memory".
    """

    type: Literal["memory"] = "memory"


@dataclass
class OSFSConfig:
    """Configuration for a host directory filesystem.

    Attributes:
        type: Always "os".
        root: Host directory exposed as the filesystem root.
        create_root: Create the root directory if it does not exist.
    """

    type: Literal["os"] = "os"
    root: str = ""
    create_root: bool = False


# Type alias for all filesystem configs
FSConfig = MemFSConfig | OSFSConfig


def connect_fs(
    type: Literal["memory", "os"] = "memory",
    **kwargs,
) -> FSConfig:
    """Configure filesystem access.

    Args:
        type: Filesystem type.
            - "memory": In-memory filesystem. Takes no arguments.
            - "os": Host directory. Requires 'root'.
        **kwargs: Additional configuration for the filesystem type.
            For type="os":
                - root (str): Required. Host directory.
                - create_root (bool): Optional. Create root if missing.

    Returns:
        FSConfig for new_fs().

    Examples:
        >>> connect_fs()
        MemFSConfig(type='memory')

        >>> connect_fs(type="os", root="/srv/data")
        OSFSConfig(type='os', root='/srv/data', create_root=False)
    """
    if type == "memory":
        if kwargs:
            raise ValueError(
                f"Unexpected arguments for memory fs: {list(kwargs.keys())}"
            )
        return MemFSConfig()

    elif type == "os":
        root = kwargs.pop("root", "")
        create_root = kwargs.pop("create_root", False)

        if kwargs:
            raise ValueError(
                f"Unexpected arguments for os fs: {list(kwargs.keys())}"
            )

        if not root:
            raise ValueError("OS filesystem requires 'root' parameter")

        return OSFSConfig(root=root, create_root=create_root)

    else:
        raise ValueError(
            f"Unsupported filesystem type: {type}. Use 'memory' or 'os'."
        )


def new_fs(config: FSConfig) -> MemFS | OSFS:
    """Build the filesystem described by ``config``.

    Raises:
        ValueError: If the config type is unknown.
        OSError: If an OS root is missing and may not be created.
    """
    if isinstance(config, MemFSConfig):
        return MemFS()

    if isinstance(config, OSFSConfig):
        fsys = OSFS(config.root)
        if config.create_root:
            fsys.mkdir_all(".")
        else:
            fsys.stat(".")
        return fsys

    raise ValueError(f"Unsupported filesystem config: {config!r}")
