"""Path management utilities for deployment-sequencer library."""

from pathlib import Path
from typing import Optional, Union


def get_default_record_dir() -> Path:
    """
    Get default deployment record directory.

    Returns:
        Path to ./.deployment-sequencer
    """
    return Path.cwd() / ".deployment-sequencer"


def get_record_path(network: str, record_root: Optional[Union[Path, str]] = None) -> Path:
    """
    Get the deployment record path for a network.

    Args:
        network: Network name
        record_root: Custom record directory (defaults to ./.deployment-sequencer)

    Returns:
        Path to <record_root>/<network>.json
    """
    if record_root is None:
        record_root = get_default_record_dir()
    else:
        record_root = Path(record_root).absolute()

    return record_root / f"{network}.json"
