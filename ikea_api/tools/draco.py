# Path: ikea_api/tools/draco.py
"""
Draco Decompression

Decodes a Draco-compressed GLB into a plain GLB with the external
gltf-transform command line tool.

Install the tool with:
    npm install -g @gltf-transform/cli

Usage:
    from ikea_api.tools.draco import decompress_draco

    output = decompress_draco(Path('ikea_cache/00346735/model.glb'))
    # ikea_cache/00346735/model_uncompressed.glb
"""

import shutil
import subprocess
from pathlib import Path
from typing import Optional

from ikea_api.core.logger import get_logger
from ikea_api.constants import (
    DRACO_TOOL,
    DRACO_OUTPUT_SUFFIX,
    LOG_INPUT,
    LOG_PROCESS,
    LOG_OUTPUT,
)

logger = get_logger(__name__, 'tools')

DRACO_TIMEOUT: int = 300  # seconds


class DracoError(Exception):
    """Base class for decompression failures."""


class DracoToolMissingError(DracoError):
    """gltf-transform is not on PATH."""


class DracoDecompressionError(DracoError):
    """gltf-transform failed or the input is unusable."""


def default_output_path(input_path: Path) -> Path:
    """'<dir>/<name>.glb' -> '<dir>/<name>_uncompressed.glb'"""
    return input_path.with_name(f"{input_path.stem}{DRACO_OUTPUT_SUFFIX}.glb")


def find_tool() -> Optional[str]:
    return shutil.which(DRACO_TOOL)


def decompress_draco(
    input_path: Path,
    output_path: Optional[Path] = None,
    timeout: int = DRACO_TIMEOUT
) -> Path:
    """
    Decode a Draco-compressed GLB.

    Args:
        input_path: Compressed GLB
        output_path: Destination, defaults to '<name>_uncompressed.glb'
        timeout: Seconds before the tool is killed

    Returns:
        Path of the decompressed file

    Raises:
        DracoToolMissingError: gltf-transform is not installed
        DracoDecompressionError: Input missing or the tool failed
    """
    input_path = Path(input_path)
    output_path = Path(output_path) if output_path else default_output_path(input_path)

    logger.info(f"{LOG_INPUT} Decompressing {input_path} to {output_path}")

    if not input_path.is_file():
        raise DracoDecompressionError(f"Input file not found: {input_path}")

    tool = find_tool()
    if tool is None:
        raise DracoToolMissingError(
            f"{DRACO_TOOL} not found. Install with: npm install -g @gltf-transform/cli"
        )

    command = [tool, 'draco', str(input_path), str(output_path), '--decode']
    logger.debug(f"{LOG_PROCESS} Running: {' '.join(command)}")

    try:
        result = subprocess.run(
            command,
            capture_output=True,
            text=True,
            timeout=timeout
        )
    except subprocess.TimeoutExpired as e:
        raise DracoDecompressionError(f"{DRACO_TOOL} timed out after {timeout}s") from e
    except OSError as e:
        raise DracoDecompressionError(f"Cannot run {DRACO_TOOL}: {e}") from e

    if result.returncode != 0:
        detail = (result.stderr or result.stdout or '').strip()
        raise DracoDecompressionError(
            f"{DRACO_TOOL} exited with code {result.returncode}: {detail}"
        )

    logger.info(f"{LOG_OUTPUT} Decompressed model saved to {output_path}")
    return output_path


__all__ = [
    'DracoError',
    'DracoToolMissingError',
    'DracoDecompressionError',
    'default_output_path',
    'decompress_draco',
]
