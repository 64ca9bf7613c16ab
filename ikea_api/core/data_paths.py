# Path: ikea_api/core/data_paths.py
"""
IKEA API Data Paths Manager

Automatic directory creation and validation for the ikea_api module.
Ensures the cache root and log directory exist and are writable.

Architecture:
- Minimal directory creation (only what's needed)
- Create on first use pattern
- Health checks for directory accessibility
"""

from pathlib import Path
from typing import Optional

from ikea_api.core.config_loader import ConfigLoader


class DataPathsManager:
    """
    Manages directory creation and validation for the ikea_api module.

    Example:
        manager = DataPathsManager()
        manager.ensure_all_directories()
        health = manager.health_check()
    """

    def __init__(self, config: Optional[ConfigLoader] = None):
        """
        Initialize data paths manager.

        Args:
            config: Optional ConfigLoader instance
        """
        self.config = config if config else ConfigLoader()
        self._created_dirs: list[Path] = []
        self._existing_dirs: list[Path] = []
        self._failed_dirs: list[tuple[Path, str]] = []

    def ensure_all_directories(self) -> dict:
        """
        Create all required directories.

        Only creates essential directories:
        - Cache root
        - Log directory (if configured)

        Returns:
            Dictionary with creation statistics
        """
        self._created_dirs = []
        self._existing_dirs = []
        self._failed_dirs = []

        required_dirs = [
            self.config.get('cache_dir'),
            self.config.get('log_dir'),
        ]
        required_dirs = [d for d in required_dirs if d is not None]

        for directory in required_dirs:
            self._ensure_directory(directory)

        return {
            'created': self._created_dirs,
            'existing': self._existing_dirs,
            'failed': self._failed_dirs,
            'total_required': len(required_dirs),
            'success_rate': self._calculate_success_rate(),
        }

    def _ensure_directory(self, path: Path) -> bool:
        """
        Ensure a single directory exists.

        Args:
            path: Path to directory

        Returns:
            True if directory exists or was created, False if failed
        """
        try:
            if path.exists():
                if path.is_dir():
                    self._existing_dirs.append(path)
                    return True
                error_msg = f"Path exists but is not a directory: {path}"
                self._failed_dirs.append((path, error_msg))
                return False

            path.mkdir(parents=True, exist_ok=True)
            self._created_dirs.append(path)
            return True

        except PermissionError as e:
            self._failed_dirs.append((path, f"Permission denied: {e}"))
            return False
        except OSError as e:
            self._failed_dirs.append((path, f"OS error: {e}"))
            return False

    def _calculate_success_rate(self) -> float:
        """Success rate of directory creation as a percentage."""
        total = len(self._created_dirs) + len(self._existing_dirs) + len(self._failed_dirs)
        if total == 0:
            return 100.0

        successful = len(self._created_dirs) + len(self._existing_dirs)
        return (successful / total) * 100.0

    def validate_paths(self) -> dict:
        """
        Validate that all configured paths exist and are writable.

        Returns:
            Dictionary mapping path name to (valid, error_message)
        """
        results = {
            'cache_dir': self._validate_directory(self.config.get('cache_dir'), writable=True),
        }

        log_dir = self.config.get('log_dir')
        if log_dir:
            results['log_dir'] = self._validate_directory(log_dir, writable=True)

        return results

    def _validate_directory(
        self,
        path: Optional[Path],
        writable: bool = False
    ) -> tuple[bool, Optional[str]]:
        """
        Validate a single directory.

        Args:
            path: Path to validate
            writable: Whether to check write permissions

        Returns:
            Tuple of (valid, error_message)
        """
        if path is None:
            return (False, "Path not configured")

        if not path.exists():
            return (False, f"Path does not exist: {path}")

        if not path.is_dir():
            return (False, f"Path is not a directory: {path}")

        try:
            list(path.iterdir())
        except PermissionError:
            return (False, "Permission denied - not readable")
        except OSError as e:
            return (False, f"OS error: {e}")

        if writable:
            test_file = path / '.write_test'
            try:
                test_file.touch()
                test_file.unlink()
            except PermissionError:
                return (False, "Permission denied - not writable")
            except OSError as e:
                return (False, f"OS error: {e}")

        return (True, None)

    def health_check(self) -> dict:
        """
        Perform health check of all paths.

        Returns:
            Dictionary with status ('healthy', 'degraded', 'critical'),
            per-path validation and the list of issues
        """
        issues = []
        path_validation = self.validate_paths()

        for path_name, (valid, error) in path_validation.items():
            if not valid:
                issues.append(f"{path_name}: {error}")

        if not issues:
            status = 'healthy'
        elif not path_validation['cache_dir'][0]:
            # Nothing can be cached without the cache root
            status = 'critical'
        else:
            status = 'degraded'

        return {
            'status': status,
            'path_validation': path_validation,
            'issues': issues,
            'total_issues': len(issues),
        }


def ensure_data_paths(config: Optional[ConfigLoader] = None) -> dict:
    """Convenience function to ensure all data paths exist."""
    return DataPathsManager(config).ensure_all_directories()


def validate_paths(config: Optional[ConfigLoader] = None) -> dict:
    """Convenience function to run the path health check."""
    return DataPathsManager(config).health_check()


__all__ = ['DataPathsManager', 'ensure_data_paths', 'validate_paths']
