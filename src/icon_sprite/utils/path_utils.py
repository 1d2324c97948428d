"""Path utility module for the icon sprite compiler.

Provides centralized path resolution so that configuration files, bundled
templates and external binaries are located the same way by the command-line
entry point, the compiler and the tests.
"""

import os
from pathlib import Path

from icon_sprite.constants import APP_DIR_NAME, CONFIG_FILENAME
from icon_sprite.exceptions import ConfigFileNotFoundError


class PathResolver:
    """Centralized utility for path resolution and management.

    Attributes:
        project_root: The project root directory
        package_dir: Directory of the installed icon_sprite package
        system_config_dir: System-wide configuration directory
        user_config_dir: User-specific configuration directory
    """

    def __init__(self) -> None:
        """Initialize the path resolver.

        Determines project root, package location and configuration directories.
        """
        self.package_dir = Path(__file__).resolve().parent.parent
        self.project_root = self._find_project_root()
        self.system_config_dir = Path(f"/etc/{APP_DIR_NAME}")
        self.user_config_dir = Path.home() / f".config/{APP_DIR_NAME}"

    def _find_project_root(self) -> Path:
        """Find the project root directory.

        Climbs up from the package directory to the parent of ``src``.

        Returns:
            The project root directory path.
        """
        current_dir = self.package_dir

        while current_dir.name != "src" and current_dir.parent != current_dir:
            current_dir = current_dir.parent

        if current_dir.name == "src":
            return current_dir.parent

        # Installed as a regular distribution, no src directory above us
        return self.package_dir.parent

    def config_search_paths(self, config_filename: str = CONFIG_FILENAME) -> list[Path]:
        """List candidate configuration file locations in priority order.

        Args:
            config_filename: Name of the configuration file

        Returns:
            Candidate paths, highest priority first.
        """
        return [
            Path.cwd() / config_filename,
            self.user_config_dir / config_filename,
            self.system_config_dir / config_filename,
            self.project_root / config_filename,
        ]

    def get_config_path(self, config_filename: str = CONFIG_FILENAME) -> Path | None:
        """Get the path to a configuration file.

        Args:
            config_filename: Name of the configuration file

        Returns:
            Path to the first existing configuration file, or None.
        """
        for path in self.config_search_paths(config_filename):
            if path.exists():
                return path
        return None

    def get_templates_dir(self) -> Path:
        """Get path to the bundled templates directory.

        Returns:
            Path to the templates directory shipped with the package.
        """
        return self.package_dir / "templates"

    def get_template_path(self, template_name: str) -> Path:
        """Get path to a bundled template file.

        Args:
            template_name: Template filename

        Returns:
            Path to the template.
        """
        return self.get_templates_dir() / template_name

    def normalize_path(self, path: str | Path) -> Path:
        """Convert a string path to a Path object.

        Args:
            path: String or Path object

        Returns:
            A Path object.
        """
        return Path(path) if isinstance(path, str) else path

    def ensure_dir_exists(self, path: str | Path) -> Path:
        """Ensure a directory exists, creating it if necessary.

        Args:
            path: Directory path

        Returns:
            Path to the directory.
        """
        dir_path = self.normalize_path(path)
        dir_path.mkdir(exist_ok=True, parents=True)
        return dir_path

    def get_bin_path(self, command: str) -> Path:
        """Get the full path to an external command.

        Looks in the project's ``node_modules/.bin`` first (where svgo is
        usually installed), then in common system locations.

        Args:
            command: Command name

        Returns:
            Path to the command binary, or the bare name to let PATH resolve it.
        """
        if os.sep in command:
            return Path(command)

        search_dirs = [
            Path.cwd() / "node_modules" / ".bin",
            self.project_root / "node_modules" / ".bin",
            Path("/usr/local/bin"),
            Path("/usr/bin"),
            Path("/bin"),
        ]

        for base_path in search_dirs:
            full_path = base_path / command
            if full_path.is_file() and os.access(full_path, os.X_OK):
                return full_path

        return Path(command)


# Create a global instance for easy import
path_resolver = PathResolver()


def validate_config_path(config_path: str | Path | None = None) -> Path:
    """Validate and resolve the configuration file path.

    Args:
        config_path: Optional path to configuration file

    Returns:
        Resolved Path to the configuration file

    Raises:
        ConfigFileNotFoundError: If no configuration file can be found
    """
    search_locations: list[str] = []

    if config_path is None:
        found = path_resolver.get_config_path()
        if found is not None:
            return found
        search_locations = [str(p) for p in path_resolver.config_search_paths()]
        resolved_path = path_resolver.system_config_dir / CONFIG_FILENAME
    else:
        resolved_path = path_resolver.normalize_path(config_path)
        if resolved_path.is_file():
            return resolved_path

    error_msg = f"Configuration file not found: {resolved_path}"
    if search_locations:
        error_msg += "\n\nSearched in the following locations:\n"
        error_msg += "\n".join(f"  - {loc}" for loc in search_locations)

    raise ConfigFileNotFoundError(
        error_msg,
        {
            "path": str(resolved_path),
            "cwd": str(Path.cwd()),
            "searched_locations": search_locations or None,
        },
    )
