"""
Theme loader for rendered frames.

A theme is a directory containing:
  - theme.yaml: Configuration (fade colours, Pygments style)
  - theme.css: Optional CSS embedded in every HTML frame

Themes ship inside the package under themes/<name>/.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, List, Optional, Tuple


THEMES_DIR = Path(__file__).parent.parent / "themes"


class ThemeError(Exception):
    """Raised when theme loading or validation fails"""
    pass


class Theme:
    """
    Represents a frame rendering theme.

    A theme consists of:
      - Configuration (fade colours, syntax style) from theme.yaml
      - Custom CSS from theme.css
    """

    def __init__(self, theme_name: str, themes_dir: Optional[str] = None):
        """
        Load a theme by name.

        Args:
            theme_name: Name of the theme directory (e.g., "default", "dark")
            themes_dir: Path to themes directory (default: packaged themes)

        Raises:
            ThemeError: If theme directory or theme.yaml don't exist
        """
        self.name = theme_name
        self.themes_dir = Path(themes_dir) if themes_dir else THEMES_DIR
        self.theme_dir = self.themes_dir / theme_name

        if not self.theme_dir.exists():
            raise ThemeError(
                f"Theme '{theme_name}' not found. "
                f"Expected directory: {self.theme_dir}"
            )

        self.config_path = self.theme_dir / "theme.yaml"
        if not self.config_path.exists():
            raise ThemeError(
                f"Theme '{theme_name}' missing theme.yaml"
            )

        self.config = self._config_load()
        self.css_path = self.theme_dir / "theme.css"

    def _config_load(self) -> Dict[str, Any]:
        """Load and parse theme.yaml"""
        try:
            with open(self.config_path, 'r') as f:
                config: Any = yaml.safe_load(f)
                if config is None:
                    config = {}
                return config
        except yaml.YAMLError as e:
            raise ThemeError(f"Failed to parse theme.yaml: {e}")
        except OSError as e:
            raise ThemeError(f"Failed to load theme.yaml: {e}")

    def css_has(self) -> bool:
        """Check if theme has custom CSS file"""
        return self.css_path.exists()

    def css_load(self) -> str:
        """Theme CSS, or an empty string when the theme has none"""
        return self.css_path.read_text(encoding='utf-8') if self.css_has() else ""

    def config_get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value from theme.yaml.

        Supports nested keys with dot notation:
          theme.config_get('fade.disabled_color', '#d9d9d9')

        Args:
            key: Configuration key (supports dot notation)
            default: Default value if key doesn't exist

        Returns:
            Configuration value or default
        """
        keys: list[str] = key.split('.')
        value: Any = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def pygmentsStyle_get(self) -> str:
        """
        Get Pygments style name for frame highlighting.

        Returns:
            Pygments style name (default: 'default')
        """
        return self.config_get('syntax.pygments_style', 'default')

    def fadeColors_get(
        self, distance_colors: List[str], disabled_color: str
    ) -> Tuple[List[str], str]:
        """
        Fade colours with theme overrides applied.

        A theme's fade.distance_colors is only used when it lists exactly
        two colours.

        Args:
            distance_colors: Colours for distances 1 and 2 from settings
            disabled_color: Colour for distance 3+ from settings

        Returns:
            Tuple of (distance_colors, disabled_color)
        """
        themed = self.config_get('fade.distance_colors')
        if isinstance(themed, list) and len(themed) == 2:
            distance_colors = [str(color) for color in themed]
        disabled_color = str(self.config_get('fade.disabled_color', disabled_color))
        return distance_colors, disabled_color

    def __repr__(self) -> str:
        return f"Theme(name='{self.name}', path='{self.theme_dir}')"


def themes_listAvailable(themes_dir: Optional[str] = None) -> list[str]:
    """
    List all available theme names.

    Args:
        themes_dir: Path to themes directory (default: packaged themes)

    Returns:
        List of theme names (directory names with valid theme.yaml)
    """
    themes_path: Path = Path(themes_dir) if themes_dir else THEMES_DIR

    if not themes_path.exists():
        return []

    themes: list[str] = []
    for item in themes_path.iterdir():
        if item.is_dir():
            if (item / "theme.yaml").exists():
                themes.append(item.name)

    return sorted(themes)


def theme_validate(theme_name: str, themes_dir: Optional[str] = None) -> tuple[bool, str]:
    """
    Validate a theme's structure and configuration.

    Args:
        theme_name: Name of theme to validate
        themes_dir: Path to themes directory

    Returns:
        Tuple of (is_valid, message)
    """
    try:
        theme: Theme = Theme(theme_name, themes_dir)

        if not theme.config:
            return False, f"Theme '{theme_name}' has empty configuration"

        return True, f"Theme '{theme_name}' is valid"

    except ThemeError as e:
        return False, str(e)
