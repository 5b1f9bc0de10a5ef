"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use SLIDEPAUSE_ prefix (e.g., SLIDEPAUSE_FOLD_AGE=3).

Settings can also be loaded from a .env file in the project root.
"""

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use SLIDEPAUSE_ prefix.

    Examples:
        SLIDEPAUSE_ACCEPT_FIRST_LEVEL_ONLY=false
        SLIDEPAUSE_LARGE_TEXT_THRESHOLD=250
        SLIDEPAUSE_DISTANCE_COLORS='["#666666", "#999999"]'
    """

    model_config = SettingsConfigDict(
        env_prefix="SLIDEPAUSE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Marker scanning
    accept_first_level_only: bool = Field(
        default=True,
        description="Only pause on list items at the minimum indentation seen so far",
    )

    # Reveal behaviour
    fold_age: int = Field(
        default=2,
        ge=1,
        description="Fold the list item this many reveals behind the current one",
    )

    large_text_threshold: int = Field(
        default=400,
        ge=0,
        description="Heading subtree size (characters) above which fading and folding run",
    )

    distance_colors: List[str] = Field(
        default=["#7f7f7f", "#b3b3b3"],
        min_length=2,
        max_length=2,
        description="Fade colours for segments one and two reveals behind",
    )

    disabled_color: str = Field(
        default="#d9d9d9",
        description="Fade colour for segments three or more reveals behind",
    )

    jump_delay: float = Field(
        default=0.0,
        ge=0.0,
        description="Seconds to wait between steps when jumping to the end (0 = no pacing)",
    )

    # Parser configuration
    strict_mode: bool = Field(
        default=False,
        description="Strict mode: unterminated blocks and drawers are syntax errors",
    )

    debug_mode: bool = Field(
        default=False,
        description="Enable debug output while compiling frames",
    )

    # Rendering
    default_theme: str = Field(
        default="default",
        description="Theme used to render frames when none is given",
    )

    def fadeColor_get(self, distance: int) -> str:
        """
        Colour for a segment revealed `distance` steps ago.

        Args:
            distance: Number of reveals since the segment was shown (>= 1)

        Returns:
            distance_colors[distance - 1] for distances 1 and 2,
            disabled_color beyond that

        Example:
            >>> settings = AppSettings()
            >>> settings.fadeColor_get(1)
            '#7f7f7f'
            >>> settings.fadeColor_get(5)
            '#d9d9d9'
        """
        if 1 <= distance <= len(self.distance_colors):
            return self.distance_colors[distance - 1]
        return self.disabled_color


# Singleton instance - import this in your code
appsettings = AppSettings()
