"""Color themes for swaptop."""

from enum import Enum

from textual.theme import Theme


class ThemeType(Enum):
    """Themes in cycling order."""

    DEFAULT = "default"
    SOLARIZED = "solarized"
    MONOKAI = "monokai"
    DRACULA = "dracula"
    NORD = "nord"

    @property
    def textual_name(self) -> str:
        """Name the theme is registered under with Textual."""
        return f"swaptop-{self.value}"

    def next(self) -> "ThemeType":
        members = list(ThemeType)
        return members[(members.index(self) + 1) % len(members)]


THEMES: dict[ThemeType, Theme] = {
    ThemeType.DEFAULT: Theme(
        name=ThemeType.DEFAULT.textual_name,
        primary="#64c8ff",
        secondary="#9696ff",
        accent="#ff9632",
        warning="#ff5050",
        foreground="#dcdcdc",
        background="#14141e",
        surface="#14141e",
        panel="#505078",
        dark=True,
    ),
    ThemeType.SOLARIZED: Theme(
        name=ThemeType.SOLARIZED.textual_name,
        primary="#268bd2",  # blue
        secondary="#2aa198",  # cyan
        accent="#cb4b16",  # orange
        warning="#d30102",  # red
        foreground="#eee8d5",  # base1
        background="#002b36",  # base03
        surface="#002b36",
        panel="#586e75",  # base01
        dark=True,
    ),
    ThemeType.MONOKAI: Theme(
        name=ThemeType.MONOKAI.textual_name,
        primary="#f92672",
        secondary="#66d9ef",
        accent="#fd971f",
        warning="#ff0000",
        foreground="#f8f8f2",
        background="#272822",
        surface="#272822",
        panel="#75715e",
        dark=True,
    ),
    ThemeType.DRACULA: Theme(
        name=ThemeType.DRACULA.textual_name,
        primary="#bd93f9",
        secondary="#8be9fd",
        accent="#ffb86c",
        warning="#ff5555",
        foreground="#f8f8f2",
        background="#282a36",
        surface="#282a36",
        panel="#6272a4",
        dark=True,
    ),
    ThemeType.NORD: Theme(
        name=ThemeType.NORD.textual_name,
        primary="#81a1c1",  # frost
        secondary="#88c0d0",
        accent="#bf616a",  # aurora
        warning="#d08770",
        foreground="#eceff4",  # snow storm
        background="#2e3440",  # polar night
        surface="#2e3440",
        panel="#4c566a",
        dark=True,
    ),
}
