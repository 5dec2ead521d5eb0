"""Light/dark theme switching with a persisted preference."""
import logging
from src.domain.colors import rgb_triple
from src.domain.page_interface import IPortfolioPage
from src.domain.storage_interface import IKeyValueStorage, StorageError


logger = logging.getLogger(__name__)

LIGHT = "light"
DARK = "dark"
DARK_THEME_CLASS = "dark-theme"
THEME_STORAGE_KEY = "theme"

# Custom properties whose RGB triple is exposed as ``<name>-rgb``
RGB_VARIABLES = ("--bg-color", "--accent-color")


class ThemeController:
    """Applies and toggles the page theme."""

    def __init__(self, page: IPortfolioPage, storage: IKeyValueStorage, prefers_dark: bool = False):
        """Initialize the controller.

        Args:
            page: Rendering target
            storage: Where the chosen theme is persisted
            prefers_dark: OS-level color scheme preference
        """
        self._page = page
        self._storage = storage
        self._prefers_dark = prefers_dark

    @property
    def current_theme(self) -> str:
        return DARK if self._page.has_body_class(DARK_THEME_CLASS) else LIGHT

    def initial_theme(self) -> str:
        """Persisted theme, else the OS preference, else light."""
        saved = self._storage.get_item(THEME_STORAGE_KEY)
        if saved:
            return saved
        return DARK if self._prefers_dark else LIGHT

    def load(self) -> str:
        """Apply the initial theme and return it."""
        theme = self.initial_theme()
        self.apply(theme)
        return theme

    def apply(self, theme: str) -> None:
        self._page.set_body_class(DARK_THEME_CLASS, theme == DARK)
        self.update_rgb_variables()

    def update_rgb_variables(self) -> None:
        """Write ``r, g, b`` variants of the theme colors on the root element."""
        for name in RGB_VARIABLES:
            value = self._page.get_css_variable(name).strip()
            self._page.set_css_variable(f"{name}-rgb", rgb_triple(value))

    def toggle(self) -> str:
        """Flip between light and dark, persist the choice and apply it."""
        new_theme = LIGHT if self.current_theme == DARK else DARK
        try:
            self._storage.set_item(THEME_STORAGE_KEY, new_theme)
        except StorageError as e:
            logger.error(f"Error saving theme preference: {e}")
        self.apply(new_theme)
        logger.info(f"Switched theme to {new_theme}")
        return new_theme
