"""
Tunable render policy for the renderer component.

Every delay, timeout and selector the readiness engine uses lives here so a
deployment can retune them from YAML without touching the state machine.
"""
from typing import List, Optional, TYPE_CHECKING

from pydantic import BaseModel, Field

from dynamic_renderer.core.exceptions import ConfigurationError

if TYPE_CHECKING:
    from dynamic_renderer.core.config import ConfigurationManager

SUPPORTED_BROWSER_TYPES = ('chromium', 'firefox', 'webkit')
SUPPORTED_LOAD_SIGNALS = ('load', 'domcontentloaded', 'networkidle', 'commit')

DEFAULT_LAUNCH_ARGS = [
    '--no-sandbox',
    '--disable-setuid-sandbox',
    '--disable-dev-shm-usage',
    '--disable-gpu',
    '--disable-software-rasterizer',
    '--disable-extensions',
    '--disable-blink-features=AutomationControlled',
    '--window-size=1920,1080',
]


class RenderSettings(BaseModel):
    """
    Browser launch flags and readiness timings.

    All durations are in milliseconds, matching Playwright's own timeout units.
    """
    browser_type: str = 'chromium'
    headless: bool = True
    launch_args: List[str] = Field(default_factory=lambda: list(DEFAULT_LAUNCH_ARGS))

    navigation_timeout_ms: int = 60000
    wait_until: str = 'load'
    settle_delay_ms: int = 3000

    scroll_delay_ms: int = 1000
    expand_selector: Optional[str] = '.viewMoreResults'
    expand_delay_ms: int = 2000

    results_table_selector: str = 'table.results'
    selector_timeout_ms: int = 15000
    content_timeout_ms: int = 20000
    poll_interval_ms: int = 500

    def model_post_init(self, __context) -> None:
        if self.browser_type not in SUPPORTED_BROWSER_TYPES:
            raise ConfigurationError(
                f"Unsupported browser type: {self.browser_type}. Must be one of {', '.join(SUPPORTED_BROWSER_TYPES)}."
            )
        if self.wait_until not in SUPPORTED_LOAD_SIGNALS:
            raise ConfigurationError(
                f"Unsupported load signal: {self.wait_until}. Must be one of {', '.join(SUPPORTED_LOAD_SIGNALS)}."
            )

    @classmethod
    def from_config(cls, config: Optional['ConfigurationManager'] = None) -> 'RenderSettings':
        """
        Builds settings from the `renderer` configuration section.

        Keys missing from the section keep their defaults.

        Args:
            config (Optional[ConfigurationManager]): The configuration to read. If None,
                the defaults are used unchanged.

        Raises:
            ConfigurationError: If the section names an unsupported browser type or load signal.
        """
        if config is None:
            return cls()
        section = config.get('renderer', {}) or {}
        if not isinstance(section, dict):
            raise ConfigurationError("The 'renderer' configuration section must be a mapping.")
        known = {key: value for key, value in section.items() if key in cls.model_fields}
        return cls(**known)
