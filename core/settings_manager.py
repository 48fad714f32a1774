"""Settings management with presets and persistence"""

import json
import logging
from pathlib import Path
from dataclasses import dataclass, asdict
from typing import Dict, Any

from config import Config

logger = logging.getLogger(__name__)


@dataclass
class ProxySettings:
    """Where the client fetches the document from"""
    base_url: str = "http://127.0.0.1:8000"
    timeout: int = 30


@dataclass
class SearchSettings:
    """Search behaviour settings"""
    min_query_length: int = 3
    discard_stale_responses: bool = True


@dataclass
class DisplaySettings:
    """Panel display settings"""
    panel_height: int = 600
    context_chars: int = 80
    highlight_background: str = "yellow"
    current_match_background: str = "orange"


@dataclass
class UserSettings:
    """Complete user settings"""
    proxy: ProxySettings
    search: SearchSettings
    display: DisplaySettings
    profile: str = "default"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            'proxy': asdict(self.proxy),
            'search': asdict(self.search),
            'display': asdict(self.display),
            'profile': self.profile
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'UserSettings':
        """Create from dictionary"""
        search_data = dict(data.get('search', {}))
        if 'min_query_length' in search_data:
            search_data['min_query_length'] = max(
                int(search_data['min_query_length']), Config.MIN_QUERY_LENGTH_FLOOR
            )

        return cls(
            proxy=ProxySettings(**data.get('proxy', {})),
            search=SearchSettings(**search_data),
            display=DisplaySettings(**data.get('display', {})),
            profile=data.get('profile', 'default')
        )


class SettingsManager:
    """Manage user settings with presets and persistence"""

    SETTINGS_FILE = Path("user_settings.json")

    PRESETS = {
        'default': UserSettings(
            proxy=ProxySettings(),
            search=SearchSettings(),
            display=DisplaySettings(),
            profile='default'
        ),
        'compact': UserSettings(
            proxy=ProxySettings(),
            search=SearchSettings(),
            display=DisplaySettings(
                panel_height=400,
                context_chars=40
            ),
            profile='compact'
        ),
        'large_panel': UserSettings(
            proxy=ProxySettings(),
            search=SearchSettings(),
            display=DisplaySettings(
                panel_height=900,
                context_chars=150
            ),
            profile='large_panel'
        )
    }

    @classmethod
    def load_settings(cls) -> UserSettings:
        """Load settings from file or return defaults"""
        if cls.SETTINGS_FILE.exists():
            try:
                with open(cls.SETTINGS_FILE, 'r') as f:
                    data = json.load(f)
                return UserSettings.from_dict(data)
            except (OSError, ValueError, TypeError) as e:
                logger.warning("Error loading settings: %s", e)
                return cls.get_preset('default')
        return cls.get_preset('default')

    @classmethod
    def save_settings(cls, settings: UserSettings):
        """Save settings to file"""
        try:
            with open(cls.SETTINGS_FILE, 'w') as f:
                json.dump(settings.to_dict(), f, indent=2)
        except OSError as e:
            logger.error("Error saving settings: %s", e)

    @classmethod
    def get_preset(cls, preset_name: str) -> UserSettings:
        """Get a copy of a preset configuration"""
        preset = cls.PRESETS.get(preset_name, cls.PRESETS['default'])
        return UserSettings.from_dict(preset.to_dict())

    @classmethod
    def get_preset_names(cls):
        """Get list of preset names"""
        return list(cls.PRESETS.keys())
